"""Read-only modal for the cashier's daily reports."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static


class ReportModal(ModalScreen[None]):
    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
    ]

    CSS = """
    ReportModal {
        align: center middle;
        background: $background 60%;
    }

    #report-dialog {
        width: 72;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #report-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #report-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, body: Text) -> None:
        super().__init__()
        self.body = body

    def compose(self) -> ComposeResult:
        with Container(id="report-dialog"):
            yield Static("Reports", id="report-title")
            yield Static(self.body, id="report-body")
            yield Static("Esc / q / Ctrl+C to close", id="report-help")

    def action_close(self) -> None:
        self.dismiss()
