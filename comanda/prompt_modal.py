"""Small input modals: one-field prompt and yes/no confirmation."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

_DIALOG_CSS = """
    {name} {{
        align: center middle;
        background: $background 60%;
    }}

    .dialog {{
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }}

    .dialog-title {{
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }}

    .dialog-value {{
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }}

    .dialog-error {{
        color: #ffb3b3;
        margin-bottom: 1;
    }}

    .dialog-help {{
        color: #dddddd;
    }}
"""


class PromptModal(ModalScreen[str | None]):
    """Ask for one value. Dismisses with the text, or None on cancel."""

    CSS = _DIALOG_CSS.format(name="PromptModal")

    def __init__(
        self,
        title: str,
        initial: str = "",
        digits_only: bool = True,
        secret: bool = False,
        max_length: int = 24,
    ) -> None:
        super().__init__()
        self.title_text = title
        self.value = initial
        self.digits_only = digits_only
        self.secret = secret
        self.max_length = max_length
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(classes="dialog"):
            yield Static(self.title_text, classes="dialog-title")
            yield Static(id="prompt-value", classes="dialog-value")
            yield Static(id="prompt-error", classes="dialog-error")
            yield Static("Enter confirm. Backspace delete. Esc cancel.", classes="dialog-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            if not self.value:
                self.error = "A value is required."
                self._refresh_content()
            else:
                self.dismiss(self.value)
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self.error = ""
                self._refresh_content()
            event.stop()
            return

        if not event.is_printable or not event.character:
            return
        if self.digits_only and not event.character.isdigit():
            event.stop()
            return
        if len(self.value) < self.max_length:
            self.value += event.character
        self.error = ""
        self._refresh_content()
        event.stop()

    def _refresh_content(self) -> None:
        shown = "*" * len(self.value) if self.secret else self.value
        self.query_one("#prompt-value", Static).update(shown)
        self.query_one("#prompt-error", Static).update(self.error)


class ConfirmModal(ModalScreen[bool]):
    """Yes/no question. Dismisses with True only on ``y``."""

    CSS = _DIALOG_CSS.format(name="ConfirmModal")

    def __init__(self, question: str) -> None:
        super().__init__()
        self.question = question

    def compose(self) -> ComposeResult:
        with Container(classes="dialog"):
            yield Static(self.question, classes="dialog-title")
            yield Static("y confirm, n / Esc cancel", classes="dialog-help")

    def on_key(self, event: Key) -> None:
        if event.character in {"y", "Y"}:
            self.dismiss(True)
            event.stop()
            return
        if event.key in {"escape", "ctrl+c"} or event.character in {"n", "N"}:
            self.dismiss(False)
            event.stop()
