"""Exceptions raised by comanda."""

from __future__ import annotations


class ComandaError(Exception):
    """Base class for comanda errors."""


class MenuUnavailableError(ComandaError):
    """No menu could be loaded from storage, the remote source or the bundled default."""


class EngineNotReadyError(ComandaError):
    """An operation was attempted before the menu finished loading."""


class NotAuthorizedError(ComandaError):
    """A protected view was requested without a session carrying a role."""
