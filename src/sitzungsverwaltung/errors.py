"""Error taxonomy shared by the gateway, auth flow and TUI."""


class SitzungsverwaltungError(Exception):
    """Base class for all errors raised by this package."""


class TransportError(SitzungsverwaltungError):
    """Connection failure, timeout or HTTP error status from the server."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(SitzungsverwaltungError):
    """Server response was not valid JSON or had an unexpected shape."""


class AuthError(SitzungsverwaltungError):
    """Token acquisition failed."""


class EmptySelectionError(SitzungsverwaltungError, LookupError):
    """An operation needs a selected item but the list has none."""
