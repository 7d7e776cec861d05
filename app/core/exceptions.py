"""Domain errors raised by the service layer."""


class FinanceError(Exception):
    """Base class for errors the API maps to a client response."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(FinanceError):
    """Identifier does not resolve to a stored record."""
    pass


class ConflictError(FinanceError):
    """Requested transition is not allowed from the current status."""
    pass
