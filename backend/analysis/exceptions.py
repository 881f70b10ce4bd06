"""Exceptions raised by the analysis core."""


class AnalysisError(Exception):
    """Base class for analysis failures."""


class ValidationError(AnalysisError):
    """Raised when a price series is malformed.

    Insufficient history is not a validation failure; the engine answers it
    with a neutral response instead.
    """

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)
