"""Error types raised by the document model."""


class EFaturaError(Exception):
    """Base class for all e-Fatura errors."""


class ValidationError(EFaturaError):
    """A document invariant was violated at construction time.

    The object being built never exists; callers must supply corrected data.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class DocumentSourceError(EFaturaError):
    """A document description could not be read or has a malformed structure."""
