"""Headwind exceptions."""


class HeadwindError(Exception):
    """Base class for headwind errors."""


class HeadwindSyntaxError(HeadwindError):
    """Raised when an inline style string cannot be parsed."""

    def __init__(self, message: str, source: str = "", position: int = -1):
        self.message = message
        self.source = source
        self.position = position
        super().__init__(message)

    def __str__(self) -> str:
        if self.source and self.position >= 0:
            return f"{self.message} at position {self.position} in {self.source!r}"
        return self.message
