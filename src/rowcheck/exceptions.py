"""Exceptions for programmer and environment errors. Invalid data is never raised."""


class RowcheckError(Exception):
    """Base class for rowcheck errors."""


class IdentifierNotFoundError(RowcheckError):
    """Raised when an operation needs an Identifier key that is not registered."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Identifier not found: {key!r}")


class DuplicateIdentifierError(RowcheckError):
    """Raised when registering an Identifier key that already exists."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Identifier already exists: {key!r}")


class RowFileError(RowcheckError):
    """Raised when a row file cannot be read or has an unsupported shape."""
