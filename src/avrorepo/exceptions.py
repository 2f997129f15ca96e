"""Custom exceptions for the avrorepo library."""


class RepositoryError(Exception):
    """Base exception for all avrorepo errors."""
    pass


class InvalidNameError(RepositoryError, ValueError):
    """Raised when a subject name, schema id or schema text is malformed."""
    pass


class SubjectNotFoundError(RepositoryError):
    """Raised when an operation requires a subject that does not exist."""
    pass


class SchemaValidationError(RepositoryError):
    """Raised when the repository rejects a schema.

    Args:
        schema: The rejected schema text
        message: Optional override for the error message
    """

    def __init__(self, schema: str, message: str | None = None):
        self.schema = schema
        super().__init__(message or f"Invalid schema: {schema}")
