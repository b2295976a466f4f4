"""Custom exceptions for student records."""


class RosterError(Exception):
    """Base exception for roster errors."""


class InvalidArgumentError(RosterError, ValueError):
    """A field value failed validation.

    Raised before any persistence side effect takes place.
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Invalid {field}.")


class RepositoryError(RosterError):
    """Base exception for storage backend failures."""


class DuplicateEmailError(RepositoryError):
    """Another student already uses this email address."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Student with email '{email}' already exists")
