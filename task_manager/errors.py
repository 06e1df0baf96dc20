"""Errors raised by the account and task services.

The service layer raises these synchronously and never retries; the HTTP
layer in ``task_manager.main`` maps each class to a status code.
"""


class AccountError(Exception):
    """Base class for service-level errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AccountError):
    """A field failed its schema constraint before persistence."""


class UniquenessError(AccountError):
    """A unique field (email) collided with an existing record."""


class AuthenticationError(AccountError):
    """Credentials did not match a stored account."""


class PersistenceError(AccountError):
    """The underlying store rejected or failed a write."""
