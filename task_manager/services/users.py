"""User account service: validation, hashing, tokens and cascade delete."""

import logging
from typing import Any

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from task_manager.errors import (
    AccountError,
    AuthenticationError,
    PersistenceError,
    UniquenessError,
    ValidationError,
)
from task_manager.models.user import User, UserToken
from task_manager.services.auth import create_access_token, get_password_hash, verify_password
from task_manager.services.tasks import TaskService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 7
FORBIDDEN_PASSWORD_WORD = "password"  # noqa: S105
UPDATABLE_FIELDS = {"name", "email", "password", "age", "avatar"}


def normalize_name(value: str | None) -> str | None:
    """Trim surrounding whitespace from a display name."""
    if value is None:
        return None
    return value.strip()


def normalize_email(value: str | None) -> str:
    """Trim, lowercase and syntax-check an email address."""
    email = (value or "").strip().lower()
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError("Enter a valid email.") from e
    return email


def validate_password(value: str | None) -> str:
    """Trim a plaintext password and enforce the password rules."""
    password = (value or "").strip()
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if FORBIDDEN_PASSWORD_WORD in password.lower():
        raise ValidationError('Password can not contain the word "password"')
    return password


def validate_age(value: Any) -> int:
    """Require a non-negative integer age."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Age must be a number")
    if value < 0:
        raise ValidationError("Age must be positive")
    return value


def password_changed(user: User) -> bool:
    """Check whether the password differs from the value last loaded.

    Compares the newly assigned value against the previous one recorded in
    the attribute history. An untouched attribute has no history and is
    therefore already a stored hash.
    """
    history = inspect(user).attrs.password.history
    if not history.added:
        return False
    if not history.deleted:
        return True
    return history.added[0] != history.deleted[0]


class UserService:
    """Service for user account operations."""

    def __init__(
        self,
        db: Session,
        secret_key: str,
        algorithm: str = "HS256",
        task_service: TaskService | None = None,
    ):
        self.db = db
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.task_service = task_service or TaskService(db)

    def get_user(self, user_id: int) -> User | None:
        """Get a user by id."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def create_user(
        self,
        email: str,
        password: str,
        name: str | None = None,
        age: int = 0,
        avatar: bytes | None = None,
    ) -> User:
        """Create a new user. The password is hashed before the first persist."""
        user = User(email=email, password=password, name=name, age=age, avatar=avatar)
        self.save(user)
        logger.info(f"Created user {user.id}")
        return user

    def update_user(self, user: User, **changes: Any) -> User:
        """Apply field changes to a user and persist them."""
        if set(changes) - UPDATABLE_FIELDS:
            raise ValidationError("Invalid updates!")

        for field, value in changes.items():
            setattr(user, field, value)

        return self.save(user)

    def save(self, user: User) -> User:
        """Validate and persist a user, hashing the password only if it changed."""
        try:
            self._prepare_for_save(user)
        except AccountError:
            if user in self.db:
                self.db.rollback()
            raise

        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            reason = str(e.orig).lower()
            if "unique" not in reason or "email" not in reason:
                logger.error(f"Failed to save user: {e}")
                raise PersistenceError("Unable to save user") from e
            logger.warning(f"Rejected duplicate email on save: {e.orig}")
            raise UniquenessError("Email is already registered") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save user: {e}")
            raise PersistenceError("Unable to save user") from e

        self.db.refresh(user)
        return user

    def generate_auth_token(self, user: User) -> str:
        """Issue a bearer token for the user and record it on the account.

        Not idempotent: each call appends a new token.
        """
        if user.id is None:
            raise PersistenceError("User must be saved before issuing a token")

        token = create_access_token(user.id, self.secret_key, self.algorithm)
        user.tokens.append(UserToken(token=token))

        try:
            self.save(user)
        except AccountError as e:
            raise PersistenceError("Unable to save authentication token") from e

        return token

    def get_public_user(self, user: User) -> dict[str, Any]:
        """Return the fields of a user that are safe to expose."""
        return {
            "name": user.name,
            "email": user.email,
            "age": user.age,
            "id": user.id,
            "created_at": user.created_at,
            "updated_at": user.updated_at,
        }

    def find_by_credentials(self, email: str, password: str) -> User:
        """Look up a user by email and check the password against the stored hash."""
        user = self.get_user_by_email(email or "")
        if not user:
            logger.warning("Login attempt for unknown email")
            raise AuthenticationError("Unable to login")

        # The two messages differ, which reveals that the email is registered.
        if not verify_password(password or "", user.password):
            logger.warning(f"Incorrect password for user {user.id}")
            raise AuthenticationError("Email or password is incorrect")

        return user

    def set_avatar(self, user: User, data: bytes) -> User:
        """Store avatar image bytes on the user."""
        user.avatar = data
        return self.save(user)

    def clear_avatar(self, user: User) -> User:
        """Remove the user's avatar."""
        user.avatar = None
        return self.save(user)

    def delete_user(self, user: User) -> None:
        """Delete a user together with every task they own.

        Both deletes share one transaction, so a failure leaves tasks and
        account untouched.
        """
        user_id = user.id
        try:
            self.task_service.delete_tasks_for_owner(user_id)
            self.db.delete(user)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete user {user_id}: {e}")
            raise PersistenceError("Unable to delete user") from e

        logger.info(f"Deleted user {user_id}")

    def _prepare_for_save(self, user: User) -> None:
        user.name = normalize_name(user.name)
        user.email = normalize_email(user.email)
        user.age = validate_age(0 if user.age is None else user.age)

        # A user that was never persisted has no stored hash yet.
        if user.id is None or password_changed(user):
            user.password = get_password_hash(validate_password(user.password))

        existing = self.get_user_by_email(user.email)
        if existing is not None and existing is not user:
            raise UniquenessError("Email is already registered")
