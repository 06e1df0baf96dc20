"""Password hashing and JWT helpers."""

from datetime import UTC, datetime

from jose import JWTError, jwt
from passlib.context import CryptContext

# Fixed bcrypt cost factor for stored passwords
PASSWORD_HASH_ROUNDS = 8

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=PASSWORD_HASH_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, secret_key: str, algorithm: str = "HS256") -> str:
    """Create a signed JWT carrying the user id.

    Tokens carry no expiry claim; they stay valid for as long as they are
    listed on the user record.
    """
    to_encode = {
        "id": str(user_id),
        "iat": datetime.now(UTC),
    }
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(token: str, secret_key: str, algorithm: str = "HS256") -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
        return payload
    except JWTError:
        return None
