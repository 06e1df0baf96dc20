"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from task_manager.config import Settings, get_settings
from task_manager.database import get_db
from task_manager.models.user import User
from task_manager.services.auth import decode_access_token
from task_manager.services.tasks import TaskService
from task_manager.services.users import UserService

security = HTTPBearer()


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Please authenticate.",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_task_service(
    db: Annotated[Session, Depends(get_db)],
) -> TaskService:
    """Get task service."""
    return TaskService(db)


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserService:
    """Get user service configured with the signing secret."""
    return UserService(db, settings.jwt_secret, settings.jwt_algorithm)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> User:
    """Get the current user from a bearer token that is still on their record."""
    token = credentials.credentials
    payload = decode_access_token(token, users.secret_key, users.algorithm)
    if payload is None:
        raise _unauthorized()

    user_id = payload.get("id")
    if user_id is None or not str(user_id).isdigit():
        raise _unauthorized()

    user = users.get_user(int(user_id))
    if user is None or token not in {t.token for t in user.tokens}:
        raise _unauthorized()

    return user
