"""User account API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from task_manager.api.dependencies import get_current_user, get_user_service
from task_manager.errors import ValidationError
from task_manager.models.user import User
from task_manager.schemas.user import AuthResponse, UserCreate, UserLogin, UserResponse, UserUpdate
from task_manager.services.users import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])

MAX_AVATAR_BYTES = 1_000_000
AVATAR_CONTENT_TYPES = {"image/png", "image/jpeg"}


@router.post("", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Register a new user and issue their first token."""
    user = users.create_user(
        email=user_data.email,
        password=user_data.password,
        name=user_data.name,
        age=user_data.age,
    )
    token = users.generate_auth_token(user)
    return {"user": users.get_public_user(user), "token": token}


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Login with email and password."""
    user = users.find_by_credentials(credentials.email, credentials.password)
    token = users.generate_auth_token(user)
    return {"user": users.get_public_user(user), "token": token}


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Get current user information."""
    return users.get_public_user(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    user_data: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Update the current user's profile or password."""
    changes = {**user_data.model_dump(exclude_unset=True), **(user_data.model_extra or {})}
    # Avatars go through the binary upload endpoint
    if "avatar" in changes:
        raise ValidationError("Invalid updates!")

    user = users.update_user(current_user, **changes)
    return users.get_public_user(user)


@router.delete("/me", response_model=UserResponse)
async def delete_me(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Delete the current user and all of their tasks."""
    public_user = users.get_public_user(current_user)
    users.delete_user(current_user)
    return public_user


@router.post("/me/avatar", status_code=status.HTTP_204_NO_CONTENT)
async def upload_avatar(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Upload a PNG or JPEG avatar as the raw request body."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip()
    if content_type not in AVATAR_CONTENT_TYPES:
        raise ValidationError("Please upload a PNG or JPEG image")

    data = await request.body()
    if not data:
        raise ValidationError("Avatar image is empty")
    if len(data) > MAX_AVATAR_BYTES:
        raise ValidationError("Avatar image must be smaller than 1MB")

    users.set_avatar(current_user, data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/me/avatar", status_code=status.HTTP_204_NO_CONTENT)
async def delete_avatar(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Remove the current user's avatar."""
    users.clear_avatar(current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}/avatar")
async def get_avatar(
    user_id: int,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Get a user's avatar image."""
    user = users.get_user(user_id)
    if user is None or not user.avatar:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Avatar not found")

    media_type = "image/png" if user.avatar.startswith(b"\x89PNG") else "image/jpeg"
    return Response(content=user.avatar, media_type=media_type)
