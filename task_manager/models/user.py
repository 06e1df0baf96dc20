"""User model."""

from sqlalchemy import Column, ForeignKey, Integer, LargeBinary, String, Text
from sqlalchemy.orm import relationship

from task_manager.database import Base
from task_manager.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User account for authentication and task ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash once saved
    avatar = Column(LargeBinary, nullable=True)
    age = Column(Integer, nullable=False, default=0)

    # Relationships
    tokens = relationship(
        "UserToken",
        back_populates="user",
        order_by="UserToken.id",
        cascade="all, delete-orphan",
    )


class UserToken(Base):
    """Bearer token issued to a user on authentication."""

    __tablename__ = "user_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token = Column(Text, nullable=False)

    # Relationships
    user = relationship("User", back_populates="tokens")
