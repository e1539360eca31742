"""User account models."""

from enum import StrEnum

from pydantic import BaseModel


class UserRole(StrEnum):
    """Account privilege level."""

    OWNER = "owner"
    ADMIN = "admin"
    USER = "user"


class User(BaseModel):
    """A stored user account. The password is only kept as a hash."""

    username: str
    password_hash: str
    role: UserRole = UserRole.USER
    banned: bool = False
    created_at: int
