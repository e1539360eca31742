"""User account operations."""

import hashlib
import hmac
import logging
import time

from media_store.db.adapter import DatabaseAdapter
from media_store.db.queries import (
    delete_user_stmts,
    get_user,
    insert_user_stmt,
    list_users,
    update_user_field,
)
from media_store.models.user import User, UserRole

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """SHA-256 hex digest of a password.

    Unsalted on purpose: this is the format already stored in existing
    ``users`` tables, so accounts created elsewhere keep verifying. It is
    not a password-hardening scheme.
    """
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


class UserStore:
    """Create, look up and remove user accounts."""

    def __init__(self, db: DatabaseAdapter):
        """Initialize with a database adapter."""
        self.db = db

    async def create_user(
        self,
        username: str,
        password: str,
        role: UserRole = UserRole.USER,
        created_at: int | None = None,
    ) -> bool:
        """Create a user. Returns False if the username is already taken."""
        stmt = insert_user_stmt(
            self.db,
            username,
            hash_password(password),
            created_at if created_at is not None else now_ms(),
            role,
        )
        result = await stmt.run()
        if not result.success:
            raise RuntimeError(f"Failed to create user {username}: {result.error}")
        created = bool(result.changes)
        if created:
            logger.info("Created user %s (%s)", username, role.value)
        return created

    async def get_user(self, username: str) -> User | None:
        """Fetch a user by name."""
        return await get_user(self.db, username)

    async def list_users(self) -> list[User]:
        """List all users."""
        return await list_users(self.db)

    async def verify_password(self, username: str, password: str) -> bool:
        """Check a password. Banned and unknown users never verify."""
        user = await get_user(self.db, username)
        if user is None or user.banned:
            return False
        return hmac.compare_digest(user.password_hash, hash_password(password))

    async def change_password(self, username: str, password: str) -> bool:
        """Replace a user's password."""
        return await update_user_field(self.db, username, "password_hash", hash_password(password))

    async def set_role(self, username: str, role: UserRole) -> bool:
        """Change a user's role."""
        return await update_user_field(self.db, username, "role", role.value)

    async def set_banned(self, username: str, banned: bool) -> bool:
        """Ban or unban a user."""
        return await update_user_field(self.db, username, "banned", int(banned))

    async def delete_user(self, username: str) -> bool:
        """Delete a user with all favorites and play records in one transaction."""
        results = await self.db.batch(delete_user_stmts(self.db, username))
        deleted = bool(results[-1].changes)
        if deleted:
            logger.info("Deleted user %s", username)
        return deleted
