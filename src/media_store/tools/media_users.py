"""media_users MCP tool — account management."""

import logging
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from media_store.models.user import UserRole
from media_store.store.user_store import UserStore
from media_store.tools.formatters import format_result_list, format_user

logger = logging.getLogger(__name__)

_ACTIONS = {"list", "get", "create", "delete", "set_role", "ban", "unban"}


def register_media_users(mcp: FastMCP) -> None:
    """Register the media_users tool with the MCP server."""

    @mcp.tool()
    async def media_users(
        action: Annotated[
            str,
            Field(description="One of: list, get, create, delete, set_role, ban, unban"),
        ] = "list",
        username: Annotated[
            str | None, Field(description="Account name (all actions except list)")
        ] = None,
        password: Annotated[str | None, Field(description="Initial password (create)")] = None,
        role: Annotated[
            str | None, Field(description="owner, admin or user (create, set_role)")
        ] = None,
        confirm: Annotated[
            bool, Field(description="Required True for delete")
        ] = False,
        ctx: Context | None = None,
    ) -> str:
        """Manage user accounts. Favorites and history belong to an account.

        Actions:
        - list: All accounts, oldest first
        - get: One account (requires username)
        - create: New account (requires username and password; role defaults to user)
        - delete: Remove an account with its favorites and history (requires confirm=True)
        - set_role: Change the role (requires username and role)
        - ban / unban: Block or restore an account
        """
        if ctx is None:
            raise RuntimeError("Context not injected")

        users: UserStore = ctx.lifespan_context["users"]
        return await users_action(
            users, action, username=username, password=password, role=role, confirm=confirm
        )


async def users_action(
    users: UserStore,
    action: str,
    *,
    username: str | None = None,
    password: str | None = None,
    role: str | None = None,
    confirm: bool = False,
) -> str:
    """Dispatch one account action and render the response text."""
    if action not in _ACTIONS:
        return f"Unknown action '{action}'. Use: {', '.join(sorted(_ACTIONS))}"

    if action == "list":
        accounts = await users.list_users()
        return format_result_list([format_user(u) for u in accounts], header="Users")

    if not username:
        return f"Error: action '{action}' requires username."

    parsed_role: UserRole | None = None
    if role is not None:
        try:
            parsed_role = UserRole(role.lower())
        except ValueError:
            return f"Error: unknown role '{role}'. Use: {', '.join(r.value for r in UserRole)}"

    if action == "get":
        user = await users.get_user(username)
        return format_user(user) if user else f"User '{username}' not found"

    if action == "create":
        if not password:
            return "Error: create requires password."
        created = await users.create_user(username, password, parsed_role or UserRole.USER)
        if not created:
            return f"Error: user '{username}' already exists."
        return f"Created user {username} ({(parsed_role or UserRole.USER).value})."

    if action == "delete":
        if not confirm:
            return "Error: delete removes the account with all its data. Pass confirm=True."
        deleted = await users.delete_user(username)
        return f"Deleted user {username}." if deleted else f"User '{username}' not found"

    if action == "set_role":
        if parsed_role is None:
            return "Error: set_role requires role."
        if not await users.set_role(username, parsed_role):
            return f"User '{username}' not found"
        return f"User {username} is now {parsed_role.value}."

    # ban / unban
    banned = action == "ban"
    if not await users.set_banned(username, banned):
        return f"User '{username}' not found"
    return f"{'Banned' if banned else 'Unbanned'} user {username}."
