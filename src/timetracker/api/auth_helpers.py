# File: src/timetracker/api/auth_helpers.py
"""Role-based authorization helpers."""

from fastapi import Depends

from timetracker.api.auth import get_current_user
from timetracker.core.errors import ForbiddenError
from timetracker.core.logging import get_logger
from timetracker.models.user import UserAccount, UserRole

logger = get_logger(__name__)


def require_roles(*roles: UserRole):
    """Build a dependency that admits only the given roles."""
    allowed = {role.value for role in roles}

    async def dependency(current_user: UserAccount = Depends(get_current_user)) -> UserAccount:
        if current_user.role.value not in allowed:
            logger.warning(
                "auth.permission_denied",
                username=current_user.username,
                required_roles=sorted(allowed),
                user_role=current_user.role.value,
            )
            raise ForbiddenError()
        return current_user

    return dependency


require_admin = require_roles(UserRole.ADMIN)
require_viewer = require_roles(UserRole.ADMIN, UserRole.CLIENT)
