"""Domain models package."""

from timetracker.models.auth_schemas import AuthenticatedUser, LoginRequest
from timetracker.models.user import UserAccount, UserRole
from timetracker.models.work_session import WorkSession
from timetracker.models.work_session_schemas import (
    WorkSessionRead,
    WorkSessionStart,
    WorkStats,
)

__all__ = [
    "AuthenticatedUser",
    "LoginRequest",
    "UserAccount",
    "UserRole",
    "WorkSession",
    "WorkSessionRead",
    "WorkSessionStart",
    "WorkStats",
]
