# File: src/timetracker/models/user.py
"""Static user accounts and roles."""

import enum
from dataclasses import dataclass


class UserRole(str, enum.Enum):
    """User role enumeration."""

    ADMIN = "ADMIN"
    CLIENT = "CLIENT"


@dataclass(frozen=True)
class UserAccount:
    """A configured account. Built once at startup, never mutated."""

    username: str
    role: UserRole
    password_hash: str

    @property
    def authorities(self) -> list[str]:
        """Granted authorities in ROLE_<NAME> form."""
        return [f"ROLE_{self.role.value}"]

    def __repr__(self) -> str:
        # Keep the hash out of logs and tracebacks
        return f"<UserAccount(username={self.username}, role={self.role.value})>"
