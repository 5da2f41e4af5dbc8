# File: src/timetracker/services/auth.py
"""Credential checks against the static account set."""

import secrets
from typing import Mapping, Sequence

from timetracker.core.errors import UnauthenticatedError
from timetracker.core.security import hash_password, verify_password
from timetracker.models.auth_schemas import AuthenticatedUser
from timetracker.models.user import UserAccount

ROLE_PREFIX = "ROLE_"
DEFAULT_ROLE = "USER"


class AuthService:
    """Validate username/password pairs. Stateless apart from the accounts it was built with."""

    def __init__(self, accounts: Mapping[str, UserAccount]):
        self._accounts = accounts
        # Verified for unknown usernames so both failure paths do the same work
        self._dummy_hash = hash_password(secrets.token_urlsafe(32))

    @property
    def usernames(self) -> list[str]:
        return sorted(self._accounts)

    def verify_credentials(self, username: str, password: str) -> UserAccount:
        """Return the matching account or raise UnauthenticatedError.

        Unknown user and wrong password raise the same error.
        """
        account = self._accounts.get(username)
        if account is None:
            verify_password(password, self._dummy_hash)
            raise UnauthenticatedError()

        if not verify_password(password, account.password_hash):
            raise UnauthenticatedError()

        return account

    def authenticate(self, username: str, password: str) -> AuthenticatedUser:
        account = self.verify_credentials(username, password)
        return self.current_user(account.username, account.authorities)

    @staticmethod
    def current_user(username: str, authorities: Sequence[str]) -> AuthenticatedUser:
        """Username plus the first granted role, without the ROLE_ prefix."""
        role = authorities[0] if authorities else DEFAULT_ROLE
        return AuthenticatedUser(username=username, role=role.removeprefix(ROLE_PREFIX))
