"""Pydantic schemas for the auth API."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Body of POST /api/auth/login."""

    username: str
    password: str


class AuthenticatedUser(BaseModel):
    """Who the caller is, as reported by login and /me."""

    username: str
    role: str
