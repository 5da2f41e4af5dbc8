"""Authentication endpoints and dependencies."""

import sentry_sdk
from fastapi import APIRouter, Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request

from timetracker.core.errors import UnauthenticatedError
from timetracker.core.logging import get_logger
from timetracker.models.auth_schemas import AuthenticatedUser, LoginRequest
from timetracker.models.user import UserAccount
from timetracker.services.auth import AuthService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

http_basic = HTTPBasic(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    """AuthService built at startup and kept on app.state."""
    return request.app.state.auth_service


async def get_current_user(
    credentials: HTTPBasicCredentials | None = Depends(http_basic),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserAccount:
    """Dependency resolving the Basic Auth header to a configured account."""
    if credentials is None:
        raise UnauthenticatedError("Not authenticated", challenge=True)

    try:
        account = await run_in_threadpool(
            auth_service.verify_credentials, credentials.username, credentials.password
        )
    except UnauthenticatedError:
        logger.warning("auth.basic_failed", username=credentials.username)
        raise UnauthenticatedError(challenge=True) from None

    sentry_sdk.set_user({"username": account.username})
    return account


@router.post("/login", response_model=AuthenticatedUser)
async def login(
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Check a username/password pair and report the role."""
    try:
        user = await run_in_threadpool(auth_service.authenticate, body.username, body.password)
    except UnauthenticatedError:
        logger.warning("auth.login_failed", username=body.username)
        raise

    logger.info("auth.login_success", username=user.username, role=user.role)
    return user


@router.get("/me", response_model=AuthenticatedUser)
async def me(
    current_user: UserAccount = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Return the caller's username and role."""
    return auth_service.current_user(current_user.username, current_user.authorities)
