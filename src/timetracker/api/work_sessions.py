"""WorkSession endpoints (history, active, start, stop, stats)."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from timetracker.api.auth_helpers import require_admin, require_viewer
from timetracker.core.db import get_db
from timetracker.models import UserAccount, WorkSessionRead, WorkSessionStart, WorkStats
from timetracker.services.tracker import TrackerService

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def get_tracker_service(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> TrackerService:
    """TrackerService bound to this request's transaction."""
    return TrackerService(db, contracted_hours=request.app.state.contracted_hours)


@router.get("", response_model=list[WorkSessionRead])
async def list_sessions(
    _: UserAccount = Depends(require_viewer),
    tracker: TrackerService = Depends(get_tracker_service),
):
    """All sessions, newest first."""
    return await tracker.list_all()


@router.get(
    "/active",
    response_model=WorkSessionRead,
    responses={status.HTTP_204_NO_CONTENT: {"description": "No session is running"}},
)
async def get_active_session(
    _: UserAccount = Depends(require_viewer),
    tracker: TrackerService = Depends(get_tracker_service),
):
    """The running session, or 204 when the timer is stopped."""
    work_session = await tracker.get_active()
    if work_session is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return work_session


@router.post("/start", response_model=WorkSessionRead, status_code=status.HTTP_201_CREATED)
async def start_session(
    body: WorkSessionStart,
    _: UserAccount = Depends(require_admin),
    tracker: TrackerService = Depends(get_tracker_service),
):
    """Start the timer. 400 if one is already running."""
    return await tracker.start(body.description)


@router.post("/stop", response_model=WorkSessionRead)
async def stop_session(
    _: UserAccount = Depends(require_admin),
    tracker: TrackerService = Depends(get_tracker_service),
):
    """Stop the timer. 400 if nothing is running."""
    return await tracker.stop()


@router.get("/stats", response_model=WorkStats)
async def get_stats(
    _: UserAccount = Depends(require_viewer),
    tracker: TrackerService = Depends(get_tracker_service),
):
    """Total completed hours (2 decimals) against the contracted hours."""
    return await tracker.stats()
