# File: src/timetracker/services/tracker.py
"""Work session lifecycle: start, stop, and the hours aggregate.

The single-active-session rule is checked here and guarded again by the
``uq_work_sessions_single_active`` partial unique index, so two concurrent
starts cannot both commit even across processes.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from timetracker.core.config import DEFAULT_CONTRACTED_HOURS
from timetracker.core.errors import ConflictError, NotFoundError, ValidationError
from timetracker.core.logging import get_logger
from timetracker.models.work_session import WorkSession
from timetracker.models.work_session_schemas import WorkStats
from timetracker.utils.datetime import now_utc

logger = get_logger(__name__)

SESSION_ALREADY_RUNNING = "A session is already running. Stop it before starting a new one."
NO_ACTIVE_SESSION = "No active session to stop."
DESCRIPTION_REQUIRED = "Description is required"


class TrackerService:
    """Session operations bound to one request's database transaction."""

    def __init__(self, db: AsyncSession, contracted_hours: int = DEFAULT_CONTRACTED_HOURS):
        self.db = db
        self.contracted_hours = contracted_hours

    async def list_all(self) -> list[WorkSession]:
        """All sessions, newest start time first."""
        stmt = select(WorkSession).order_by(
            WorkSession.start_time.desc(),
            WorkSession.id.desc(),
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_active(self) -> WorkSession | None:
        """The running session, if any."""
        stmt = select(WorkSession).where(WorkSession.end_time.is_(None))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def has_active(self) -> bool:
        stmt = select(WorkSession.id).where(WorkSession.end_time.is_(None)).limit(1)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def start(self, description: str) -> WorkSession:
        """Start the timer.

        Raises:
            ValidationError: description is empty or whitespace.
            ConflictError: another session is still running.
        """
        description = (description or "").strip()
        if not description:
            raise ValidationError(DESCRIPTION_REQUIRED, details={"field": "description"})

        if await self.has_active():
            logger.warning("session.start_conflict", reason="active_session_exists")
            raise ConflictError(SESSION_ALREADY_RUNNING)

        work_session = WorkSession(description=description, start_time=now_utc())
        self.db.add(work_session)

        try:
            await self.db.flush()
        except IntegrityError as exc:
            # A concurrent start committed first; the unique index rejected this row
            await self.db.rollback()
            logger.warning("session.start_conflict", reason="unique_index")
            raise ConflictError(SESSION_ALREADY_RUNNING) from exc

        logger.info(
            "session.started",
            session_id=work_session.id,
            start_time=work_session.start_time.isoformat(),
        )
        return work_session

    async def stop(self) -> WorkSession:
        """Stop the running session.

        Raises:
            NotFoundError: nothing is running.
        """
        stmt = (
            select(WorkSession)
            .where(WorkSession.end_time.is_(None))
            .with_for_update()
        )
        result = await self.db.execute(stmt)
        work_session = result.scalar_one_or_none()

        if work_session is None:
            logger.warning("session.stop_without_active")
            raise NotFoundError(NO_ACTIVE_SESSION)

        # Clock skew must not produce end < start
        work_session.end_time = max(now_utc(), work_session.start_time)
        await self.db.flush()

        logger.info(
            "session.stopped",
            session_id=work_session.id,
            duration_seconds=work_session.duration_seconds,
        )
        return work_session

    async def total_hours_worked(self) -> float:
        """Hours across completed sessions. Running sessions are excluded."""
        stmt = select(WorkSession).where(WorkSession.end_time.is_not(None))
        result = await self.db.execute(stmt)
        total_seconds = sum(ws.duration_seconds for ws in result.scalars().all())
        return total_seconds / 3600.0

    async def stats(self) -> WorkStats:
        total_hours = await self.total_hours_worked()
        return WorkStats(
            total_hours_worked=round(total_hours, 2),
            contracted_hours=self.contracted_hours,
        )
