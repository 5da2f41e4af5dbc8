# File: src/timetracker/models/work_session.py
"""WorkSession model: one row per start/stop of the timer."""

from datetime import datetime

from sqlalchemy import CheckConstraint, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from timetracker.core.db import Base
from timetracker.utils.datetime import now_utc


class WorkSession(Base):
    """A tracked block of work. ``end_time`` is NULL while the timer runs."""

    __tablename__ = "work_sessions"
    __table_args__ = (
        CheckConstraint(
            "end_time IS NULL OR end_time >= start_time",
            name="ck_work_sessions_end_after_start",
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )

    start_time: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
        index=True,
    )

    end_time: Mapped[datetime | None] = mapped_column(
        nullable=True,
    )

    @property
    def active(self) -> bool:
        """True while the timer is running."""
        return self.end_time is None

    @property
    def duration_seconds(self) -> int:
        """Whole seconds worked; measured against now for an active session."""
        end = self.end_time if self.end_time is not None else now_utc()
        return max(int((end - self.start_time).total_seconds()), 0)

    def __repr__(self) -> str:
        return (
            f"<WorkSession(id={self.id}, start_time={self.start_time}, "
            f"end_time={self.end_time})>"
        )


# At most one active session in the whole table. The indexed expression is
# constant over the rows the WHERE clause keeps, so a second NULL end_time
# violates uniqueness.
Index(
    "uq_work_sessions_single_active",
    WorkSession.end_time.is_(None),
    unique=True,
    postgresql_where=WorkSession.end_time.is_(None),
    sqlite_where=WorkSession.end_time.is_(None),
)
