"""Timeline log ORM model. Append-only trail of actions taken against deployments."""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, ForeignKey, Index, String, Text, event
from sqlalchemy.orm import Mapped, Mapper, mapped_column, relationship
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.deployment import Deployment
from app.infrastructure.persistence.models.user import User
from app.shared.utils.generators import generate_cuid


class TimelineLog(Base):
    """Timeline entry: who did what to which deployment, and when. No update/delete."""

    __tablename__ = "timeline_log"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    action: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    performed_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    target_deployment: Mapped[str | None] = mapped_column(
        String, ForeignKey("deployment.id", ondelete="SET NULL"), nullable=True, index=True
    )

    actor: Mapped[User | None] = relationship(lazy="raise")
    deployment: Mapped[Deployment | None] = relationship(lazy="raise")

    __table_args__ = (Index("ix_timeline_log_timestamp_id", "timestamp", "id"),)


@event.listens_for(TimelineLog, "before_update")
def _prevent_timeline_log_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: TimelineLog
) -> None:
    """Timeline entries are append-only; updates are forbidden."""
    raise ValueError("Timeline log entries are immutable and cannot be updated.")


@event.listens_for(TimelineLog, "before_delete")
def _prevent_timeline_log_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: TimelineLog
) -> None:
    """Timeline entries cannot be deleted."""
    raise ValueError("Timeline log entries cannot be deleted.")
