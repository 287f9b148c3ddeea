"""Driver ORM model. Shared fleet resource (no company attribution)."""

from sqlalchemy import Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import FleetRecordModel


class Driver(FleetRecordModel, Base):
    """Driver. trip_count is incremented by the deployment service on completion."""

    __tablename__ = "driver"

    firstname: Mapped[str] = mapped_column(String, nullable=False)
    lastname: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    trip_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    phone_no: Mapped[str | None] = mapped_column(String, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
