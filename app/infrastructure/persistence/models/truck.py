"""Truck ORM model. Shared fleet resource (no company attribution)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import FleetRecordModel


class Truck(FleetRecordModel, Base):
    """Truck in the fleet. Table: truck."""

    __tablename__ = "truck"

    plate_no: Mapped[str] = mapped_column(String, nullable=False, index=True)
    truck_type: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
