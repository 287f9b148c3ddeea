"""Deployment ORM model: a trip linking a truck, a driver and a requesting company."""

from sqlalchemy import Float, ForeignKey, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.driver import Driver
from app.infrastructure.persistence.models.mixins import FleetRecordModel
from app.infrastructure.persistence.models.truck import Truck


class Deployment(FleetRecordModel, Base):
    """Deployment. Table: deployment.

    The optional replacement (substitute truck and/or driver) is stored inline
    as replacement_* columns; a replacement supersedes the original for display
    and search.
    """

    __tablename__ = "deployment"

    deployment_code: Mapped[str] = mapped_column(String, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
    request_from: Mapped[str] = mapped_column(String, nullable=False, index=True)
    destination: Mapped[str | None] = mapped_column(String, nullable=True)
    sacks_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    load_weight_kg: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0, server_default=text("0")
    )

    truck_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("truck.id", ondelete="SET NULL"), nullable=True, index=True
    )
    driver_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("driver.id", ondelete="SET NULL"), nullable=True, index=True
    )
    replacement_truck_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("truck.id", ondelete="SET NULL"), nullable=True
    )
    replacement_driver_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("driver.id", ondelete="SET NULL"), nullable=True
    )
    replacement_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    truck: Mapped[Truck | None] = relationship(foreign_keys=[truck_id], lazy="raise")
    driver: Mapped[Driver | None] = relationship(foreign_keys=[driver_id], lazy="raise")
    replacement_truck: Mapped[Truck | None] = relationship(
        foreign_keys=[replacement_truck_id], lazy="raise"
    )
    replacement_driver: Mapped[Driver | None] = relationship(
        foreign_keys=[replacement_driver_id], lazy="raise"
    )
