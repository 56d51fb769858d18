"""
Booking model for guest stays at a property.
"""

from sqlalchemy import Date, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sejour.database import Base
from datetime import date


class Booking(Base):
    """
    Booking of a property by a guest for a date range.
    No overlap check is made against other bookings of the same property.
    """

    __tablename__ = "bookings"

    start_date: Mapped[date] = mapped_column(Date, nullable=False)

    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    property_id: Mapped[int] = mapped_column(
        ForeignKey("properties.id"),
        nullable=False,
        index=True,
        comment="ID of the booked property"
    )

    guest_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Principal id of the guest"
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, property_id={self.property_id}, {self.start_date}..{self.end_date})>"
