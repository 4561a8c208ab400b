"""
Hotel model: a stay booked for the trip
"""
from sqlalchemy import Column, String, Integer, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from trip_planner.core.db import Base


class Hotel(Base):
    __tablename__ = "hotels"
    __table_args__ = (
        Index("idx_hotels_trip_checkin", "trip_id", "check_in_date"),
    )

    id = Column(String, primary_key=True)
    trip_id = Column(String, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    city = Column(Text, nullable=False)
    check_in_date = Column(String(10), nullable=False)
    check_out_date = Column(String(10), nullable=False)
    confirmation_no = Column(String, nullable=True)
    total_price = Column(Integer, nullable=True)
    currency = Column(String, nullable=True, server_default="JPY")
    note = Column(Text, nullable=True)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    trip = relationship("Trip", back_populates="hotels")
