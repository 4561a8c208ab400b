"""
Day model: one calendar day of a trip itinerary
"""
from sqlalchemy import Column, String, Integer, Text, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from trip_planner.core.db import Base


class Day(Base):
    __tablename__ = "days"
    __table_args__ = (
        UniqueConstraint("trip_id", "day_no", name="uq_days_trip_day_no"),
        UniqueConstraint("trip_id", "date", name="uq_days_trip_date"),
        Index("idx_days_trip_day_no", "trip_id", "day_no"),
    )

    id = Column(String, primary_key=True)
    trip_id = Column(String, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    day_no = Column(Integer, nullable=False)
    date = Column(String(10), nullable=False)
    title = Column(Text, nullable=True)
    note = Column(Text, nullable=True)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    trip = relationship("Trip", back_populates="days")
    plans = relationship("Plan", back_populates="day", cascade="all, delete-orphan", passive_deletes=True)
