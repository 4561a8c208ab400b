"""
Plan model: a scheduled stop within one day, times in minutes since midnight
"""
from sqlalchemy import Column, String, Integer, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from trip_planner.core.db import Base


class Plan(Base):
    __tablename__ = "plans"
    __table_args__ = (
        Index("idx_plans_day_sort", "day_id", "sort_order", "start_min"),
    )

    id = Column(String, primary_key=True)
    trip_id = Column(String, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    day_id = Column(String, ForeignKey("days.id", ondelete="CASCADE"), nullable=False)
    start_min = Column(Integer, nullable=True)
    end_min = Column(Integer, nullable=True)
    place = Column(Text, nullable=False)
    detail = Column(Text, nullable=True)
    map_url = Column(Text, nullable=True)
    food = Column(Text, nullable=True)
    transport = Column(Text, nullable=True)
    cost_estimate = Column(Integer, nullable=True)
    sort_order = Column(Integer, nullable=False, server_default="0")
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    trip = relationship("Trip", back_populates="plans")
    day = relationship("Day", back_populates="plans")
