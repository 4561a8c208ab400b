"""
Expense model: whole-unit spending, optionally pinned to a day
"""
from sqlalchemy import Column, String, Integer, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from trip_planner.core.db import Base


class Expense(Base):
    __tablename__ = "expenses"
    __table_args__ = (
        Index("idx_expenses_trip_spent_at", "trip_id", "spent_at"),
    )

    id = Column(String, primary_key=True)
    trip_id = Column(String, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    # Deleting the day keeps the expense and clears the link
    day_id = Column(String, ForeignKey("days.id", ondelete="SET NULL"), nullable=True)
    item = Column(Text, nullable=False)
    amount = Column(Integer, nullable=False)
    currency = Column(String, nullable=False, server_default="JPY")
    category = Column(Text, nullable=True)
    spent_at = Column(String, nullable=False)
    note = Column(Text, nullable=True)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    trip = relationship("Trip", back_populates="expenses")
