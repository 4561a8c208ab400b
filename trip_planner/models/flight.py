"""
Flight model: one leg of a trip's air itinerary
"""
from sqlalchemy import Column, String, Integer, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
import enum

from trip_planner.core.db import Base


class LegType(str, enum.Enum):
    """Leg classification within an itinerary"""
    OUTBOUND = "outbound"
    INBOUND = "inbound"
    MULTI = "multi"


class Flight(Base):
    __tablename__ = "flights"
    __table_args__ = (
        Index("idx_flights_trip_depart_at", "trip_id", "depart_at"),
    )

    id = Column(String, primary_key=True)
    trip_id = Column(String, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    leg_type = Column(String, nullable=False, server_default=LegType.MULTI.value)
    leg_order = Column(Integer, nullable=False, server_default="1")
    from_code = Column(String, nullable=False)
    from_airport = Column(Text, nullable=True)
    to_code = Column(String, nullable=False)
    to_airport = Column(Text, nullable=True)
    depart_at = Column(String, nullable=False)
    arrive_at = Column(String, nullable=False)
    airline = Column(Text, nullable=False)
    flight_no = Column(String, nullable=False)
    price = Column(Integer, nullable=True)
    currency = Column(String, nullable=True, server_default="KRW")
    note = Column(Text, nullable=True)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    trip = relationship("Trip", back_populates="flights")
