"""
ORM models for the trip planner.

Importing this package registers every table on ``Base.metadata``.
"""

from .trip import Trip, TripStatus
from .day import Day
from .plan import Plan
from .expense import Expense
from .flight import Flight, LegType
from .hotel import Hotel
from .meta import AppMeta

__all__ = [
    "Trip",
    "TripStatus",
    "Day",
    "Plan",
    "Expense",
    "Flight",
    "LegType",
    "Hotel",
    "AppMeta",
]
