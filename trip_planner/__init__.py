"""Trip planner API: trips, daily itineraries, expenses, flights and hotels."""

__version__ = "1.0.0"
