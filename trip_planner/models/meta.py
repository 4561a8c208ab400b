"""
Application-wide key/value store for client settings
"""
from sqlalchemy import Column, String, JSON

from trip_planner.core.db import Base


class AppMeta(Base):
    __tablename__ = "app_meta"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=False)
    updated_at = Column(String, nullable=False)
