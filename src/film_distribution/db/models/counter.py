"""
Site visitor counter (single row)
"""
from sqlalchemy import Column, Integer, DateTime
from datetime import datetime

from ..base import Base

VISITOR_COUNTER_ID = 1


class VisitorCounter(Base):
    __tablename__ = "visitor_counter"

    id = Column(Integer, primary_key=True)
    count = Column(Integer, default=0, nullable=False)
    last_updated = Column(DateTime, default=datetime.utcnow, nullable=False)
