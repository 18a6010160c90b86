"""
Filmmaker subscription plans and monthly revenue statements
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, Index
from datetime import datetime

from ..base import Base


class SubscriptionPlan(Base):
    """Paid filmmaker plan; price in cents"""
    __tablename__ = "subscription_plans"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    price = Column(Integer, nullable=False)
    duration_months = Column(Integer, nullable=False)
    description = Column(Text, nullable=False)


class RevenueStatement(Base):
    """Monthly revenue statement for a filmmaker; amounts in cents"""
    __tablename__ = "revenue_statements"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    month = Column(Integer, nullable=False)  # 1-12
    year = Column(Integer, nullable=False)
    total_revenue = Column(Integer, nullable=False)
    platform_fee = Column(Integer, nullable=False)
    net_revenue = Column(Integer, nullable=False)
    is_paid = Column(Boolean, default=False, nullable=False)
    payment_date = Column(DateTime, nullable=True)
    statement_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("idx_revenue_statements_user_period", "user_id", "year", "month"),
    )
