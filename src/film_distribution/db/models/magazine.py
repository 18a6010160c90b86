"""
Magazine subscription, issue and subscriber mailing info models
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from datetime import datetime
import enum

from ..base import Base


class MagazineSubscriptionStatus(str, enum.Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


MAGAZINE_DEFAULT_PRICE = 399  # cents


class MagazineSubscription(Base):
    """Print magazine subscription for a user"""
    __tablename__ = "magazine_subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    status = Column(String, default=MagazineSubscriptionStatus.ACTIVE.value, nullable=False, index=True)
    start_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    end_date = Column(DateTime, nullable=True)
    stripe_subscription_id = Column(String, nullable=True)
    payment_method = Column(String, nullable=True)  # stripe, paypal
    price = Column(Integer, default=MAGAZINE_DEFAULT_PRICE, nullable=False)

    # Invoice and payment tracking
    invoice_sent = Column(Boolean, default=False, nullable=False)
    invoice_sent_date = Column(DateTime, nullable=True)
    payment_received = Column(Boolean, default=False, nullable=False)
    payment_received_date = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class MagazineIssue(Base):
    __tablename__ = "magazine_issues"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    issue_date = Column(DateTime, nullable=False, index=True)
    cover_image_url = Column(String, nullable=True)
    issuu_link = Column(String, nullable=True)
    is_published = Column(Boolean, default=False, nullable=False)


class MagazineSubscriberInfo(Base):
    """Mailing details, one row per subscription"""
    __tablename__ = "magazine_subscriber_info"

    id = Column(Integer, primary_key=True, index=True)
    subscription_id = Column(Integer, unique=True, nullable=False, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    mailing_address = Column(String, nullable=False)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)
    zip_code = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
