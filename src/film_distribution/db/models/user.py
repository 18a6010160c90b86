"""
User model
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship

from ..base import Base, JSONType


class User(Base):
    """Registered account; filmmakers carry a paid subscription tier"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    bio = Column(Text, nullable=True)
    profile_image = Column(String, nullable=True)

    # Stripe
    stripe_customer_id = Column(String, nullable=True, index=True)
    stripe_account_id = Column(String, nullable=True)
    stripe_subscription_id = Column(String, nullable=True)

    # Filmmaker subscription: 'basic', 'premium', 'professional'
    subscription_tier = Column(String, nullable=True)
    subscription_start_date = Column(DateTime, nullable=True)
    subscription_end_date = Column(DateTime, nullable=True)
    is_active_filmmaker = Column(Boolean, default=False, nullable=False)

    # Verification and moderation standing
    verification_status = Column(String, default="unverified", nullable=False)  # unverified, pending, verified
    verification_documents = Column(JSONType, nullable=True)
    trust_score = Column(Integer, default=0, nullable=False)
    strikes = Column(Integer, default=0, nullable=False)
    is_banned = Column(Boolean, default=False, nullable=False)

    is_admin = Column(Boolean, default=False, nullable=False, index=True)

    # Relationships
    videos = relationship("Video", back_populates="owner")
