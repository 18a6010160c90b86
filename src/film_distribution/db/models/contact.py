"""
Filmmaker outreach contacts
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from datetime import datetime

from ..base import Base, JSONType, StringArray


class FilmmakerContact(Base):
    """Prospective filmmaker collected from festival submissions"""
    __tablename__ = "filmmaker_contacts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    film_title = Column(String, nullable=True)
    submission_year = Column(Integer, nullable=True)
    film_category = Column(String, nullable=True)
    film_festival_year = Column(Integer, nullable=True)
    additional_info = Column(JSONType, nullable=True)
    date_added = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Invitation tracking
    invitation_sent = Column(Boolean, default=False, nullable=False)
    invitation_sent_at = Column(DateTime, nullable=True)
    last_invitation_sent_at = Column(DateTime, nullable=True)
    invitation_count = Column(Integer, default=0, nullable=False)
    has_registered = Column(Boolean, default=False, nullable=False)
    registered_at = Column(DateTime, nullable=True)
    registered_user_id = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    last_email_opened = Column(DateTime, nullable=True)
    last_email_clicked = Column(DateTime, nullable=True)

    tags = Column(StringArray, nullable=True)
