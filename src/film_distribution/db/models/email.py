"""
Email templates, drafts and sent-mail records (UUID string keys)
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey
from datetime import datetime
import enum
import uuid

from ..base import Base, JSONType


def _new_id() -> str:
    return str(uuid.uuid4())


class EmailStatus(str, enum.Enum):
    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"


class EmailTemplate(Base):
    __tablename__ = "email_templates"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    created_by = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    updated_by = Column(Integer, nullable=True)
    is_archived = Column(Boolean, default=False, nullable=False)


class EmailDraft(Base):
    __tablename__ = "email_drafts"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    recipients = Column(JSONType, nullable=True)  # list of addresses
    created_by = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    template_id = Column(String, ForeignKey("email_templates.id"), nullable=True)


class EmailSent(Base):
    """Record of an email handed to the email provider"""
    __tablename__ = "email_sent"

    id = Column(String, primary_key=True, default=_new_id)
    subject = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    recipients = Column(JSONType, nullable=True)
    sent_by = Column(Integer, nullable=False, index=True)
    sent_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    template_id = Column(String, ForeignKey("email_templates.id"), nullable=True)
    opens = Column(Integer, default=0, nullable=False)
    clicks = Column(Integer, default=0, nullable=False)
    status = Column(String, default=EmailStatus.SENT.value, nullable=False)
