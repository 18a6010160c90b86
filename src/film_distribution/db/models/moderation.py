"""
Content reports and the human review queue
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from datetime import datetime
import enum

from ..base import Base, JSONType


class ReportStatus(str, enum.Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    DISMISSED = "dismissed"


class QueueStatus(str, enum.Enum):
    PENDING = "pending"
    IN_REVIEW = "in-review"
    APPROVED = "approved"
    REJECTED = "rejected"


class QueuePriority(str, enum.Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class ContentReport(Base):
    """User-submitted report against a video; reporter may be anonymous"""
    __tablename__ = "content_reports"

    id = Column(Integer, primary_key=True, index=True)
    video_id = Column(Integer, nullable=False, index=True)
    reporter_id = Column(Integer, nullable=True)
    report_reason = Column(String, nullable=False)
    report_details = Column(Text, nullable=True)
    reported_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    status = Column(String, default=ReportStatus.PENDING.value, nullable=False, index=True)
    reviewed_by = Column(Integer, nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    resolution = Column(Text, nullable=True)


class ModerationQueue(Base):
    """One review queue entry per video"""
    __tablename__ = "moderation_queue"

    id = Column(Integer, primary_key=True, index=True)
    video_id = Column(Integer, unique=True, nullable=False, index=True)
    user_id = Column(Integer, nullable=False)  # video owner
    added_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    priority = Column(String, default=QueuePriority.NORMAL.value, nullable=False)
    ai_screening_completed = Column(Boolean, default=False, nullable=False)
    human_review_required = Column(Boolean, default=True, nullable=False)
    assigned_to = Column(Integer, nullable=True)
    status = Column(String, default=QueueStatus.PENDING.value, nullable=False, index=True)
    platform_specific_flags = Column(JSONType, nullable=True)
