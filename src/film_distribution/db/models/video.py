"""
Video, platform, distribution and revenue models
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from ..base import Base, JSONType, StringArray


class DistributionStatus(str, enum.Enum):
    """Distribution lifecycle on an external platform"""
    PENDING = "pending"
    PROCESSING = "processing"
    TRANSCODING = "transcoding"
    SUBMITTED = "submitted"
    ACTIVE = "active"
    REJECTED = "rejected"


class ModerationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Video(Base):
    """Uploaded video owned by a user"""
    __tablename__ = "videos"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    video_url = Column(String, nullable=False)
    thumbnail_url = Column(String, nullable=True)
    duration = Column(Integer, nullable=True)  # seconds
    upload_date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    is_published = Column(Boolean, default=False, nullable=False)
    # "metadata" is reserved on declarative classes
    extra_metadata = Column("metadata", JSONType, nullable=True)

    # Moderation
    moderation_status = Column(String, default=ModerationStatus.PENDING.value, nullable=False, index=True)
    moderation_notes = Column(Text, nullable=True)
    ai_screening_result = Column(JSONType, nullable=True)
    ai_screening_score = Column(Float, nullable=True)  # 0-1
    moderated_by = Column(Integer, nullable=True)
    moderated_at = Column(DateTime, nullable=True)
    content_rating = Column(String, nullable=True)  # G, PG, PG-13, R...
    content_warnings = Column(StringArray, nullable=True)

    # Relationships
    owner = relationship("User", back_populates="videos")


class Platform(Base):
    """Third-party streaming platform"""
    __tablename__ = "platforms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    logo_url = Column(String, nullable=True)
    api_endpoint = Column(String, nullable=True)
    content_policies = Column(JSONType, nullable=True)
    restricted_content = Column(StringArray, nullable=True)
    required_documents = Column(StringArray, nullable=True)
    rating_system = Column(String, nullable=True)


class Distribution(Base):
    """A video's presence on one platform"""
    __tablename__ = "distributions"

    id = Column(Integer, primary_key=True, index=True)
    video_id = Column(Integer, ForeignKey("videos.id"), nullable=False, index=True)
    platform_id = Column(Integer, ForeignKey("platforms.id"), nullable=False, index=True)
    status = Column(String, default=DistributionStatus.PENDING.value, nullable=False)
    distribution_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    views = Column(Integer, default=0, nullable=False)
    revenue = Column(Float, default=0.0, nullable=False)
    external_id = Column(String, nullable=True)
    submission_date = Column(DateTime, nullable=True)
    approval_date = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    processing_progress = Column(Integer, nullable=True)  # percent
    last_status_update = Column(DateTime, nullable=True)
    distribution_url = Column(String, nullable=True)


class Revenue(Base):
    """Append-only revenue record for a video on a platform"""
    __tablename__ = "revenues"

    id = Column(Integer, primary_key=True, index=True)
    video_id = Column(Integer, ForeignKey("videos.id"), nullable=False, index=True)
    platform_id = Column(Integer, ForeignKey("platforms.id"), nullable=False)
    date = Column(DateTime, default=datetime.utcnow, nullable=False)
    amount = Column(Float, nullable=False)
    views = Column(Integer, nullable=False)

    __table_args__ = (
        Index("idx_revenues_video_date", "video_id", "date"),
    )
