"""
Database models for the film distribution backend
"""
from .user import User
from .video import Video, Platform, Distribution, Revenue, DistributionStatus, ModerationStatus
from .billing import SubscriptionPlan, RevenueStatement
from .moderation import ContentReport, ModerationQueue, ReportStatus, QueueStatus, QueuePriority
from .contact import FilmmakerContact
from .magazine import (
    MagazineSubscription,
    MagazineIssue,
    MagazineSubscriberInfo,
    MagazineSubscriptionStatus,
    MAGAZINE_DEFAULT_PRICE,
)
from .email import EmailTemplate, EmailDraft, EmailSent, EmailStatus
from .counter import VisitorCounter, VISITOR_COUNTER_ID

__all__ = [
    "User",
    "Video",
    "Platform",
    "Distribution",
    "Revenue",
    "DistributionStatus",
    "ModerationStatus",
    "SubscriptionPlan",
    "RevenueStatement",
    "ContentReport",
    "ModerationQueue",
    "ReportStatus",
    "QueueStatus",
    "QueuePriority",
    "FilmmakerContact",
    "MagazineSubscription",
    "MagazineIssue",
    "MagazineSubscriberInfo",
    "MagazineSubscriptionStatus",
    "MAGAZINE_DEFAULT_PRICE",
    "EmailTemplate",
    "EmailDraft",
    "EmailSent",
    "EmailStatus",
    "VisitorCounter",
    "VISITOR_COUNTER_ID",
]
