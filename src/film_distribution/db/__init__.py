"""
Database layer for the film distribution backend
"""
from .engine import engine, SessionLocal, get_db, create_db_engine
from .base import Base
from .models import (
    User,
    Video,
    Platform,
    Distribution,
    Revenue,
    SubscriptionPlan,
    RevenueStatement,
    ContentReport,
    ModerationQueue,
    FilmmakerContact,
    MagazineSubscription,
    MagazineIssue,
    MagazineSubscriberInfo,
    EmailTemplate,
    EmailDraft,
    EmailSent,
    VisitorCounter,
)

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "create_db_engine",
    "Base",
    "User",
    "Video",
    "Platform",
    "Distribution",
    "Revenue",
    "SubscriptionPlan",
    "RevenueStatement",
    "ContentReport",
    "ModerationQueue",
    "FilmmakerContact",
    "MagazineSubscription",
    "MagazineIssue",
    "MagazineSubscriberInfo",
    "EmailTemplate",
    "EmailDraft",
    "EmailSent",
    "VisitorCounter",
]
