"""
Storage layer: one repository per entity family behind a single facade

    storage = DatabaseStorage(db)
    user = storage.users.get_by_username("ava").value
"""
from sqlalchemy.orm import Session

from .result import StoreResult, read_operation, write_operation
from .users import UserRepository
from .videos import (
    VideoRepository,
    PlatformRepository,
    DistributionRepository,
    RevenueRepository,
    can_transition,
)
from .billing import SubscriptionPlanRepository, RevenueStatementRepository
from .moderation import ContentReportRepository, ModerationQueueRepository
from .contacts import FilmmakerContactRepository
from .magazine import (
    MagazineSubscriptionRepository,
    MagazineIssueRepository,
    MagazineSubscriberInfoRepository,
)
from .emails import EmailRepository
from .counter import VisitorCounterRepository
from .seed import seed_catalogs, DEFAULT_PLATFORMS, DEFAULT_PLANS


class DatabaseStorage:
    """Repositories bound to one SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.videos = VideoRepository(db)
        self.platforms = PlatformRepository(db)
        self.distributions = DistributionRepository(db)
        self.revenues = RevenueRepository(db)
        self.plans = SubscriptionPlanRepository(db)
        self.statements = RevenueStatementRepository(db)
        self.reports = ContentReportRepository(db)
        self.moderation_queue = ModerationQueueRepository(db)
        self.contacts = FilmmakerContactRepository(db)
        self.magazine_subscriptions = MagazineSubscriptionRepository(db)
        self.magazine_issues = MagazineIssueRepository(db)
        self.subscriber_info = MagazineSubscriberInfoRepository(db)
        self.emails = EmailRepository(db)
        self.visitor_counter = VisitorCounterRepository(db)


__all__ = [
    "DatabaseStorage",
    "StoreResult",
    "read_operation",
    "write_operation",
    "can_transition",
    "seed_catalogs",
    "DEFAULT_PLATFORMS",
    "DEFAULT_PLANS",
]
