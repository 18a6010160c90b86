"""
Magazine subscription, issue and subscriber info repositories
"""
import logging
from datetime import datetime
from typing import Optional

from ..db.models import (
    MagazineSubscription,
    MagazineIssue,
    MagazineSubscriberInfo,
    MagazineSubscriptionStatus,
    MAGAZINE_DEFAULT_PRICE,
)
from ..schemas import (
    MagazineSubscriptionCreate,
    MagazineSubscriptionUpdate,
    MagazineIssueCreate,
    MagazineIssueUpdate,
    MagazineSubscriberInfoCreate,
)
from .base import Repository
from .result import read_operation, write_operation

logger = logging.getLogger(__name__)


class MagazineSubscriptionRepository(Repository):
    model = MagazineSubscription

    def _newest_first(self, query):
        return query.order_by(MagazineSubscription.created_at.desc(), MagazineSubscription.id.desc())

    @read_operation()
    def get(self, subscription_id: int):
        return self._get(subscription_id)

    @read_operation()
    def get_by_user(self, user_id: int):
        """Most recently created subscription of the user"""
        query = self.db.query(MagazineSubscription).filter(MagazineSubscription.user_id == user_id)
        return self._newest_first(query).first()

    @read_operation(default=list)
    def get_all(self, limit: int = 100, offset: int = 0):
        return self._newest_first(self.db.query(MagazineSubscription)).limit(limit).offset(offset).all()

    @read_operation(default=list)
    def get_by_status(self, status: str):
        query = self.db.query(MagazineSubscription).filter(MagazineSubscription.status == status)
        return self._newest_first(query).all()

    @write_operation
    def create(self, data: MagazineSubscriptionCreate) -> MagazineSubscription:
        subscription = MagazineSubscription(
            user_id=data.user_id,
            status=data.status or MagazineSubscriptionStatus.ACTIVE.value,
            start_date=data.start_date or datetime.utcnow(),
            end_date=data.end_date,
            price=MAGAZINE_DEFAULT_PRICE if data.price is None else data.price,
            payment_method=data.payment_method,
            stripe_subscription_id=data.stripe_subscription_id,
        )
        subscription = self._insert(subscription)
        logger.info(f"Magazine subscription {subscription.id} created for user {subscription.user_id}")
        return subscription

    @write_operation
    def update(self, subscription_id: int, data: MagazineSubscriptionUpdate) -> Optional[MagazineSubscription]:
        changes = data.changes()
        changes["updated_at"] = datetime.utcnow()
        return self._apply(subscription_id, changes)

    @write_operation
    def cancel(self, subscription_id: int) -> Optional[MagazineSubscription]:
        return self._apply(subscription_id, {
            "status": MagazineSubscriptionStatus.CANCELLED.value,
            "updated_at": datetime.utcnow(),
        })

    @write_operation
    def renew(self, subscription_id: int) -> Optional[MagazineSubscription]:
        return self._apply(subscription_id, {
            "status": MagazineSubscriptionStatus.ACTIVE.value,
            "updated_at": datetime.utcnow(),
        })


class MagazineIssueRepository(Repository):
    model = MagazineIssue

    def _newest_first(self, query):
        return query.order_by(MagazineIssue.issue_date.desc(), MagazineIssue.id.desc())

    @read_operation()
    def get(self, issue_id: int):
        return self._get(issue_id)

    @read_operation(default=list)
    def get_all(self, limit: int = 100, offset: int = 0):
        return self._newest_first(self.db.query(MagazineIssue)).limit(limit).offset(offset).all()

    @read_operation(default=list)
    def get_published(self, limit: int = 100, offset: int = 0):
        query = self.db.query(MagazineIssue).filter(MagazineIssue.is_published.is_(True))
        return self._newest_first(query).limit(limit).offset(offset).all()

    @read_operation()
    def get_latest(self):
        """Latest published issue by issue date"""
        query = self.db.query(MagazineIssue).filter(MagazineIssue.is_published.is_(True))
        return self._newest_first(query).first()

    @write_operation
    def create(self, data: MagazineIssueCreate) -> MagazineIssue:
        return self._insert(MagazineIssue(**data.model_dump()))

    @write_operation
    def update(self, issue_id: int, data: MagazineIssueUpdate) -> Optional[MagazineIssue]:
        return self._apply(issue_id, data.changes())

    @write_operation
    def publish(self, issue_id: int) -> Optional[MagazineIssue]:
        return self._apply(issue_id, {"is_published": True})

    @write_operation
    def unpublish(self, issue_id: int) -> Optional[MagazineIssue]:
        return self._apply(issue_id, {"is_published": False})


class MagazineSubscriberInfoRepository(Repository):
    model = MagazineSubscriberInfo

    @read_operation()
    def get_by_subscription(self, subscription_id: int):
        return self.db.query(MagazineSubscriberInfo).filter(
            MagazineSubscriberInfo.subscription_id == subscription_id
        ).first()

    @write_operation
    def create(self, data: MagazineSubscriberInfoCreate) -> MagazineSubscriberInfo:
        """One row per subscription; a second one raises ConstraintViolation"""
        return self._insert(MagazineSubscriberInfo(**data.model_dump()))
