"""
User repository
"""
import logging
from datetime import datetime
from typing import Optional

from ..db.models import User
from ..schemas import UserCreate, UserUpdate, FilmmakerSubscriptionUpdate
from .base import Repository
from .result import read_operation, write_operation

logger = logging.getLogger(__name__)


class UserRepository(Repository):
    model = User

    @read_operation()
    def get(self, user_id: int):
        return self._get(user_id)

    @read_operation()
    def get_by_username(self, username: str):
        return self.db.query(User).filter(User.username == username).first()

    @read_operation()
    def get_by_email(self, email: str):
        return self.db.query(User).filter(User.email == email).first()

    @read_operation(default=list)
    def get_by_stripe_customer_id(self, customer_id: str):
        return self.db.query(User).filter(User.stripe_customer_id == customer_id).order_by(User.id).all()

    @read_operation(default=list)
    def get_active_filmmakers(self):
        """Filmmakers flagged active whose subscription has not ended"""
        now = datetime.utcnow()
        return self.db.query(User).filter(
            User.is_active_filmmaker.is_(True),
            User.subscription_end_date > now
        ).order_by(User.id).all()

    @write_operation
    def create(self, data: UserCreate) -> User:
        user = self._insert(User(**data.model_dump()))
        logger.info(f"Created user {user.id} ({user.username})")
        return user

    @write_operation
    def update(self, user_id: int, data: UserUpdate) -> Optional[User]:
        return self._apply(user_id, data.changes())

    @write_operation
    def update_stripe_customer_id(self, user_id: int, customer_id: str) -> Optional[User]:
        return self._apply(user_id, {"stripe_customer_id": customer_id})

    @write_operation
    def update_stripe_info(
        self,
        user_id: int,
        stripe_customer_id: Optional[str] = None,
        stripe_account_id: Optional[str] = None,
        stripe_subscription_id: Optional[str] = None
    ) -> Optional[User]:
        """Set whichever Stripe identifiers are given; others are left alone"""
        changes = {
            key: value for key, value in {
                "stripe_customer_id": stripe_customer_id,
                "stripe_account_id": stripe_account_id,
                "stripe_subscription_id": stripe_subscription_id,
            }.items() if value is not None
        }
        return self._apply(user_id, changes)

    @write_operation
    def update_filmmaker_subscription(self, user_id: int, data: FilmmakerSubscriptionUpdate) -> Optional[User]:
        changes = data.model_dump()
        if changes.get("stripe_customer_id") is None:
            changes.pop("stripe_customer_id", None)
        user = self._apply(user_id, changes)
        if user is not None:
            logger.info(
                f"User {user_id} subscribed as {data.subscription_tier} filmmaker until "
                f"{data.subscription_end_date.isoformat()}"
            )
        return user
