"""
Subscription plan and revenue statement repositories
"""
from datetime import datetime
from typing import Optional

from ..db.models import SubscriptionPlan, RevenueStatement
from ..schemas import SubscriptionPlanCreate, RevenueStatementCreate
from .base import Repository
from .result import read_operation, write_operation


class SubscriptionPlanRepository(Repository):
    model = SubscriptionPlan

    @read_operation(default=list)
    def get_all(self):
        return self.db.query(SubscriptionPlan).order_by(SubscriptionPlan.id).all()

    @read_operation()
    def get(self, plan_id: int):
        return self._get(plan_id)

    @write_operation
    def create(self, data: SubscriptionPlanCreate) -> SubscriptionPlan:
        return self._insert(SubscriptionPlan(**data.model_dump()))


class RevenueStatementRepository(Repository):
    model = RevenueStatement

    @read_operation(default=list)
    def get_for_user(self, user_id: int):
        """Statements newest period first"""
        return self.db.query(RevenueStatement).filter(
            RevenueStatement.user_id == user_id
        ).order_by(RevenueStatement.year.desc(), RevenueStatement.month.desc()).all()

    @read_operation()
    def get(self, statement_id: int):
        return self._get(statement_id)

    @read_operation()
    def get_monthly_for_user(self, user_id: int, month: int, year: int):
        return self.db.query(RevenueStatement).filter(
            RevenueStatement.user_id == user_id,
            RevenueStatement.month == month,
            RevenueStatement.year == year
        ).first()

    @write_operation
    def create(self, data: RevenueStatementCreate) -> RevenueStatement:
        return self._insert(RevenueStatement(**data.model_dump()))

    @write_operation
    def update_payment(
        self,
        statement_id: int,
        is_paid: bool,
        payment_date: Optional[datetime] = None
    ) -> Optional[RevenueStatement]:
        return self._apply(statement_id, {"is_paid": is_paid, "payment_date": payment_date})
