"""
Monthly revenue statements for filmmakers
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ..config import config
from ..db.models import RevenueStatement
from ..schemas import RevenueStatementCreate
from ..storage import DatabaseStorage

logger = logging.getLogger(__name__)


def month_bounds(month: int, year: int):
    """[start, end) of a calendar month"""
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return start, end


class StatementService:
    """Builds one revenue statement per filmmaker and month"""

    def __init__(self, db: Session, fee_percent: Optional[int] = None):
        self.db = db
        self.storage = DatabaseStorage(db)
        self.fee_percent = config.PLATFORM_FEE_PERCENT if fee_percent is None else fee_percent

    def revenue_for_month(self, user_id: int, month: int, year: int) -> float:
        start, end = month_bounds(month, year)
        return self.storage.revenues.get_total_for_user_between(user_id, start, end).unwrap()

    def generate_monthly_statement(self, user_id: int, month: int, year: int) -> RevenueStatement:
        """
        Create the statement for a user's month, or return the existing one

        Amounts are stored in cents; the platform fee is rounded to the
        nearest cent and the filmmaker receives the remainder.
        """
        existing = self.storage.statements.get_monthly_for_user(user_id, month, year).unwrap()
        if existing is not None:
            return existing

        total_cents = round(self.revenue_for_month(user_id, month, year) * 100)
        fee_cents = round(total_cents * self.fee_percent / 100)

        statement = self.storage.statements.create(RevenueStatementCreate(
            user_id=user_id,
            month=month,
            year=year,
            total_revenue=total_cents,
            platform_fee=fee_cents,
            net_revenue=total_cents - fee_cents,
        ))
        logger.info(
            f"Generated statement {statement.id} for user {user_id} {year}-{month:02d}: "
            f"total={total_cents} fee={fee_cents} net={statement.net_revenue}"
        )
        return statement
