"""
Visitor counter repository
"""
import logging
from datetime import datetime

from ..db.models import VisitorCounter, VISITOR_COUNTER_ID
from .base import Repository
from .dialect import conflict_insert
from .result import read_operation, write_operation

logger = logging.getLogger(__name__)


class VisitorCounterRepository(Repository):
    model = VisitorCounter

    @write_operation
    def increment(self) -> int:
        """
        Add one visit and return the new total

        A single INSERT ... ON CONFLICT (id) DO UPDATE against the fixed row,
        so concurrent increments serialize in the database and a fresh
        counter starts at 1.
        """
        now = datetime.utcnow()
        stmt = conflict_insert(self.db, VisitorCounter).values(
            id=VISITOR_COUNTER_ID, count=1, last_updated=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[VisitorCounter.id],
            set_={"count": VisitorCounter.count + 1, "last_updated": now},
        ).returning(VisitorCounter.count)
        count = self.db.execute(stmt).scalar_one()
        self.db.commit()
        return count

    @read_operation(default=0)
    def get_count(self) -> int:
        counter = self.db.get(VisitorCounter, VISITOR_COUNTER_ID, populate_existing=True)
        return counter.count if counter is not None else 0
