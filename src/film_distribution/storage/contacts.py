"""
Filmmaker contact repository
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError

from ..config import config
from ..db.models import FilmmakerContact
from ..schemas import FilmmakerContactCreate, FilmmakerContactUpdate
from .base import Repository
from .dialect import conflict_insert, dialect_name
from .result import read_operation, write_operation

logger = logging.getLogger(__name__)

# Every imported row carries exactly these keys so a batch is one multi-row INSERT
IMPORT_FIELDS = (
    "name",
    "email",
    "film_title",
    "submission_year",
    "film_category",
    "film_festival_year",
    "additional_info",
    "notes",
    "tags",
)


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class FilmmakerContactRepository(Repository):
    model = FilmmakerContact

    def _newest_first(self, query):
        return query.order_by(FilmmakerContact.date_added.desc(), FilmmakerContact.id.desc())

    def _search_filter(self, query: str):
        pattern = _like_pattern(query)
        return or_(
            FilmmakerContact.name.ilike(pattern, escape="\\"),
            FilmmakerContact.email.ilike(pattern, escape="\\"),
            FilmmakerContact.film_title.ilike(pattern, escape="\\"),
        )

    @read_operation()
    def get(self, contact_id: int):
        return self._get(contact_id)

    @read_operation()
    def get_by_email(self, email: str):
        return self.db.query(FilmmakerContact).filter(FilmmakerContact.email == email.strip().lower()).first()

    @read_operation(default=list)
    def get_all(self, limit: int = 100, offset: int = 0, search: Optional[str] = None):
        query = self.db.query(FilmmakerContact)
        if search:
            query = query.filter(self._search_filter(search))
        return self._newest_first(query).limit(limit).offset(offset).all()

    @read_operation(default=0)
    def count(self, search: Optional[str] = None) -> int:
        query = self.db.query(func.count(FilmmakerContact.id))
        if search:
            query = query.filter(self._search_filter(search))
        return query.scalar() or 0

    @write_operation
    def create(self, data: FilmmakerContactCreate) -> FilmmakerContact:
        return self._insert(FilmmakerContact(**data.model_dump(exclude_none=True)))

    @write_operation
    def update(self, contact_id: int, data: FilmmakerContactUpdate) -> Optional[FilmmakerContact]:
        return self._apply(contact_id, data.changes())

    @write_operation
    def delete(self, contact_id: int) -> bool:
        removed = self.db.query(FilmmakerContact).filter(FilmmakerContact.id == contact_id).delete()
        self.db.commit()
        return removed > 0

    @write_operation
    def mark_invited(self, contact_id: int) -> Optional[FilmmakerContact]:
        """Flag an invitation as sent; the counter is incremented in SQL"""
        now = datetime.utcnow()
        updated = self.db.query(FilmmakerContact).filter(FilmmakerContact.id == contact_id).update(
            {
                FilmmakerContact.invitation_sent: True,
                FilmmakerContact.invitation_sent_at: now,
                FilmmakerContact.last_invitation_sent_at: now,
                FilmmakerContact.invitation_count: FilmmakerContact.invitation_count + 1,
            },
            synchronize_session=False,
        )
        self.db.commit()
        if not updated:
            return None
        return self._get(contact_id)

    @write_operation
    def mark_registered(self, contact_id: int, user_id: int) -> Optional[FilmmakerContact]:
        return self._apply(contact_id, {
            "has_registered": True,
            "registered_at": datetime.utcnow(),
            "registered_user_id": user_id,
        })

    @read_operation(default=list)
    def get_unregistered(self):
        query = self.db.query(FilmmakerContact).filter(FilmmakerContact.has_registered.is_(False))
        return self._newest_first(query).all()

    @read_operation(default=list)
    def get_without_invitation(self):
        query = self.db.query(FilmmakerContact).filter(FilmmakerContact.invitation_sent.is_(False))
        return self._newest_first(query).all()

    @read_operation(default=list)
    def search(self, query: str):
        """Case-insensitive substring match on name, email and film title"""
        return self._newest_first(self.db.query(FilmmakerContact).filter(self._search_filter(query))).all()

    @read_operation(default=list)
    def get_by_tags(self, tags: List[str]):
        """Contacts carrying at least one of `tags`"""
        if not tags:
            return []
        if dialect_name(self.db) == "postgresql":
            query = self.db.query(FilmmakerContact).filter(FilmmakerContact.tags.overlap(list(tags)))
            return self._newest_first(query).all()

        # No array operators here; tags are a JSON list
        wanted = set(tags)
        query = self.db.query(FilmmakerContact).filter(FilmmakerContact.tags.isnot(None))
        return [contact for contact in self._newest_first(query).all() if wanted.intersection(contact.tags or [])]

    def import_contacts(self, contacts: List[FilmmakerContactCreate]) -> Dict[str, int]:
        """
        Bulk insert contacts, skipping emails that already exist

        Rows go in batches of CONTACT_IMPORT_BATCH_SIZE, one INSERT ... ON
        CONFLICT (email) DO NOTHING per batch. A batch that fails outright is
        retried one row at a time. `failed` counts duplicates and rows that
        could not be written.
        """
        imported = 0
        failed = 0
        batch_size = config.CONTACT_IMPORT_BATCH_SIZE
        rows = [self._import_row(contact) for contact in contacts]

        for start in range(0, len(rows), batch_size):
            batch = rows[start:start + batch_size]
            try:
                inserted = self._insert_ignoring_duplicates(batch)
                self.db.commit()
                imported += inserted
                failed += len(batch) - inserted
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.warning(
                    f"Contact import batch at offset {start} failed ({type(e).__name__}), "
                    f"retrying {len(batch)} rows individually"
                )
                for row in batch:
                    try:
                        inserted = self._insert_ignoring_duplicates([row])
                        self.db.commit()
                    except SQLAlchemyError as row_error:
                        self.db.rollback()
                        logger.warning(f"Could not import contact {row['email']}: {type(row_error).__name__}")
                        inserted = 0
                    imported += inserted
                    failed += 1 - inserted

        logger.info(f"Contact import finished: {imported} imported, {failed} failed")
        return {"imported": imported, "failed": failed}

    @staticmethod
    def _import_row(contact: FilmmakerContactCreate) -> Dict:
        values = contact.model_dump()
        return {field: values.get(field) for field in IMPORT_FIELDS}

    def _insert_ignoring_duplicates(self, rows: List[Dict]) -> int:
        stmt = conflict_insert(self.db, FilmmakerContact).values(rows)
        stmt = stmt.on_conflict_do_nothing(index_elements=["email"]).returning(FilmmakerContact.id)
        return len(self.db.execute(stmt).all())
