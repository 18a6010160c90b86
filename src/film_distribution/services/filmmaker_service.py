"""
Filmmaker outreach: CSV import, paginated listing and email invitations
"""
import csv
import io
import logging
import re
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..config import config
from ..db.models import EmailStatus
from ..schemas import FilmmakerContactCreate, FilmmakerContactPublic, EmailSentCreate
from ..storage import DatabaseStorage
from .email_provider import EmailProvider, EmailMessage
from .email_templates import FilmmakerInvitationTemplate

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

# CSV header (normalized) -> contact field
_HEADER_ALIASES = {
    "name": "name",
    "full_name": "name",
    "filmmaker": "name",
    "email": "email",
    "email_address": "email",
    "film_title": "film_title",
    "film": "film_title",
    "title": "film_title",
    "submission_year": "submission_year",
    "year": "submission_year",
    "film_category": "film_category",
    "category": "film_category",
    "film_festival_year": "film_festival_year",
    "festival_year": "film_festival_year",
    "notes": "notes",
    "tags": "tags",
}
_INT_FIELDS = {"submission_year", "film_festival_year"}


def _normalize_header(header: str) -> str:
    header = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", header.strip())
    return re.sub(r"[\s\-]+", "_", header).lower()


def _parse_int(value: str) -> Optional[int]:
    value = value.strip()
    if not value:
        return None
    try:
        return int(float(value))
    except ValueError:
        return None


def parse_contacts_csv(csv_content: str) -> Tuple[List[FilmmakerContactCreate], int]:
    """
    Parse a CSV export of festival submissions

    Returns the valid contacts and the number of rows that could not be
    turned into one. Unknown columns are kept in `additional_info`; tags are
    separated by ';' or ','.
    """
    reader = csv.DictReader(io.StringIO(csv_content.strip()))
    if not reader.fieldnames:
        return [], 0

    contacts: List[FilmmakerContactCreate] = []
    invalid = 0
    for line_number, row in enumerate(reader, start=2):
        values: Dict = {}
        extra: Dict[str, str] = {}
        for header, raw in row.items():
            if header is None:
                continue
            raw = (raw or "").strip() if isinstance(raw, str) else ""
            field = _HEADER_ALIASES.get(_normalize_header(header))
            if field is None:
                if raw:
                    extra[header.strip()] = raw
            elif field in _INT_FIELDS:
                values[field] = _parse_int(raw)
            elif field == "tags":
                values[field] = [tag.strip() for tag in re.split(r"[;,]", raw) if tag.strip()] or None
            elif raw:
                values[field] = raw
        if extra:
            values["additional_info"] = extra

        try:
            contacts.append(FilmmakerContactCreate(**values))
        except ValidationError as e:
            invalid += 1
            logger.warning(f"Skipping CSV line {line_number}: {e.error_count()} validation error(s)")

    return contacts, invalid


class FilmmakerService:
    """Service for managing filmmaker contacts and invitations"""

    def __init__(self, db: Session, email_provider: Optional[EmailProvider] = None):
        self.db = db
        self.storage = DatabaseStorage(db)
        self.email_provider = email_provider

    def import_csv(self, csv_content: str) -> Dict[str, int]:
        """Parse and bulk import; unparseable rows count as failed"""
        contacts, invalid = parse_contacts_csv(csv_content)
        result = self.storage.contacts.import_contacts(contacts)
        return {"imported": result["imported"], "failed": result["failed"] + invalid}

    def list_filmmakers(self, page: int = 1, limit: int = 20, search: Optional[str] = None) -> Dict:
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)
        search = search.strip() if search else None

        contacts = self.storage.contacts.get_all(limit=limit, offset=(page - 1) * limit, search=search).unwrap()
        total = self.storage.contacts.count(search=search).unwrap()
        return {
            "filmmakers": [FilmmakerContactPublic.model_validate(c).model_dump(mode="json") for c in contacts],
            "total": total,
            "page": page,
            "limit": limit,
        }

    def send_invitations(
        self,
        contact_ids: List[int],
        sent_by: int,
        subject: Optional[str] = None,
        message: Optional[str] = None
    ) -> Dict[str, int]:
        """
        Email an invitation to each contact and mark it invited

        Unknown ids and failed sends count as failed. Each attempt is
        recorded as a sent-mail row.
        """
        sent = 0
        failed = 0
        subject = subject or FilmmakerInvitationTemplate.subject

        for contact_id in contact_ids:
            contact = self.storage.contacts.get(contact_id).unwrap()
            if contact is None:
                logger.warning(f"Invitation skipped: filmmaker contact {contact_id} not found")
                failed += 1
                continue

            text_body = FilmmakerInvitationTemplate.render_plain_text(
                name=contact.name, signup_url=config.SIGNUP_URL, film_title=contact.film_title, message=message
            )
            html_body = FilmmakerInvitationTemplate.render_html(
                name=contact.name, signup_url=config.SIGNUP_URL, film_title=contact.film_title, message=message
            )
            try:
                delivered = self.email_provider.send(EmailMessage(
                    to=contact.email, subject=subject, html_body=html_body, text_body=text_body
                ))
            except Exception as e:
                logger.error(f"Failed to send invitation to {contact.email}: {e}", exc_info=True)
                delivered = False

            self.storage.emails.record_sent(EmailSentCreate(
                subject=subject,
                content=text_body,
                recipients=[contact.email],
                sent_by=sent_by,
                status=EmailStatus.SENT.value if delivered else EmailStatus.FAILED.value,
            ))

            if delivered:
                self.storage.contacts.mark_invited(contact.id)
                sent += 1
            else:
                failed += 1

        logger.info(f"Invitations by user {sent_by}: {sent} sent, {failed} failed")
        return {"sent": sent, "failed": failed}
