"""
Email template, draft and sent-mail repository
"""
from datetime import datetime
from typing import Optional

from ..db.models import EmailTemplate, EmailDraft, EmailSent
from ..schemas import EmailTemplateCreate, EmailDraftCreate, EmailDraftUpdate, EmailSentCreate
from .base import Repository
from .result import read_operation, write_operation


class EmailRepository(Repository):
    """Templates, drafts and sent records share UUID string keys"""

    # Templates

    @write_operation
    def create_template(self, data: EmailTemplateCreate) -> EmailTemplate:
        return self._insert(EmailTemplate(**data.model_dump()))

    @read_operation()
    def get_template(self, template_id: str):
        return self.db.get(EmailTemplate, template_id)

    @read_operation(default=list)
    def get_templates(self):
        return self.db.query(EmailTemplate).filter(
            EmailTemplate.is_archived.is_(False)
        ).order_by(EmailTemplate.created_at.desc()).all()

    @write_operation
    def archive_template(self, template_id: str, archived_by: Optional[int] = None) -> Optional[EmailTemplate]:
        template = self.db.get(EmailTemplate, template_id)
        if template is None:
            return None
        template.is_archived = True
        template.updated_by = archived_by
        self.db.commit()
        self.db.refresh(template)
        return template

    # Drafts

    @write_operation
    def create_draft(self, data: EmailDraftCreate) -> EmailDraft:
        return self._insert(EmailDraft(**data.model_dump()))

    @read_operation()
    def get_draft(self, draft_id: str):
        return self.db.get(EmailDraft, draft_id)

    @read_operation(default=list)
    def get_drafts_by_user(self, user_id: int):
        return self.db.query(EmailDraft).filter(
            EmailDraft.created_by == user_id
        ).order_by(EmailDraft.updated_at.desc()).all()

    @write_operation
    def update_draft(self, draft_id: str, data: EmailDraftUpdate) -> Optional[EmailDraft]:
        draft = self.db.get(EmailDraft, draft_id)
        if draft is None:
            return None
        for field, value in data.changes().items():
            setattr(draft, field, value)
        draft.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(draft)
        return draft

    @write_operation
    def delete_draft(self, draft_id: str) -> bool:
        removed = self.db.query(EmailDraft).filter(EmailDraft.id == draft_id).delete()
        self.db.commit()
        return removed > 0

    # Sent mail

    @write_operation
    def record_sent(self, data: EmailSentCreate) -> EmailSent:
        return self._insert(EmailSent(**data.model_dump()))

    @read_operation()
    def get_sent(self, email_id: str):
        return self.db.get(EmailSent, email_id)

    @read_operation(default=list)
    def get_sent_by_user(self, user_id: int):
        return self.db.query(EmailSent).filter(
            EmailSent.sent_by == user_id
        ).order_by(EmailSent.sent_at.desc()).all()
