"""
Content report and moderation queue repositories
"""
import logging
from typing import Optional

from ..db.models import ContentReport, ModerationQueue, ReportStatus, QueueStatus
from ..schemas import (
    ContentReportCreate,
    ContentReportUpdate,
    ModerationQueueCreate,
    ModerationQueueUpdate,
)
from .base import Repository
from .result import read_operation, write_operation

logger = logging.getLogger(__name__)


class ContentReportRepository(Repository):
    model = ContentReport

    @write_operation
    def create(self, data: ContentReportCreate) -> ContentReport:
        report = self._insert(ContentReport(**data.model_dump()))
        logger.info(f"Content report {report.id} filed against video {report.video_id}: {report.report_reason}")
        return report

    @read_operation(default=list)
    def get_by_video(self, video_id: int):
        return self.db.query(ContentReport).filter(
            ContentReport.video_id == video_id
        ).order_by(ContentReport.reported_at.desc(), ContentReport.id.desc()).all()

    @write_operation
    def update(self, report_id: int, data: ContentReportUpdate) -> Optional[ContentReport]:
        return self._apply(report_id, data.changes())

    @read_operation(default=list)
    def get_pending(self):
        """Pending reports, oldest first"""
        return self.db.query(ContentReport).filter(
            ContentReport.status == ReportStatus.PENDING.value
        ).order_by(ContentReport.reported_at.asc(), ContentReport.id.asc()).all()


class ModerationQueueRepository(Repository):
    model = ModerationQueue

    @write_operation
    def create(self, data: ModerationQueueCreate) -> ModerationQueue:
        """Enqueue a video; a second entry for the same video raises ConstraintViolation"""
        return self._insert(ModerationQueue(**data.model_dump(exclude_none=True)))

    @read_operation()
    def get_by_video(self, video_id: int):
        return self.db.query(ModerationQueue).filter(ModerationQueue.video_id == video_id).first()

    @write_operation
    def update(self, queue_id: int, data: ModerationQueueUpdate) -> Optional[ModerationQueue]:
        return self._apply(queue_id, data.changes())

    @read_operation(default=list)
    def get_pending(self, limit: int = 20):
        """Pending items, oldest first"""
        return self.db.query(ModerationQueue).filter(
            ModerationQueue.status == QueueStatus.PENDING.value
        ).order_by(ModerationQueue.added_at.asc(), ModerationQueue.id.asc()).limit(limit).all()

    @write_operation
    def assign(self, queue_id: int, moderator_id: int) -> Optional[ModerationQueue]:
        item = self._apply(queue_id, {"assigned_to": moderator_id, "status": QueueStatus.IN_REVIEW.value})
        if item is not None:
            logger.info(f"Moderation item {queue_id} assigned to moderator {moderator_id}")
        return item
