"""
Content Moderation Service
Rules-based screening of uploaded films plus the human review workflow
"""
import re
import logging
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..config import config
from ..db.models import (
    ContentReport,
    ModerationQueue,
    ModerationStatus,
    QueuePriority,
    QueueStatus,
    ReportStatus,
    User,
)
from ..schemas import ContentReportUpdate, ModerationQueueCreate, ModerationQueueUpdate, UserUpdate, VideoUpdate
from ..storage import DatabaseStorage

logger = logging.getLogger(__name__)

STRIKE_PENALTY = 10
STRIKES_BEFORE_BAN = 3


class ScreeningCategory(str, Enum):
    """Screening flag codes, also stored as content warnings"""
    VIOLENCE = "violence"
    HATE = "hate"
    ADULT = "adult"
    ILLEGAL = "illegal"
    PII = "pii"
    CUSTOM = "custom"


# Category -> (keywords, weight added to the screening score)
DEFAULT_RULES: Dict[ScreeningCategory, Tuple[List[str], float]] = {
    ScreeningCategory.VIOLENCE: (["gore", "murder", "torture", "weapon", "bomb"], 0.3),
    ScreeningCategory.HATE: (["hate speech", "racism", "slur", "extremist"], 0.5),
    ScreeningCategory.ADULT: (["explicit", "porn", "nudity", "xxx"], 0.6),
    ScreeningCategory.ILLEGAL: (["pirated", "torrent", "drug dealing", "counterfeit"], 0.4),
}

PII_PATTERNS = [
    (r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b', 'email'),
    (r'\b\d{3}[-.]?\d{3}[-.]?\d{4}\b', 'phone'),
    (r'\b\d{3}-\d{2}-\d{4}\b', 'ssn'),
]
PII_WEIGHT = 0.2
CUSTOM_WEIGHT = 0.4


class ScreeningResult:
    """Outcome of automated screening"""

    def __init__(self, score: float, flags: Optional[Dict[str, List[str]]] = None):
        self.score = score
        self.flags = flags or {}

    @property
    def passed(self) -> bool:
        return not self.flags

    def to_dict(self) -> Dict:
        """Shape stored in videos.ai_screening_result"""
        return {
            "passed": self.passed,
            "score": self.score,
            "flags": self.flags,
            "screened_at": datetime.utcnow().isoformat(),
        }


def priority_for_score(score: float) -> str:
    if score >= 0.8:
        return QueuePriority.URGENT.value
    if score >= 0.5:
        return QueuePriority.HIGH.value
    if score > 0:
        return QueuePriority.NORMAL.value
    return QueuePriority.LOW.value


class ModerationService:
    """
    Content moderation service

    Screens a video's text (title, description, metadata) against keyword
    rules and PII patterns, queues it for human review and applies the
    reviewer's decision.
    """

    def __init__(self, db: Session):
        self.db = db
        self.storage = DatabaseStorage(db)
        self.rules = self._load_rules()

    def _load_rules(self) -> Dict[ScreeningCategory, Tuple[List[str], float]]:
        rules = dict(DEFAULT_RULES)
        if config.MODERATION_FLAGGED_KEYWORDS:
            keywords = [kw.strip().lower() for kw in config.MODERATION_FLAGGED_KEYWORDS.split(",") if kw.strip()]
            rules[ScreeningCategory.CUSTOM] = (keywords, CUSTOM_WEIGHT)
        return rules

    def screen_text(self, text: str) -> ScreeningResult:
        if not text or not text.strip():
            return ScreeningResult(score=0.0)

        text_lower = text.lower()
        flags: Dict[str, List[str]] = {}
        score = 0.0

        for category, (keywords, weight) in self.rules.items():
            matched = [kw for kw in keywords if re.search(rf"\b{re.escape(kw)}\b", text_lower)]
            if matched:
                flags[category.value] = matched
                score += weight

        pii_found = [pii_type for pattern, pii_type in PII_PATTERNS if re.search(pattern, text)]
        if pii_found:
            flags[ScreeningCategory.PII.value] = pii_found
            score += PII_WEIGHT

        return ScreeningResult(score=round(min(score, 1.0), 2), flags=flags)

    def screen_video(self, video_id: int) -> ScreeningResult:
        """Screen a video and store the result and warnings on it"""
        video = self.storage.videos.get(video_id).unwrap()
        if video is None:
            raise LookupError(f"Video {video_id} not found")

        parts = [video.title, video.description or ""]
        metadata = video.extra_metadata or {}
        parts.extend(str(value) for value in metadata.values() if isinstance(value, (str, int, float)))
        result = self.screen_text("\n".join(parts))

        self.storage.videos.update(video_id, VideoUpdate(
            ai_screening_result=result.to_dict(),
            ai_screening_score=result.score,
            content_warnings=sorted(result.flags),
        ))

        if result.passed:
            logger.info(f"Video {video_id} passed automated screening")
        else:
            logger.warning(f"Video {video_id} flagged by screening: {sorted(result.flags)} (score={result.score})")
        return result

    def enqueue_video(self, video_id: int) -> ModerationQueue:
        """
        Screen a video and add it to the review queue

        A video already in the queue is returned as is.
        """
        existing = self.storage.moderation_queue.get_by_video(video_id).unwrap()
        if existing is not None:
            return existing

        result = self.screen_video(video_id)
        video = self.storage.videos.get(video_id).unwrap()
        item = self.storage.moderation_queue.create(ModerationQueueCreate(
            video_id=video_id,
            user_id=video.user_id,
            priority=priority_for_score(result.score),
            ai_screening_completed=True,
            human_review_required=True,
            platform_specific_flags={"screening": result.flags} if result.flags else None,
        ))
        logger.info(f"Video {video_id} queued for review with priority {item.priority}")
        return item

    def resolve(self, queue_id: int, moderator_id: int, approved: bool, notes: Optional[str] = None) -> ModerationQueue:
        """Apply a reviewer's decision to the queue item and its video"""
        item = self.storage.moderation_queue.update(queue_id, ModerationQueueUpdate(
            status=QueueStatus.APPROVED.value if approved else QueueStatus.REJECTED.value,
            assigned_to=moderator_id,
            human_review_required=False,
        ))
        if item is None:
            raise LookupError(f"Moderation queue item {queue_id} not found")

        self.storage.videos.update(item.video_id, VideoUpdate(
            moderation_status=ModerationStatus.APPROVED.value if approved else ModerationStatus.REJECTED.value,
            moderation_notes=notes,
            moderated_by=moderator_id,
            moderated_at=datetime.utcnow(),
        ))
        logger.info(f"Video {item.video_id} {'approved' if approved else 'rejected'} by moderator {moderator_id}")
        return item

    def review_report(
        self,
        report_id: int,
        reviewer_id: int,
        resolution: str,
        dismiss: bool = False
    ) -> ContentReport:
        report = self.storage.reports.update(report_id, ContentReportUpdate(
            status=ReportStatus.DISMISSED.value if dismiss else ReportStatus.REVIEWED.value,
            reviewed_by=reviewer_id,
            reviewed_at=datetime.utcnow(),
            resolution=resolution,
        ))
        if report is None:
            raise LookupError(f"Content report {report_id} not found")
        return report

    def record_strike(self, user_id: int, reason: str) -> User:
        """
        Add a strike to a user

        Each strike costs STRIKE_PENALTY trust points; the account is banned
        once it reaches STRIKES_BEFORE_BAN strikes.
        """
        user = self.storage.users.get(user_id).unwrap()
        if user is None:
            raise LookupError(f"User {user_id} not found")

        strikes = (user.strikes or 0) + 1
        banned = user.is_banned or strikes >= STRIKES_BEFORE_BAN
        updated = self.storage.users.update(user_id, UserUpdate(
            strikes=strikes,
            trust_score=(user.trust_score or 0) - STRIKE_PENALTY,
            is_banned=banned,
        ))

        logger.warning(f"Strike {strikes} recorded for user {user_id}: {reason}")
        if banned and not user.is_banned:
            logger.warning(f"User {user_id} banned after {strikes} strikes")
        return updated
