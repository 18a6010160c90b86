"""
Video, platform, distribution and revenue repositories
"""
import logging
from datetime import datetime
from typing import Dict, Optional, Union

from sqlalchemy import func

from ..db.models import Video, Platform, Distribution, Revenue, DistributionStatus
from ..exceptions import InvalidStatusTransition
from ..schemas import (
    VideoCreate,
    VideoUpdate,
    PlatformCreate,
    DistributionCreate,
    DistributionUpdate,
    RevenueCreate,
)
from .base import Repository
from .result import read_operation, write_operation

logger = logging.getLogger(__name__)


class VideoRepository(Repository):
    model = Video

    @read_operation()
    def get(self, video_id: int):
        return self._get(video_id)

    @read_operation(default=list)
    def get_by_user(self, user_id: int):
        return self.db.query(Video).filter(
            Video.user_id == user_id
        ).order_by(Video.upload_date.desc(), Video.id.desc()).all()

    @write_operation
    def create(self, data: VideoCreate) -> Video:
        return self._insert(Video(**data.model_dump(exclude_none=True)))

    @write_operation
    def update(self, video_id: int, data: VideoUpdate) -> Optional[Video]:
        return self._apply(video_id, data.changes())

    @write_operation
    def delete(self, video_id: int) -> bool:
        """
        Delete a video with its distributions and revenue records

        Order is distributions, revenues, then the video row, committed
        together. Returns True iff the video row existed.
        """
        distributions = self.db.query(Distribution).filter(Distribution.video_id == video_id).delete()
        revenues = self.db.query(Revenue).filter(Revenue.video_id == video_id).delete()
        removed = self.db.query(Video).filter(Video.id == video_id).delete()
        self.db.commit()

        if removed:
            logger.info(
                f"Deleted video {video_id} with {distributions} distribution(s) "
                f"and {revenues} revenue record(s)"
            )
        return removed > 0


class PlatformRepository(Repository):
    model = Platform

    @read_operation()
    def get(self, platform_id: int):
        return self._get(platform_id)

    @read_operation(default=list)
    def get_all(self):
        return self.db.query(Platform).order_by(Platform.id).all()

    @write_operation
    def create(self, data: PlatformCreate) -> Platform:
        return self._insert(Platform(**data.model_dump(exclude_none=True)))


# Forward path of a distribution; rejection is allowed from any state before active
_NEXT_STATUS = {
    DistributionStatus.PENDING: DistributionStatus.PROCESSING,
    DistributionStatus.PROCESSING: DistributionStatus.TRANSCODING,
    DistributionStatus.TRANSCODING: DistributionStatus.SUBMITTED,
    DistributionStatus.SUBMITTED: DistributionStatus.ACTIVE,
}


def can_transition(current: Union[str, DistributionStatus], requested: Union[str, DistributionStatus]) -> bool:
    current = DistributionStatus(current)
    requested = DistributionStatus(requested)
    if requested == DistributionStatus.REJECTED:
        return current not in (DistributionStatus.ACTIVE, DistributionStatus.REJECTED)
    return _NEXT_STATUS.get(current) == requested


class DistributionRepository(Repository):
    model = Distribution

    @read_operation()
    def get(self, distribution_id: int):
        return self._get(distribution_id)

    @read_operation(default=list)
    def get_by_video(self, video_id: int):
        return self.db.query(Distribution).filter(
            Distribution.video_id == video_id
        ).order_by(Distribution.distribution_date.desc(), Distribution.id.desc()).all()

    @read_operation(default=list)
    def get_by_user(self, user_id: int):
        """Distributions of every video owned by the user"""
        return self.db.query(Distribution).join(
            Video, Distribution.video_id == Video.id
        ).filter(
            Video.user_id == user_id
        ).order_by(Distribution.distribution_date.desc(), Distribution.id.desc()).all()

    @write_operation
    def create(self, data: DistributionCreate) -> Distribution:
        values = data.model_dump(exclude_none=True)
        if "status" in values:
            values["status"] = DistributionStatus(values["status"]).value
        return self._insert(Distribution(**values))

    @write_operation
    def update(self, distribution_id: int, data: DistributionUpdate) -> Optional[Distribution]:
        return self._apply(distribution_id, data.changes())

    @write_operation
    def update_status(
        self,
        distribution_id: int,
        status: Union[str, DistributionStatus],
        rejection_reason: Optional[str] = None
    ) -> Optional[Distribution]:
        """
        Move a distribution along its lifecycle

        Raises InvalidStatusTransition when the move is not allowed; returns
        None when the distribution does not exist.
        """
        distribution = self._get(distribution_id)
        if distribution is None:
            return None

        requested = DistributionStatus(status)
        if not can_transition(distribution.status, requested):
            raise InvalidStatusTransition(distribution.status, requested.value)

        now = datetime.utcnow()
        changes = {"status": requested.value, "last_status_update": now}
        if requested == DistributionStatus.SUBMITTED:
            changes["submission_date"] = now
        elif requested == DistributionStatus.ACTIVE:
            changes["approval_date"] = now
        elif requested == DistributionStatus.REJECTED:
            changes["rejection_reason"] = rejection_reason

        logger.info(f"Distribution {distribution_id}: {distribution.status} -> {requested.value}")
        return self._apply(distribution_id, changes)


class RevenueRepository(Repository):
    """Revenue records are append-only"""
    model = Revenue

    @read_operation()
    def get(self, revenue_id: int):
        return self._get(revenue_id)

    @read_operation(default=list)
    def get_by_video(self, video_id: int):
        return self.db.query(Revenue).filter(
            Revenue.video_id == video_id
        ).order_by(Revenue.date.desc(), Revenue.id.desc()).all()

    @read_operation(default=list)
    def get_by_user(self, user_id: int):
        return self.db.query(Revenue).join(
            Video, Revenue.video_id == Video.id
        ).filter(
            Video.user_id == user_id
        ).order_by(Revenue.date.desc(), Revenue.id.desc()).all()

    @write_operation
    def create(self, data: RevenueCreate) -> Revenue:
        return self._insert(Revenue(**data.model_dump(exclude_none=True)))

    @read_operation(default=lambda: {"total": 0, "by_platform": {}})
    def get_stats_by_user(self, user_id: int) -> Dict:
        """
        Revenue totals for a user's videos

        Returns {"total": float, "by_platform": {platform name: float}}.
        Platform ids missing from the catalog are labelled "Platform <id>".
        """
        total = self.db.query(func.sum(Revenue.amount)).join(
            Video, Revenue.video_id == Video.id
        ).filter(Video.user_id == user_id).scalar()

        rows = self.db.query(Revenue.platform_id, func.sum(Revenue.amount)).join(
            Video, Revenue.video_id == Video.id
        ).filter(Video.user_id == user_id).group_by(Revenue.platform_id).all()

        names = {platform.id: platform.name for platform in self.db.query(Platform).all()}
        by_platform = {
            names.get(platform_id, f"Platform {platform_id}"): amount
            for platform_id, amount in rows
        }
        return {"total": total or 0, "by_platform": by_platform}

    @read_operation(default=0.0)
    def get_total_for_user_between(self, user_id: int, start: datetime, end: datetime) -> float:
        """Sum of a user's revenue dated in [start, end)"""
        total = self.db.query(func.sum(Revenue.amount)).join(
            Video, Revenue.video_id == Video.id
        ).filter(
            Video.user_id == user_id,
            Revenue.date >= start,
            Revenue.date < end
        ).scalar()
        return float(total or 0)
