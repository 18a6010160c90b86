"""
Tests for the storage layer: users, videos, distributions, revenue and seeding
"""
from datetime import datetime

import pytest

from film_distribution.db.models import DistributionStatus, Platform
from film_distribution.exceptions import ConstraintViolation, InvalidStatusTransition
from film_distribution.schemas import (
    ContentReportCreate,
    DistributionCreate,
    FilmmakerSubscriptionUpdate,
    ModerationQueueCreate,
    PlatformCreate,
    RevenueCreate,
    RevenueStatementCreate,
    SubscriptionPlanCreate,
    UserCreate,
    UserUpdate,
    VideoCreate,
    VideoUpdate,
)
from film_distribution.storage import DEFAULT_PLANS, DEFAULT_PLATFORMS, can_transition, seed_catalogs


@pytest.fixture
def platform(storage):
    return storage.platforms.create(PlatformCreate(name="Google TV"))


@pytest.fixture
def video(storage, make_user):
    owner = make_user()
    return storage.videos.create(VideoCreate(
        title="Night Harbor",
        description="A fisherman's last season",
        user_id=owner.id,
        video_url="https://cdn.example.com/night-harbor.mp4",
        duration=5400,
    ))


class TestUserRepository:
    """Test user persistence"""

    def test_create_and_lookup(self, storage, make_user):
        user = make_user(username="ava", email="ava@example.com")

        assert storage.users.get(user.id).value.username == "ava"
        assert storage.users.get_by_username("ava").value.id == user.id
        assert storage.users.get_by_email("ava@example.com").value.id == user.id
        assert user.is_active_filmmaker is False
        assert user.verification_status == "unverified"
        assert user.trust_score == 0

    def test_missing_user_is_none_not_failure(self, storage):
        result = storage.users.get_by_username("nobody")

        assert result.ok
        assert result.value is None

    def test_duplicate_username_raises_constraint_violation(self, storage, make_user):
        make_user(username="ava")

        with pytest.raises(ConstraintViolation):
            storage.users.create(UserCreate(
                username="ava", password="x", email="other@example.com", name="Other"
            ))

    def test_sparse_update_only_changes_given_fields(self, storage, make_user):
        user = make_user(bio="Documentary maker")

        updated = storage.users.update(user.id, UserUpdate(name="New Name"))

        assert updated.name == "New Name"
        assert updated.bio == "Documentary maker"

    def test_update_missing_user_returns_none(self, storage):
        assert storage.users.update(9999, UserUpdate(name="Ghost")) is None

    def test_stripe_customer_lookup(self, storage, make_user):
        user = make_user()
        storage.users.update_stripe_info(user.id, stripe_customer_id="cus_123", stripe_account_id="acct_1")

        users = storage.users.get_by_stripe_customer_id("cus_123").value

        assert [u.id for u in users] == [user.id]
        assert users[0].stripe_account_id == "acct_1"
        assert users[0].stripe_subscription_id is None

    def test_active_filmmakers_require_future_end_date(self, storage, make_user):
        current = make_user()
        expired = make_user()
        storage.users.update_filmmaker_subscription(current.id, FilmmakerSubscriptionUpdate(
            subscription_tier="Basic",
            subscription_start_date=datetime(2020, 1, 1),
            subscription_end_date=datetime(2999, 1, 1),
        ))
        storage.users.update_filmmaker_subscription(expired.id, FilmmakerSubscriptionUpdate(
            subscription_tier="Basic",
            subscription_start_date=datetime(2020, 1, 1),
            subscription_end_date=datetime(2020, 4, 1),
        ))

        active = storage.users.get_active_filmmakers().value

        assert [u.id for u in active] == [current.id]


class TestVideoRepository:
    """Test videos and the delete cascade"""

    def test_create_video_defaults(self, video):
        assert video.is_published is False
        assert video.moderation_status == "pending"
        assert video.upload_date is not None

    def test_metadata_round_trips_as_json(self, storage, video):
        storage.videos.update(video.id, VideoUpdate(extra_metadata={"genre": "drama", "year": 2024}))

        assert storage.videos.get(video.id).value.extra_metadata == {"genre": "drama", "year": 2024}

    def test_delete_removes_distributions_and_revenue(self, storage, video, platform):
        storage.distributions.create(DistributionCreate(video_id=video.id, platform_id=platform.id))
        storage.distributions.create(DistributionCreate(video_id=video.id, platform_id=platform.id))
        for amount in (1.0, 2.0, 3.0):
            storage.revenues.create(RevenueCreate(
                video_id=video.id, platform_id=platform.id, amount=amount, views=10
            ))

        assert storage.videos.delete(video.id) is True

        assert storage.videos.get(video.id).value is None
        assert storage.distributions.get_by_video(video.id).value == []
        assert storage.revenues.get_by_video(video.id).value == []

    def test_delete_missing_video_returns_false(self, storage):
        assert storage.videos.delete(424242) is False

    def test_videos_by_user(self, storage, video):
        videos = storage.videos.get_by_user(video.user_id).value

        assert [v.id for v in videos] == [video.id]


class TestDistributionStatus:
    """Test the distribution lifecycle"""

    def test_transition_table(self):
        assert can_transition("pending", "processing")
        assert can_transition("submitted", "active")
        assert can_transition("transcoding", "rejected")
        assert not can_transition("pending", "active")
        assert not can_transition("active", "rejected")
        assert not can_transition("rejected", "pending")

    def test_full_lifecycle_sets_dates(self, storage, video, platform):
        distribution = storage.distributions.create(DistributionCreate(video_id=video.id, platform_id=platform.id))
        assert distribution.status == DistributionStatus.PENDING.value

        for status in ("processing", "transcoding", "submitted"):
            distribution = storage.distributions.update_status(distribution.id, status)
        assert distribution.submission_date is not None
        assert distribution.approval_date is None

        distribution = storage.distributions.update_status(distribution.id, DistributionStatus.ACTIVE)
        assert distribution.status == "active"
        assert distribution.approval_date is not None
        assert distribution.last_status_update is not None

    def test_invalid_transition_raises(self, storage, video, platform):
        distribution = storage.distributions.create(DistributionCreate(video_id=video.id, platform_id=platform.id))

        with pytest.raises(InvalidStatusTransition):
            storage.distributions.update_status(distribution.id, "active")

        assert storage.distributions.get(distribution.id).value.status == "pending"

    def test_rejection_records_reason(self, storage, video, platform):
        distribution = storage.distributions.create(DistributionCreate(video_id=video.id, platform_id=platform.id))

        rejected = storage.distributions.update_status(distribution.id, "rejected", rejection_reason="Missing E&O insurance")

        assert rejected.status == "rejected"
        assert rejected.rejection_reason == "Missing E&O insurance"

    def test_update_status_missing_distribution(self, storage):
        assert storage.distributions.update_status(999, "processing") is None

    def test_distributions_by_user_follow_video_owner(self, storage, video, platform, make_user):
        storage.distributions.create(DistributionCreate(video_id=video.id, platform_id=platform.id))
        stranger = make_user()

        assert len(storage.distributions.get_by_user(video.user_id).value) == 1
        assert storage.distributions.get_by_user(stranger.id).value == []


class TestRevenueStats:
    """Test revenue aggregation"""

    def test_user_without_revenue(self, storage, make_user):
        user = make_user()

        assert storage.revenues.get_stats_by_user(user.id).unwrap() == {"total": 0, "by_platform": {}}

    def test_totals_grouped_by_platform_name(self, storage, video):
        seed_catalogs(storage.db)
        platforms = {p.name: p.id for p in storage.platforms.get_all().value}
        storage.revenues.create(RevenueCreate(video_id=video.id, platform_id=platforms["Google TV"], amount=10.5, views=100))
        storage.revenues.create(RevenueCreate(video_id=video.id, platform_id=platforms["Google TV"], amount=4.5, views=40))
        storage.revenues.create(RevenueCreate(video_id=video.id, platform_id=platforms["Peacock"], amount=5.0, views=20))

        stats = storage.revenues.get_stats_by_user(video.user_id).unwrap()

        assert stats["total"] == pytest.approx(20.0)
        assert stats["by_platform"] == {"Google TV": pytest.approx(15.0), "Peacock": pytest.approx(5.0)}


class TestSeeding:
    """Test idempotent catalog seeding"""

    def test_seeds_empty_catalogs_once(self, db_session, storage):
        assert seed_catalogs(db_session) == {"platforms": len(DEFAULT_PLATFORMS), "plans": len(DEFAULT_PLANS)}
        assert seed_catalogs(db_session) == {"platforms": 0, "plans": 0}

        assert [p.name for p in storage.platforms.get_all().value] == ["Google TV", "Prime Video", "Apple TV", "Peacock"]
        plans = {p.name: (p.price, p.duration_months) for p in storage.plans.get_all().value}
        assert plans == {"Basic": (9900, 3), "Premium": (59900, 6), "Professional": (99900, 12)}

    def test_existing_row_suppresses_seed(self, db_session, storage):
        storage.platforms.create(PlatformCreate(name="Tubi"))

        assert seed_catalogs(db_session) == {"platforms": 0, "plans": 3}
        assert db_session.query(Platform).count() == 1


class TestRevenueStatements:

    def test_monthly_lookup_and_payment(self, storage, make_user):
        user = make_user()
        statement = storage.statements.create(RevenueStatementCreate(
            user_id=user.id, month=3, year=2024, total_revenue=10000, platform_fee=1500, net_revenue=8500
        ))

        assert storage.statements.get_monthly_for_user(user.id, 3, 2024).value.id == statement.id
        assert storage.statements.get_monthly_for_user(user.id, 4, 2024).value is None

        paid_at = datetime(2024, 4, 5)
        paid = storage.statements.update_payment(statement.id, True, paid_at)
        assert paid.is_paid is True
        assert paid.payment_date == paid_at

    def test_plans_and_statement_lookup(self, storage, make_user):
        plan = storage.plans.create(SubscriptionPlanCreate(
            name="Festival", price=4900, duration_months=1, description="One festival month"
        ))
        assert storage.plans.get(plan.id).value.name == "Festival"

        user = make_user()
        statement = storage.statements.create(RevenueStatementCreate(
            user_id=user.id, month=1, year=2024, total_revenue=0, platform_fee=0, net_revenue=0
        ))
        assert storage.statements.get(statement.id).value.user_id == user.id
        assert storage.statements.get(statement.id + 1).value is None


class TestRevenueQueries:

    def test_revenue_by_user_newest_first(self, storage, video, platform):
        older = storage.revenues.create(RevenueCreate(
            video_id=video.id, platform_id=platform.id, amount=1.0, views=1, date=datetime(2024, 1, 1)
        ))
        newer = storage.revenues.create(RevenueCreate(
            video_id=video.id, platform_id=platform.id, amount=2.0, views=2, date=datetime(2024, 2, 1)
        ))

        assert [r.id for r in storage.revenues.get_by_user(video.user_id).value] == [newer.id, older.id]
        assert storage.revenues.get_by_user(video.user_id + 100).value == []

    def test_total_between_dates(self, storage, video, platform, make_user):
        for amount, date in ((5.0, datetime(2024, 2, 29, 23, 0)), (7.5, datetime(2024, 3, 1)), (2.5, datetime(2024, 4, 1))):
            storage.revenues.create(RevenueCreate(
                video_id=video.id, platform_id=platform.id, amount=amount, views=1, date=date
            ))

        total = storage.revenues.get_total_for_user_between(video.user_id, datetime(2024, 3, 1), datetime(2024, 4, 1))

        assert total.ok
        assert total.value == pytest.approx(7.5)
        assert storage.revenues.get_total_for_user_between(
            make_user().id, datetime(2024, 1, 1), datetime(2025, 1, 1)
        ).value == 0.0


class TestModerationStorage:
    """Test report and queue repositories"""

    def test_reports_by_video(self, storage, video):
        first = storage.reports.create(ContentReportCreate(video_id=video.id, report_reason="spam"))
        second = storage.reports.create(ContentReportCreate(video_id=video.id, report_reason="copyright"))

        assert {r.id for r in storage.reports.get_by_video(video.id).value} == {first.id, second.id}
        assert [r.id for r in storage.reports.get_pending().value] == [first.id, second.id]

    def test_one_queue_entry_per_video(self, storage, video):
        storage.moderation_queue.create(ModerationQueueCreate(video_id=video.id, user_id=video.user_id))

        with pytest.raises(ConstraintViolation):
            storage.moderation_queue.create(ModerationQueueCreate(video_id=video.id, user_id=video.user_id))

    def test_assign_moves_item_into_review(self, storage, video):
        item = storage.moderation_queue.create(ModerationQueueCreate(video_id=video.id, user_id=video.user_id))
        assert item.priority == "normal"

        assigned = storage.moderation_queue.assign(item.id, moderator_id=9)

        assert assigned.assigned_to == 9
        assert assigned.status == "in-review"
        assert storage.moderation_queue.get_pending().value == []
        assert storage.moderation_queue.assign(999, moderator_id=9) is None
