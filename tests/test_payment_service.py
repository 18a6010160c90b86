"""
Tests for payment completion
"""
from datetime import datetime

import pytest

from film_distribution.config import config
from film_distribution.services.payment_service import (
    PaymentService,
    PaymentNotCompleted,
    add_months,
    plan_duration_months,
)
from film_distribution.storage import seed_catalogs
from conftest import RecordingEmailProvider


class TestPlanDuration:
    """Test subscription length derived from the plan name"""

    @pytest.mark.parametrize("plan_name,months", [
        ("Basic - 6 months", 6),
        ("Distribution 1 year", 12),
        ("Premium", 12),
        ("Basic", 3),
        ("Professional", 3),
        ("", 3),
        (None, 3),
    ])
    def test_duration(self, plan_name, months):
        assert plan_duration_months(plan_name) == months

    def test_add_months_clamps_day(self):
        assert add_months(datetime(2024, 1, 31), 1) == datetime(2024, 2, 29)
        assert add_months(datetime(2023, 1, 31), 1) == datetime(2023, 2, 28)

    def test_add_months_crosses_year(self):
        assert add_months(datetime(2023, 11, 15, 9, 30), 3) == datetime(2024, 2, 15, 9, 30)
        assert add_months(datetime(2024, 1, 15), 12) == datetime(2025, 1, 15)


class TestCompletePayment:
    """Test applying a payment to a user"""

    def test_activates_subscription_and_sends_confirmation(self, db_session, storage, make_user, email_provider):
        user = make_user(email="ava@example.com")
        service = PaymentService(db_session, email_provider)

        end = service.complete_payment(
            user, plan_name="Premium", amount=599.0, stripe_customer_id="cus_42", now=datetime(2024, 1, 15)
        )

        assert end == datetime(2025, 1, 15)
        refreshed = storage.users.get(user.id).value
        assert refreshed.is_active_filmmaker is True
        assert refreshed.subscription_tier == "Premium"
        assert refreshed.subscription_start_date == datetime(2024, 1, 15)
        assert refreshed.subscription_end_date == datetime(2025, 1, 15)
        assert refreshed.stripe_customer_id == "cus_42"

        assert [m.to for m in email_provider.sent] == ["ava@example.com"]
        assert "$599.00" in email_provider.sent[0].text_body
        log = storage.emails.get_sent_by_user(config.ADMIN_SENDER_ID).value
        assert [entry.status for entry in log] == ["sent"]

    def test_keeps_existing_customer_id_when_none_given(self, db_session, storage, make_user, email_provider):
        user = make_user()
        storage.users.update_stripe_customer_id(user.id, "cus_existing")

        PaymentService(db_session, email_provider).complete_payment(user, plan_name="Basic", amount=99.0)

        assert storage.users.get(user.id).value.stripe_customer_id == "cus_existing"

    def test_email_failure_does_not_fail_payment(self, db_session, storage, make_user):
        user = make_user()
        service = PaymentService(db_session, RecordingEmailProvider(raise_error=True))

        end = service.complete_payment(user, plan_name="Basic", amount=99.0, now=datetime(2024, 1, 1))

        assert end == datetime(2024, 4, 1)
        assert storage.users.get(user.id).value.is_active_filmmaker is True
        log = storage.emails.get_sent_by_user(config.ADMIN_SENDER_ID).value
        assert [entry.status for entry in log] == ["failed"]

    def test_undelivered_email_is_recorded_as_failed(self, db_session, storage, make_user):
        user = make_user()

        sent = PaymentService(db_session, RecordingEmailProvider(fail=True)).send_confirmation(
            to=user.email, name=user.name, plan_name="Basic", amount=99.0, end_date=datetime(2024, 4, 1)
        )

        assert sent is False
        assert storage.emails.get_sent_by_user(config.ADMIN_SENDER_ID).value[0].status == "failed"


class TestWebhookPayment:
    """Test payment_intent.succeeded handling"""

    def test_matches_user_by_receipt_email(self, db_session, storage, make_user, email_provider):
        user = make_user(email="ava@example.com")
        intent = {
            "id": "pi_1",
            "amount": 59900,
            "customer": "cus_9",
            "receipt_email": "ava@example.com",
            "metadata": {"planName": "Premium"},
        }

        end = PaymentService(db_session, email_provider).handle_payment_intent_succeeded(intent)

        assert end is not None
        refreshed = storage.users.get(user.id).value
        assert refreshed.subscription_tier == "Premium"
        assert refreshed.stripe_customer_id == "cus_9"
        assert "$599.00" in email_provider.sent[0].text_body

    def test_plan_resolved_from_plan_id(self, db_session, storage, make_user, email_provider):
        seed_catalogs(db_session)
        plan = next(p for p in storage.plans.get_all().value if p.name == "Professional")
        user = make_user(email="luis@example.com")
        intent = {"id": "pi_2", "amount": 99900, "receipt_email": "luis@example.com", "metadata": {"planId": str(plan.id)}}

        PaymentService(db_session, email_provider).handle_payment_intent_succeeded(intent)

        assert storage.users.get(user.id).value.subscription_tier == "Professional"

    def test_unknown_email_is_ignored(self, db_session, email_provider):
        intent = {"id": "pi_3", "amount": 100, "receipt_email": "nobody@example.com", "metadata": {"planName": "Basic"}}

        assert PaymentService(db_session, email_provider).handle_payment_intent_succeeded(intent) is None
        assert email_provider.sent == []

    def test_missing_plan_is_ignored(self, db_session, make_user, email_provider):
        make_user(email="ava@example.com")
        intent = {"id": "pi_4", "amount": 100, "receipt_email": "ava@example.com", "metadata": {}}

        assert PaymentService(db_session, email_provider).handle_payment_intent_succeeded(intent) is None


class TestManualConfirmation:

    def test_confirms_succeeded_intent(self, db_session, storage, make_user, email_provider, payment_gateway):
        user = make_user()
        payment_gateway.add_intent("pi_ok", customer="cus_manual")
        service = PaymentService(db_session, email_provider, payment_gateway)

        end = service.confirm_manual_payment("pi_ok", user.id, "ava@example.com", "Ava", "Basic - 6 months", 299.0)

        assert end > datetime.utcnow()
        refreshed = storage.users.get(user.id).value
        assert refreshed.subscription_tier == "Basic - 6 months"
        assert refreshed.stripe_customer_id == "cus_manual"
        assert email_provider.sent[0].to == "ava@example.com"

    def test_rejects_unfinished_intent(self, db_session, make_user, email_provider, payment_gateway):
        user = make_user()
        payment_gateway.add_intent("pi_pending", status="processing")
        service = PaymentService(db_session, email_provider, payment_gateway)

        with pytest.raises(PaymentNotCompleted) as exc_info:
            service.confirm_manual_payment("pi_pending", user.id, user.email, user.name, "Basic", 99.0)

        assert exc_info.value.status == "processing"

    def test_unknown_user(self, db_session, email_provider, payment_gateway):
        payment_gateway.add_intent("pi_ok")
        service = PaymentService(db_session, email_provider, payment_gateway)

        with pytest.raises(LookupError):
            service.confirm_manual_payment("pi_ok", 999, "x@example.com", "X", "Basic", 99.0)
