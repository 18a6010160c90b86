"""
Payment Service - completes filmmaker subscription payments
"""
import calendar
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..config import config
from ..db.models import User, EmailStatus
from ..schemas import FilmmakerSubscriptionUpdate, EmailSentCreate
from ..storage import DatabaseStorage
from .email_provider import EmailProvider, EmailMessage
from .email_templates import PaymentConfirmationTemplate
from .payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


class PaymentNotCompleted(Exception):
    """The provider does not report the payment intent as succeeded"""

    def __init__(self, payment_intent_id: str, status: Optional[str]):
        super().__init__(f"Payment intent {payment_intent_id} has status '{status}'")
        self.payment_intent_id = payment_intent_id
        self.status = status


def plan_duration_months(plan_name: Optional[str]) -> int:
    """
    Subscription length derived from the plan name

    "6 months" -> 6, "1 year" or "Premium" -> 12, anything else -> 3
    """
    name = plan_name or ""
    if "6 months" in name:
        return 6
    if "1 year" in name or "Premium" in name:
        return 12
    return 3


def add_months(start: datetime, months: int) -> datetime:
    """Calendar month arithmetic; the day is clamped to the target month's length"""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


class PaymentService:
    """Service applying completed payments to filmmaker accounts"""

    def __init__(self, db: Session, email_provider: EmailProvider, gateway: Optional[PaymentGateway] = None):
        self.db = db
        self.storage = DatabaseStorage(db)
        self.email_provider = email_provider
        self.gateway = gateway

    def complete_payment(
        self,
        user: User,
        plan_name: str,
        amount: float,
        stripe_customer_id: Optional[str] = None,
        email: Optional[str] = None,
        name: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> datetime:
        """
        Activate the user's filmmaker subscription and send a confirmation

        Returns the subscription end date. The confirmation email is best
        effort: a failure is logged and recorded, never raised.
        """
        start = now or datetime.utcnow()
        end = add_months(start, plan_duration_months(plan_name))

        updated = self.storage.users.update_filmmaker_subscription(user.id, FilmmakerSubscriptionUpdate(
            stripe_customer_id=stripe_customer_id,
            subscription_tier=plan_name,
            subscription_start_date=start,
            subscription_end_date=end,
            is_active_filmmaker=True,
        ))
        if updated is None:
            raise LookupError(f"User {user.id} disappeared while completing payment")

        self.send_confirmation(
            to=email or updated.email,
            name=name or updated.name,
            plan_name=plan_name,
            amount=amount,
            end_date=end,
        )
        logger.info(f"Processed payment for user {updated.id}: plan={plan_name}, until={end.isoformat()}")
        return end

    def handle_payment_intent_succeeded(self, intent: Dict[str, Any]) -> Optional[datetime]:
        """
        Apply a `payment_intent.succeeded` webhook event

        The user is found by the intent's receipt email. Returns the new
        subscription end date, or None when the event cannot be matched.
        """
        metadata = intent.get("metadata") or {}
        plan_name = metadata.get("planName") or self.plan_name_for_id(metadata.get("planId"))
        customer_email = intent.get("receipt_email") or ""

        if not plan_name:
            logger.error(f"Payment intent {intent.get('id')} carries no plan information")
            return None

        user = self.storage.users.get_by_email(customer_email).unwrap() if customer_email else None
        if user is None:
            logger.error(f"User with email {customer_email!r} not found for payment intent {intent.get('id')}")
            return None

        amount = (intent.get("amount") or 0) / 100
        return self.complete_payment(
            user,
            plan_name=plan_name,
            amount=amount,
            stripe_customer_id=intent.get("customer"),
        )

    def confirm_manual_payment(
        self,
        payment_intent_id: str,
        user_id: int,
        email: str,
        name: Optional[str],
        plan_name: str,
        amount: float
    ) -> datetime:
        """
        Confirm a payment reported by the client after checking it with the provider

        Raises PaymentNotCompleted if the intent has not succeeded and
        LookupError if the user does not exist.
        """
        intent = self.gateway.retrieve_payment_intent(payment_intent_id)
        if intent.get("status") != "succeeded":
            raise PaymentNotCompleted(payment_intent_id, intent.get("status"))

        user = self.storage.users.get(user_id).unwrap()
        if user is None:
            raise LookupError(f"User {user_id} not found")

        return self.complete_payment(
            user,
            plan_name=plan_name,
            amount=amount,
            stripe_customer_id=intent.get("customer"),
            email=email,
            name=name,
        )

    def send_confirmation(self, to: str, name: str, plan_name: str, amount: float, end_date: datetime) -> bool:
        """Send and record the payment confirmation email; never raises"""
        subject = PaymentConfirmationTemplate.subject
        text_body = PaymentConfirmationTemplate.render_plain_text(
            name=name, plan_name=plan_name, amount=amount, end_date=end_date
        )
        try:
            html_body = PaymentConfirmationTemplate.render_html(
                name=name, plan_name=plan_name, amount=amount, end_date=end_date
            )
            sent = self.email_provider.send(EmailMessage(
                to=to, subject=subject, html_body=html_body, text_body=text_body
            ))
        except Exception as e:
            logger.error(f"Failed to send confirmation email to {to}: {e}", exc_info=True)
            sent = False

        if not sent:
            logger.error(f"Confirmation email to {to} was not delivered")

        try:
            self.storage.emails.record_sent(EmailSentCreate(
                subject=subject,
                content=text_body,
                recipients=[to],
                sent_by=config.ADMIN_SENDER_ID,
                status=EmailStatus.SENT.value if sent else EmailStatus.FAILED.value,
            ))
        except Exception as e:
            logger.error(f"Could not record confirmation email to {to}: {e}")
        return sent

    def plan_name_for_id(self, plan_id: Optional[str]) -> Optional[str]:
        try:
            plan = self.storage.plans.get(int(plan_id)).value if plan_id else None
        except (TypeError, ValueError):
            return None
        return plan.name if plan else None
