"""
Payment Gateway - interface to the payment provider
Stripe payment intents and webhook verification
"""
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import stripe

from ..exceptions import UpstreamFailure

logger = logging.getLogger(__name__)


class WebhookSignatureError(Exception):
    """Webhook payload did not carry a valid provider signature"""


class PaymentGateway(ABC):
    """Abstract base class for payment providers"""

    @abstractmethod
    def create_payment_intent(
        self,
        amount_cents: int,
        currency: str,
        description: str,
        metadata: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """Create a payment intent; returns id, client_secret and status"""

    @abstractmethod
    def retrieve_payment_intent(self, payment_intent_id: str) -> Dict[str, Any]:
        """Fetch a payment intent; returns id, status, customer, amount, metadata"""

    @abstractmethod
    def construct_event(self, payload: bytes, signature: Optional[str]) -> Dict[str, Any]:
        """Verify a webhook payload and return the event; raises WebhookSignatureError"""

    def verify_webhook_signature(self, payload: bytes, signature: Optional[str]) -> bool:
        try:
            self.construct_event(payload, signature)
            return True
        except WebhookSignatureError:
            return False


def _field(obj, key: str) -> Any:
    try:
        return obj[key]
    except KeyError:
        return None


def _intent_dict(intent) -> Dict[str, Any]:
    metadata = _field(intent, "metadata")
    return {
        "id": _field(intent, "id"),
        "status": _field(intent, "status"),
        "amount": _field(intent, "amount"),
        "currency": _field(intent, "currency"),
        "customer": _field(intent, "customer"),
        "receipt_email": _field(intent, "receipt_email"),
        "client_secret": _field(intent, "client_secret"),
        "metadata": {key: metadata[key] for key in metadata.keys()} if metadata else {},
    }


class StripeGateway(PaymentGateway):
    """Stripe payment gateway"""

    def __init__(self, api_key: Optional[str], webhook_secret: Optional[str] = None):
        """
        Args:
            api_key: Stripe secret key (test or live)
            webhook_secret: Stripe webhook signing secret; without one, webhook
                payloads are accepted unverified (development only)
        """
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    def create_payment_intent(
        self,
        amount_cents: int,
        currency: str,
        description: str,
        metadata: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount_cents,
                currency=currency,
                description=description,
                automatic_payment_methods={"enabled": True},
                metadata=metadata or {},
                api_key=self.api_key,
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe payment intent creation failed: {e}")
            raise UpstreamFailure("stripe", getattr(e, "user_message", None) or str(e)) from e
        logger.info(f"Created payment intent {intent['id']} for {amount_cents} {currency}")
        return _intent_dict(intent)

    def retrieve_payment_intent(self, payment_intent_id: str) -> Dict[str, Any]:
        try:
            intent = stripe.PaymentIntent.retrieve(payment_intent_id, api_key=self.api_key)
        except stripe.StripeError as e:
            logger.error(f"Stripe payment intent retrieval failed for {payment_intent_id}: {e}")
            raise UpstreamFailure("stripe", getattr(e, "user_message", None) or str(e)) from e
        return _intent_dict(intent)

    def construct_event(self, payload: bytes, signature: Optional[str]) -> Dict[str, Any]:
        if self.webhook_secret:
            try:
                stripe.Webhook.construct_event(payload, signature or "", self.webhook_secret)
            except stripe.SignatureVerificationError as e:
                logger.warning(f"Webhook signature verification failed: {e}")
                raise WebhookSignatureError(str(e)) from e
            except ValueError as e:
                raise WebhookSignatureError(f"Invalid payload: {e}") from e
        else:
            logger.warning("STRIPE_WEBHOOK_SECRET not set, accepting webhook without verification")

        try:
            return json.loads(payload)
        except ValueError as e:
            raise WebhookSignatureError(f"Invalid payload: {e}") from e


# Singleton instance
_payment_gateway: Optional[PaymentGateway] = None


def get_payment_gateway() -> PaymentGateway:
    """Get or create the payment gateway singleton from config"""
    global _payment_gateway

    if _payment_gateway is None:
        from ..config import config

        if not config.STRIPE_SECRET_KEY:
            logger.warning("STRIPE_SECRET_KEY not set; payment provider calls will fail")
        _payment_gateway = StripeGateway(
            api_key=config.STRIPE_SECRET_KEY,
            webhook_secret=config.STRIPE_WEBHOOK_SECRET,
        )
    return _payment_gateway
