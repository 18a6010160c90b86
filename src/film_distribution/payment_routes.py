"""
Payment API routes: Stripe payment intents, webhook and manual confirmation
Errors use the { error: { message } } envelope
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from .config import config
from .dependencies import get_payment_service
from .exceptions import error_detail
from .services.payment_gateway import WebhookSignatureError
from .services.payment_service import PaymentService, PaymentNotCompleted

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["payments"])


class PaymentIntentRequest(BaseModel):
    amount: Optional[float] = None  # dollars
    plan_id: Optional[str] = Field(None, alias="planId")
    description: Optional[str] = None

    model_config = {"populate_by_name": True, "coerce_numbers_to_str": True}


class PaymentSuccessRequest(BaseModel):
    payment_intent_id: str = Field(..., alias="paymentIntentId")
    user_id: int = Field(..., alias="userId")
    email: str
    name: Optional[str] = None
    plan_name: str = Field(..., alias="planName")
    amount: float

    model_config = {"populate_by_name": True}


@router.post("/create-payment-intent")
async def create_payment_intent(
    request: PaymentIntentRequest,
    payment_service: PaymentService = Depends(get_payment_service)
):
    """Create a Stripe payment intent for a plan purchase; amount is in dollars"""
    if request.amount is None or request.amount <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_detail("Invalid amount"))

    metadata = {}
    if request.plan_id:
        metadata["planId"] = request.plan_id
        plan_name = payment_service.plan_name_for_id(request.plan_id)
        if plan_name:
            metadata["planName"] = plan_name

    intent = payment_service.gateway.create_payment_intent(
        amount_cents=round(request.amount * 100),
        currency=config.PAYMENT_CURRENCY,
        description=request.description or "Filmmaker subscription",
        metadata=metadata,
    )
    return {"clientSecret": intent["client_secret"]}


@router.post("/payment-webhook")
async def payment_webhook(
    request: Request,
    payment_service: PaymentService = Depends(get_payment_service)
):
    """
    Stripe webhook endpoint

    The signature is checked when a webhook secret is configured. After
    that the event is always acknowledged; processing errors are logged.
    """
    body = await request.body()
    signature = request.headers.get("stripe-signature")

    try:
        event = payment_service.gateway.construct_event(body, signature)
    except WebhookSignatureError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_detail(f"Webhook Error: {e}"))

    event_type = event.get("type")
    data_object = (event.get("data") or {}).get("object") or {}

    try:
        if event_type == "payment_intent.succeeded":
            end = payment_service.handle_payment_intent_succeeded(data_object)
            logger.info(f"PaymentIntent {data_object.get('id')} succeeded; subscription end: {end}")
        elif event_type == "charge.succeeded":
            logger.info(f"Charge {data_object.get('id')} succeeded")
        else:
            logger.info(f"Unhandled webhook event type: {event_type}")
    except Exception as e:
        logger.error(f"Webhook processing failed for {event_type}: {e}", exc_info=True)

    return {"received": True}


@router.post("/handle-payment-success")
async def handle_payment_success(
    request: PaymentSuccessRequest,
    payment_service: PaymentService = Depends(get_payment_service)
):
    """Confirm a client-reported payment after checking it with Stripe"""
    try:
        end = payment_service.confirm_manual_payment(
            payment_intent_id=request.payment_intent_id,
            user_id=request.user_id,
            email=request.email,
            name=request.name,
            plan_name=request.plan_name,
            amount=request.amount,
        )
    except PaymentNotCompleted as e:
        logger.warning(str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_detail("Payment has not been completed"))
    except LookupError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error_detail("User not found"))

    return {"success": True, "subscriptionEnd": end.isoformat()}
