"""
FastAPI dependencies wiring sessions to storage and services
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from .db import get_db
from .services.email_provider import EmailProvider, get_email_provider
from .services.filmmaker_service import FilmmakerService
from .services.payment_gateway import PaymentGateway, get_payment_gateway
from .services.payment_service import PaymentService
from .storage import DatabaseStorage


def get_storage(db: Session = Depends(get_db)) -> DatabaseStorage:
    return DatabaseStorage(db)


def get_payment_service(
    db: Session = Depends(get_db),
    email_provider: EmailProvider = Depends(get_email_provider),
    gateway: PaymentGateway = Depends(get_payment_gateway)
) -> PaymentService:
    return PaymentService(db, email_provider, gateway)


def get_filmmaker_service(
    db: Session = Depends(get_db),
    email_provider: EmailProvider = Depends(get_email_provider)
) -> FilmmakerService:
    return FilmmakerService(db, email_provider)
