"""
Pytest configuration and fixtures
"""
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

# Add src to path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Set test environment variables before importing
os.environ["ENV"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-only-min-32-chars"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("STRIPE_WEBHOOK_SECRET", None)
os.environ.pop("SMTP_HOST", None)

# Import after setting env vars
from film_distribution.api_server import app
from film_distribution.auth import get_password_hash, create_access_token
from film_distribution.db import Base, get_db, create_db_engine
from film_distribution.schemas import UserCreate
from film_distribution.services.email_provider import EmailProvider, EmailMessage, get_email_provider
from film_distribution.services.payment_gateway import (
    PaymentGateway,
    WebhookSignatureError,
    get_payment_gateway,
)
from film_distribution.storage import DatabaseStorage

TEST_PASSWORD = "testpassword123"


class RecordingEmailProvider(EmailProvider):
    """Keeps sent messages in memory; `fail` makes every send report failure"""

    def __init__(self, fail: bool = False, raise_error: bool = False):
        self.fail = fail
        self.raise_error = raise_error
        self.sent: List[EmailMessage] = []

    def send(self, message: EmailMessage) -> bool:
        if self.raise_error:
            raise ConnectionError("SMTP server unreachable")
        if self.fail:
            return False
        self.sent.append(message)
        return True

    def is_available(self) -> bool:
        return True


class FakePaymentGateway(PaymentGateway):
    """In-memory stand-in for Stripe"""

    def __init__(self):
        self.intents: Dict[str, Dict[str, Any]] = {}
        self.created: List[Dict[str, Any]] = []
        self.reject_signatures = False

    def add_intent(self, intent_id: str, status: str = "succeeded", customer: Optional[str] = "cus_test", **extra):
        self.intents[intent_id] = {"id": intent_id, "status": status, "customer": customer, "metadata": {}, **extra}

    def create_payment_intent(self, amount_cents, currency, description, metadata=None):
        intent = {
            "id": f"pi_{len(self.created) + 1}",
            "status": "requires_payment_method",
            "amount": amount_cents,
            "currency": currency,
            "description": description,
            "metadata": metadata or {},
            "client_secret": f"pi_{len(self.created) + 1}_secret",
        }
        self.created.append(intent)
        return intent

    def retrieve_payment_intent(self, payment_intent_id):
        return self.intents.get(payment_intent_id, {"id": payment_intent_id, "status": "requires_payment_method"})

    def construct_event(self, payload, signature):
        import json
        if self.reject_signatures:
            raise WebhookSignatureError("No signatures found matching the expected signature for payload")
        return json.loads(payload)


@pytest.fixture(scope="function")
def test_engine():
    """Fresh in-memory database per test"""
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(test_engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def storage(db_session):
    return DatabaseStorage(db_session)


@pytest.fixture(scope="function")
def email_provider():
    return RecordingEmailProvider()


@pytest.fixture(scope="function")
def payment_gateway():
    return FakePaymentGateway()


@pytest.fixture(scope="function")
def make_user(storage):
    """Factory creating users with a known password"""
    counter = {"n": 0}

    def _make_user(username: Optional[str] = None, email: Optional[str] = None, **fields):
        counter["n"] += 1
        username = username or f"filmmaker{counter['n']}"
        return storage.users.create(UserCreate(
            username=username,
            password=get_password_hash(TEST_PASSWORD),
            email=email or f"{username}@example.com",
            name=fields.pop("name", f"Filmmaker {counter['n']}"),
            **fields,
        ))

    return _make_user


@pytest.fixture(scope="function")
def client(db_session, email_provider, payment_gateway):
    """Test client wired to the per-test database and fake collaborators"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_provider] = lambda: email_provider
    app.dependency_overrides[get_payment_gateway] = lambda: payment_gateway

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def auth_headers(make_user):
    user = make_user(username="authuser")
    token = create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}
