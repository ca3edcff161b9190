"""
Shared fixtures: an in-memory MongoDB (mongomock), a DI container wired
to it, a recording event publisher and helpers to mint bearer tokens.
"""
from datetime import datetime, timedelta, timezone
from typing import Dict, List

import mongomock
import pytest
from fastapi.testclient import TestClient
from jose import jwt

from lending.application.services.loan_request_service import LoanRequestService
from lending.application.services.loan_service import LoanService
from lending.core.config import Settings
from lending.di.container import DIContainer
from lending.domain.events.event_publisher import EventPublisher
from lending.domain.events.loan_events import LoanEvent
from lending.domain.repositories.loan_offer_repository import LoanOfferRepository
from lending.domain.repositories.loan_repository import LoanRepository
from lending.domain.repositories.loan_request_repository import LoanRequestRepository
from lending.infrastructure.db.mongo_connection import MongoClientManager
from lending.main import create_application
from lending.utils.datetime_utils import today

TEST_JWT_SECRET = "test-secret"
CONDO = "condo-1"


class RecordingEventPublisher(EventPublisher):
    """Keeps published events in memory."""
    
    def __init__(self) -> None:
        self.events: List[LoanEvent] = []
    
    def publish(self, event: LoanEvent) -> None:
        self.events.append(event)
    
    def of_type(self, event_type: str) -> List[LoanEvent]:
        return [e for e in self.events if e.event_type == event_type]


@pytest.fixture
def settings(monkeypatch) -> Settings:
    monkeypatch.setenv("JWT_SECRET_KEY", TEST_JWT_SECRET)
    monkeypatch.setenv("JWT_ISSUER", "condoapp")
    monkeypatch.setenv("KAFKA_ENABLED", "false")
    monkeypatch.setenv("MONGO_TRANSACTIONS_ENABLED", "false")
    return Settings()


@pytest.fixture
def mongo(settings) -> MongoClientManager:
    manager = MongoClientManager(settings, client=mongomock.MongoClient())
    manager.ensure_indexes()
    return manager


@pytest.fixture
def publisher() -> RecordingEventPublisher:
    return RecordingEventPublisher()


@pytest.fixture
def container(settings, mongo, publisher) -> DIContainer:
    return DIContainer(settings=settings, mongo_client=mongo, event_publisher=publisher)


@pytest.fixture
def request_service(container) -> LoanRequestService:
    return container.get(LoanRequestService)


@pytest.fixture
def loan_service(container) -> LoanService:
    return container.get(LoanService)


@pytest.fixture
def request_repository(container) -> LoanRequestRepository:
    return container.get(LoanRequestRepository)


@pytest.fixture
def offer_repository(container) -> LoanOfferRepository:
    return container.get(LoanOfferRepository)


@pytest.fixture
def loan_repository(container) -> LoanRepository:
    return container.get(LoanRepository)


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_application(container))


@pytest.fixture
def tomorrow() -> str:
    return (today() + timedelta(days=1)).isoformat()


@pytest.fixture
def agreement_terms(tomorrow) -> Dict[str, str]:
    return {
        "agreed_return_date": tomorrow,
        "digital_term": "Borrower is liable for any damage beyond normal wear.",
        "handover_photo_url": "http://x/y.jpg",
    }


@pytest.fixture
def formed_loan(request_service, loan_service, agreement_terms):
    """R asked for a drill, A lent it: a loan in pending_handover (owner A, borrower R)."""
    request = request_service.create_request("R", CONDO, "Need a drill")
    offer = request_service.create_offer(request.id, "A", CONDO)
    return loan_service.form_agreement(offer.id, "R", **agreement_terms)


def make_token(user_id: str, condo_id: str = CONDO, role: str = "resident", **overrides) -> str:
    claims = {
        "sub": user_id,
        "userId": user_id,
        "condoId": condo_id,
        "role": role,
        "iss": "condoapp",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    claims.update(overrides)
    return jwt.encode(claims, TEST_JWT_SECRET, algorithm="HS256")


def auth(user_id: str, condo_id: str = CONDO) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, condo_id)}"}
