from datetime import datetime, timedelta, timezone

import pytest

from lending.domain.constants.loan_status import OfferStatus, RequestStatus
from lending.domain.events.loan_events import LoanEventType
from lending.domain.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    RequestClosedError,
    SelfOfferError,
    ValidationError,
)
from lending.domain.models.loan_request import LoanRequest

from conftest import CONDO


def test_create_request_is_open_and_scoped_to_condo(request_service):
    request = request_service.create_request("R", CONDO, "  Need a drill ", "For two shelves")
    
    assert request.status == RequestStatus.OPEN
    assert request.condo_id == CONDO
    assert request.requester_id == "R"
    assert request.title == "Need a drill"
    assert request.description == "For two shelves"


@pytest.mark.parametrize("title", ["", "   ", "x", "y" * 121])
def test_create_request_rejects_bad_titles(request_service, title):
    with pytest.raises(ValidationError):
        request_service.create_request("R", CONDO, title)


def test_create_request_rejects_long_description(request_service):
    with pytest.raises(ValidationError):
        request_service.create_request("R", CONDO, "Ladder", "d" * 1001)


def test_list_open_excludes_own_other_condos_and_closed(request_service):
    mine = request_service.create_request("R", CONDO, "Mine")
    theirs = request_service.create_request("B", CONDO, "Theirs")
    request_service.create_request("C", "condo-2", "Elsewhere")
    cancelled = request_service.create_request("D", CONDO, "Cancelled")
    request_service.cancel_request(cancelled.id, "D")
    
    listed = request_service.list_open_requests(CONDO, "R")
    
    assert [r.id for r in listed] == [theirs.id]
    assert mine.id not in [r.id for r in listed]


def test_list_open_is_newest_first(request_service, request_repository):
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for i, title in enumerate(["oldest", "middle", "newest"]):
        request_repository.create(LoanRequest(
            id=f"req-{i}",
            requester_id="B",
            condo_id=CONDO,
            title=title,
            created_at=base + timedelta(minutes=i),
            updated_at=base + timedelta(minutes=i),
        ))
    
    listed = request_service.list_open_requests(CONDO, "R")
    
    assert [r.title for r in listed] == ["newest", "middle", "oldest"]


def test_get_request_includes_offers(request_service):
    request = request_service.create_request("R", CONDO, "Need a drill")
    first = request_service.create_offer(request.id, "A", CONDO)
    second = request_service.create_offer(request.id, "B", CONDO)
    
    detail = request_service.get_request_with_offers(request.id, CONDO)
    
    assert {o.id for o in detail.offers} == {first.id, second.id}
    assert all(o.status == OfferStatus.PENDING for o in detail.offers)


def test_get_request_from_another_condo_is_not_found(request_service):
    request = request_service.create_request("R", CONDO, "Need a drill")
    
    with pytest.raises(NotFoundError):
        request_service.get_request_with_offers(request.id, "condo-2")
    with pytest.raises(NotFoundError):
        request_service.get_request_with_offers("missing", CONDO)


def test_create_offer_emits_event(request_service, publisher):
    request = request_service.create_request("R", CONDO, "Need a drill")
    
    offer = request_service.create_offer(request.id, "A", CONDO)
    
    assert offer.status == OfferStatus.PENDING
    assert offer.offerer_id == "A"
    events = publisher.of_type(LoanEventType.OFFER_CREATED)
    assert len(events) == 1
    assert events[0].payload["requester_id"] == "R"
    assert events[0].payload["offer_id"] == offer.id


def test_self_offer_is_rejected(request_service, offer_repository):
    request = request_service.create_request("R", CONDO, "Need a drill")
    
    with pytest.raises(SelfOfferError) as exc_info:
        request_service.create_offer(request.id, "R", CONDO)
    
    assert exc_info.value.status_code == 400
    assert offer_repository.find_by_request_id(request.id) == []


def test_offer_on_missing_or_foreign_request_is_not_found(request_service):
    request = request_service.create_request("R", CONDO, "Need a drill")
    
    with pytest.raises(NotFoundError):
        request_service.create_offer("missing", "A", CONDO)
    with pytest.raises(NotFoundError):
        request_service.create_offer(request.id, "A", "condo-2")


def test_offer_on_closed_request_conflicts(request_service):
    request = request_service.create_request("R", CONDO, "Need a drill")
    request_service.cancel_request(request.id, "R")
    
    with pytest.raises(RequestClosedError) as exc_info:
        request_service.create_offer(request.id, "A", CONDO)
    
    assert exc_info.value.status_code == 409


def test_cancel_rejects_pending_offers(request_service, offer_repository):
    request = request_service.create_request("R", CONDO, "Need a drill")
    request_service.create_offer(request.id, "A", CONDO)
    request_service.create_offer(request.id, "B", CONDO)
    
    cancelled = request_service.cancel_request(request.id, "R")
    
    assert cancelled.status == RequestStatus.CANCELLED
    offers = offer_repository.find_by_request_id(request.id)
    assert [o.status for o in offers] == [OfferStatus.REJECTED, OfferStatus.REJECTED]


def test_cancel_checks_requester_then_state(request_service):
    request = request_service.create_request("R", CONDO, "Need a drill")
    
    with pytest.raises(NotFoundError):
        request_service.cancel_request("missing", "R")
    with pytest.raises(PermissionDeniedError):
        request_service.cancel_request(request.id, "A")
    
    request_service.cancel_request(request.id, "R")
    with pytest.raises(RequestClosedError):
        request_service.cancel_request(request.id, "R")


def test_failed_cancel_leaves_request_open(monkeypatch, request_service, request_repository, offer_repository):
    request = request_service.create_request("R", CONDO, "Need a drill")
    offer = request_service.create_offer(request.id, "A", CONDO)
    
    def reject_fails(request_id, except_offer_id=None, session=None):
        raise RuntimeError("connection reset")
    
    monkeypatch.setattr(offer_repository, "reject_pending", reject_fails)
    with pytest.raises(RuntimeError):
        request_service.cancel_request(request.id, "R")
    
    assert request_repository.find_by_id(request.id).status == RequestStatus.OPEN
    assert offer_repository.find_by_id(offer.id).status == OfferStatus.PENDING
