from datetime import date, timedelta

import pytest
from pymongo.errors import DuplicateKeyError

from lending.application.use_cases.loan.form_agreement import FormAgreementUseCase
from lending.domain.constants.loan_status import LoanStatus, OfferStatus, RequestStatus
from lending.domain.events.event_publisher import EventPublisher
from lending.domain.events.loan_events import LoanEventType
from lending.domain.exceptions import (
    NotFoundError,
    OfferUnavailableError,
    PermissionDeniedError,
    ValidationError,
)
from lending.domain.models.loan import Loan
from lending.domain.repositories.unit_of_work import UnitOfWork
from lending.utils.datetime_utils import today

from conftest import CONDO


class StaleReads:
    """
    Wraps a repository so find_by_id keeps answering with what it saw first.
    
    Lets several formations pass their precondition checks against the same
    snapshot, as concurrent transactions would, so only the conditional
    writes decide who wins.
    """
    
    def __init__(self, repository):
        self._repository = repository
        self._snapshots = {}
    
    def find_by_id(self, entity_id, session=None):
        if entity_id not in self._snapshots:
            self._snapshots[entity_id] = self._repository.find_by_id(entity_id, session=session)
        return self._snapshots[entity_id]
    
    def __getattr__(self, name):
        return getattr(self._repository, name)


class FailingPublisher(EventPublisher):
    def publish(self, event):
        raise RuntimeError("broker unavailable")


def _request_with_offers(request_service, offerers):
    request = request_service.create_request("R", CONDO, "Need a drill")
    offers = [request_service.create_offer(request.id, user, CONDO) for user in offerers]
    return request, offers


def test_single_offer_forms_loan(
    request_service, loan_service, request_repository, offer_repository, agreement_terms, tomorrow
):
    request, (offer,) = _request_with_offers(request_service, ["A"])
    
    loan = loan_service.form_agreement(offer.id, "R", **agreement_terms)
    
    assert loan.status == LoanStatus.PENDING_HANDOVER
    assert loan.owner_id == "A"
    assert loan.borrower_id == "R"
    assert loan.offer_id == offer.id
    assert loan.loan_request_id == request.id
    assert loan.agreed_return_date.isoformat() == tomorrow
    assert request_repository.find_by_id(request.id).status == RequestStatus.FULFILLED
    assert offer_repository.find_by_id(offer.id).status == OfferStatus.ACCEPTED


def test_competing_offers_are_rejected(
    request_service, loan_service, offer_repository, loan_repository, agreement_terms
):
    request, (offer_a, offer_b) = _request_with_offers(request_service, ["A", "B"])
    
    loan = loan_service.form_agreement(offer_b.id, "R", **agreement_terms)
    
    assert loan.owner_id == "B"
    assert offer_repository.find_by_id(offer_a.id).status == OfferStatus.REJECTED
    assert offer_repository.find_by_id(offer_b.id).status == OfferStatus.ACCEPTED
    assert len(loan_repository.find_by_request_id(request.id)) == 1
    
    with pytest.raises(OfferUnavailableError):
        loan_service.form_agreement(offer_a.id, "R", **agreement_terms)
    with pytest.raises(OfferUnavailableError):
        loan_service.form_agreement(offer_b.id, "R", **agreement_terms)
    assert len(loan_repository.find_by_request_id(request.id)) == 1


def test_loan_formed_event_lists_participants(request_service, loan_service, publisher, agreement_terms):
    _, (offer,) = _request_with_offers(request_service, ["A"])
    
    loan = loan_service.form_agreement(offer.id, "R", **agreement_terms)
    
    events = publisher.of_type(LoanEventType.LOAN_FORMED)
    assert len(events) == 1
    assert events[0].payload["loan_id"] == loan.id
    assert sorted(events[0].payload["participants"]) == ["A", "R"]


def test_only_requester_may_accept(request_service, loan_service, offer_repository, agreement_terms):
    _, (offer,) = _request_with_offers(request_service, ["A"])
    
    for outsider in ("A", "B"):
        with pytest.raises(PermissionDeniedError):
            loan_service.form_agreement(offer.id, outsider, **agreement_terms)
    
    assert offer_repository.find_by_id(offer.id).status == OfferStatus.PENDING


def test_unknown_offer_is_not_found(loan_service, agreement_terms):
    with pytest.raises(NotFoundError):
        loan_service.form_agreement("missing", "R", **agreement_terms)


def test_offer_on_cancelled_request_is_unavailable(request_service, loan_service, agreement_terms):
    request, (offer,) = _request_with_offers(request_service, ["A"])
    request_service.cancel_request(request.id, "R")
    
    with pytest.raises(OfferUnavailableError):
        loan_service.form_agreement(offer.id, "R", **agreement_terms)


@pytest.mark.parametrize("overrides", [
    {"agreed_return_date": (today() - timedelta(days=1)).isoformat()},
    {"agreed_return_date": "next tuesday"},
    {"digital_term": "too short"},
    {"handover_photo_url": "not a url"},
    {"handover_photo_url": "ftp://x/y.jpg"},
])
def test_invalid_terms_leave_everything_untouched(
    request_service, loan_service, request_repository, offer_repository, loan_repository,
    agreement_terms, overrides,
):
    request, (offer,) = _request_with_offers(request_service, ["A"])
    
    with pytest.raises(ValidationError):
        loan_service.form_agreement(offer.id, "R", **{**agreement_terms, **overrides})
    
    assert request_repository.find_by_id(request.id).status == RequestStatus.OPEN
    assert offer_repository.find_by_id(offer.id).status == OfferStatus.PENDING
    assert loan_repository.find_by_request_id(request.id) == []


def test_return_date_today_is_accepted(request_service, loan_service, agreement_terms):
    _, (offer,) = _request_with_offers(request_service, ["A"])
    
    loan = loan_service.form_agreement(
        offer.id, "R", **{**agreement_terms, "agreed_return_date": today()}
    )
    
    assert loan.agreed_return_date == today()
    assert isinstance(loan.agreed_return_date, date)


def test_concurrent_formations_have_exactly_one_winner(
    container, request_service, request_repository, offer_repository, loan_repository,
    publisher, settings, agreement_terms,
):
    offerers = ["A", "B", "C", "D", "E"]
    request, offers = _request_with_offers(request_service, offerers)
    use_case = FormAgreementUseCase(
        request_repository=StaleReads(request_repository),
        offer_repository=StaleReads(offer_repository),
        loan_repository=loan_repository,
        unit_of_work=container.get(UnitOfWork),
        event_publisher=publisher,
        settings=settings,
    )
    # Every attempt reads the request as open and its offer as pending
    for offer in offers:
        use_case._request_repository.find_by_id(request.id)
        use_case._offer_repository.find_by_id(offer.id)
    
    winners, losers = [], []
    for offer in reversed(offers):
        try:
            winners.append(use_case.execute(offer.id, "R", **agreement_terms))
        except OfferUnavailableError:
            losers.append(offer.id)
    
    assert len(winners) == 1
    assert len(losers) == len(offers) - 1
    winner = winners[0]
    
    statuses = {o.id: o.status for o in offer_repository.find_by_request_id(request.id)}
    assert statuses[winner.offer_id] == OfferStatus.ACCEPTED
    assert [s for s in statuses.values() if s == OfferStatus.ACCEPTED] == [OfferStatus.ACCEPTED]
    assert all(statuses[offer_id] == OfferStatus.REJECTED for offer_id in losers)
    assert len(loan_repository.find_by_request_id(request.id)) == 1
    assert request_repository.find_by_id(request.id).status == RequestStatus.FULFILLED
    assert len(publisher.of_type(LoanEventType.LOAN_FORMED)) == 1


def test_publisher_failure_does_not_undo_agreement(
    container, request_service, request_repository, offer_repository, loan_repository,
    settings, agreement_terms,
):
    request, (offer,) = _request_with_offers(request_service, ["A"])
    use_case = FormAgreementUseCase(
        request_repository=request_repository,
        offer_repository=offer_repository,
        loan_repository=loan_repository,
        unit_of_work=container.get(UnitOfWork),
        event_publisher=FailingPublisher(),
        settings=settings,
    )
    
    loan = use_case.execute(offer.id, "R", **agreement_terms)
    
    assert loan_repository.find_by_id(loan.id).status == LoanStatus.PENDING_HANDOVER
    assert request_repository.find_by_id(request.id).status == RequestStatus.FULFILLED


def test_failed_loan_insert_reopens_request(
    monkeypatch, request_service, loan_service, request_repository, offer_repository,
    loan_repository, publisher, agreement_terms,
):
    request, (offer_a, offer_b) = _request_with_offers(request_service, ["A", "B"])
    
    def insert_fails(loan, session=None):
        raise RuntimeError("connection reset")
    
    monkeypatch.setattr(loan_repository, "create", insert_fails)
    with pytest.raises(RuntimeError):
        loan_service.form_agreement(offer_a.id, "R", **agreement_terms)
    
    assert request_repository.find_by_id(request.id).status == RequestStatus.OPEN
    assert offer_repository.find_by_id(offer_a.id).status == OfferStatus.PENDING
    assert offer_repository.find_by_id(offer_b.id).status == OfferStatus.PENDING
    assert loan_repository.find_by_request_id(request.id) == []
    assert publisher.of_type(LoanEventType.LOAN_FORMED) == []
    
    monkeypatch.undo()
    loan = loan_service.form_agreement(offer_b.id, "R", **agreement_terms)
    
    assert loan.owner_id == "B"
    assert offer_repository.find_by_id(offer_a.id).status == OfferStatus.REJECTED


def test_failed_rejection_reopens_request(
    monkeypatch, request_service, loan_service, request_repository, offer_repository, agreement_terms,
):
    request, (offer_a, offer_b) = _request_with_offers(request_service, ["A", "B"])
    
    def reject_fails(request_id, except_offer_id=None, session=None):
        raise RuntimeError("connection reset")
    
    monkeypatch.setattr(offer_repository, "reject_pending", reject_fails)
    with pytest.raises(RuntimeError):
        loan_service.form_agreement(offer_a.id, "R", **agreement_terms)
    
    assert request_repository.find_by_id(request.id).status == RequestStatus.OPEN
    assert offer_repository.find_by_id(offer_a.id).status == OfferStatus.PENDING
    assert offer_repository.find_by_id(offer_b.id).status == OfferStatus.PENDING


def test_store_rejects_second_loan_for_a_request(loan_repository, formed_loan):
    duplicate = Loan(
        id="other-loan",
        loan_request_id=formed_loan.loan_request_id,
        offer_id="other-offer",
        owner_id="B",
        borrower_id="R",
        agreed_return_date=formed_loan.agreed_return_date,
        digital_term=formed_loan.digital_term,
        handover_photo_url=formed_loan.handover_photo_url,
    )
    
    with pytest.raises(DuplicateKeyError):
        loan_repository.create(duplicate)
