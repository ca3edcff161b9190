import pytest
from pymongo.errors import OperationFailure, PyMongoError

from lending.application.use_cases.loan.form_agreement import FormAgreementUseCase
from lending.domain.constants.loan_status import OfferStatus, RequestStatus
from lending.domain.exceptions import OfferUnavailableError
from lending.domain.repositories.unit_of_work import TransactionScope
from lending.infrastructure.db.mongo_unit_of_work import MongoUnitOfWork

from conftest import CONDO


def _write_conflict():
    return OperationFailure(
        "WriteConflict",
        code=112,
        details={"errorLabels": ["TransientTransactionError"]},
    )


class FakeSession:
    """Client session that retries its callback on transient errors, like pymongo's."""
    
    def __init__(self):
        self.attempts = 0
        self.ended = False
    
    def __enter__(self):
        return self
    
    def __exit__(self, *exc_info):
        self.ended = True
    
    def with_transaction(self, callback):
        while True:
            self.attempts += 1
            try:
                return callback(self)
            except PyMongoError as exc:
                if exc.has_error_label("TransientTransactionError") and self.attempts < 5:
                    continue
                raise


class FakeClient:
    def __init__(self):
        self.sessions = []
    
    def start_session(self):
        session = FakeSession()
        self.sessions.append(session)
        return session


class FakeMongo:
    def __init__(self):
        self.client = FakeClient()


class Sessionless:
    """Forwards to a mongomock-backed repository, recording and dropping the session."""
    
    def __init__(self, repository):
        self._repository = repository
        self.sessions = []
    
    def __getattr__(self, name):
        method = getattr(self._repository, name)
        
        def call(*args, **kwargs):
            self.sessions.append(kwargs.pop("session", None))
            return method(*args, **kwargs)
        return call


class LosesFirstClaim:
    """Request repository whose first claim collides with a formation committed meanwhile."""
    
    def __init__(self, repository, commit_winner):
        self._repository = repository
        self._commit_winner = commit_winner
        self.conflicts = 0
    
    def transition_status(self, *args, **kwargs):
        if self.conflicts == 0:
            self.conflicts += 1
            self._commit_winner()
            raise _write_conflict()
        return self._repository.transition_status(*args, **kwargs)
    
    def __getattr__(self, name):
        return getattr(self._repository, name)


def test_without_transactions_undo_steps_run_newest_first():
    unit_of_work = MongoUnitOfWork(FakeMongo(), transactions_enabled=False)
    undone = []
    
    def work(scope):
        assert scope.session is None
        scope.on_rollback(lambda: undone.append("first"))
        scope.on_rollback(lambda: undone.append("second"))
        raise RuntimeError("insert failed")
    
    with pytest.raises(RuntimeError):
        unit_of_work.run(work)
    
    assert undone == ["second", "first"]


def test_without_transactions_success_keeps_writes():
    unit_of_work = MongoUnitOfWork(FakeMongo(), transactions_enabled=False)
    undone = []
    
    def work(scope):
        scope.on_rollback(lambda: undone.append("step"))
        return "done"
    
    assert unit_of_work.run(work) == "done"
    assert undone == []


def test_failing_undo_step_does_not_stop_the_rest():
    scope = TransactionScope()
    undone = []
    
    def broken():
        raise RuntimeError("store down")
    
    scope.on_rollback(lambda: undone.append("first"))
    scope.on_rollback(broken)
    scope.rollback()
    
    assert undone == ["first"]


def test_with_transactions_work_runs_in_session():
    mongo = FakeMongo()
    unit_of_work = MongoUnitOfWork(mongo, transactions_enabled=True)
    seen = []
    
    def work(scope):
        seen.append(scope)
        scope.on_rollback(lambda: pytest.fail("transactions abort on their own"))
        return "done"
    
    assert unit_of_work.run(work) == "done"
    
    (session,) = mongo.client.sessions
    assert seen[0].session is session
    assert seen[0].transactional
    assert session.ended


def test_with_transactions_errors_propagate_and_end_session():
    mongo = FakeMongo()
    unit_of_work = MongoUnitOfWork(mongo, transactions_enabled=True)
    
    def work(scope):
        raise OfferUnavailableError()
    
    with pytest.raises(OfferUnavailableError):
        unit_of_work.run(work)
    
    (session,) = mongo.client.sessions
    assert session.attempts == 1
    assert session.ended


def test_transient_conflict_is_retried():
    mongo = FakeMongo()
    unit_of_work = MongoUnitOfWork(mongo, transactions_enabled=True)
    calls = []
    
    def work(scope):
        calls.append(scope.session)
        if len(calls) == 1:
            raise _write_conflict()
        return "committed"
    
    assert unit_of_work.run(work) == "committed"
    assert len(calls) == 2


def test_losing_transactional_formation_reports_offer_unavailable(
    request_service, loan_service, request_repository, offer_repository, loan_repository,
    publisher, settings, agreement_terms,
):
    request = request_service.create_request("R", CONDO, "Need a drill")
    offer_a = request_service.create_offer(request.id, "A", CONDO)
    offer_b = request_service.create_offer(request.id, "B", CONDO)
    mongo = FakeMongo()
    requests = Sessionless(LosesFirstClaim(
        request_repository,
        commit_winner=lambda: loan_service.form_agreement(offer_a.id, "R", **agreement_terms),
    ))
    use_case = FormAgreementUseCase(
        request_repository=requests,
        offer_repository=Sessionless(offer_repository),
        loan_repository=Sessionless(loan_repository),
        unit_of_work=MongoUnitOfWork(mongo, transactions_enabled=True),
        event_publisher=publisher,
        settings=settings,
    )
    
    with pytest.raises(OfferUnavailableError):
        use_case.execute(offer_b.id, "R", **agreement_terms)
    
    (session,) = mongo.client.sessions
    assert session.attempts == 2
    assert all(s is session for s in requests.sessions)
    assert request_repository.find_by_id(request.id).status == RequestStatus.FULFILLED
    assert offer_repository.find_by_id(offer_a.id).status == OfferStatus.ACCEPTED
    assert offer_repository.find_by_id(offer_b.id).status == OfferStatus.REJECTED
    loans = loan_repository.find_by_request_id(request.id)
    assert [loan.owner_id for loan in loans] == ["A"]
