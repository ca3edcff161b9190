"""
Lending Exceptions
==================

Typed business failures raised by the lending use cases.
Each carries the HTTP status and error code the API layer renders.
"""
from typing import Any


class ErrorCode:
    """Machine-readable error codes"""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SELF_OFFER = "SELF_OFFER"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    OFFER_UNAVAILABLE = "OFFER_UNAVAILABLE"
    REQUEST_CLOSED = "REQUEST_CLOSED"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class LendingError(Exception):
    """Base exception for lending business errors"""
    
    error_code: str = ErrorCode.INTERNAL_ERROR
    status_code: int = 500
    
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(LendingError):
    """Malformed input"""
    error_code = ErrorCode.VALIDATION_ERROR
    status_code = 400


class SelfOfferError(ValidationError):
    """A resident tried to offer on their own request"""
    error_code = ErrorCode.SELF_OFFER
    
    def __init__(self, message: str = "You cannot make an offer on your own loan request"):
        super().__init__(message)


class NotFoundError(LendingError):
    """Referenced entity does not exist"""
    error_code = ErrorCode.NOT_FOUND
    status_code = 404
    
    def __init__(self, resource: str, identifier: Any):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} '{identifier}' not found")


class PermissionDeniedError(LendingError):
    """Authenticated but not allowed to act on this entity"""
    error_code = ErrorCode.PERMISSION_DENIED
    status_code = 403


class ConflictError(LendingError):
    """Stale state or a lost race; the caller should re-fetch"""
    status_code = 409


class OfferUnavailableError(ConflictError):
    error_code = ErrorCode.OFFER_UNAVAILABLE
    
    def __init__(self, message: str = "This offer is no longer available"):
        super().__init__(message)


class RequestClosedError(ConflictError):
    error_code = ErrorCode.REQUEST_CLOSED
    
    def __init__(self, message: str = "This loan request is no longer open"):
        super().__init__(message)


class InvalidStateTransitionError(ConflictError):
    error_code = ErrorCode.INVALID_STATE_TRANSITION
    
    def __init__(self, loan_id: str, current_status: str, event: str):
        self.loan_id = loan_id
        self.current_status = current_status
        self.event = event
        super().__init__(
            f"Cannot {event} loan '{loan_id}' while it is '{current_status}'"
        )
