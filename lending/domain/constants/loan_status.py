"""Status values for loan requests, offers and loans"""


class RequestStatus:
    """Status values for LoanRequest"""
    OPEN = "open"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"


class OfferStatus:
    """Status values for LoanOffer"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class LoanStatus:
    """Status values for Loan"""
    PENDING_HANDOVER = "pending_handover"
    ACTIVE = "active"
    PENDING_RETURN_CONFIRMATION = "pending_return_confirmation"
    RETURNED = "returned"
    DISPUTED = "disputed"
    
    TERMINAL = (RETURNED, DISPUTED)
    NON_TERMINAL = (PENDING_HANDOVER, ACTIVE, PENDING_RETURN_CONFIRMATION)
