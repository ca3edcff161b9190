"""Constants for loan model field names"""


class LoanRequestFields:
    """Field name constants for LoanRequest model"""
    ID = "id"
    REQUESTER_ID = "requester_id"
    CONDO_ID = "condo_id"
    TITLE = "title"
    DESCRIPTION = "description"
    STATUS = "status"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    
    # MongoDB specific
    MONGO_ID = "_id"


class LoanOfferFields:
    """Field name constants for LoanOffer model"""
    ID = "id"
    LOAN_REQUEST_ID = "loan_request_id"
    OFFERER_ID = "offerer_id"
    STATUS = "status"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    
    MONGO_ID = "_id"


class LoanFields:
    """Field name constants for Loan model"""
    ID = "id"
    LOAN_REQUEST_ID = "loan_request_id"
    OFFER_ID = "offer_id"
    OWNER_ID = "owner_id"
    BORROWER_ID = "borrower_id"
    AGREED_RETURN_DATE = "agreed_return_date"
    DIGITAL_TERM = "digital_term"
    HANDOVER_PHOTO_URL = "handover_photo_url"
    STATUS = "status"
    HANDOVER_DATE = "handover_date"
    ACTUAL_RETURN_DATE = "actual_return_date"
    RETURN_CONDITION = "return_condition"
    RETURN_CONDITION_NOTES = "return_condition_notes"
    RETURN_PHOTO_URL = "return_photo_url"
    DISPUTE_REASON = "dispute_reason"
    DISPUTED_BY = "disputed_by"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    
    MONGO_ID = "_id"
    
    DATETIME_FIELDS = (HANDOVER_DATE, ACTUAL_RETURN_DATE, CREATED_AT, UPDATED_AT)
