"""
API Dependencies
================

Authentication and service lookup for the v1 controllers.
Services come from the DI container attached to the application.
"""
import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from lending.application.services.loan_request_service import LoanRequestService
from lending.application.services.loan_service import LoanService
from lending.core.config import Settings
from lending.di.container import DIContainer
from lending.domain.models.principal import Principal

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported as 401, not 403
security = HTTPBearer(auto_error=False)


def get_container(request: Request) -> DIContainer:
    """Get the DI container the application was built with."""
    return request.app.state.container


def get_settings_dependency(container: DIContainer = Depends(get_container)) -> Settings:
    return container.get(Settings)


def get_loan_request_service(container: DIContainer = Depends(get_container)) -> LoanRequestService:
    """
    Get loan request service instance (singleton).
    
    Returns:
        LoanRequestService instance
    """
    return container.get(LoanRequestService)


def get_loan_service(container: DIContainer = Depends(get_container)) -> LoanService:
    """
    Get loan service instance (singleton).
    
    Returns:
        LoanService instance
    """
    return container.get(LoanService)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    settings: Settings = Depends(get_settings_dependency),
) -> Principal:
    """
    Verify the bearer token and extract the caller.
    
    Tokens are HS256 JWTs issued by the auth service. The user id is read
    from 'userId' (falling back to 'sub'); 'condoId' is required.
    
    Returns:
        Principal with user_id, condo_id and role
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Not authenticated")
    
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
            options={"verify_aud": False},
        )
    except JWTError as e:
        logger.info("JWT validation error: %s", e)
        raise _unauthorized("Could not validate credentials")
    
    user_id = payload.get("userId") or payload.get("sub")
    condo_id = payload.get("condoId")
    if not user_id or not condo_id:
        raise _unauthorized("Invalid token: missing user or condominium information")
    
    return Principal(
        user_id=str(user_id),
        condo_id=str(condo_id),
        role=payload.get("role", "resident"),
    )
