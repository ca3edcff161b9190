"""
API v1 Package
===============

Version 1 API controllers.
"""
from .loan_request_controller import router as loan_request_router
from .loan_controller import router as loan_router

__all__ = ["loan_request_router", "loan_router"]
