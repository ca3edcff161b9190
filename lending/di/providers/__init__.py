"""
Providers Package
=================

Dependency injection providers for registering dependencies.
"""
from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .notification_provider import NotificationProvider
from .loan_provider import LoanProvider

__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "NotificationProvider",
    "LoanProvider",
]
