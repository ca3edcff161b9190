# Standard library imports
from typing import Optional

# Local application imports
from .base_container import BaseContainer
from .providers import (
    DatabaseProvider,
    RepositoryProvider,
    NotificationProvider,
    LoanProvider,
)
from ..core.config import Settings, get_settings
from ..domain.events.event_publisher import EventPublisher
from ..infrastructure.db.mongo_connection import MongoClientManager


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.
    
    Registration order is important:
    1. Settings
    2. Database connections (DatabaseProvider)
    3. Repositories (RepositoryProvider) - depends on database
    4. Event publisher (NotificationProvider)
    5. Services (LoanProvider) - depend on repositories and publisher
    
    Pre-built collaborators (an existing Mongo client manager, a different
    event publisher) can be handed in and are used instead of the defaults.
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        mongo_client: Optional[MongoClientManager] = None,
        event_publisher: Optional[EventPublisher] = None,
    ) -> None:
        super().__init__()
        self.register_singleton(Settings, settings or get_settings())
        if mongo_client is not None:
            self.register_singleton("mongo_client", mongo_client)
        if event_publisher is not None:
            self.register_singleton(EventPublisher, event_publisher)
        self.setup()
    
    def setup(self) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → repositories → notifications → services
        """
        DatabaseProvider.register(self)
        RepositoryProvider.register(self)
        NotificationProvider.register(self)
        LoanProvider.register(self)
    
    def shutdown(self) -> None:
        """Release connections held by registered collaborators."""
        publisher = self.get(EventPublisher)
        close = getattr(publisher, "close", None)
        if callable(close):
            close()
        self.get("mongo_client").close()
