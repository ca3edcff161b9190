# Standard library imports
import os
from typing import Final, List, Optional
from dotenv import load_dotenv


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Settings:
    """
    Application settings loaded from environment variables.
    
    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """
    
    def __init__(self) -> None:
        # Load environment variables from .env file
        load_dotenv()
        
        # Timezone Configuration
        # Default to UTC, but can be set via TIMEZONE env var (e.g., "UTC", "America/Sao_Paulo")
        self.timezone: Final[str] = os.getenv("TIMEZONE", "UTC")
        
        # Logging
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()
        
        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("DB_NAME", "condo_lending")
        # Multi-document transactions need a replica set; standalone servers must leave this off
        self.mongo_transactions_enabled: Final[bool] = _env_flag("MONGO_TRANSACTIONS_ENABLED", "false")
        
        # Collection Names
        self.loan_requests_collection: Final[str] = os.getenv("LOAN_REQUESTS_COLLECTION", "loan_requests")
        self.loan_offers_collection: Final[str] = os.getenv("LOAN_OFFERS_COLLECTION", "loan_offers")
        self.loans_collection: Final[str] = os.getenv("LOANS_COLLECTION", "loans")
        
        # Authentication (tokens are issued by the external auth service)
        self.jwt_secret_key: Final[str] = os.getenv("JWT_SECRET_KEY", "dev-secret-key-change-in-production")
        self.jwt_algorithm: Final[str] = os.getenv("JWT_ALGORITHM", "HS256")
        self.jwt_issuer: Final[Optional[str]] = os.getenv("JWT_ISSUER", "condoapp") or None
        
        # Kafka Configuration (notification / chat bridge)
        self.kafka_enabled: Final[bool] = _env_flag("KAFKA_ENABLED", "false")
        self.kafka_bootstrap_servers: Final[str] = os.getenv(
            "KAFKA_BOOTSTRAP_SERVERS",
            "localhost:9092"
        )
        self.kafka_loan_events_topic: Final[str] = os.getenv(
            "KAFKA_LOAN_EVENTS_TOPIC",
            "loan-events"
        )
        
        # Loan validation bounds
        self.loan_title_min_length: Final[int] = int(os.getenv("LOAN_TITLE_MIN_LENGTH", "2"))
        self.loan_title_max_length: Final[int] = int(os.getenv("LOAN_TITLE_MAX_LENGTH", "120"))
        self.loan_description_max_length: Final[int] = int(
            os.getenv("LOAN_DESCRIPTION_MAX_LENGTH", "1000")
        )
        self.digital_term_min_length: Final[int] = int(os.getenv("DIGITAL_TERM_MIN_LENGTH", "20"))
        
        # CORS
        self.cors_allow_origins: Final[List[str]] = [
            origin.strip()
            for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
            if origin.strip()
        ]


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)
    
    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
