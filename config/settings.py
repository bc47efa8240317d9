"""
Application settings and environment configuration.

Purpose:
- Centralize all config (collection endpoint, paging, notices, logging)
- Load from environment variables for 12-factor app compliance
- Provide sensible defaults for local development
"""
import os
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # UI Configuration
    APP_TITLE: str = "User Management"

    # Remote collection endpoint: GET/POST on the URL, PUT/DELETE on URL/{id}
    # Example: https://jsonplaceholder.typicode.com/users
    USERS_API_URL: str = os.getenv("USERS_API_URL", "https://jsonplaceholder.typicode.com/users")

    # Rows per page in the user table
    PAGE_SIZE: int = int(os.getenv("PAGE_SIZE", "5"))

    # Success notice lifetime (seconds)
    NOTICE_TIMEOUT_SEC: float = float(os.getenv("NOTICE_TIMEOUT_SEC", "3.0"))

    # HTTP timeout for calls to the collection endpoint (seconds)
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "10.0"))

    # Keep the id returned by POST instead of computing max+1 locally
    TRUST_SERVER_IDS: bool = os.getenv("TRUST_SERVER_IDS", "false").lower() == "true"

    # Logging: configure logging level
    # Values: DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"  # Load from .env file if present
        extra = "allow"

# Global settings instance
settings = Settings()
