# -*- coding: utf-8 -*-
"""
Formatting service configuration using Pydantic BaseSettings.
"""
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central service configuration loaded from environment variables.
    Values can also be read from a local .env file.
    """

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8002

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # API Documentation (disable in production)
    DOCS_ENABLED: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = False

    # Request tracking
    REQUEST_ID_HEADER: str = "X-Request-ID"

    # Compression
    GZIP_MIN_SIZE: int = 1000

    # ==========================================================================
    # Formatting
    # ==========================================================================

    # Answers longer than this are truncated by the FAQ schema sanitizer
    FAQ_ANSWER_MAX_LENGTH: int = 400

    # Run the sanitizer on schemas returned by /faq/extract unless the request says otherwise
    SANITIZE_FAQ_SCHEMA: bool = True

    # Largest text field accepted by the text endpoints (characters)
    MAX_CONTENT_CHARS: int = 500_000

    # Largest declared request body accepted by any endpoint (bytes)
    MAX_REQUEST_BYTES: int = 5_000_000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


# Global configuration instance
settings = Settings()
