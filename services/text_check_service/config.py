"""
Configuration module for the Text Check Service.

This module defines the settings for the Text Check Service, including HTTP
port configuration, the API version selected at startup, rule confidence
calibration and the checking engine backend.
"""

from __future__ import annotations

from dotenv import find_dotenv, load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from textcheck_service_libs.config_enums import Environment

# Load .env file from repository root, regardless of current working directory
load_dotenv(find_dotenv(".env"))


class Settings(BaseSettings):
    """
    Configuration settings for the Text Check Service.

    These settings can be overridden via environment variables prefixed with
    TEXT_CHECK_SERVICE_.
    """

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",  # Read from global ENVIRONMENT var
        description="Runtime environment for the service",
    )
    SERVICE_NAME: str = "text-check-service"
    HTTP_PORT: int = 8086
    HOST: str = "0.0.0.0"
    WEB_CONCURRENCY: int = 1
    GRACEFUL_TIMEOUT: int = 30
    KEEP_ALIVE_TIMEOUT: int = 5

    # Request interpretation
    API_VERSION: str = Field(
        default="v2", description="API version whose parameter rules are applied"
    )
    RULE_ID_TO_CONFIDENCE_FILE: str | None = Field(
        default=None,
        description="Optional file with 'RULE_ID,float_value[,...]' lines",
    )

    # Language detection
    LANGUAGE_DETECTION_SAMPLE_CHARS: int = Field(
        default=1000, description="Number of leading characters used for detection"
    )
    FALLBACK_LANGUAGE: str = Field(
        default="en-US", description="Language used when detection finds no candidate"
    )

    # Checking engine
    USE_STUB_ENGINE: bool = Field(
        default=True, description="Use the built-in stub engine instead of LanguageTool"
    )
    LANGUAGE_TOOL_URL: str = Field(
        default="http://localhost:8081", description="Base URL of a LanguageTool server"
    )
    LANGUAGE_TOOL_MAX_CONCURRENT_REQUESTS: int = Field(
        default=10, description="Maximum concurrent requests to LanguageTool"
    )
    LANGUAGE_TOOL_REQUEST_TIMEOUT_SECONDS: int = Field(
        default=30, description="Timeout for individual LanguageTool requests"
    )

    # Response metadata
    SOFTWARE_NAME: str = "TextCheck"
    SOFTWARE_VERSION: str = "1.0.0"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="TEXT_CHECK_SERVICE_",
    )


# Create a single instance for the application to use
settings = Settings()
