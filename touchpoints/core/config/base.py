"""
Base configuration settings for the application
"""
import secrets
from typing import List, Literal
from pydantic_settings import BaseSettings
from pydantic import field_validator, Field, SecretStr


class Settings(BaseSettings):
    """Base settings with common functionality and validation"""

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "str_strip_whitespace": True,
        "validate_default": True,
        "env_prefix": "TOUCHPOINTS_",
        "validate_assignment": True,
        "extra": "ignore"
    }

    # API Settings
    API_V1_STR: str = Field("/api/v1", description="API version prefix")
    PROJECT_NAME: str = Field("Touchpoint Analytics", description="Project name")
    VERSION: str = Field("1.0.0", description="API version")
    DEBUG: bool = Field(False, description="Debug mode")
    DESCRIPTION: str = Field(
        "Conversion funnel and contact journey analytics",
        description="API description"
    )

    # Security Settings
    SECRET_KEY: SecretStr = Field(
        default_factory=lambda: secrets.token_urlsafe(32),
        description="Shared secret used to verify HS256 bearer tokens"
    )
    ALGORITHM: str = Field("HS256", description="JWT algorithm")
    DEFAULT_ROLE: Literal["admin", "manager", "analyst", "viewer"] = Field("viewer", description="Role assumed when a token carries none")

    # CORS Settings
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )
    CORS_METHODS: List[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        description="Allowed HTTP methods"
    )
    CORS_HEADERS: List[str] = Field(
        default=["*"],
        description="Allowed HTTP headers"
    )

    # Aggregation
    QUERY_WORKERS: int = Field(
        8, ge=1,
        description="Threads used to fan out independent collection queries"
    )

    # Logging Settings
    LOG_LEVEL: str = Field("INFO", description="Logging level")
    LOG_TO_FILE: bool = Field(False, description="Enable file logging")
    LOG_FILE: str = Field("logs/touchpoints.log", description="Log file path when file logging is on")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v.upper()


# Create global settings instance
settings = Settings()
