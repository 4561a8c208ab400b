"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional, List
from enum import Enum


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DatabaseSettings(BaseSettings):
    """Relational store configuration"""

    url: str = Field(
        default="sqlite+aiosqlite:///./trip_planner.db",
        description="SQLAlchemy async database URL"
    )
    echo: bool = Field(default=False)
    auto_create_schema: bool = Field(
        default=True,
        description="Create missing tables on startup"
    )

    model_config = {
        "env_prefix": "DATABASE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class SecuritySettings(BaseSettings):
    """Shared-secret authentication and CORS configuration"""

    app_password: Optional[str] = Field(default=None)
    allowed_origin: str = Field(
        default="",
        description="Comma separated list of allowed origins, '*' for any"
    )
    password_header: str = Field(default="X-App-Password")

    @property
    def allowed_origins(self) -> List[str]:
        """Parse CORS origins from the comma separated setting"""
        return [origin.strip() for origin in self.allowed_origin.split(",") if origin.strip()]

    model_config = {
        "env_prefix": "SECURITY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class FlightLookupSettings(BaseSettings):
    """Third-party flight data provider configuration"""

    access_key: Optional[str] = Field(default=None)
    api_url: str = Field(default="http://api.aviationstack.com/v1")
    timeout_seconds: int = Field(default=10, ge=1, le=60)

    model_config = {
        "env_prefix": "FLIGHT_LOOKUP_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="travel-api")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8787, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="'json' or 'text'")
    log_file: Optional[str] = Field(default=None)

    # Nested Settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    flight_lookup: FlightLookupSettings = Field(default_factory=FlightLookupSettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

