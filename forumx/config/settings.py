"""Application settings using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="forumx", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Literal["development", "staging", "production", "testing"] = Field(
        default="development", description="Environment name"
    )
    debug: bool = Field(default=True, description="Debug mode")

    # API Server
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=3000, description="API port")
    api_workers: int = Field(default=1, description="Number of workers")
    api_reload: bool = Field(default=True, description="Enable auto-reload")

    # Authentication
    auth_provider: Literal["firebase", "jwt"] = Field(
        default="firebase",
        description="Identity token verifier (firebase in production, jwt for local use)",
    )
    firebase_credentials_path: str | None = Field(
        default=None, description="Path to Firebase service account JSON file"
    )
    firebase_project_id: str | None = Field(
        default=None, description="Firebase project ID"
    )
    auth_jwt_secret: str = Field(
        default="dev-jwt-secret-key-change-in-production-32chars!",
        description="HS256 signing key for locally issued identity tokens",
    )
    auth_jwt_algorithm: str = Field(default="HS256", description="JWT algorithm")

    # Redis
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    redis_max_connections: int = Field(default=10, description="Max Redis connections")
    redis_socket_timeout: float = Field(default=5.0, description="Redis socket timeout")
    redis_socket_connect_timeout: float = Field(
        default=5.0, description="Redis connect timeout"
    )

    # Cassandra
    cassandra_hosts: list[str] = Field(
        default=["localhost"], description="Cassandra hosts"
    )
    cassandra_port: int = Field(default=9042, description="Cassandra port")
    cassandra_keyspace: str = Field(default="forumx", description="Cassandra keyspace")
    cassandra_username: str | None = Field(default=None, description="Cassandra user")
    cassandra_password: str | None = Field(
        default=None, description="Cassandra password"
    )
    cassandra_protocol_version: int = Field(default=4, description="Protocol version")
    cassandra_connect_timeout: float = Field(
        default=10.0, description="Connect timeout"
    )
    cassandra_request_timeout: float = Field(
        default=10.0, description="Request timeout"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="DEBUG", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", description="Log format"
    )
    log_include_caller_info: bool = Field(
        default=True, description="Include caller info"
    )
    log_dir: str = Field(default="logs", description="Directory for log files")
    log_file_max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Max size per log file (10MB default)"
    )
    log_file_backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )
    log_requests: bool = Field(
        default=True, description="Log HTTP request start/finish"
    )
    log_exclude_paths: list[str] = Field(
        default=["/health", "/health/live", "/health/ready"],
        description="Paths to exclude from request logging",
    )

    # CORS
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "https://forum-x-auth.web.app"],
        description="CORS origins",
    )
    cors_allow_credentials: bool = Field(default=True, description="Allow credentials")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "PATCH"],
        description="Allowed methods",
    )
    cors_allow_headers: list[str] = Field(default=["*"], description="Allowed headers")
    cors_max_age: int = Field(default=600, description="CORS max age")

    # Payments (Stripe REST API)
    stripe_secret_key: str | None = Field(
        default=None, description="Stripe secret key (KEEP SECRET!)"
    )
    stripe_api_base: str = Field(
        default="https://api.stripe.com", description="Stripe API base URL"
    )
    stripe_currency: str = Field(default="usd", description="Payment currency")
    stripe_timeout_seconds: float = Field(
        default=10.0, description="Timeout for payment provider requests"
    )

    # Forum rules
    free_post_limit: int = Field(
        default=5, description="Max posts for users without membership"
    )
    posts_page_size: int = Field(default=5, description="Default posts per page")
    reports_per_hour: int = Field(
        default=5, description="Max comment reports per user per hour"
    )
    vote_conditional_updates: bool = Field(
        default=False,
        description="Use compare-and-set writes for votes instead of last-write-wins",
    )
    vote_max_attempts: int = Field(
        default=5, description="Compare-and-set attempts before giving up on a vote"
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"

    @property
    def firebase_configured(self) -> bool:
        """Check if Firebase token verification is configured."""
        return bool(self.firebase_credentials_path)

    @property
    def stripe_configured(self) -> bool:
        """Check if the payment provider is configured."""
        return bool(self.stripe_secret_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
