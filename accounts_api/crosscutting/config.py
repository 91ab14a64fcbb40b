"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the federated instance behavior

Collaborators:
  - api/main.py: reads settings for CORS, DB pool and startup validation
  - container.py: reads settings for adapters (Postgres / RQ / in-memory)
  - interfaces/api/http/dependencies.py: remote URI search capability flags

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic: pure configuration

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache for performance
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.entities import NSFWPolicy


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        log_level: Root log level (default: INFO)
        log_json: Emit JSON logs (default: True)
        database_url: PostgreSQL connection string (required in production)
        redis_url: Redis connection string for the refresh queue
        allowed_origins: Comma-separated CORS origins
        default_page_size: Page size when `count` is absent (default: 15)
        max_page_size: Upper clamp for `count` (default: 100)
        actor_refresh_interval_seconds: Max age of cached actor metadata (default: 2 days)
        local_host: Host of this instance (used to resolve `name@host`)
        instance_default_nsfw_policy: display|blur|do_not_list
        search_remote_uri_users: Authenticated users may search remote URIs
        search_remote_uri_anonymous: Anonymous callers may search remote URIs
        refresh_queue_name: RQ queue for actor refresh jobs
        refresh_job_path: Dotted path of the refresh job run by the external worker
    """

    # Environment
    app_env: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Database
    database_url: str = ""
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    # Redis / refresh queue
    redis_url: str = ""
    refresh_queue_name: str = "activitypub-refresher"
    refresh_job_path: str = "workers.activitypub.refresh_actor_job"
    refresh_retry_max_attempts: int = 3
    refresh_job_timeout_seconds: int = 300
    refresh_result_ttl_seconds: int = 0

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"

    # Pagination
    default_page_size: int = 15
    max_page_size: int = 100

    # Federation
    local_host: str = "localhost:9000"
    actor_refresh_interval_seconds: int = 2 * 24 * 3600

    # Instance policies
    instance_default_nsfw_policy: NSFWPolicy = NSFWPolicy.DO_NOT_LIST
    search_remote_uri_users: bool = True
    search_remote_uri_anonymous: bool = False

    @field_validator("default_page_size", "max_page_size")
    @classmethod
    def page_size_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("page sizes must be greater than 0")
        return v

    @field_validator("actor_refresh_interval_seconds")
    @classmethod
    def refresh_interval_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("actor_refresh_interval_seconds must be greater than 0")
        return v

    @field_validator("local_host")
    @classmethod
    def normalize_local_host(cls, v: str) -> str:
        return v.strip().lower()

    @model_validator(mode="after")
    def validate_page_sizes(self):
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) must be <= "
                f"max_page_size ({self.max_page_size})"
            )
        return self

    def validate_production_requirements(self) -> None:
        """
        Cross-field validation for production deployments.
        Called explicitly from the app lifespan.
        """
        if not self.is_production():
            return
        if not self.database_url.strip():
            raise ValueError("DATABASE_URL is required in production")
        if not self.redis_url.strip():
            raise ValueError("REDIS_URL is required in production")

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    @property
    def actor_refresh_interval(self) -> timedelta:
        return timedelta(seconds=self.actor_refresh_interval_seconds)

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
