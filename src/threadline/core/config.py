from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    # API
    app_name: str = Field(
        default="threadline",
        validation_alias=AliasChoices("APP_NAME"),
    )
    environment: str = Field(default="local", validation_alias=AliasChoices("DEPLOYMENT_ENV"))
    api_prefix: str = Field(default="/api/v1", validation_alias=AliasChoices("API_PREFIX"))
    enable_cors: bool = Field(default=True, validation_alias=AliasChoices("ENABLE_CORS"))
    api_host: str = Field(default="0.0.0.0", validation_alias=AliasChoices("API_HOST"))
    api_port: int = Field(default=8000, validation_alias=AliasChoices("API_PORT"))

    log_level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL"))

    # Database components (primary source of truth)
    db_user: str = Field(default="threadline", validation_alias=AliasChoices("POSTGRES_USER"))
    db_password: str = Field(default="threadlinepwd", validation_alias=AliasChoices("POSTGRES_PASSWORD"))
    db_host: str = Field(default="db", validation_alias=AliasChoices("POSTGRES_HOST"))
    db_port: int = Field(default=5432, validation_alias=AliasChoices("POSTGRES_PORT"))
    db_name: str = Field(default="threadline", validation_alias=AliasChoices("POSTGRES_DB"))
    database_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("DATABASE_URL"))
    db_echo: bool = Field(default=False, validation_alias=AliasChoices("DB_ECHO"))

    # Threads
    threads_page_size: int = Field(
        default=10,
        validation_alias=AliasChoices("THREADS_PAGE_SIZE"),
        description="Number of threads returned per page by the list endpoint.",
        gt=0,
    )

    # ------------------------------------------------------------------
    # Auth / OIDC
    # ------------------------------------------------------------------
    # ⚠️ keep False for local runs; callers then identify with X-User-Id
    auth_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices("AUTH_ENABLED"),
        description="Enable OIDC bearer token verification. When false, the X-User-Id header identifies the caller."
    )
    auth0_domain: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AUTH_DOMAIN"),
        description="OIDC issuer or domain (full https URL like 'https://{tenant}.eu.auth0.com/' or bare domain)."
    )
    auth0_api_audience: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AUTH_API_AUDIENCE"),
        description="Expected audience value for access tokens."
    )
    auth_algorithms: list[str] = Field(
        default=["RS256"],
        validation_alias=AliasChoices("AUTH_ALGORITHMS"),
        description="Allowed JWT signing algorithms."
    )
    auth_jwks_cache_ttl_seconds: int = Field(
        default=600,
        validation_alias=AliasChoices("AUTH_JWKS_CACHE_TTL", "AUTH_JWKS_CACHE_TTL_SECONDS"),
        description="JWKS cache TTL in seconds before refreshing from the issuer."
    )

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def auth0_host(self) -> Optional[str]:
        """Bare issuer host, without scheme, path or trailing '/'."""
        raw = (self.auth0_domain or "").strip()
        if not raw:
            return None
        if raw.startswith("http://"):
            raw = raw[len("http://"):]
        elif raw.startswith("https://"):
            raw = raw[len("https://"):]
        return raw.split("/", 1)[0].rstrip("/") or None

    @property
    def auth0_issuer(self) -> Optional[str]:
        """Normalized issuer URL with trailing '/' regardless of input format."""
        host = self.auth0_host
        return f"https://{host}/" if host else None

    def _build_base(self) -> str:
        return (
            f"postgresql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{int(self.db_port)}/{self.db_name}"
        )

    @property
    def database_url_async(self) -> str:
        """Async driver URL (used by SQLAlchemy async engine)."""
        if isinstance(self.database_url, str) and self.database_url.strip():
            return self.database_url.strip()
        return self._build_base().replace("postgresql://", "postgresql+asyncpg://", 1)

@lru_cache
def get_settings() -> Settings:
    return Settings()
