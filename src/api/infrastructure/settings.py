"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Redis store connection settings.

    Environment variables:
        TENANT_EDGE_REDIS_ADDRESS: host:port of the Redis server (default: redis:6379)
        TENANT_EDGE_REDIS_PASSWORD: Redis password (default: empty, no AUTH)
        TENANT_EDGE_REDIS_DB: Redis logical database (default: 0)
        TENANT_EDGE_REDIS_SOCKET_TIMEOUT: Per-command timeout in seconds (default: 5)
        TENANT_EDGE_REDIS_SOCKET_CONNECT_TIMEOUT: Connect timeout in seconds (default: 5)
        TENANT_EDGE_REDIS_MAX_CONNECTIONS: Connection pool size (default: 50)
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANT_EDGE_REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    address: str = Field(default="redis:6379", description="Redis host:port")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Redis password",
    )
    db: int = Field(default=0, description="Redis database number", ge=0)
    socket_timeout: float = Field(
        default=5.0,
        description="Per-command socket timeout in seconds",
        gt=0,
    )
    socket_connect_timeout: float = Field(
        default=5.0,
        description="Connect timeout in seconds",
        gt=0,
    )
    max_connections: int = Field(
        default=50,
        description="Maximum connections in the pool",
        ge=1,
        le=1000,
    )

    @field_validator("address")
    @classmethod
    def validate_address(cls, value: str) -> str:
        """Require a host:port pair with a numeric port."""
        host, sep, port = value.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError(f"address must be in host:port form, got: '{value}'")
        return value

    @property
    def host(self) -> str:
        """Host part of the address."""
        return self.address.rpartition(":")[0]

    @property
    def port(self) -> int:
        """Port part of the address."""
        return int(self.address.rpartition(":")[2])


class ServerSettings(BaseSettings):
    """HTTP server settings for the resolver process.

    Environment variables:
        TENANT_EDGE_SERVER_HOST: Bind address (default: 0.0.0.0)
        TENANT_EDGE_SERVER_PORT: Listen port (default: 80)
        TENANT_EDGE_SERVER_IDLE_TIMEOUT: Keep-alive idle timeout in seconds (default: 15)
        TENANT_EDGE_SERVER_SHUTDOWN_GRACE_PERIOD: Seconds in-flight requests get
            to finish on shutdown (default: 5)
        TENANT_EDGE_SERVER_LOG_LEVEL: uvicorn log level (default: info)
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANT_EDGE_SERVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=80, description="Listen port", ge=1, le=65535)
    idle_timeout: int = Field(
        default=15,
        description="Keep-alive idle timeout in seconds",
        ge=1,
    )
    shutdown_grace_period: int = Field(
        default=5,
        description="Graceful shutdown window in seconds",
        ge=0,
    )
    log_level: str = Field(default="info", description="uvicorn log level")


class ResolutionSettings(BaseSettings):
    """Domain resolution policy.

    Environment variables:
        TENANT_EDGE_RESOLUTION_HOST_HEADER_PRIORITY: JSON list of header names
            consulted for the origin host, highest priority first
            (default: ["X-Original-Host", "X-Forwarded-Host", "Host"])
        TENANT_EDGE_RESOLUTION_KEY_PREFIX: Prefix of the mapping key (default: domain:)
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANT_EDGE_RESOLUTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host_header_priority: list[str] = Field(
        default=["X-Original-Host", "X-Forwarded-Host", "Host"],
        description="Header names consulted for the origin host, in order",
    )
    key_prefix: str = Field(default="domain:", description="Mapping key prefix")

    @model_validator(mode="after")
    def validate_priority(self) -> "ResolutionSettings":
        """Require at least one header and no duplicates."""
        if not self.host_header_priority:
            raise ValueError("host_header_priority must name at least one header")
        lowered = [name.lower() for name in self.host_header_priority]
        if len(set(lowered)) != len(lowered):
            raise ValueError(
                f"host_header_priority contains duplicates: {self.host_header_priority}"
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Tenant Edge", description="Application name")

    @property
    def store(self) -> StoreSettings:
        """Get store settings."""
        return get_store_settings()

    @property
    def server(self) -> ServerSettings:
        """Get server settings."""
        return get_server_settings()

    @property
    def resolution(self) -> ResolutionSettings:
        """Get resolution settings."""
        return get_resolution_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_store_settings() -> StoreSettings:
    """Get cached store settings."""
    return StoreSettings()


@lru_cache
def get_server_settings() -> ServerSettings:
    """Get cached server settings."""
    return ServerSettings()


@lru_cache
def get_resolution_settings() -> ResolutionSettings:
    """Get cached resolution settings."""
    return ResolutionSettings()
