"""Configuration models for dbtck."""

from collections.abc import Mapping
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dbtck.core.exceptions import ConfigError


class PoolConfig(BaseModel):
    """Options of the connection pool used by the POOLING wrapper."""

    model_config = ConfigDict(frozen=True)

    pool_size: int = Field(default=5, ge=1, description="Connection pool size")
    max_overflow: int = Field(default=10, ge=0, description="Max overflow connections")
    timeout: float = Field(default=30.0, gt=0, description="Checkout timeout in seconds")
    recycle: int = Field(default=-1, ge=-1, description="Connection recycle time, -1 to disable")
    pre_ping: bool = Field(default=False, description="Test connections on checkout")

    @classmethod
    def from_settings(cls, settings: Mapping[str, str]) -> "PoolConfig":
        """Build pool options from ``DBTCK_POOL_*`` settings.

        Args:
            settings: Resolved harness settings

        Returns:
            Validated PoolConfig

        Raises:
            ConfigError: If an option is not valid
        """
        from dbtck.config.resolver import Property

        fields = {
            "pool_size": Property.POOL_SIZE,
            "max_overflow": Property.POOL_MAX_OVERFLOW,
            "timeout": Property.POOL_TIMEOUT,
            "recycle": Property.POOL_RECYCLE,
            "pre_ping": Property.POOL_PRE_PING,
        }
        values = {}
        for field_name, prop in fields.items():
            value = settings.get(prop.path)
            if value not in (None, ""):
                values[field_name] = value

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid pool configuration: {e}") from e


class LoggingSettings(BaseSettings):
    """Logging options read from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="DBTCK_LOGGING_",
        case_sensitive=False,
    )

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    file: Optional[str] = Field(default=None, description="Log file path")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v
