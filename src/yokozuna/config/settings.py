"""Client settings: Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (YOKOZUNA_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from yokozuna.transport.exceptions import ConfigurationError


class ConnectionSettings(BaseModel):
    """Riak HTTP endpoint configuration."""

    scheme: str = Field(default="http", description="URL scheme: http or https")
    host: str = Field(default="127.0.0.1", description="Riak node host")
    port: int = Field(default=8098, description="Riak HTTP port")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    @field_validator("scheme")
    @classmethod
    def _check_scheme(cls, v: str) -> str:
        v = v.lower()
        if v not in ("http", "https"):
            raise ValueError(f"unsupported scheme: {v!r}")
        return v

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="warning", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="console", description="Log format: json, console")


class Settings(BaseSettings):
    """Root settings.

    Nested settings use double underscores in environment variables.

    Example:
        YOKOZUNA_CONNECTION__HOST=riak1.internal
        YOKOZUNA_CONNECTION__PORT=8098
        YOKOZUNA_OBSERVABILITY__LOG_LEVEL=debug
    """

    model_config = {
        "env_prefix": "YOKOZUNA_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    connection: ConnectionSettings = Field(default_factory=ConnectionSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys present in the YAML file override environment variables; keys it
        omits still come from the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.

        Raises:
            ConfigurationError: If the file is missing or not a YAML mapping.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {config_path}")

        return cls(**data)
