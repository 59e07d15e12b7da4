"""Application configuration."""

from typing import Literal

from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sparkyfitness_mcp.domain.errors import ConfigError

TransportMode = Literal["stdio", "http"]
AuthScheme = Literal["bearer", "cookie"]

_ALLOWED_VALUES: dict[str, str] = {
    "sparkyfitness_auth_scheme": "must be 'bearer' or 'cookie'",
    "mcp_transport": "must be 'stdio' or 'http'",
    "mcp_http_port": "must be a port number between 1 and 65535",
    "log_level": "must be 'debug', 'info', 'warn' or 'error'",
    "log_format": "must be 'text' or 'json'",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    sparkyfitness_api_url: str
    sparkyfitness_api_key: str
    sparkyfitness_auth_scheme: AuthScheme = "bearer"
    mcp_transport: TransportMode = "stdio"
    mcp_http_host: str = "0.0.0.0"  # noqa: S104
    mcp_http_port: int = 8080
    mcp_http_basic_auth_user: str | None = None
    mcp_http_basic_auth_password: str | None = None
    log_level: Literal["debug", "info", "warn", "warning", "error"] = "info"
    log_format: Literal["text", "json"] = "text"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator("sparkyfitness_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @field_validator("sparkyfitness_api_key")
    @classmethod
    def _strip_api_key(cls, value: str) -> str:
        return value.strip()

    @field_validator(
        "sparkyfitness_auth_scheme", "mcp_transport", "log_level", "log_format",
        mode="before",
    )
    @classmethod
    def _lowercase(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("mcp_http_port")
    @classmethod
    def _check_port(cls, value: int) -> int:
        if not 0 < value < 65536:  # noqa: PLR2004
            raise ValueError("port out of range")
        return value

    @property
    def basic_auth_enabled(self) -> bool:
        """Return True when both basic auth credentials are configured."""
        return bool(self.mcp_http_basic_auth_user and self.mcp_http_basic_auth_password)


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment, raising ConfigError on bad input."""
    try:
        settings = Settings(**overrides)  # type: ignore[arg-type]
    except PydanticValidationError as exc:
        raise ConfigError(_describe_errors(exc)) from exc
    if not settings.sparkyfitness_api_url:
        raise ConfigError("SPARKYFITNESS_API_URL environment variable is required")
    if not settings.sparkyfitness_api_key:
        raise ConfigError("SPARKYFITNESS_API_KEY environment variable is required")
    return settings


def _describe_errors(exc: PydanticValidationError) -> str:
    """Turn pydantic errors into messages naming the environment variable."""
    messages: list[str] = []
    for error in exc.errors():
        field_name = str(error["loc"][0]) if error["loc"] else ""
        env_name = field_name.upper()
        if error["type"] == "missing":
            messages.append(f"{env_name} environment variable is required")
            continue
        hint = _ALLOWED_VALUES.get(field_name, error["msg"])
        messages.append(f"invalid {env_name} value: {error.get('input')} ({hint})")
    return "; ".join(messages)
