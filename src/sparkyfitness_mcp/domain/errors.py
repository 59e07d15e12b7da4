"""Error types raised across the adapter."""


class SparkyFitnessMcpError(Exception):
    """Base class for adapter errors."""


class ConfigError(SparkyFitnessMcpError):
    """Raised when environment configuration is missing or invalid."""


class ValidationError(SparkyFitnessMcpError):
    """Raised when a tool receives invalid input."""


class APIError(SparkyFitnessMcpError):
    """Raised when the SparkyFitness backend call fails."""

    def __init__(self, message: str, status_code: int | None, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"{message}: status={status_code}, body={body}")


class TransportError(SparkyFitnessMcpError):
    """Raised when the MCP transport cannot start or fails while running."""
