"""Service settings loaded once at startup from the environment."""

from dataclasses import dataclass, field
from os import getenv

from spitfire_posts.exceptions import ConfigurationError

DEFAULT_API_KEYS = "ELITE"
DEFAULT_API_KEY_HEADER = "SPITFIRE-API-KEY"
DEFAULT_CORS_MAX_AGE = 12 * 60 * 60


def _csv_env(name: str, *, default: str) -> frozenset[str]:
    raw = getenv(name, default)
    return frozenset(item.strip() for item in raw.split(",") if item.strip())


def _int_env(name: str, *, default: int) -> int:
    raw = getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Immutable process-wide configuration.

    Attributes:
        api_keys: The accepted secret values for the API key header.
        api_key_header: Name of the request header carrying the key.
        cors_max_age: Seconds a browser may cache a preflight decision.
        host: Bind address for the runner.
        port: Bind port for the runner.
        log_level: Root log level for the runner.
    """

    api_keys: frozenset[str] = field(default_factory=lambda: frozenset({DEFAULT_API_KEYS}))
    api_key_header: str = DEFAULT_API_KEY_HEADER
    cors_max_age: int = DEFAULT_CORS_MAX_AGE
    host: str = "0.0.0.0"
    port: int = 1234
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from SPITFIRE_* environment variables.

        Raises:
            ConfigurationError: If a numeric variable is malformed.
        """
        return cls(
            api_keys=_csv_env("SPITFIRE_API_KEYS", default=DEFAULT_API_KEYS),
            api_key_header=getenv("SPITFIRE_API_KEY_HEADER", DEFAULT_API_KEY_HEADER).strip(),
            cors_max_age=_int_env("SPITFIRE_CORS_MAX_AGE", default=DEFAULT_CORS_MAX_AGE),
            host=getenv("SPITFIRE_HOST", "0.0.0.0").strip(),
            port=_int_env("SPITFIRE_PORT", default=1234),
            log_level=getenv("SPITFIRE_LOG_LEVEL", "INFO").strip().upper(),
        )
