"""Client settings: frozen, with API key and endpoint resolved from the environment."""

from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

from calais.errors import ConfigurationError

load_dotenv()

DEFAULT_ENDPOINT = "http://api.opencalais.com/enlighten/rest/"
DEFAULT_TIMEOUT_S = 30.0

_API_KEY_ENV_VAR = "CALAIS_API_KEY"
_ENDPOINT_ENV_VAR = "CALAIS_ENDPOINT"
_TIMEOUT_ENV_VAR = "CALAIS_TIMEOUT_S"


@dataclass(frozen=True)
class Settings:
    """Immutable settings for a :class:`~calais.client.CalaisClient`.

    Unset values fall back to ``CALAIS_API_KEY``, ``CALAIS_ENDPOINT`` and
    ``CALAIS_TIMEOUT_S``, then to the built-in defaults.

    Example:
        settings = Settings(api_key="...", timeout_s=10)
    """

    #: Auto-resolved from ``CALAIS_API_KEY`` when *None*.
    api_key: str | None = None
    endpoint: str | None = None
    timeout_s: float | None = None
    #: Answer from a local mock transport; no API key needed.
    use_mock: bool = False

    def __post_init__(self) -> None:
        """Resolve environment fallbacks and validate."""
        if self.endpoint is None:
            object.__setattr__(
                self, "endpoint", os.environ.get(_ENDPOINT_ENV_VAR, DEFAULT_ENDPOINT)
            )
        if not str(self.endpoint).startswith(("http://", "https://")):
            raise ConfigurationError(
                f"endpoint must be an http(s) URL, got {self.endpoint!r}",
                hint=f"Unset {_ENDPOINT_ENV_VAR} to use {DEFAULT_ENDPOINT}",
            )

        if self.timeout_s is None:
            raw = os.environ.get(_TIMEOUT_ENV_VAR)
            timeout = DEFAULT_TIMEOUT_S
            if raw:
                try:
                    timeout = float(raw)
                except ValueError as exc:
                    raise ConfigurationError(
                        f"{_TIMEOUT_ENV_VAR} must be a number, got {raw!r}"
                    ) from exc
            object.__setattr__(self, "timeout_s", timeout)
        if self.timeout_s is not None and self.timeout_s <= 0:
            raise ConfigurationError(
                f"timeout_s must be > 0, got {self.timeout_s}",
                hint="This bounds each HTTP exchange with the service.",
            )

        if self.api_key is None and not self.use_mock:
            object.__setattr__(self, "api_key", os.environ.get(_API_KEY_ENV_VAR))

        if not self.use_mock and not self.api_key:
            raise ConfigurationError(
                "API key required for the Calais service",
                hint=f"Set {_API_KEY_ENV_VAR} environment variable or pass api_key=...",
            )

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Settings(endpoint={self.endpoint!r}, "
            f"api_key={'[REDACTED]' if self.api_key else None}, "
            f"timeout_s={self.timeout_s}, use_mock={self.use_mock})"
        )

    __repr__ = __str__
