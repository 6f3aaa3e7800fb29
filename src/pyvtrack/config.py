"""Client configuration for pyvtrack."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyvtrack._constants import AGENTS_ENDPOINT, BASE_URL, CARS_ENDPOINT, DEFAULT_REQUEST_TIMEOUT
from pyvtrack.exceptions import VtrackConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise VtrackConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class VtrackConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        API base URL of the tracking backend (no trailing slash).
    token : str or None
        Bearer token sent as ``Authorization`` header. Obtaining the
        token is up to the caller; pyvtrack never logs in by itself.
    cars_endpoint : str
        Path of the car listing endpoint.
    agents_endpoint : str
        Path of the agent listing endpoint used to fill the agent
        directory.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    api_trace_enabled : bool
        Log redacted response bodies at DEBUG level.
    """

    base_url: str = BASE_URL
    token: str | None = None
    cars_endpoint: str = CARS_ENDPOINT
    agents_endpoint: str = AGENTS_ENDPOINT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise VtrackConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> VtrackConfig:
        """Create configuration from environment variables.

        Reads optional ``VTRACK_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        VtrackConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "VTRACK_BASE_URL": "base_url",
            "VTRACK_TOKEN": "token",
            "VTRACK_CARS_ENDPOINT": "cars_endpoint",
            "VTRACK_AGENTS_ENDPOINT": "agents_endpoint",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("VTRACK_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_float("VTRACK_REQUEST_TIMEOUT", timeout_env)

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("VTRACK_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
