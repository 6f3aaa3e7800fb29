"""Custom exception hierarchy for pyvtrack."""

from __future__ import annotations


class VtrackError(Exception):
    """Base exception for all pyvtrack errors."""


class VtrackConfigError(VtrackError):
    """Invalid or missing configuration."""


class VtrackTransportError(VtrackError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class VtrackApiError(VtrackError):
    """Backend answered 200 but the JSON body carries an ``error`` field.

    The PHP endpoints report failures as ``{"error": "..."}`` rather
    than through the status code.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str = "",
    ) -> None:
        self.endpoint = endpoint
        super().__init__(message)
