"""HTTP transport for the tracking backend's JSON endpoints."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyvtrack._constants import USER_AGENT
from pyvtrack._redact import redact_for_log
from pyvtrack.config import VtrackConfig
from pyvtrack.exceptions import VtrackApiError, VtrackTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the ingestion modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> Any:
        ...


class HttpTransport:
    """Bearer-token HTTP transport returning decoded JSON bodies."""

    def __init__(self, config: VtrackConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if self._config.token:
            headers["authorization"] = f"Bearer {self._config.token}"
        return headers

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> Any:
        """GET *endpoint* and return the decoded JSON body.

        Raises :class:`VtrackTransportError` for network failures, non-200
        statuses and bodies that are not JSON, and :class:`VtrackApiError`
        when the body is an object carrying an ``error`` field.
        """
        url = f"{self._config.base_url}{endpoint}"
        _logger.debug("GET %s", url)

        try:
            async with self._http.get(
                url,
                params=dict(params) if params else None,
                headers=self._headers(),
                timeout=self._timeout,
            ) as resp:
                # PHP endpoints sometimes omit the charset; bytes are UTF-8.
                raw = await resp.read()
                text = raw.decode("utf-8", errors="replace")
                if resp.status != 200:
                    raise VtrackTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except VtrackTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise VtrackTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise VtrackTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if self._config.api_trace_enabled:
            _logger.debug("Response from %s: %s", endpoint, redact_for_log(body))

        if isinstance(body, dict) and body.get("error"):
            raise VtrackApiError(f"{endpoint} failed: {body['error']}", endpoint=endpoint)

        return body
