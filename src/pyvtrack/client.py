"""High-level async client for the vehicle tracking backend."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyvtrack._transport import HttpTransport, Transport
from pyvtrack.agents import AgentDirectory
from pyvtrack.config import VtrackConfig
from pyvtrack.exceptions import VtrackError
from pyvtrack.ingestion.agents import fetch_agents
from pyvtrack.ingestion.cars import fetch_cars
from pyvtrack.lifecycle import LifecycleStage, StageCounts, count_stages, filter_by_stage
from pyvtrack.models.agent import Agent
from pyvtrack.models.car import Car

_logger = logging.getLogger(__name__)


class VtrackClient:
    """Async read-only client for car and agent listings.

    Usage::

        async with VtrackClient(VtrackConfig.from_env()) as client:
            cars = await client.get_cars()
            counts = await client.get_stage_counts()

    The client owns one :class:`AgentDirectory`; it is filled from the
    agent listing the first time a garbled agent name needs a fallback.
    """

    def __init__(
        self,
        config: VtrackConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport is not None
        self._transport: Transport | None = transport
        self._agents = AgentDirectory(self.get_agents)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> VtrackClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise VtrackError("Client not initialized. Use 'async with VtrackClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    @property
    def agent_directory(self) -> AgentDirectory:
        return self._agents

    async def get_cars(self) -> list[Car]:
        """Fetch every car visible to the configured token."""
        cars = await fetch_cars(self._config, self._require_transport())
        _logger.debug("Fetched %d cars", len(cars))
        return cars

    async def get_agents(self) -> list[Agent]:
        """Fetch the agent listing."""
        return await fetch_agents(self._config, self._require_transport())

    async def get_cars_by_stage(self, stage: LifecycleStage | None) -> list[Car]:
        """Fetch cars and keep those in *stage* (``None`` keeps all)."""
        return filter_by_stage(await self.get_cars(), stage)

    async def get_stage_counts(self) -> StageCounts:
        """Fetch cars and total them per lifecycle stage."""
        return count_stages(await self.get_cars())

    async def agent_display_name(self, car: Car) -> str:
        """Readable agent label for *car*, using the directory when the name stays garbled."""
        if not car.agent_name:
            return car.agent_label
        return await self._agents.display_name(car.agent_name, car.agent_id)
