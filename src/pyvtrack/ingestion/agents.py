"""Agent list ingestion + parsing."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyvtrack._transport import Transport
from pyvtrack.config import VtrackConfig
from pyvtrack.models.agent import Agent

_logger = logging.getLogger(__name__)


def parse_agents(rows: Any) -> list[Agent]:
    """Validate agent rows one by one, skipping rows without an id."""
    if not isinstance(rows, list):
        return []
    agents: list[Agent] = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        try:
            agent = Agent.model_validate(row)
        except ValidationError:
            _logger.debug("Skipping invalid agent row", exc_info=True)
            continue
        if agent.id is None:
            continue
        agents.append(agent)
    return agents


async def fetch_agents(config: VtrackConfig, transport: Transport) -> list[Agent]:
    """Fetch and parse the agent list."""
    decoded = await transport.get_json(config.agents_endpoint)
    return parse_agents(decoded)
