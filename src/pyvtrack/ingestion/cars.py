"""Car list ingestion + parsing."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyvtrack._transport import Transport
from pyvtrack.config import VtrackConfig
from pyvtrack.models.car import Car

_logger = logging.getLogger(__name__)


def parse_cars(rows: Any) -> list[Car]:
    """Validate car rows one by one; a bad row is skipped, not the whole listing."""
    if not isinstance(rows, list):
        _logger.debug("Car listing is not a list: %s", type(rows).__name__)
        return []
    cars: list[Car] = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            _logger.debug("Skipping car row %d: %s", index, type(row).__name__)
            continue
        try:
            cars.append(Car.model_validate(row))
        except ValidationError:
            _logger.debug("Skipping invalid car row %d", index, exc_info=True)
    return cars


async def fetch_cars(config: VtrackConfig, transport: Transport) -> list[Car]:
    """Fetch and parse the car list."""
    decoded = await transport.get_json(config.cars_endpoint)
    return parse_cars(decoded)
