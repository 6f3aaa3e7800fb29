"""pyvtrack - Async Python client and text repair for a vehicle import tracker."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyvtrack")
except PackageNotFoundError:
    __version__ = "0+local"
from pyvtrack.agents import AgentDirectory
from pyvtrack.client import VtrackClient
from pyvtrack.config import VtrackConfig
from pyvtrack.exceptions import (
    VtrackApiError,
    VtrackConfigError,
    VtrackError,
    VtrackTransportError,
)
from pyvtrack.lifecycle import (
    LifecycleInput,
    LifecycleStage,
    StageCounts,
    classify,
    count_stages,
    filter_by_stage,
    has_container,
    is_valid_date,
)
from pyvtrack.models import Agent, Car, search_cars
from pyvtrack.text import is_right_to_left, looks_corrupted, recover

__all__ = [
    "__version__",
    "Agent",
    "AgentDirectory",
    "Car",
    "LifecycleInput",
    "LifecycleStage",
    "StageCounts",
    "VtrackApiError",
    "VtrackClient",
    "VtrackConfig",
    "VtrackConfigError",
    "VtrackError",
    "VtrackTransportError",
    "classify",
    "count_stages",
    "filter_by_stage",
    "has_container",
    "is_right_to_left",
    "is_valid_date",
    "looks_corrupted",
    "recover",
    "search_cars",
]
