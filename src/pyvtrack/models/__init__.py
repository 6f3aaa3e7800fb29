"""Typed models for backend rows."""

from pyvtrack.models._base import VtrackBaseModel
from pyvtrack.models.agent import Agent
from pyvtrack.models.car import Car, search_cars

__all__ = [
    "Agent",
    "Car",
    "VtrackBaseModel",
    "search_cars",
]
