"""Car model."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import AliasChoices, Field

from pyvtrack.lifecycle import LifecycleField, LifecycleInput, LifecycleStage, classify
from pyvtrack.models._base import IdStr, OptionalInt, Text, VtrackBaseModel
from pyvtrack.text import recover

#: Fields shown as free text in list and detail views.
DISPLAY_FIELDS: tuple[str, ...] = ("make", "model", "destination", "terminal", "agent_name", "color", "note")

_SEARCH_FIELDS: tuple[str, ...] = (
    "vin",
    "lot",
    "container_number",
    "destination",
    "make",
    "model",
    "terminal",
    "agent_name",
    "agent_username",
    "id",
)


class Car(VtrackBaseModel):
    """A tracked vehicle as returned by the car listing endpoint.

    The backend mixes camelCase and snake_case keys between endpoint
    revisions; every synonym is listed once here in ``AliasChoices``.
    The three logistics fields use the classifier's own coercion, so
    ``Car.stage`` always matches :func:`~pyvtrack.lifecycle.classify` on
    the raw row.
    """

    id: IdStr = Field(default=None, validation_alias=AliasChoices("id", "carId", "car_id"))
    make: Text = Field(default=None, validation_alias=AliasChoices("make", "brand", "brandName", "brand_name"))
    """Brand name, possibly mojibake."""
    model: Text = Field(default=None, validation_alias=AliasChoices("model", "modelName", "model_name"))
    """Model name, possibly mojibake."""
    year: OptionalInt = Field(default=None, validation_alias=AliasChoices("year", "makingYear", "making_year"))
    vin: IdStr = Field(default=None, validation_alias=AliasChoices("vin"))
    lot: IdStr = Field(default=None, validation_alias=AliasChoices("lot"))
    status: Text = Field(default=None, validation_alias=AliasChoices("status"))
    """Free-text status. Not used for lifecycle classification."""
    eta: Text = Field(default=None, validation_alias=AliasChoices("eta"))
    container_number: LifecycleField = Field(
        default=None,
        validation_alias=AliasChoices("containerNumber", "container_number"),
    )
    warehouse_date: LifecycleField = Field(default=None, validation_alias=AliasChoices("warehouseDate", "warehouse_date"))
    purchase_date: LifecycleField = Field(default=None, validation_alias=AliasChoices("purchaseDate", "purchase_date"))
    destination: Text = Field(default=None, validation_alias=AliasChoices("destination"))
    terminal: Text = Field(
        default=None,
        validation_alias=AliasChoices("terminal", "terminalName", "terminal_name", "terminalState"),
    )
    agent_id: IdStr = Field(default=None, validation_alias=AliasChoices("agent_id", "agentId", "userid", "userId"))
    agent_name: Text = Field(default=None, validation_alias=AliasChoices("agent_name", "agentName"))
    """Full agent name, preferred for display."""
    agent_username: Text = Field(
        default=None,
        validation_alias=AliasChoices("agent_username", "agentUsername"),
    )
    image: Text = Field(default=None, validation_alias=AliasChoices("image", "imageUrl", "image_url"))
    color: Text = Field(default=None, validation_alias=AliasChoices("color", "colour"))
    note: Text = Field(default=None, validation_alias=AliasChoices("note", "notes"))

    @property
    def lifecycle_input(self) -> LifecycleInput:
        return LifecycleInput(
            purchase_date=self.purchase_date,
            warehouse_date=self.warehouse_date,
            container_number=self.container_number,
        )

    @property
    def stage(self) -> LifecycleStage:
        return classify(self.lifecycle_input)

    @property
    def title(self) -> str:
        """Recovered ``"<model> <year>"`` heading, ``"Vehicle"`` when both are missing."""
        parts = [recover(self.model)]
        if self.year:
            parts.append(str(self.year))
        heading = " ".join(part for part in parts if part)
        return heading or "Vehicle"

    @property
    def agent_label(self) -> str:
        """Best display label for the assigned agent without any directory lookup."""
        return recover(self.agent_name) or recover(self.agent_username) or (self.agent_id or "")

    def display(self) -> dict[str, str]:
        """Recovered strings for every free-text field."""
        return {name: recover(getattr(self, name)) for name in DISPLAY_FIELDS}

    def search_text(self) -> str:
        return " ".join((getattr(self, name) or "") for name in _SEARCH_FIELDS).lower()


def search_cars(cars: Iterable[Car], query: str | None) -> list[Car]:
    """Case-insensitive substring search over identifiers, places and names."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(cars)
    return [car for car in cars if needle in car.search_text()]
