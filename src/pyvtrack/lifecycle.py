"""Vehicle lifecycle classification.

A car's pipeline stage is derived from three logistics fields rather than
from its free-text ``status``: a container number means it is shipping,
a warehouse date means it reached the warehouse, a purchase date means it
was newly added. The first matching rule wins.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Annotated, Any, Protocol, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict

from pyvtrack._constants import NULL_LITERAL, ZERO_DATE
from pyvtrack.ingestion.normalize import pick_first


class LifecycleStage(StrEnum):
    NEW = "NEW"
    WAREHOUSE = "WAREHOUSE"
    SHIPPING = "SHIPPING"
    UNCLASSIFIED = "UNCLASSIFIED"


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


LifecycleField = Annotated[str | None, BeforeValidator(_str_or_none)]
"""Optional string; any non-string value is read as absent."""


class LifecycleInput(BaseModel):
    """Read-only projection of the fields the classifier looks at."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    purchase_date: LifecycleField = None
    warehouse_date: LifecycleField = None
    container_number: LifecycleField = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> LifecycleInput:
        """Build an input from a raw backend row (camelCase or snake_case keys)."""
        return cls(
            purchase_date=pick_first(record, ("purchaseDate", "purchase_date")),
            warehouse_date=pick_first(record, ("warehouseDate", "warehouse_date")),
            container_number=pick_first(record, ("containerNumber", "container_number")),
        )


class HasLifecycle(Protocol):
    @property
    def lifecycle_input(self) -> LifecycleInput: ...


T = TypeVar("T", bound=LifecycleInput | HasLifecycle)


def is_valid_date(value: Any) -> bool:
    """Return ``True`` for a usable date marker.

    Only presence matters: any non-empty string other than the MySQL zero
    date and a literal ``"null"`` counts, without calendar validation.
    """
    if not isinstance(value, str):
        return False
    text = value.strip()
    if not text:
        return False
    if text == ZERO_DATE:
        return False
    return text.lower() != NULL_LITERAL


def has_container(value: Any) -> bool:
    """Return ``True`` when a container number is assigned."""
    return isinstance(value, str) and bool(value.strip())


def classify(record: LifecycleInput) -> LifecycleStage:
    """Return the lifecycle stage of *record*.

    Precedence: SHIPPING, then WAREHOUSE, then NEW, else UNCLASSIFIED.
    """
    if has_container(record.container_number):
        return LifecycleStage.SHIPPING
    if is_valid_date(record.warehouse_date):
        return LifecycleStage.WAREHOUSE
    if is_valid_date(record.purchase_date):
        return LifecycleStage.NEW
    return LifecycleStage.UNCLASSIFIED


def _stage_of(item: LifecycleInput | HasLifecycle) -> LifecycleStage:
    if isinstance(item, LifecycleInput):
        return classify(item)
    return classify(item.lifecycle_input)


class StageCounts(BaseModel):
    """Dashboard totals per lifecycle stage."""

    model_config = ConfigDict(frozen=True)

    all: int = 0
    new: int = 0
    warehouse: int = 0
    shipping: int = 0
    unclassified: int = 0

    def for_stage(self, stage: LifecycleStage | None) -> int:
        if stage is None:
            return self.all
        return int(getattr(self, stage.value.lower()))


def count_stages(records: Iterable[LifecycleInput | HasLifecycle]) -> StageCounts:
    """Classify every record once and total the results."""
    totals: dict[str, int] = {stage.value.lower(): 0 for stage in LifecycleStage}
    total = 0
    for item in records:
        totals[_stage_of(item).value.lower()] += 1
        total += 1
    return StageCounts(all=total, **totals)


def filter_by_stage(records: Iterable[T], stage: LifecycleStage | None) -> list[T]:
    """Keep the records in *stage*; ``None`` keeps all of them."""
    if stage is None:
        return list(records)
    return [item for item in records if _stage_of(item) == stage]
