"""Base model for backend rows.

Every row model inherits from :class:`VtrackBaseModel` which provides:

* frozen, ``extra="ignore"`` models that accept both field names and
  the backend's aliases;
* a ``model_validator(mode="before")`` that drops ``None`` and blank
  strings so the field default is used;
* a ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from pyvtrack.ingestion.normalize import pick_first, safe_int, safe_str

# Blank strings are the only "not filled in" marker the backend sends.
_SENTINELS = frozenset({""})


IdStr = Annotated[str | None, BeforeValidator(safe_str)]
"""Identifier or label that may arrive as a JSON number."""

OptionalInt = Annotated[int | None, BeforeValidator(safe_int)]
"""Integer that may arrive as a numeric string."""

Text = Annotated[str | None, BeforeValidator(safe_str)]
"""Free text; numbers and booleans are rendered as strings rather than rejected."""


class VtrackBaseModel(BaseModel):
    """Base for backend row models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original row as received."""

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_row_values(cls, values: Any) -> Any:
        """Strip placeholder values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        original = dict(values)
        cleaned = VtrackBaseModel._clean_dict(original)

        # Keep an explicit raw= passed by the caller.
        if "raw" not in values:
            cleaned["raw"] = original
        return cleaned

    def raw_value(self, field_name: str) -> Any:
        """Return the payload value behind *field_name*, whichever alias it arrived under."""
        field = type(self).model_fields[field_name]
        alias = field.validation_alias
        if isinstance(alias, AliasChoices):
            keys = [choice for choice in alias.choices if isinstance(choice, str)]
        elif isinstance(alias, str):
            keys = [alias]
        else:
            keys = [field_name]
        return pick_first(self.raw, keys)
