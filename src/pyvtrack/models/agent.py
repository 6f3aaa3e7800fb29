"""Agent model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from pyvtrack.models._base import IdStr, VtrackBaseModel
from pyvtrack.text import recover


class Agent(VtrackBaseModel):
    """A shipping agent from the agent listing endpoint."""

    id: IdStr = Field(default=None, validation_alias=AliasChoices("id", "agent_id", "agentId", "userid"))
    name: str | None = Field(default=None, validation_alias=AliasChoices("name", "fullName", "full_name"))
    """Full name, often Arabic and sometimes double-encoded."""
    username: str | None = Field(default=None, validation_alias=AliasChoices("username", "userName"))

    @property
    def display_name(self) -> str:
        """Recovered full name, falling back to the username."""
        return recover(self.name) or recover(self.username)
