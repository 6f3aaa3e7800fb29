"""Process-lifetime agent directory used as a display-name fallback.

When an agent name on a car row is still garbled after
:func:`~pyvtrack.text.recover`, the UI falls back to the name from the
agent listing. The listing is fetched once; every later caller shares
that single fetch.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from pyvtrack.ingestion.normalize import safe_str
from pyvtrack.models.agent import Agent
from pyvtrack.text import looks_corrupted, recover

_logger = logging.getLogger(__name__)

AgentFetcher = Callable[[], Awaitable[Iterable[Agent | Mapping[str, Any]]]]


def _as_agent(item: Agent | Mapping[str, Any]) -> Agent | None:
    if isinstance(item, Agent):
        return item
    if not isinstance(item, Mapping):
        return None
    try:
        return Agent.model_validate(dict(item))
    except ValidationError:
        return None


class AgentDirectory:
    """Additive id -> display name cache with a single-flight bulk load.

    The first :meth:`ensure_loaded` starts the fetch; concurrent and later
    callers await the same task. A failed fetch leaves the directory empty
    and is not retried for the life of the instance. Entries are never
    removed or refreshed.

    The check-and-set of the load task has no await in between, which is
    enough on a single event loop. Do not share one instance across loops
    or threads.
    """

    def __init__(self, fetch: AgentFetcher) -> None:
        self._fetch = fetch
        self._names: dict[str, str] = {}
        self._load_task: asyncio.Future[None] | None = None

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, agent_id: object) -> bool:
        return self.resolve(agent_id) is not None

    @property
    def is_loaded(self) -> bool:
        """Whether the bulk load has settled (successfully or not)."""
        return self._load_task is not None and self._load_task.done()

    async def ensure_loaded(self) -> None:
        """Load the directory once; later calls join the same load."""
        if self._load_task is None:
            self._load_task = asyncio.ensure_future(self._load())
        # Shielded so a cancelled caller does not cancel the shared fetch.
        await asyncio.shield(self._load_task)

    async def _load(self) -> None:
        try:
            rows = await self._fetch()
            added = self._add_all(rows)
        except Exception:
            _logger.debug("Agent directory load failed", exc_info=True)
            return
        _logger.debug("Agent directory loaded %d names", added)

    def _add_all(self, rows: Iterable[Agent | Mapping[str, Any]]) -> int:
        added = 0
        for item in rows:
            agent = _as_agent(item)
            if agent is None or agent.id is None:
                continue
            name = agent.display_name
            if not name:
                continue
            self._names[agent.id.strip()] = name
            added += 1
        return added

    def resolve(self, agent_id: Any) -> str | None:
        """Return the cached display name for *agent_id* without waiting."""
        key = safe_str(agent_id)
        if key is None:
            return None
        return self._names.get(key.strip())

    async def display_name(self, text: Any, agent_id: Any) -> str:
        """Recover *text*, falling back to the directory if it stays garbled."""
        recovered = recover(text)
        if not looks_corrupted(recovered):
            return recovered
        await self.ensure_loaded()
        return self.resolve(agent_id) or recovered
