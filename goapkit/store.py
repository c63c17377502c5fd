"""World-wide facts shared by every agent, cached per state layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from goapkit.settings import FULL_MASK, WorldStateSettings
from goapkit.worldstate import WorldState


@dataclass
class _CachedState:
    settings: Optional[WorldStateSettings]
    state: WorldState
    version: int


class WorldStateStore:
    """Named boolean facts of the world, turned into a ``WorldState`` on demand.

    ``version`` grows whenever the facts change, so cached states are rebuilt
    only when needed.
    """

    def __init__(self) -> None:
        self.data: dict[str, bool] = {}
        self.version = 0
        self._cache: dict[int, _CachedState] = {}

    def write(self, key: str, value: bool) -> None:
        """Record a fact."""
        self.data[key] = bool(value)
        self.version += 1

    def clear(self) -> None:
        """Forget every fact."""
        self.data.clear()

    def _fill(self, state: WorldState) -> None:
        for key, value in self.data.items():
            state.set_state_value(key, value)

    def world_state(self, settings: Optional[WorldStateSettings] = None) -> WorldState:
        """The facts laid out by ``settings``; the same object is returned while nothing changes."""
        entry = self._cache.get(id(settings))
        if entry is not None and entry.settings is settings:
            if entry.version != self.version:
                entry.state.clear()
                self._fill(entry.state)
                entry.version = self.version
            return entry.state
        state = WorldState(settings)
        self._fill(state)
        self._cache[id(settings)] = _CachedState(settings, state, self.version)
        return state

    def row_count(self) -> int:
        """Number of lines ``describe`` produces."""
        return len(self.data)

    def apply_shared_effect(self, effect: WorldState) -> None:
        """Record every used, world-shared fact of ``effect``."""
        changed = False
        used = FULL_MASK ^ effect.not_used_flag
        for key, offset in effect.names_table.items():
            mask = 1 << offset
            if mask & effect.shared_flag and mask & used:
                value = bool(mask & effect.values)
                if self.data.get(key) != value:
                    changed = True
                    self.data[key] = value
        if changed:
            self.version += 1

    def describe(self) -> str:
        """Human-readable listing of the facts."""
        return "".join(
            f"  {key} : {'True' if value else 'False'} \n" for key, value in self.data.items()
        )