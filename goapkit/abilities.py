"""Ability groups with cooldowns and weighted random activation."""

from __future__ import annotations

import random
from dataclasses import dataclass
from itertools import count
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class AbilityConfig:
    """An ability to grant, the group it joins, its cooldown and weight."""

    ability: Any
    group: str
    cooldown_time: float = 0.0
    weight: int = 1


@dataclass
class AbilityCooldown:
    """Cooldown bookkeeping of one granted ability."""

    handle: int
    ability: Any
    cooldown_time: float = 0.0
    weight: int = 1
    current_cooldown: float = 0.0

    def is_cooldown_complete(self) -> bool:
        return self.current_cooldown <= 0

    def activate(self) -> bool:
        """Start the cooldown; False if it is still running."""
        if self.is_cooldown_complete():
            self.current_cooldown = self.cooldown_time
            return True
        return False

    def current_weight(self) -> int:
        """Selection weight: 1 while cooling down, else the configured weight."""
        if not self.is_cooldown_complete() and self.cooldown_time > 0:
            return 1
        return self.weight

    def tick(self, delta_time: float) -> None:
        if not self.is_cooldown_complete():
            self.current_cooldown -= delta_time
            if self.is_cooldown_complete():
                self.current_cooldown = 0


class AbilityGroups:
    """Granted abilities sorted into groups, activated at random by weight.

    ``activator`` is called with a handle and reports whether the ability
    actually started; by default every activation succeeds.
    """

    def __init__(
        self,
        activator: Optional[Callable[[int], bool]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.activator = activator if activator is not None else (lambda handle: True)
        self.rng = rng if rng is not None else random.Random()
        self.groups: dict[str, list[AbilityCooldown]] = {}
        self.granted: dict[int, Any] = {}
        self._handles = count(1)

    @staticmethod
    def _check(config: AbilityConfig) -> None:
        if config.ability is None or not config.group:
            raise ValueError("ability config needs an ability and a group")

    def give_ability(self, config: AbilityConfig) -> int:
        """Grant the ability, add it to its group and return its handle."""
        self._check(config)
        handle = next(self._handles)
        self.granted[handle] = config.ability
        self.groups.setdefault(config.group, []).append(
            AbilityCooldown(handle, config.ability, config.cooldown_time, config.weight)
        )
        return handle

    def clear_ability(self, config: AbilityConfig) -> None:
        """Remove the ability from its group, dropping the group once empty."""
        self._check(config)
        entries = self.groups.get(config.group)
        if entries is None:
            return
        found = next((entry for entry in entries if entry.ability == config.ability), None)
        if found is None:
            return
        self.granted.pop(found.handle, None)
        entries.remove(found)
        if not entries:
            del self.groups[config.group]

    def try_activate_from_group(self, group: str) -> Optional[int]:
        """Pick an ability of ``group`` by weight and activate it; its handle, or None."""
        if not group:
            raise ValueError("ability group must not be empty")
        entries = self.groups.get(group)
        if entries is None:
            return None
        total = sum(entry.current_weight() for entry in entries)
        handle: Optional[int] = None
        if total > 0:
            pick = self.rng.randint(0, total - 1)
            running = 0
            for entry in entries:
                running += entry.current_weight()
                if pick < running:
                    entry.activate()
                    handle = entry.handle
                    break
        if handle is None or not self.activator(handle):
            return None
        return handle

    def group_info(self, group: str) -> Optional[tuple[int, int]]:
        """``(ready, total)`` ability counts of ``group``, or None if it does not exist."""
        entries = self.groups.get(group)
        if entries is None:
            return None
        ready = sum(1 for entry in entries if entry.is_cooldown_complete())
        return ready, len(entries)

    def should_tick(self) -> bool:
        return bool(self.groups)

    def tick(self, delta_time: float) -> None:
        """Advance every cooldown."""
        for entries in self.groups.values():
            for entry in entries:
                entry.tick(delta_time)