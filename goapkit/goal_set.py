"""Prioritised groups of goals and the selection of the next goal."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, Optional

from goapkit.goal import Goal, GoalResult
from goapkit.settings import FULL_MASK, WorldStateSettings
from goapkit.worldstate import WorldState


@dataclass
class GoalEntry:
    """A goal and its selection weight; weights below 1 become 1."""

    goal: Goal
    weight: int = 1

    def __post_init__(self) -> None:
        if self.weight <= 0:
            self.weight = 1


@dataclass
class GoalGroup:
    """Goals of equal priority, optionally shuffled before each selection."""

    entries: list[GoalEntry] = field(default_factory=list)
    rand_before_select: bool = False
    rand_by_weight: bool = False

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Reorder the entries in place, uniformly or by weight."""
        rng = rng if rng is not None else random
        entries = self.entries
        if len(entries) <= 1 or not self.rand_before_select:
            return
        if not self.rand_by_weight:
            for index in range(len(entries) - 1, 0, -1):
                target = rng.randint(0, index)
                entries[target], entries[index] = entries[index], entries[target]
            return
        remaining = sum(entry.weight for entry in entries) - 1
        for index in range(len(entries) - 1, 0, -1):
            pick = rng.randint(0, remaining)
            for position, entry in enumerate(entries[: index + 1]):
                pick -= entry.weight
                if pick < 0:
                    remaining -= entry.weight
                    entries[position], entries[index] = entries[index], entries[position]
                    break


class GoalSet:
    """Goal groups in priority order."""

    def __init__(
        self,
        settings: Optional[WorldStateSettings],
        groups: Iterable[GoalGroup],
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings
        self.rng = rng if rng is not None else random.Random()
        self.groups: list[GoalGroup] = []
        for group in groups:
            for entry in group.entries:
                if entry.goal.settings != settings:
                    raise ValueError(f"goal {entry.goal.name!r} uses different world state settings")
                entry.goal.init_state()
            self.groups.append(group)

    def select_goal(self, state: WorldState) -> Optional[Goal]:
        """Start and return the first goal whose precondition ``state`` meets, or None."""
        for group in self.groups:
            candidates = GoalGroup(list(group.entries), group.rand_before_select, group.rand_by_weight)
            candidates.shuffle(self.rng)
            for entry in candidates.entries:
                goal = entry.goal
                care = FULL_MASK ^ goal.precondition.not_used_flag
                if goal.precondition.values & care == state.values & care:
                    goal.set_result(GoalResult.IN_PROGRESS)
                    return goal
        return None