"""Goals an agent pursues: a target state, a precondition and interrupt rules."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Iterable, Mapping, Optional

from goapkit.settings import WorldStateSettings
from goapkit.worldstate import WorldState


class GoalResult(Enum):
    INVALID = auto()
    IN_PROGRESS = auto()
    SUCCEEDED = auto()
    FAILED = auto()
    ABORTED = auto()


class Goal:
    """A goal with the state it wants and the state it needs before it can be chosen."""

    def __init__(
        self,
        settings: Optional[WorldStateSettings] = None,
        goal: Optional[Mapping[str, bool]] = None,
        preconditions: Optional[Mapping[str, bool]] = None,
        usable_action_type: str = "",
        interrupt_conditions: Iterable[Mapping[str, bool]] = (),
        can_interrupt: bool = False,
        name: Optional[str] = None,
    ) -> None:
        self.settings = settings
        self.goal_values: dict[str, bool] = dict(goal or {})
        self.preconditions: dict[str, bool] = dict(preconditions or {})
        self.usable_action_type = usable_action_type
        self.interrupt_conditions: list[dict[str, bool]] = [dict(c) for c in interrupt_conditions]
        self.can_interrupt = can_interrupt
        self.name = name if name is not None else type(self).__name__
        self.result = GoalResult.INVALID
        self.goal_state = WorldState(settings)
        self.precondition = WorldState(settings)
        self.init_state()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, result={self.result.name})"

    def init_state(self) -> None:
        """Rebuild the goal and precondition states from their configuration."""
        self.goal_state = WorldState(self.settings)
        self.goal_state.build_from_config(self.goal_values)
        self.precondition = WorldState(self.settings)
        self.precondition.build_from_config(self.preconditions)

    def set_result(self, result: GoalResult) -> None:
        self.result = result

    def on_active(self, agent: Any) -> None:
        """Called when ``agent`` selects this goal; the default does nothing."""

    def agent_state_changed(self, previous: WorldState, current: WorldState) -> None:
        """Abort the goal if a changed fact satisfies one of its interrupt conditions."""
        if not self.can_interrupt:
            return
        diff = (previous.values & ~previous.not_used_flag) ^ (current.values & ~current.not_used_flag)
        if diff == 0:
            return
        for condition in self.interrupt_conditions:
            interrupt = False
            for name, expected in condition.items():
                offset = current.names_table.get(name)
                if offset is None:
                    continue
                mask = 1 << offset
                if not diff & mask:
                    continue
                if bool(current.values & mask) == expected:
                    interrupt = True
                else:
                    interrupt = False
                    break
            if interrupt and self.result in (GoalResult.IN_PROGRESS, GoalResult.INVALID):
                self.set_result(GoalResult.ABORTED)