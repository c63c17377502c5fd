"""Planner actions: preconditions, effects, cost and run-time lifecycle."""

from __future__ import annotations

from enum import Enum, auto
from typing import Iterable, Mapping, Optional

from goapkit.settings import FULL_MASK, WorldStateSettings
from goapkit.worldstate import WorldState


class ActionResult(Enum):
    INVALID = auto()
    IN_PROGRESS = auto()
    SUCCEEDED = auto()
    FAILED = auto()
    ABORTED = auto()


def _require_same_settings(a: WorldState, b: WorldState) -> None:
    if a.settings != b.settings:
        raise ValueError("world states use different settings")


class Action:
    """An action the planner can chain; subclasses override the ``on_*`` hooks."""

    def __init__(
        self,
        settings: Optional[WorldStateSettings] = None,
        preconditions: Optional[Mapping[str, bool]] = None,
        effects: Optional[Mapping[str, bool]] = None,
        config_cost: int = 0,
        static_cost: int = 0,
        action_type: str = "",
        interrupt_conditions: Iterable[Mapping[str, bool]] = (),
        can_interrupt: bool = False,
        name: Optional[str] = None,
    ) -> None:
        self.settings = settings
        self.preconditions: dict[str, bool] = dict(preconditions or {})
        self.effects: dict[str, bool] = dict(effects or {})
        self.config_cost = config_cost
        self.static_cost = static_cost
        self.dynamic_cost = 0
        self.action_type = action_type
        self.interrupt_conditions: list[dict[str, bool]] = [dict(c) for c in interrupt_conditions]
        self.can_interrupt = can_interrupt
        self.name = name if name is not None else type(self).__name__
        self.result = ActionResult.INVALID
        self.active_time = 0.0
        self.precondition = WorldState(settings)
        self.effect = WorldState(settings)
        self.init_state()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, result={self.result.name})"

    def init_state(self) -> None:
        """Rebuild the precondition and effect states from their configuration."""
        self.precondition = WorldState(self.settings)
        self.precondition.build_from_config(self.preconditions)
        self.effect = WorldState(self.settings)
        self.effect.build_from_config(self.effects)

    def get_cost(self) -> int:
        return self.config_cost + self.static_cost + self.dynamic_cost

    def agent_state_changed(self, previous: WorldState, current: WorldState) -> None:
        """Abort the action if a changed fact satisfies one of its interrupt conditions."""
        if not self.can_interrupt:
            return
        diff = (previous.values & ~previous.not_used_flag) ^ (current.values & ~current.not_used_flag)
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
            if interrupt and self.result in (ActionResult.IN_PROGRESS, ActionResult.INVALID):
                self.set_result(ActionResult.ABORTED)

    def match_precondition(self, state: WorldState) -> bool:
        """True if ``state`` agrees with every precondition fact."""
        _require_same_settings(self.precondition, state)
        care = FULL_MASK ^ self.precondition.not_used_flag
        return (self.precondition.values & care) == (state.values & care)

    def match_effect(self, state: WorldState) -> bool:
        """True if the effect shares at least one used fact with ``state`` and agrees on all of them."""
        _require_same_settings(self.effect, state)
        care = (FULL_MASK ^ self.effect.not_used_flag) & (FULL_MASK ^ state.not_used_flag)
        if care == 0:
            return False
        return (self.effect.values & care) == (state.values & care)

    def apply_effect(self, state: WorldState, apply_private_state: bool = True) -> None:
        """Write the effect's private (or, if not ``apply_private_state``, shared) facts into ``state``."""
        _require_same_settings(self.effect, state)
        sharing = self.effect.shared_flag if apply_private_state else FULL_MASK ^ self.effect.shared_flag
        mask = self.effect.not_used_flag | sharing
        new_values = (state.values & mask) | (self.effect.values & ~mask)
        state.set_not_used_flag(state.not_used_flag & mask)
        state.set_values(new_values)

    def apply_precondition(self, state: WorldState) -> None:
        """Write every precondition fact into ``state``."""
        _require_same_settings(self.precondition, state)
        mask = self.precondition.not_used_flag
        new_values = (state.values & mask) | (self.precondition.values & ~mask)
        state.set_not_used_flag(state.not_used_flag & mask)
        state.set_values(new_values)

    def update(self, delta_time: float) -> None:
        """Advance the action: start it if invalid, tick it if in progress."""
        if self.result is ActionResult.INVALID:
            self.set_result(ActionResult.IN_PROGRESS)
        elif self.result is ActionResult.IN_PROGRESS:
            self.active_time += delta_time
            self.on_tick(delta_time)

    def set_result(self, result: ActionResult) -> None:
        """Change the result, firing the matching hook."""
        if self.result is result:
            return
        self.result = result
        if result is ActionResult.FAILED:
            self.on_failed()
        elif result is ActionResult.ABORTED:
            self.on_aborted()
        elif result is ActionResult.IN_PROGRESS:
            self.on_active()
        elif result is ActionResult.INVALID:
            self.active_time = 0.0

    def end(self, result: ActionResult) -> None:
        """Finish the action with ``result`` if it has not already finished otherwise."""
        if self.result in (result, ActionResult.IN_PROGRESS, ActionResult.INVALID):
            self.set_result(result)

    def update_dynamic_cost(self, state: WorldState) -> None:
        """Hook for recomputing ``dynamic_cost`` from ``state``; the default keeps it."""

    def on_active(self) -> None:
        """Called when the action starts running."""
        self.active_time = 0.0

    def on_tick(self, delta_time: float) -> None:
        """Called every update while the action runs; the default does nothing."""

    def on_aborted(self) -> None:
        """Called when the action is aborted; the default does nothing."""

    def on_failed(self) -> None:
        """Called when the action fails; the default does nothing."""