"""The pool of actions an agent can plan with."""

from __future__ import annotations

from typing import Iterable, Optional

from goapkit.action import Action, ActionResult
from goapkit.astar import AstarNode
from goapkit.settings import WorldStateSettings, tag_matches
from goapkit.worldstate import WorldState


class ActionSet:
    """All actions of an agent, and the subset usable for the current goal."""

    def __init__(self, settings: Optional[WorldStateSettings], actions: Iterable[Action]) -> None:
        self.settings = settings
        self.actions: list[Action] = []
        for action in actions:
            if action.settings != settings:
                raise ValueError(f"action {action.name!r} uses different world state settings")
            action.init_state()
            self.actions.append(action)
        self.usable_actions: list[Action] = []

    def update_usable_actions(self, action_type: str, state: WorldState) -> None:
        """Select the actions whose type fits ``action_type`` and reset them for planning."""
        self.usable_actions = []
        for action in self.actions:
            if not action.action_type or not action_type or tag_matches(action_type, action.action_type):
                action.update_dynamic_cost(state)
                self.usable_actions.append(action)
                action.set_result(ActionResult.INVALID)

    def possible_transitions(self, node: AstarNode, start: WorldState) -> list[AstarNode]:
        """Nodes reached by regressing ``node`` through each usable action whose effect fits it."""
        transitions = []
        for action in self.usable_actions:
            if action.match_effect(node.world_state):
                next_state = node.world_state.copy()
                action.apply_precondition(next_state)
                transitions.append(AstarNode(next_state, node, start, action))
        return transitions

    def usable_actions_report(self) -> str:
        """Listing of the usable actions, one per line."""
        if not self.usable_actions:
            return "  Empty"
        return "".join(f"  {action.name}\n" for action in self.usable_actions)