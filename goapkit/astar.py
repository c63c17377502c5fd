"""Regressive A* search over world states, from the goal back to the current state."""

from __future__ import annotations

import random
from functools import reduce
from typing import TYPE_CHECKING, Optional

from goapkit.settings import FULL_MASK
from goapkit.worldstate import WorldState

if TYPE_CHECKING:
    from goapkit.action import Action
    from goapkit.action_set import ActionSet


class AstarNode:
    """A search node: a world state, the action that led to it and its costs."""

    def __init__(
        self,
        world_state: WorldState,
        parent: Optional[AstarNode] = None,
        start: Optional[WorldState] = None,
        owner: Optional[Action] = None,
    ) -> None:
        self.world_state = world_state
        self.parent = parent
        self.owner = owner
        self.g = 0
        self.h = start.calc_correlation(world_state) if start is not None else 0
        self.f = self.g + self.h

    def __repr__(self) -> str:
        owner = self.owner.name if self.owner is not None else None
        return f"AstarNode(owner={owner!r}, g={self.g}, h={self.h}, f={self.f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AstarNode):
            return NotImplemented
        return self.world_state == other.world_state

    __hash__ = None  # type: ignore[assignment]

    def set_cost_g(self, g: int) -> None:
        """Set the path cost and refresh ``f``."""
        self.g = g
        self.f = self.g + self.h

    def care_data(self) -> int:
        """Bits of the node's state that are in use."""
        return self.world_state.values & (FULL_MASK ^ self.world_state.not_used_flag)


class AstarPlanner:
    """Finds the cheapest chain of actions turning a start state into a goal state."""

    def __init__(
        self,
        compare_f_when_h_equal: bool = False,
        random_when_h_equal: bool = False,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.compare_f_when_h_equal = compare_f_when_h_equal
        self.random_when_h_equal = random_when_h_equal
        self.rng = rng if rng is not None else random.Random()
        self.planned_actions: list[Action] = []

    def plan(self, start: WorldState, goal: WorldState, action_set: ActionSet) -> list[Action]:
        """Return the actions to run, in order; empty if none are needed or none reach the goal."""
        self.planned_actions = []
        open_list = [AstarNode(goal.copy(), None, start, None)]
        closed_list: list[AstarNode] = []

        while open_list:
            node = self._pop_best(open_list)
            closed_list.append(node)

            care = FULL_MASK ^ node.world_state.not_used_flag
            if node.world_state.values & care == start.values & care:
                return self._final_plan(node)

            for candidate in action_set.possible_transitions(node, start):
                if candidate in closed_list:
                    continue
                candidate.set_cost_g(node.g + candidate.owner.get_cost())
                if candidate not in open_list:
                    open_list.append(candidate)
        return []

    def _pop_best(self, open_list: list[AstarNode]) -> AstarNode:
        best = reduce(lambda chosen, node: node if self.compare(node, chosen) else chosen, open_list)
        open_list[:] = [node for node in open_list if node is not best]
        return best

    def _final_plan(self, end_node: AstarNode) -> list[Action]:
        node = end_node
        while node.parent is not None:
            self.planned_actions.append(node.owner)
            node = node.parent
        return list(self.planned_actions)

    def planned_action_report(self, current_action: Optional[Action] = None) -> str:
        """Listing of the last plan, highlighting ``current_action``."""
        lines = []
        for action in self.planned_actions:
            color = "{green}" if action is current_action else "{white}"
            lines.append(f"{color}  {action.name}  ActiveTime: {action.active_time:.2f}\n")
        return "".join(lines)

    def compare(self, a: AstarNode, b: AstarNode) -> bool:
        """True if ``a`` should be expanded before ``b``."""
        if self.compare_f_when_h_equal and a.f == b.f:
            if self.random_when_h_equal:
                return self.rng.random() < 0.5
            return a.h < b.h
        return a.f < b.f