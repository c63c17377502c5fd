"""An agent that selects goals, plans actions and runs them tick by tick."""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Optional

from goapkit.action import Action, ActionResult
from goapkit.action_set import ActionSet
from goapkit.astar import AstarPlanner
from goapkit.goal import Goal, GoalResult
from goapkit.goal_set import GoalSet
from goapkit.settings import FULL_MASK, WorldStateSettings
from goapkit.store import WorldStateStore
from goapkit.worldstate import WorldState

logger = logging.getLogger(__name__)

_FINISHED_GOAL = (GoalResult.ABORTED, GoalResult.FAILED, GoalResult.SUCCEEDED)


def merge_private_state(private_state: WorldState, world_state: WorldState) -> WorldState:
    """Combine an agent's private facts with the world's shared ones."""
    shared = private_state.shared_flag
    private = FULL_MASK ^ shared
    merged = WorldState(private_state.settings)
    merged.set_values((private_state.values & private) | (world_state.values & shared))
    merged.set_not_used_flag((private_state.not_used_flag & private) | (world_state.not_used_flag & shared))
    return merged


class Agent:
    """Drives one goal and its planned actions against private and world state."""

    def __init__(
        self,
        settings: Optional[WorldStateSettings] = None,
        action_set: Optional[ActionSet] = None,
        goal_set: Optional[GoalSet] = None,
        store: Optional[WorldStateStore] = None,
        compare_f_when_h_equal: bool = False,
        random_when_h_equal: bool = False,
    ) -> None:
        self.settings = settings
        self.action_set = action_set
        self.goal_set = goal_set
        self.store = store if store is not None else WorldStateStore()
        self.planner = AstarPlanner(compare_f_when_h_equal, random_when_h_equal)
        self.private_state = WorldState(settings)
        self.previous_state = WorldState(settings)
        self.current_state = WorldState(settings)
        self.current_goal: Optional[Goal] = None
        self.current_action: Optional[Action] = None
        self.planned_actions: deque[Action] = deque()
        self.private_state_updaters: list[Callable[[Agent, float], None]] = []
        self.pre_goal_select_listeners: list[Callable[[Agent], None]] = []
        self.goal_select_listeners: list[Callable[[Agent], None]] = []

    def set_private_state(self, name: str, value: bool) -> bool:
        """Set a private fact; False if the name is unknown."""
        return self.private_state.set_state_value(name, value)

    def get_private_state(self, name: str, ignore_used_flag: bool = False) -> Optional[bool]:
        """A private fact, or None if unknown or not in use."""
        return self.private_state.get_state_value(name, ignore_used_flag)

    def tick(self, delta_time: float) -> None:
        """Advance world state, goal and action by one step."""
        if self.action_set is None:
            logger.info("GOAP: action set is not initialised.")
            return
        if self.goal_set is None:
            logger.info("GOAP: goal set is not initialised.")
            return
        self.update_world_state(delta_time)
        self.update_goal_state()
        self.update_action_state(delta_time)

    def update_world_state(self, delta_time: float) -> None:
        """Remember the last state and merge private facts with the world's."""
        self.previous_state = self.current_state
        for updater in self.private_state_updaters:
            updater(self, delta_time)
        world = self.store.world_state(self.settings)
        self.current_state = merge_private_state(self.private_state, world)

    def _state_changed(self) -> bool:
        return self.current_state != self.previous_state

    def update_goal_state(self) -> None:
        """Pick a new goal when needed and plan for it."""
        goal = self.current_goal
        if goal is not None and goal.result is GoalResult.IN_PROGRESS and self._state_changed():
            goal.agent_state_changed(self.previous_state, self.current_state)

        if self.current_goal is None or self.current_goal.result in _FINISHED_GOAL:
            if self.current_goal is not None:
                self.current_goal.set_result(GoalResult.INVALID)
            for listener in self.pre_goal_select_listeners:
                listener(self)
            self.current_goal = self.goal_set.select_goal(self.current_state)
            if self.current_goal is not None:
                for listener in self.goal_select_listeners:
                    listener(self)
                self.current_goal.on_active(self)
            if self.current_action is not None and self.current_action.result is ActionResult.IN_PROGRESS:
                self.current_action.end(ActionResult.ABORTED)
            self.current_action = None
            self.planned_actions.clear()

        if self.current_goal is None:
            logger.info("GOAP: no goal selected.")
            return
        if not self.planned_actions and self.current_action is None:
            self.action_set.update_usable_actions(self.current_goal.usable_action_type, self.current_state)
            plan = self.planner.plan(self.current_state, self.current_goal.goal_state, self.action_set)
            self.planned_actions = deque(plan)
            if not self.planned_actions:
                self.current_goal.set_result(GoalResult.FAILED)

    def update_action_state(self, delta_time: float) -> None:
        """Start, run or finish the current action."""
        if self.current_action is None and self.planned_actions:
            self.current_action = self.planned_actions.popleft()
            self.current_action.set_result(ActionResult.INVALID)

        action = self.current_action
        if action is None:
            logger.info("GOAP: no active action.")
            return
        if action.result is ActionResult.IN_PROGRESS and self._state_changed():
            action.agent_state_changed(self.previous_state, self.current_state)

        if action.result is ActionResult.SUCCEEDED:
            action.apply_effect(self.private_state)
            self.store.apply_shared_effect(action.effect)
            self.current_action = None
            if not self.planned_actions and self.current_goal is not None:
                self.current_goal.set_result(GoalResult.SUCCEEDED)
        elif action.result in (ActionResult.FAILED, ActionResult.ABORTED):
            self.planned_actions.clear()
            if self.current_goal is not None:
                self.current_goal.set_result(
                    GoalResult.FAILED if action.result is ActionResult.FAILED else GoalResult.ABORTED
                )
            self.current_action = None
        else:
            action.update(delta_time)

    def private_state_report(self) -> str:
        """Listing of the private facts."""
        return self.private_state.describe()