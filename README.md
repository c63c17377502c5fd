# goapkit

A small goal-oriented action planning (GOAP) library with no dependencies
outside the standard library.

World facts are named boolean flags packed into the bits of a 64-bit word.
Actions state preconditions and effects over those flags. An A* planner
searches backwards from a goal state to the current state and returns the
cheapest sequence of actions. An `Agent` ties it together: on every tick it
merges its private facts with the shared facts of a `WorldStateStore`, picks
a goal, plans for it and runs the planned actions one after another.

## Installation

```
pip install goapkit
```

## Modules

- `goapkit.settings`: `StateConfig` (`is_world_shared`) and
  `WorldStateSettings`, whose `rebuild(config)` gives each state name a bit
  offset in order (at most 64, otherwise `ValueError`) and records which bits
  are shared with the world. `tag_matches(tag, other)` is true when the
  dotted `tag` equals `other` or lies beneath it; empty tags match nothing.
- `goapkit.worldstate`: `WorldState` holds `values` and the `not_used_flag`
  mask. `set_state_value` returns `False` for an unknown name;
  `get_state_value` returns `None` for an unknown or unused fact;
  `calc_correlation` counts differing facts; `build_from_config`,
  `find_or_add_state_name`, `clear`, `copy`, `describe` and `row_count`.
  Two states are equal when their values and masks are equal.
- `goapkit.action`: `Action` with `get_cost()` (config + static + dynamic
  cost), `match_precondition`, `match_effect`, `apply_effect`,
  `apply_precondition`, and a life cycle through `ActionResult`: `update`,
  `set_result`, `end`, and the hooks `on_active`, `on_tick`, `on_aborted`,
  `on_failed` and `update_dynamic_cost` to override. With `can_interrupt`,
  `agent_state_changed` aborts the action when a changed fact meets one of
  its `interrupt_conditions`.
- `goapkit.action_set`: `ActionSet.update_usable_actions(action_type, state)`
  keeps the actions whose type fits the goal's (by `tag_matches`, or when
  either type is empty); `possible_transitions` yields the search nodes;
  `usable_actions_report` lists them.
- `goapkit.astar`: `AstarNode` and `AstarPlanner`.
  `plan(start, goal, action_set)` returns the ordered list of actions, empty
  when none is needed or none reaches the goal. Ties on `f` can be broken by
  `h` or at random (`compare_f_when_h_equal`, `random_when_h_equal`).
  `planned_action_report` lists the last plan.
- `goapkit.goal`: `Goal` with a target state, a precondition, a usable
  action type and interrupt rules; `GoalResult`.
- `goapkit.goal_set`: `GoalEntry` (weights below 1 become 1), `GoalGroup`
  with optional uniform or weighted `shuffle`, and `GoalSet.select_goal`,
  which starts and returns the first goal, in group order, whose
  precondition the state meets.
- `goapkit.store`: `WorldStateStore`, the shared world facts (`write`,
  `clear`, `world_state(settings)`, `apply_shared_effect`, `describe`,
  `row_count`). Built states are cached per settings object and rebuilt
  only after the facts change.
- `goapkit.agent`: `merge_private_state` and `Agent` (`tick`,
  `set_private_state`, `get_private_state`, `private_state_report`). Lists
  of callables `private_state_updaters`, `pre_goal_select_listeners` and
  `goal_select_listeners` let you hook into each tick.
- `goapkit.abilities`: `AbilityConfig`, `AbilityCooldown` and
  `AbilityGroups`, which hands out integer handles, picks an ability of a
  group at random by weight (weight 1 while cooling down), and ticks
  cooldowns. An optional `activator(handle)` callable decides whether an
  activation succeeds.
- `goapkit.wait_time`: `WaitTimeAction`, an action that succeeds once its
  ticks add up to `wait_time` seconds.

## Example

The planner works backwards: it starts from the goal and replaces each
action's effect with its preconditions until the result agrees with the
current state on every fact it uses. An action therefore usually lists the
opposite of its effect among its preconditions.

```python
from goapkit.settings import StateConfig, WorldStateSettings
from goapkit.action_set import ActionSet
from goapkit.goal import Goal
from goapkit.goal_set import GoalEntry, GoalGroup, GoalSet
from goapkit.store import WorldStateStore
from goapkit.agent import Agent
from goapkit.wait_time import WaitTimeAction

settings = WorldStateSettings()
settings.rebuild({
    "State.HasWeapon": StateConfig(),
    "State.EnemyDead": StateConfig(),
})

pick_up = WaitTimeAction(
    settings,
    preconditions={"State.HasWeapon": False},
    effects={"State.HasWeapon": True},
    config_cost=1,
    name="PickUp",
    wait_time=0.5,
)
attack = WaitTimeAction(
    settings,
    preconditions={"State.HasWeapon": True, "State.EnemyDead": False},
    effects={"State.EnemyDead": True},
    config_cost=1,
    name="Attack",
    wait_time=0.5,
)

actions = ActionSet(settings, [pick_up, attack])
goals = GoalSet(settings, [GoalGroup([GoalEntry(Goal(settings, goal={"State.EnemyDead": True}))])])
agent = Agent(settings, actions, goals, WorldStateStore())

for _ in range(10):
    agent.tick(0.5)

print(agent.get_private_state("State.EnemyDead"))  # True
```

Subclass `Action` for your own behaviour and call `end(ActionResult.SUCCEEDED)`
(or `FAILED`) when the work is done. The agent then applies the action's
effect to its private facts, records the world-shared ones in the store and
moves on to the next step of the plan.

## What it does not do

goapkit is a library only. It has no command-line program, saves nothing to
disk, draws no debug display, and does not load actions or goals from asset
files: you build them in Python and drive `Agent.tick` from your own loop.
Abilities are tracked by handle only; actually running one is left to the
`activator` you pass to `AbilityGroups`.

## Running the tests

```
pip install -e ".[test]"
pytest
```