"""Goal-oriented action planning: world states, actions, goals, A* planning, agents and ability groups."""

__version__ = "0.1.0"