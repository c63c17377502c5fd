"""Layout of the planner's world state: named flags, their bit offsets and sharing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

MAX_STATES = 64
FULL_MASK = (1 << MAX_STATES) - 1


@dataclass(frozen=True)
class StateConfig:
    """Configuration of one named state flag."""

    is_world_shared: bool = False


@dataclass
class WorldStateSettings:
    """Maps state names to bit offsets and marks which bits are world-shared.

    A set bit in ``shared_flag`` means the state at that offset is shared
    with the world; bits beyond the configured names stay set.
    """

    names_table: dict[str, int] = field(default_factory=dict)
    names_len: int = 0
    shared_flag: int = FULL_MASK

    def clear(self) -> None:
        """Forget every configured state."""
        self.shared_flag = FULL_MASK
        self.names_table.clear()
        self.names_len = 0

    def rebuild(self, config: Mapping[str, StateConfig]) -> None:
        """Assign offsets to the names of ``config`` in order, replacing any previous layout."""
        if len(config) > MAX_STATES:
            raise ValueError(f"at most {MAX_STATES} states can be configured, got {len(config)}")
        self.clear()
        for name, state_config in config.items():
            mask = 1 << self.names_len
            self.names_table[name] = self.names_len
            if not state_config.is_world_shared:
                self.shared_flag &= ~mask
            self.names_len += 1


def tag_matches(tag: str, other: str) -> bool:
    """Return True if dotted ``tag`` equals ``other`` or lies beneath it.

    Empty tags are invalid and match nothing.
    """
    if not tag or not other:
        return False
    return tag == other or tag.startswith(other + ".")