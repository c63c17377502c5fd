"""A bit-packed set of boolean facts used by the planner."""

from __future__ import annotations

from typing import Mapping, Optional

from goapkit.settings import FULL_MASK, MAX_STATES, WorldStateSettings

H_VALUE_SCALE = 1

_DEFAULT_SETTINGS = WorldStateSettings()


class WorldState:
    """Boolean facts stored as bits, with a mask of the facts that are not in use."""

    def __init__(self, settings: Optional[WorldStateSettings] = None) -> None:
        self.settings = settings if settings is not None else _DEFAULT_SETTINGS
        self.names_table: dict[str, int] = dict(self.settings.names_table)
        self.names_len = self.settings.names_len
        self.shared_flag = self.settings.shared_flag
        self.values = 0
        self.not_used_flag = FULL_MASK
        self.value_map: dict[str, bool] = {}

    def __repr__(self) -> str:
        return f"WorldState(values={self.values:#x}, not_used_flag={self.not_used_flag:#x})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorldState):
            return NotImplemented
        return self.values == other.values and self.not_used_flag == other.not_used_flag

    __hash__ = None  # type: ignore[assignment]

    def set_state_value(self, name: str, value: bool = False) -> bool:
        """Set a named fact and mark it in use; return False if the name is unknown."""
        offset = self.names_table.get(name)
        if offset is None:
            return False
        mask = 1 << offset
        self.values = (self.values | mask) if value else (self.values & ~mask)
        self.not_used_flag &= ~mask
        self.value_map[name] = bool(value)
        return True

    def get_state_value(self, name: str, ignore_used_flag: bool = False) -> Optional[bool]:
        """Return a named fact, or None if it is unknown or (unless ignored) not in use."""
        offset = self.names_table.get(name)
        if offset is None:
            return None
        mask = 1 << offset
        if self.not_used_flag & mask and not ignore_used_flag:
            return None
        return bool(self.values & mask)

    def calc_correlation(self, other: WorldState) -> int:
        """Count the facts used by ``other`` whose values differ from this state."""
        use_flag = FULL_MASK ^ other.not_used_flag
        diff = (self.values & use_flag) ^ (other.values & use_flag)
        diff &= (1 << len(self.names_table)) - 1
        return bin(diff).count("1") * H_VALUE_SCALE

    def set_values(self, values: int) -> None:
        """Replace the raw bits, refreshing the recorded values of facts in use."""
        self.values = values & FULL_MASK
        used = FULL_MASK ^ self.not_used_flag
        for name, offset in self.names_table.items():
            mask = 1 << offset
            if mask & used:
                self.value_map[name] = bool(self.values & mask)

    def set_not_used_flag(self, flag: int) -> None:
        self.not_used_flag = flag & FULL_MASK

    def clear(self) -> None:
        """Reset every fact to unused."""
        self.values = 0
        self.not_used_flag = FULL_MASK

    def find_or_add_state_name(self, name: str) -> int:
        """Return the offset of ``name``, adding it after the known names if new."""
        offset = self.names_table.get(name)
        if offset is not None:
            return offset
        if self.names_len >= MAX_STATES:
            raise ValueError(f"no room for state {name!r}: all {MAX_STATES} offsets are taken")
        offset = self.names_len
        self.names_table[name] = offset
        self.names_len += 1
        return offset

    def build_from_config(self, config: Optional[Mapping[str, bool]]) -> None:
        """Clear the state and set every fact listed in ``config``."""
        if config is None:
            return
        self.clear()
        for name, value in config.items():
            self.set_state_value(name, value)

    def describe(self) -> str:
        """Human-readable listing of the recorded facts."""
        if not self.value_map:
            return "None"
        return "".join(
            f"  {name} : {'True' if value else 'False'} \n" for name, value in self.value_map.items()
        )

    def row_count(self) -> int:
        """Number of lines ``describe`` produces."""
        return len(self.value_map)

    def copy(self) -> WorldState:
        """Independent copy of this state."""
        clone = WorldState(self.settings)
        clone.names_table = dict(self.names_table)
        clone.names_len = self.names_len
        clone.shared_flag = self.shared_flag
        clone.values = self.values
        clone.not_used_flag = self.not_used_flag
        clone.value_map = dict(self.value_map)
        return clone