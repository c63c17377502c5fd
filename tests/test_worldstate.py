import pytest

from goapkit.settings import FULL_MASK, MAX_STATES, StateConfig, WorldStateSettings
from goapkit.worldstate import WorldState


@pytest.fixture
def settings():
    s = WorldStateSettings()
    s.rebuild({"A": StateConfig(), "B": StateConfig(is_world_shared=True), "C": StateConfig()})
    return s


def test_new_state_is_unused(settings):
    state = WorldState(settings)
    assert state.values == 0
    assert state.not_used_flag == FULL_MASK
    assert state.names_table == settings.names_table
    assert state.shared_flag == settings.shared_flag


def test_set_and_get_round_trip(settings):
    state = WorldState(settings)
    assert state.set_state_value("A", True) is True
    assert state.set_state_value("B", False) is True
    assert state.get_state_value("A") is True
    assert state.get_state_value("B") is False


def test_unknown_name(settings):
    state = WorldState(settings)
    assert state.set_state_value("Missing", True) is False
    assert state.get_state_value("Missing") is None


def test_unused_name_needs_ignore_flag(settings):
    state = WorldState(settings)
    assert state.get_state_value("C") is None
    assert state.get_state_value("C", ignore_used_flag=True) is False


def test_set_marks_bit_used(settings):
    state = WorldState(settings)
    offset = settings.names_table["C"]
    assert (state.not_used_flag >> offset) & 1 == 1
    state.set_state_value("C", False)
    assert (state.not_used_flag >> offset) & 1 == 0
    assert state.not_used_flag == FULL_MASK & ~(1 << offset)
    assert state.get_state_value("C") is False


def test_correlation_with_itself_is_zero(settings):
    state = WorldState(settings)
    state.set_state_value("A", True)
    state.set_state_value("C", False)
    assert state.calc_correlation(state) == 0


def test_correlation_counts_differing_facts(settings):
    a = WorldState(settings)
    b = WorldState(settings)
    for name, value in {"A": True, "B": True, "C": False}.items():
        a.set_state_value(name, value)
    for name, value in {"A": True, "B": False, "C": True}.items():
        b.set_state_value(name, value)
    differing = {"B", "C"}
    assert a.calc_correlation(b) == len(differing)
    assert b.calc_correlation(a) == len(differing)


def test_correlation_ignores_unused_in_other(settings):
    a = WorldState(settings)
    a.set_state_value("A", True)
    assert a.calc_correlation(WorldState(settings)) == 0


def test_set_values_updates_used_facts_only(settings):
    state = WorldState(settings)
    state.set_state_value("A", False)
    state.set_values(1 << settings.names_table["A"])
    assert state.get_state_value("A") is True
    assert state.value_map == {"A": True}


def test_clear(settings):
    state = WorldState(settings)
    state.set_state_value("A", True)
    state.clear()
    assert state.values == 0
    assert state.not_used_flag == FULL_MASK
    assert state.get_state_value("A") is None


def test_find_or_add_existing(settings):
    state = WorldState(settings)
    assert state.find_or_add_state_name("B") == settings.names_table["B"]
    assert state.names_len == settings.names_len


def test_find_or_add_new(settings):
    state = WorldState(settings)
    before = state.names_len
    offset = state.find_or_add_state_name("Z")
    assert offset == before
    assert state.names_table["Z"] == offset
    assert state.names_len == before + 1
    assert "Z" not in settings.names_table
    assert state.set_state_value("Z", True) is True


def test_find_or_add_when_full():
    full = WorldStateSettings()
    full.rebuild({f"S{i}": StateConfig() for i in range(MAX_STATES)})
    state = WorldState(full)
    assert state.find_or_add_state_name("S5") == full.names_table["S5"]
    with pytest.raises(ValueError):
        state.find_or_add_state_name("New")


def test_build_from_config_replaces_values(settings):
    state = WorldState(settings)
    state.set_state_value("A", True)
    state.build_from_config({"C": True})
    assert state.get_state_value("A") is None
    assert state.get_state_value("C") is True


def test_build_from_none_keeps_state(settings):
    state = WorldState(settings)
    state.set_state_value("A", True)
    state.build_from_config(None)
    assert state.get_state_value("A") is True


def test_describe(settings):
    state = WorldState(settings)
    assert state.describe() == "None"
    assert state.row_count() == 0
    state.set_state_value("A", True)
    assert state.describe() == "  A : True \n"
    state.set_state_value("C", False)
    assert state.describe().splitlines()[1] == "  C : False "
    assert state.row_count() == len(state.describe().splitlines())


def test_copy_is_independent(settings):
    state = WorldState(settings)
    state.set_state_value("A", True)
    clone = state.copy()
    assert clone == state
    clone.set_state_value("A", False)
    assert clone != state
    assert state.get_state_value("A") is True


def test_equality_by_content(settings):
    a = WorldState(settings)
    b = WorldState(settings)
    a.set_state_value("B", True)
    b.set_state_value("B", True)
    assert a == b