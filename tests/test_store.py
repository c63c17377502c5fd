import pytest

from goapkit.settings import StateConfig, WorldStateSettings
from goapkit.store import WorldStateStore
from goapkit.worldstate import WorldState


@pytest.fixture
def settings():
    s = WorldStateSettings()
    s.rebuild({"private": StateConfig(False), "shared": StateConfig(True)})
    return s


def test_write_is_visible_in_world_state(settings):
    store = WorldStateStore()
    store.write("shared", True)
    state = store.world_state(settings)
    assert state.get_state_value("shared") is True
    assert state.get_state_value("private") is None


def test_world_state_is_cached_and_refreshed(settings):
    store = WorldStateStore()
    store.write("shared", True)
    first = store.world_state(settings)
    assert store.world_state(settings) is first
    store.write("shared", False)
    again = store.world_state(settings)
    assert again is first
    assert again.get_state_value("shared") is False


def test_unknown_key_is_recorded_but_not_laid_out(settings):
    store = WorldStateStore()
    store.write("elsewhere", True)
    assert store.row_count() == 1
    assert store.world_state(settings).get_state_value("elsewhere") is None


def test_apply_shared_effect_records_only_shared(settings):
    store = WorldStateStore()
    effect = WorldState(settings)
    effect.set_state_value("shared", True)
    effect.set_state_value("private", True)
    store.apply_shared_effect(effect)
    assert store.data == {"shared": True}
    assert store.world_state(settings).get_state_value("shared") is True


def test_apply_same_effect_keeps_version(settings):
    store = WorldStateStore()
    effect = WorldState(settings)
    effect.set_state_value("shared", True)
    store.apply_shared_effect(effect)
    version = store.version
    store.apply_shared_effect(effect)
    assert store.version == version


def test_describe_and_clear(settings):
    store = WorldStateStore()
    store.write("shared", True)
    assert store.describe() == "  shared : True \n"
    store.clear()
    assert store.row_count() == 0
    assert store.describe() == ""