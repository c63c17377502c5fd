import random

import pytest

from goapkit.abilities import AbilityConfig, AbilityCooldown, AbilityGroups


def test_cooldown_activate_and_tick():
    cd = AbilityCooldown(handle=1, ability="slash", cooldown_time=2.0, weight=5)
    assert cd.current_weight() == 5
    assert cd.activate() is True
    assert cd.is_cooldown_complete() is False
    assert cd.current_weight() == 1
    assert cd.activate() is False
    cd.tick(1.0)
    assert cd.is_cooldown_complete() is False
    cd.tick(5.0)
    assert cd.is_cooldown_complete() is True
    assert cd.current_cooldown == 0


def test_zero_cooldown_keeps_weight():
    cd = AbilityCooldown(handle=1, ability="slash", cooldown_time=0.0, weight=3)
    assert cd.activate() is True
    assert cd.current_weight() == 3


def test_give_ability_fills_group():
    groups = AbilityGroups(rng=random.Random(0))
    handle = groups.give_ability(AbilityConfig("slash", "melee", 1.0, 2))
    assert groups.granted[handle] == "slash"
    assert groups.group_info("melee") == (1, 1)
    assert groups.should_tick() is True


@pytest.mark.parametrize("config", [AbilityConfig(None, "melee"), AbilityConfig("slash", "")])
def test_give_invalid_ability_raises(config):
    with pytest.raises(ValueError):
        AbilityGroups().give_ability(config)


def test_activate_single_ability_starts_cooldown():
    groups = AbilityGroups(rng=random.Random(0))
    handle = groups.give_ability(AbilityConfig("slash", "melee", 1.0, 2))
    assert groups.try_activate_from_group("melee") == handle
    assert groups.group_info("melee") == (0, 1)
    groups.tick(1.0)
    assert groups.group_info("melee") == (1, 1)


def test_activation_picks_a_member_of_group():
    groups = AbilityGroups(rng=random.Random(3))
    handles = {groups.give_ability(AbilityConfig(name, "melee", 0.0, 1)) for name in ("a", "b", "c")}
    for _ in range(10):
        assert groups.try_activate_from_group("melee") in handles


def test_rejected_activation_returns_none():
    seen = []

    def reject(handle):
        seen.append(handle)
        return False

    groups = AbilityGroups(activator=reject, rng=random.Random(0))
    handle = groups.give_ability(AbilityConfig("slash", "melee"))
    assert groups.try_activate_from_group("melee") is None
    assert seen == [handle]


def test_unknown_and_empty_group():
    groups = AbilityGroups()
    assert groups.try_activate_from_group("ranged") is None
    assert groups.group_info("ranged") is None
    with pytest.raises(ValueError):
        groups.try_activate_from_group("")


def test_clear_ability_removes_empty_group():
    groups = AbilityGroups()
    first = AbilityConfig("slash", "melee")
    second = AbilityConfig("stab", "melee")
    groups.give_ability(first)
    groups.give_ability(second)
    groups.clear_ability(second)
    assert groups.group_info("melee") == (1, 1)
    groups.clear_ability(first)
    assert groups.group_info("melee") is None
    assert groups.should_tick() is False
    assert groups.granted == {}