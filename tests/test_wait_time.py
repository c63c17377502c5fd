import pytest

from goapkit.action import ActionResult
from goapkit.settings import StateConfig, WorldStateSettings
from goapkit.wait_time import WaitTimeAction


@pytest.fixture
def settings():
    s = WorldStateSettings()
    s.rebuild({"rested": StateConfig(False)})
    return s


def test_succeeds_after_wait(settings):
    action = WaitTimeAction(settings, effects={"rested": True}, wait_time=1.0)
    action.update(0.0)
    assert action.result is ActionResult.IN_PROGRESS
    assert action.remaining == 1.0
    action.update(0.5)
    assert action.result is ActionResult.IN_PROGRESS
    action.update(0.5)
    assert action.result is ActionResult.SUCCEEDED
    assert action.remaining is None


def test_abort_clears_timer(settings):
    action = WaitTimeAction(settings, wait_time=1.0)
    action.update(0.0)
    action.set_result(ActionResult.ABORTED)
    assert action.remaining is None
    action.update(5.0)
    assert action.result is ActionResult.ABORTED


def test_failure_clears_timer(settings):
    action = WaitTimeAction(settings, wait_time=1.0)
    action.update(0.0)
    action.end(ActionResult.FAILED)
    assert action.remaining is None
    assert action.result is ActionResult.FAILED


def test_effects_configured_through_base(settings):
    action = WaitTimeAction(settings, effects={"rested": True}, wait_time=2.0)
    assert action.effect.get_state_value("rested") is True
    assert action.wait_time == 2.0