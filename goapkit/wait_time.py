"""An action that succeeds after waiting a fixed time."""

from __future__ import annotations

from typing import Any, Optional

from goapkit.action import Action, ActionResult


class WaitTimeAction(Action):
    """Succeeds once ``wait_time`` seconds of ticks have passed since it started."""

    def __init__(self, *args: Any, wait_time: float = 1.0, **kwargs: Any) -> None:
        self.wait_time = wait_time
        self.remaining: Optional[float] = None
        super().__init__(*args, **kwargs)

    def on_active(self) -> None:
        super().on_active()
        self.remaining = self.wait_time

    def on_tick(self, delta_time: float) -> None:
        super().on_tick(delta_time)
        if self.remaining is None:
            return
        self.remaining -= delta_time
        if self.remaining <= 0:
            self.remaining = None
            self.end(ActionResult.SUCCEEDED)

    def on_aborted(self) -> None:
        super().on_aborted()
        self.remaining = None

    def on_failed(self) -> None:
        super().on_failed()
        self.remaining = None