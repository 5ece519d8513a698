"""Step cadence for driving stepped searches."""

from __future__ import annotations

import time


class TimeManager:
    """Pace a loop at ``tick_rate`` ticks per second."""

    def __init__(self, tick_rate: float = 20.0) -> None:
        if tick_rate <= 0:
            raise ValueError("tick_rate must be positive")
        self.tick_rate: float = tick_rate
        self.tick_counter: int = 0
        self._last_tick: float = time.perf_counter()

    @property
    def interval(self) -> float:
        return 1.0 / self.tick_rate

    def sleep_until_next_tick(self) -> None:
        """Block until the next tick should occur."""

        target = self._last_tick + self.interval
        now = time.perf_counter()
        remaining = target - now
        if remaining > 0:
            time.sleep(remaining)
            self._last_tick = target
        else:
            # Behind schedule; start from current time
            self._last_tick = now
        self.tick_counter += 1


__all__ = ["TimeManager"]
