"""Eased, interruptible value transitions sampled against a clock."""

from __future__ import annotations

import time
from dataclasses import dataclass


def now_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


def ease_cubic_in_out(t: float) -> float:
    """Symmetric cubic easing on ``[0, 1]``."""
    t = min(max(t, 0.0), 1.0) * 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


@dataclass(frozen=True)
class Transition:
    """A value moving from ``start`` to ``end`` over ``duration`` ms from ``start_time``."""

    start: float
    end: float
    start_time: float = 0.0
    duration: float = 0.0

    @classmethod
    def static(cls, value: float) -> Transition:
        """A transition that already sits at ``value``."""
        return cls(start=value, end=value)

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def value_at(self, now: float) -> float:
        if self.duration <= 0 or now >= self.end_time:
            return self.end
        if now <= self.start_time:
            return self.start
        progress = (now - self.start_time) / self.duration
        return self.start + (self.end - self.start) * ease_cubic_in_out(progress)

    def is_running(self, now: float) -> bool:
        return self.duration > 0 and self.start != self.end and self.start_time <= now < self.end_time

    def retarget(self, end: float, now: float, duration: float) -> Transition:
        """Interrupt at ``now`` and head for ``end`` from the current value."""
        return Transition(start=self.value_at(now), end=end, start_time=now, duration=duration)
