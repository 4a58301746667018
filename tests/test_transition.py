"""Tests for transitions and easing."""

import pytest

from bubblemap.render import Transition, ease_cubic_in_out


def test_easing_endpoints_and_symmetry() -> None:
    assert ease_cubic_in_out(0.0) == 0.0
    assert ease_cubic_in_out(1.0) == 1.0
    assert ease_cubic_in_out(0.5) == pytest.approx(0.5)
    assert ease_cubic_in_out(0.25) == pytest.approx(1.0 - ease_cubic_in_out(0.75))
    assert ease_cubic_in_out(0.25) < 0.25


def test_easing_clamps_input() -> None:
    assert ease_cubic_in_out(-1.0) == 0.0
    assert ease_cubic_in_out(2.0) == 1.0


class TestTransition:
    """Test Transition functionality."""

    def test_static(self) -> None:
        t = Transition.static(3.0)
        assert t.value_at(0.0) == 3.0
        assert not t.is_running(0.0)

    def test_value_over_time(self) -> None:
        t = Transition(start=0.0, end=10.0, start_time=100.0, duration=750.0)
        assert t.value_at(50.0) == 0.0
        assert t.value_at(100.0) == 0.0
        assert t.value_at(475.0) == pytest.approx(5.0)
        assert t.value_at(850.0) == 10.0
        assert t.value_at(10_000.0) == 10.0
        assert t.end_time == 850.0

    def test_is_running(self) -> None:
        t = Transition(start=0.0, end=10.0, start_time=0.0, duration=100.0)
        assert t.is_running(50.0)
        assert not t.is_running(100.0)
        assert not Transition(start=1.0, end=1.0, start_time=0.0, duration=100.0).is_running(50.0)

    def test_retarget_starts_from_current_value(self) -> None:
        """Interrupting mid-way restarts from the interpolated value, not from the old start."""
        t = Transition(start=0.0, end=10.0, start_time=0.0, duration=100.0)
        retargeted = t.retarget(20.0, now=50.0, duration=100.0)

        assert retargeted.start == pytest.approx(5.0)
        assert retargeted.end == 20.0
        assert retargeted.start_time == 50.0
        assert retargeted.value_at(150.0) == 20.0
