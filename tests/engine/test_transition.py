"""
Tests for Transition (deterministic: manual clock + fake stopwatch)

Covers:
- Binding validation (missing, inaccessible, unsupported properties)
- Tick algorithm (progress, insertion order, shared progress)
- Single terminal tick and retirement
- Re-entrancy guard
- stop(), listeners and fatal write errors
- Foreign-context dispatch
"""

from unittest.mock import MagicMock

import pytest

from dispatch import ContextAffinity, DispatchGuard
from interpolation import InterpolatorRegistry, IntManagedType
from models.color import Color
from models.enums import TransitionState
from models.errors import (
    InvalidStateError,
    NoSuchPropertyError,
    NotAccessibleError,
    PropertyWriteError,
    TimingCurveError,
    UnsupportedTypeError,
)
from models.settings import EngineSettings, get_settings, set_settings
from timing import LinearCurve, OvershootCurve, TimingCurve


class FailingCurve(TimingCurve):
    """Curve that breaks after a number of good ticks"""

    def __init__(self, good_ticks=0):
        self.good_ticks = good_ticks
        self.calls = 0

    def on_tick(self, elapsed_ms):
        self.calls += 1
        if self.calls > self.good_ticks:
            raise ZeroDivisionError("curve broke")
        return 0.5, False


class TestTransitionBindings:
    """add() validation and start value capture"""

    def test_add_records_binding(self, make_transition, panel):
        transition = make_transition(LinearCurve(500))

        binding = transition.add(panel, "width", 500)

        assert binding.start_value == 100
        assert binding.end_value == 500
        assert binding.property_name == "width"
        assert transition.bindings == (binding,)
        assert transition.state is TransitionState.IDLE

    def test_missing_property_adds_nothing(self, make_transition, panel, clocks, stopwatch):
        transition = make_transition(LinearCurve(500))

        with pytest.raises(NoSuchPropertyError) as exc_info:
            transition.add(panel, "height", 300)

        assert exc_info.value.code == "NO_SUCH_PROPERTY"
        assert transition.bindings == ()

        # Zero bindings still run to completion
        transition.go()
        stopwatch.now_ms = 500
        assert clocks[0].tick()
        assert transition.is_completed
        assert transition.tick_count == 1

    def test_unsupported_type_adds_nothing(self, make_transition, panel):
        transition = make_transition(LinearCurve(500))

        with pytest.raises(UnsupportedTypeError):
            transition.add(panel, "visible", False)   # bool is not int

        assert transition.bindings == ()

    def test_unsupported_type_with_custom_registry(self, make_transition, panel):
        registry = InterpolatorRegistry()
        registry.register(int, IntManagedType())
        transition = make_transition(LinearCurve(500), registry=registry)

        transition.add(panel, "width", 200)
        with pytest.raises(UnsupportedTypeError):
            transition.add(panel, "opacity", 0.0)

        assert len(transition.bindings) == 1

    def test_read_only_property_not_accessible(self, make_transition, panel):
        transition = make_transition(LinearCurve(500))

        with pytest.raises(NotAccessibleError) as exc_info:
            transition.add(panel, "area", 10)

        assert exc_info.value.details["readable"] is True
        assert exc_info.value.details["writable"] is False
        assert transition.bindings == ()

    def test_method_not_accessible(self, make_transition, panel):
        transition = make_transition(LinearCurve(500))

        with pytest.raises(NotAccessibleError):
            transition.add(panel, "resize", 10)

    def test_read_only_check_precedes_type_check(self, make_transition):
        class Sensor:
            @property
            def enabled(self):
                return True

        transition = make_transition(LinearCurve(500))

        with pytest.raises(NotAccessibleError):
            transition.add(Sensor(), "enabled", False)

    def test_start_value_is_independent_copy(self, make_transition, panel):
        panel.background = Color.from_rgb(10, 20, 30)
        transition = make_transition(LinearCurve(500))

        binding = transition.add(panel, "background", Color.white())
        panel.background.r = 200

        assert binding.start_value == Color.from_rgb(10, 20, 30)
        assert binding.start_value is not panel.background

    def test_binding_is_immutable(self, make_transition, panel):
        transition = make_transition(LinearCurve(500))
        binding = transition.add(panel, "width", 500)

        with pytest.raises(AttributeError):
            binding.end_value = 1000


class TestTransitionStateMachine:
    """IDLE → RUNNING → COMPLETED"""

    def test_go_starts_clock_and_stopwatch(self, make_transition, panel, clocks, stopwatch):
        transition = make_transition(LinearCurve(500), tick_interval_ms=5)
        transition.add(panel, "width", 500)

        transition.go()

        assert transition.state is TransitionState.RUNNING
        assert len(clocks) == 1
        assert clocks[0].started
        assert clocks[0].interval_ms == 5
        assert stopwatch.started

    def test_add_after_go_is_invalid(self, make_transition, panel):
        transition = make_transition(LinearCurve(500))
        transition.go()

        with pytest.raises(InvalidStateError) as exc_info:
            transition.add(panel, "width", 500)

        assert exc_info.value.details["state"] == "RUNNING"

    def test_go_twice_is_invalid(self, make_transition):
        transition = make_transition(LinearCurve(500))
        transition.go()

        with pytest.raises(InvalidStateError):
            transition.go()

    def test_completed_transition_cannot_restart(self, make_transition, clocks, stopwatch):
        transition = make_transition(LinearCurve(0))
        transition.go()
        clocks[0].tick()

        assert transition.is_completed
        with pytest.raises(InvalidStateError):
            transition.go()

    def test_default_tick_interval_from_settings(self, make_transition):
        previous = get_settings()
        set_settings(EngineSettings(tick_interval_ms=42))
        try:
            transition = make_transition(LinearCurve(500))
            assert transition.tick_interval_ms == 42
        finally:
            set_settings(previous)


class TestTransitionTicks:
    """Tick algorithm"""

    def test_linear_int_scenario(self, make_transition, panel, clocks, stopwatch):
        """100 → 500 over 500ms: ~300 at half time, exactly 500 at the end"""
        transition = make_transition(LinearCurve(500))
        transition.add(panel, "width", 500)
        transition.go()
        clock = clocks[0]

        stopwatch.now_ms = 250
        clock.tick()
        assert abs(panel.width - 300) <= 1
        assert transition.is_running
        assert clock.enabled

        stopwatch.now_ms = 500
        clock.tick()
        assert panel.width == 500
        assert transition.is_completed

    def test_final_value_exact_after_late_tick(self, make_transition, make_panel, clocks, stopwatch):
        target = make_panel(opacity=0.1)
        transition = make_transition(LinearCurve(300))
        transition.add(target, "opacity", 0.3)
        transition.go()

        stopwatch.now_ms = 731.4
        clocks[0].tick()

        assert target.opacity == 0.3

    def test_two_targets_share_progress(self, make_transition, make_panel, clocks, stopwatch):
        a = make_panel(width=0)
        b = make_panel(width=0)
        progress_seen = []

        transition = make_transition(LinearCurve(1000))
        transition.add(a, "width", 100)
        transition.add(b, "width", 1000)
        transition.add_tick_listener(lambda progress, completed: progress_seen.append(progress))
        transition.go()

        stopwatch.now_ms = 250
        clocks[0].tick()

        assert progress_seen == [0.25]
        assert a.width == 25
        assert b.width == 250

    def test_bindings_written_in_insertion_order(self, make_transition, clocks, stopwatch):
        order = []

        class Recorder:
            def __init__(self, name):
                self.name = name
                self._value = 0

            @property
            def value(self):
                return self._value

            @value.setter
            def value(self, v):
                self._value = v
                order.append(self.name)

        transition = make_transition(LinearCurve(100))
        for name in ("first", "second", "third"):
            transition.add(Recorder(name), "value", 10)
        transition.go()

        stopwatch.now_ms = 50
        clocks[0].tick()

        assert order == ["first", "second", "third"]

    def test_all_value_types_in_one_transition(self, make_transition, panel, clocks, stopwatch):
        panel.background = Color.from_rgb(0, 0, 0)
        transition = make_transition(LinearCurve(100))
        transition.add(panel, "width", 200)
        transition.add(panel, "opacity", 0.0)
        transition.add(panel, "background", Color.from_rgb(200, 100, 50))
        transition.add(panel, "title", "world")
        transition.add(panel, "position", (10, 20))
        transition.go()

        stopwatch.now_ms = 100
        clocks[0].tick()

        assert panel.width == 200
        assert panel.opacity == 0.0
        assert panel.background == Color.from_rgb(200, 100, 50)
        assert panel.title == "world"
        assert panel.position == (10, 20)

    def test_overshooting_curve_does_not_crash(self, make_transition, panel, clocks, stopwatch):
        panel.background = Color.from_rgb(0, 0, 0)
        transition = make_transition(OvershootCurve(100))
        transition.add(panel, "width", 200)
        transition.add(panel, "background", Color.from_rgb(255, 255, 255))
        transition.go()

        stopwatch.now_ms = 60
        clocks[0].tick()

        assert transition.last_progress > 1.0
        assert panel.width > 200
        assert panel.background == Color.from_rgb(255, 255, 255)


class TestTransitionTermination:
    """Exactly one terminal tick"""

    def test_single_terminal_tick(self, make_transition, panel, clocks, stopwatch):
        completed_flags = []
        transition = make_transition(LinearCurve(100))
        transition.add(panel, "width", 500)
        transition.add_tick_listener(lambda progress, completed: completed_flags.append(completed))
        transition.go()
        clock = clocks[0]

        stopwatch.now_ms = 50
        clock.tick()
        stopwatch.now_ms = 150
        clock.tick()
        writes_after_completion = list(panel.writes)

        # No further ticks are delivered, even if the callback fires again
        assert clock.stopped
        assert not clock.tick()
        clock.callback()

        assert completed_flags == [False, True]
        assert transition.tick_count == 2
        assert panel.writes == writes_after_completion

    def test_retire_releases_curve_and_bindings(self, make_transition, panel, clocks, stopwatch):
        transition = make_transition(LinearCurve(0))
        transition.add(panel, "width", 500)
        transition.go()

        clocks[0].tick()

        assert transition.timing_curve is None
        assert transition.bindings == ()
        assert transition.wait(timeout=0)

    def test_completed_listener_called_once(self, make_transition, clocks, stopwatch):
        completed = []
        transition = make_transition(LinearCurve(0))
        transition.add_completed_listener(completed.append)
        transition.go()

        clocks[0].tick()
        transition.stop()

        assert completed == [transition]

    def test_failing_listener_does_not_block_completion(self, make_transition, clocks):
        calls = []

        def broken(progress, completed):
            raise RuntimeError("listener bug")

        transition = make_transition(LinearCurve(0))
        transition.add_tick_listener(broken)
        transition.add_tick_listener(lambda progress, completed: calls.append(completed))
        transition.go()

        clocks[0].tick()

        assert calls == [True]
        assert transition.is_completed


class TestTransitionStop:
    """stop(): direct move to COMPLETED"""

    def test_stop_running(self, make_transition, panel, clocks, stopwatch):
        transition = make_transition(LinearCurve(1000))
        transition.add(panel, "width", 500)
        transition.go()
        clock = clocks[0]

        stopwatch.now_ms = 250
        clock.tick()
        transition.stop()

        assert transition.is_completed
        assert clock.stopped
        assert panel.width == 200
        assert not clock.tick()
        assert panel.width == 200

    def test_stop_is_idempotent(self, make_transition):
        transition = make_transition(LinearCurve(1000))
        transition.go()

        transition.stop()
        transition.stop()

        assert transition.is_completed

    def test_stop_before_go(self, make_transition, clocks):
        transition = make_transition(LinearCurve(1000))

        transition.stop()

        assert transition.is_completed
        assert clocks == []
        with pytest.raises(InvalidStateError):
            transition.go()

    def test_stop_from_tick_listener(self, make_transition, panel, clocks, stopwatch):
        transition = make_transition(LinearCurve(1000))
        transition.add(panel, "width", 500)
        transition.add_tick_listener(lambda progress, completed: transition.stop())
        transition.go()

        stopwatch.now_ms = 100
        clocks[0].tick()

        assert transition.is_completed
        assert transition.tick_count == 1


    def test_stop_mid_tick_skips_remaining_bindings(self, make_transition, make_panel, clocks, stopwatch):
        """stop() landing between two writes of the same tick"""
        completed = []
        transition = make_transition(LinearCurve(1000))

        class Trigger:
            def __init__(self):
                self._value = 0

            @property
            def value(self):
                return self._value

            @value.setter
            def value(self, v):
                self._value = v
                transition.stop()

        trigger = Trigger()
        later = make_panel(width=0)
        transition.add(trigger, "value", 100)
        transition.add(later, "width", 100)
        transition.add_completed_listener(completed.append)
        transition.go()

        stopwatch.now_ms = 500
        clocks[0].tick()

        assert trigger.value == 50
        assert later.writes == []
        assert completed == [transition]
        assert transition.is_completed


class TestTransitionReentrancy:
    """Tick delivery is disabled while a tick runs"""

    def test_clock_disabled_during_writes(self, make_transition, clocks, stopwatch):
        observed = {}

        class Reentrant:
            def __init__(self):
                self._value = 0

            @property
            def value(self):
                return self._value

            @value.setter
            def value(self, v):
                self._value = v
                clock = clocks[0]
                observed["enabled"] = clock.enabled
                observed["delivered"] = clock.tick()
                # Bypass the clock entirely: still dropped by the tick lock
                clock.callback()

        transition = make_transition(LinearCurve(100))
        transition.add(Reentrant(), "value", 100)
        transition.go()

        stopwatch.now_ms = 50
        clocks[0].tick()

        assert observed == {"enabled": False, "delivered": False}
        assert transition.tick_count == 1
        assert clocks[0].enabled


class TestTransitionWriteErrors:
    """A failing write is fatal for the transition"""

    def test_write_failure_stops_transition(self, make_transition, clocks, stopwatch):
        class Disposed:
            def __init__(self):
                self._value = 0

            @property
            def value(self):
                return self._value

            @value.setter
            def value(self, v):
                raise RuntimeError("target disposed")

        transition = make_transition(LinearCurve(100))
        transition.add(Disposed(), "value", 10)
        transition.go()

        stopwatch.now_ms = 50
        clocks[0].tick()

        assert transition.is_completed
        assert clocks[0].stopped
        assert isinstance(transition.error, PropertyWriteError)
        assert isinstance(transition.error.__cause__, RuntimeError)
        with pytest.raises(PropertyWriteError):
            transition.wait(timeout=0)

    def test_later_bindings_not_written_after_failure(self, make_transition, panel, clocks, stopwatch):
        class Broken:
            broken = property(lambda self: 0, MagicMock(side_effect=ValueError("bad")))

        target = Broken()

        transition = make_transition(LinearCurve(100))
        transition.add(target, "broken", 10)
        transition.add(panel, "width", 500)
        transition.go()

        stopwatch.now_ms = 50
        clocks[0].tick()

        assert panel.writes == []
        assert transition.error.details["property"] == "broken"


class TestTransitionDispatch:
    """Writes go through the DispatchGuard"""

    def test_foreign_target_only_written_via_marshal(self, make_transition, panel, clocks, stopwatch):
        queued = []
        affinity = MagicMock(spec=ContextAffinity)
        affinity.is_foreign_context.return_value = True
        affinity.marshal.side_effect = lambda target, action: queued.append(action)

        transition = make_transition(LinearCurve(100), dispatch_guard=DispatchGuard(affinity))
        transition.add(panel, "width", 500)
        transition.go()

        stopwatch.now_ms = 100
        clocks[0].tick()

        # Nothing written in place; the write waits on the owner's queue
        assert panel.writes == []
        assert panel.width == 100
        assert transition.is_completed

        for action in queued:
            action()
        assert panel.width == 500

    def test_failed_marshaled_write_is_surfaced(self, make_transition, clocks, stopwatch):
        queued = []
        affinity = MagicMock(spec=ContextAffinity)
        affinity.is_foreign_context.return_value = True
        affinity.marshal.side_effect = lambda target, action: queued.append(action)

        class Disposed:
            value = 0

            def __setattr__(self, name, v):
                raise RuntimeError("disposed")

        transition = make_transition(LinearCurve(1000), dispatch_guard=DispatchGuard(affinity))
        transition.add(Disposed(), "value", 10)
        transition.go()

        stopwatch.now_ms = 100
        clocks[0].tick()
        assert transition.is_running

        queued[0]()

        assert transition.is_completed
        assert isinstance(transition.error, PropertyWriteError)
        with pytest.raises(PropertyWriteError):
            transition.wait(timeout=0)


class TestTransitionTimingErrors:
    """A failing curve or stopwatch is fatal for the transition"""

    def test_failing_curve_retires_transition(self, make_transition, panel, clocks, stopwatch):
        completed = []
        transition = make_transition(FailingCurve(good_ticks=1))
        transition.add(panel, "width", 500)
        transition.add_completed_listener(completed.append)
        transition.go()

        stopwatch.now_ms = 10
        clocks[0].tick()
        assert transition.is_running
        assert panel.width == 300

        clocks[0].tick()

        assert transition.is_completed
        assert clocks[0].stopped
        assert completed == [transition]
        assert panel.writes == [300]
        assert isinstance(transition.error, TimingCurveError)
        assert transition.error.code == "TIMING_FAILED"
        assert isinstance(transition.error.__cause__, ZeroDivisionError)
        with pytest.raises(TimingCurveError):
            transition.wait(timeout=0)

    def test_failing_stopwatch_retires_transition(self, make_transition, panel, clocks, stopwatch):
        transition = make_transition(LinearCurve(100))
        transition.add(panel, "width", 500)
        transition.go()

        stopwatch.elapsed_ms = MagicMock(side_effect=OSError("clock unavailable"))
        clocks[0].tick()

        assert transition.is_completed
        assert isinstance(transition.error.__cause__, OSError)
        assert panel.writes == []
