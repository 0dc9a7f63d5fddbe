"""
Transition

Animates properties of arbitrary objects from their current values to
destination values. One Transition can change several properties across
several targets at once; every binding receives the same progress value on
each tick.

Example:
    transition = Transition(LinearCurve(500))
    transition.add(panel, "width", 500)
    transition.add(panel, "background", Color.red())
    transition.go()

The timing curve decides how progress evolves (linear, ease-in-out, ...).
Each property's type decides how values are interpolated (see the
interpolation package).
"""

import asyncio
import threading
from typing import Any, Callable, List, Optional, Tuple

from dispatch.guard import DispatchGuard
from engine.clock import PeriodicClock, Stopwatch
from interpolation import InterpolatorRegistry, get_registry
from models.binding import PropertyBinding
from models.enums import LogLevel, TransitionState
from models.errors import (
    InvalidStateError,
    NoSuchPropertyError,
    PropertyWriteError,
    TimingCurveError,
    TransitionError,
)
from models.settings import get_settings
from properties.accessor import AccessorResolver, AttributeAccessorResolver, PropertyAccessor
from timing.base import TimingCurve
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TRANSITION)

ClockFactory = Callable[[float, Callable[[], None]], PeriodicClock]
TickListener = Callable[[float, bool], None]
CompletedListener = Callable[['Transition'], None]


class Transition:
    """
    Single-use transition controller

    Lifecycle: IDLE (add bindings) → RUNNING (go) → COMPLETED.
    Completion happens when the timing curve reports it, on stop(), or when
    a property write or the timing curve fails. A completed transition cannot be restarted.

    Each tick runs on the clock thread:
    1. tick delivery is disabled
    2. elapsed time is read from the stopwatch
    3. the timing curve turns it into (progress, completed)
    4. every binding, in insertion order, is interpolated and written
       through the DispatchGuard
    5. on completion the transition retires (clock stopped, curve and
       bindings released), otherwise tick delivery is re-enabled
    """

    def __init__(
        self,
        timing_curve: TimingCurve,
        tick_interval_ms: Optional[float] = None,
        registry: Optional[InterpolatorRegistry] = None,
        accessor_resolver: Optional[AccessorResolver] = None,
        dispatch_guard: Optional[DispatchGuard] = None,
        clock_factory: Optional[ClockFactory] = None,
        stopwatch: Optional[Stopwatch] = None
    ):
        """
        Args:
            timing_curve: Curve driving this transition (fixed for its lifetime)
            tick_interval_ms: Clock period (default: EngineSettings.tick_interval_ms)
            registry: Interpolator registry (default: process-wide registry)
            accessor_resolver: Property resolver (default: Python attributes)
            dispatch_guard: Write policy (default: event-loop aware guard)
            clock_factory: Builds the clock from (interval_ms, callback)
            stopwatch: Elapsed time source
        """
        self._timing_curve: Optional[TimingCurve] = timing_curve
        self.tick_interval_ms = tick_interval_ms or get_settings().tick_interval_ms

        self._registry = registry or get_registry()
        self._resolver = accessor_resolver or AttributeAccessorResolver()
        self._dispatch_guard = dispatch_guard or DispatchGuard()
        self._clock_factory = clock_factory or PeriodicClock
        self._stopwatch = stopwatch or Stopwatch()

        self._bindings: List[PropertyBinding] = []
        self._state = TransitionState.IDLE
        self._clock: Optional[PeriodicClock] = None

        self._state_lock = threading.RLock()
        self._tick_lock = threading.Lock()
        self._completed_event = threading.Event()

        self._tick_listeners: List[TickListener] = []
        self._completed_listeners: List[CompletedListener] = []

        self.tick_count = 0
        self.last_progress: Optional[float] = None
        self.error: Optional[TransitionError] = None

    # ============================================================
    # Public API
    # ============================================================

    @classmethod
    def run(
        cls,
        target: Any,
        property_name: str,
        destination_value: Any,
        timing_curve: TimingCurve,
        **kwargs
    ) -> 'Transition':
        """
        Transition one property with one call

        Example:
            Transition.run(panel, "opacity", 0.0, DecelerationCurve(250))
        """
        transition = cls(timing_curve, **kwargs)
        transition.add(target, property_name, destination_value)
        transition.go()
        return transition

    def add(self, target: Any, property_name: str, destination_value: Any) -> PropertyBinding:
        """
        Add a property to animate as part of this transition

        The property's current value is copied as the start value.

        Checks run in this order and the first failure is raised: existence,
        then read/write access (the resolver), then the value type. A
        property that is both read-only and of an unsupported type therefore
        reports NotAccessibleError; a write-only property has no readable
        value whose type could be checked.

        Raises:
            NoSuchPropertyError: target has no such property
            NotAccessibleError: property is not both readable and writable
            UnsupportedTypeError: no interpolator for the property's value type
            InvalidStateError: the transition has already been started
        """
        with self._state_lock:
            if self._state is not TransitionState.IDLE:
                raise InvalidStateError("add bindings to", self._state.name)

            accessor = self._resolver.resolve(target, property_name)
            try:
                current_value = accessor.get(target)
            except AttributeError:
                # e.g. an unset __slots__ member
                raise NoSuchPropertyError(target, property_name) from None

            interpolator = self._registry.lookup(type(current_value))

            binding = PropertyBinding(
                target=target,
                accessor=accessor,
                start_value=interpolator.copy(current_value),
                end_value=destination_value,
                interpolator=interpolator,
            )
            self._bindings.append(binding)

        log.debug(
            "Binding added",
            target=type(target).__name__,
            property=property_name,
            start=binding.start_value,
            end=destination_value
        )
        return binding

    def go(self) -> None:
        """
        Start the transition

        Raises:
            InvalidStateError: the transition is already running or completed
        """
        with self._state_lock:
            if self._state is not TransitionState.IDLE:
                raise InvalidStateError("start", self._state.name)

            self._state = TransitionState.RUNNING
            self._clock = self._clock_factory(self.tick_interval_ms, self._on_tick)
            self._stopwatch.start()
            self._clock.start()

        log.info(
            "Transition started",
            bindings=len(self._bindings),
            curve=repr(self._timing_curve),
            interval_ms=self.tick_interval_ms
        )

    def stop(self) -> None:
        """
        Stop the transition without applying further ticks

        Properties keep whatever value the last tick wrote. A tick already
        running on the clock thread writes no further bindings once stop()
        has returned, although a write in progress at that moment completes.
        Idempotent; safe to call from tick and completion listeners.
        """
        if self._retire():
            log.info("Transition stopped", ticks=self.tick_count, progress=self.last_progress)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the transition is completed

        Do not call this on an event loop that owns animated targets: the
        loop would never run the marshaled writes. Use wait_completed().

        Returns:
            True if completed, False on timeout

        Raises:
            PropertyWriteError: the transition was retired by a failed write
            TimingCurveError: the transition was retired by a failing curve
        """
        finished = self._completed_event.wait(timeout)
        if finished and self.error is not None:
            raise self.error
        return finished

    async def wait_completed(self, timeout: Optional[float] = None) -> bool:
        """Awaitable wait() that keeps the calling event loop responsive"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.wait, timeout)

    def add_tick_listener(self, listener: TickListener) -> None:
        """Call listener(progress, completed) after each tick's writes are dispatched"""
        self._tick_listeners.append(listener)

    def add_completed_listener(self, listener: CompletedListener) -> None:
        """Call listener(transition) once when the transition retires"""
        self._completed_listeners.append(listener)

    @property
    def state(self) -> TransitionState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is TransitionState.RUNNING

    @property
    def is_completed(self) -> bool:
        return self._state is TransitionState.COMPLETED

    @property
    def bindings(self) -> Tuple[PropertyBinding, ...]:
        return tuple(self._bindings)

    @property
    def timing_curve(self) -> Optional[TimingCurve]:
        return self._timing_curve

    # ============================================================
    # Tick handling
    # ============================================================

    def _on_tick(self) -> None:
        """Clock callback. Overlapping calls are dropped."""
        if not self._tick_lock.acquire(blocking=False):
            return

        try:
            clock = self._clock
            curve = self._timing_curve
            if clock is None or curve is None or self._state is not TransitionState.RUNNING:
                return

            clock.enabled = False

            try:
                elapsed_ms = self._stopwatch.elapsed_ms()
                progress, completed = curve.on_tick(elapsed_ms)
            except Exception as ex:
                self._fail_timing(curve, ex)
                return

            self.tick_count += 1
            self.last_progress = progress

            for binding in self._bindings:
                # stop() from another thread ends the tick before the next write
                if self._state is not TransitionState.RUNNING:
                    return
                try:
                    value = binding.value_at(progress)
                    self._dispatch_guard.apply(
                        binding.target,
                        binding.accessor,
                        value,
                        on_error=self._on_marshaled_write_error
                    )
                except Exception as ex:
                    self._fail(binding.target, binding.property_name, ex)
                    return

            if log.is_enabled_for(LogLevel.DEBUG):
                log.debug("Tick", elapsed_ms=round(elapsed_ms, 2), progress=round(progress, 4), completed=completed)

            # stop() or a failed marshaled write may have retired us mid-tick
            if self._state is not TransitionState.RUNNING:
                return

            self._notify(self._tick_listeners, progress, completed)

            if completed:
                if self._retire():
                    log.info("Transition completed", ticks=self.tick_count, elapsed_ms=round(elapsed_ms, 2))
            else:
                clock.enabled = True
        finally:
            self._tick_lock.release()

    def _on_marshaled_write_error(self, target: Any, accessor: PropertyAccessor, error: BaseException) -> None:
        self._fail(target, accessor.name, error)

    def _record_error(self, error: TransitionError, cause: BaseException) -> bool:
        """
        Keep the first fatal error, chained to its cause

        Returns:
            True if the transition had already completed
        """
        with self._state_lock:
            if self.error is None:
                error.__cause__ = cause
                self.error = error
            return self._state is TransitionState.COMPLETED

    def _fail_timing(self, curve: TimingCurve, error: BaseException) -> None:
        """The curve or the stopwatch raised: no progress can be computed"""
        self._record_error(TimingCurveError(curve, error), error)
        log.error(
            "Timing curve failed, stopping transition",
            curve=repr(curve),
            error=str(error),
            error_type=type(error).__name__
        )
        self._retire()

    def _fail(self, target: Any, property_name: str, error: BaseException) -> None:
        """A write failed: the transition cannot continue safely"""
        already_completed = self._record_error(PropertyWriteError(target, property_name, error), error)

        if already_completed:
            # A marshaled write from the final tick landed after retirement
            log.error(
                "Property write failed after transition completed",
                target=type(target).__name__,
                property=property_name,
                error=str(error)
            )
            return

        log.error(
            "Property write failed, stopping transition",
            target=type(target).__name__,
            property=property_name,
            error=str(error),
            error_type=type(error).__name__
        )
        self._retire()

    def _retire(self) -> bool:
        """
        Move to COMPLETED, stop the clock and release the curve and bindings

        Returns:
            False if the transition was already completed
        """
        with self._state_lock:
            if self._state is TransitionState.COMPLETED:
                return False

            self._state = TransitionState.COMPLETED
            clock = self._clock
            self._clock = None
            self._timing_curve = None
            self._bindings = []

        if clock is not None:
            clock.stop()

        self._completed_event.set()
        self._notify(self._completed_listeners, self)
        self._tick_listeners = []
        self._completed_listeners = []
        return True

    def _notify(self, listeners: list, *args) -> None:
        """Call listeners; one failing listener doesn't stop the others"""
        for listener in list(listeners):
            try:
                listener(*args)
            except Exception as ex:
                log.error(
                    "Transition listener failed",
                    listener=getattr(listener, "__name__", repr(listener)),
                    error=str(ex)
                )

    def __repr__(self) -> str:
        return f"Transition({self._state.name}, bindings={len(self._bindings)}, curve={self._timing_curve!r})"
