import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dispatch import DispatchGuard, NoAffinity
from engine.transition import Transition
from models.color import Color
from models.enums import LogLevel
from utils.logger import configure_logger

# Keep test output readable: only warnings and errors from the engine
configure_logger(min_level=LogLevel.WARN, use_colors=False)


class Panel:
    """Widget-like target with the usual mix of property kinds"""

    def __init__(self, width=100, opacity=1.0, title="hello", background=None):
        self._width = width
        self.opacity = opacity
        self.title = title
        self.background = background or Color.black()
        self.position = (0, 0)
        self.visible = True
        self.writes = []

    @property
    def width(self):
        return self._width

    @width.setter
    def width(self, value):
        self._width = value
        self.writes.append(value)

    @property
    def area(self):
        return self._width * 10

    def resize(self, width):
        self.width = width


class ManualClock:
    """Clock that only ticks when the test calls tick()"""

    def __init__(self, interval_ms, callback):
        self.interval_ms = interval_ms
        self.callback = callback
        self.enabled = False
        self.started = False
        self.stopped = False

    def start(self):
        self.started = True
        self.enabled = True

    def stop(self):
        self.stopped = True
        self.enabled = False

    def join(self, timeout=None):
        pass

    def tick(self) -> bool:
        """Deliver one tick; False if the clock would not deliver it"""
        if self.stopped or not self.enabled:
            return False
        self.callback()
        return True


class FakeStopwatch:
    """Stopwatch whose elapsed time is set by the test"""

    def __init__(self):
        self.now_ms = 0.0
        self.started = False

    def start(self):
        self.started = True

    @property
    def is_running(self):
        return self.started

    def elapsed_ms(self):
        return self.now_ms


@pytest.fixture
def make_panel():
    return Panel


@pytest.fixture
def panel():
    return Panel()


@pytest.fixture
def clocks():
    """Clocks created by clock_factory, in creation order"""
    return []


@pytest.fixture
def clock_factory(clocks):
    def factory(interval_ms, callback):
        clock = ManualClock(interval_ms, callback)
        clocks.append(clock)
        return clock
    return factory


@pytest.fixture
def stopwatch():
    return FakeStopwatch()


@pytest.fixture
def make_transition(clock_factory, stopwatch):
    """Transition driven by a ManualClock and FakeStopwatch, writing in place"""
    def make(curve, **kwargs):
        kwargs.setdefault("dispatch_guard", DispatchGuard(NoAffinity()))
        return Transition(curve, clock_factory=clock_factory, stopwatch=stopwatch, **kwargs)
    return make
