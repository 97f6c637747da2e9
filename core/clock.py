# Clocks and the per-run simulation context
import threading
import time
from typing import Optional


class RealClock:
    """Wall clock. Advancing it really sleeps."""

    def now(self) -> float:
        return time.monotonic()

    def advance(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


class VirtualClock:
    """Clock that only moves when advanced; used to run simulations instantly."""

    def __init__(self, start: float = 0.0):
        self._now = start
        self._lock = threading.Lock()

    def now(self) -> float:
        with self._lock:
            return self._now

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"cannot advance clock by {seconds}")
        with self._lock:
            self._now += seconds


class SimulationContext:
    def __init__(self, clock=None):
        self.clock = clock if clock is not None else RealClock()
        self.start: Optional[float] = None

    def begin(self) -> None:
        self.start = self.clock.now()

    def elapsed(self) -> float:
        if self.start is None:
            return 0.0
        return self.clock.now() - self.start

    def wait(self, milliseconds: int) -> None:
        # cycle times are configured in msec
        self.clock.advance(milliseconds / 1000.0)

    def __repr__(self):
        return f"SimulationContext(clock={type(self.clock).__name__}, start={self.start})"
