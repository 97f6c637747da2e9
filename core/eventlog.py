# Timestamped event trace written to the screen, a file, or both
import logging
import sys
import threading
from enum import Enum
from typing import List, Optional, TextIO

from core.clock import SimulationContext
from core.errors import ConfigFormatError, ConfigIOError

logger = logging.getLogger(__name__)


class LogTarget(Enum):
    SCREEN = 'screen'
    FILE = 'file'
    BOTH = 'both'

    @classmethod
    def from_config(cls, text: str) -> 'LogTarget':
        text = text.strip()
        if text == 'Log to Both':
            return cls.BOTH
        if text == 'Log to File':
            return cls.FILE
        return cls.SCREEN


class EventLog:
    def __init__(self, context: SimulationContext, sinks: Optional[List[TextIO]] = None):
        self.context = context
        self.sinks: List[TextIO] = list(sinks) if sinks is not None else [sys.stdout]
        self.history: List[str] = []
        self._owned: List[TextIO] = []
        self._lock = threading.Lock()

    @classmethod
    def open(cls, context: SimulationContext, target: LogTarget, path: Optional[str] = None,
             screen: Optional[TextIO] = None) -> 'EventLog':
        sinks: List[TextIO] = []
        owned: List[TextIO] = []
        if target in (LogTarget.SCREEN, LogTarget.BOTH):
            sinks.append(screen if screen is not None else sys.stdout)
        if target in (LogTarget.FILE, LogTarget.BOTH):
            if not path:
                raise ConfigFormatError("A log file path is required when logging to a file")
            logger.debug("opening log file %s", path)
            try:
                fh = open(path, 'w')
            except OSError as exc:
                raise ConfigIOError(f"Unable to open log file {path}: {exc.strerror}") from exc
            sinks.append(fh)
            owned.append(fh)
        log = cls(context, sinks)
        log._owned = owned
        return log

    def record(self, message: str) -> str:
        with self._lock:
            line = f"{self.context.elapsed():.6f} - {message}"
            for sink in self.sinks:
                sink.write(line + '\n')
                sink.flush()
            self.history.append(line)
        return line

    def messages(self) -> List[str]:
        """History without the elapsed-time prefix."""
        return [line.split(' - ', 1)[1] for line in self.history]

    def close(self) -> None:
        for fh in self._owned:
            fh.close()
        self._owned = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
