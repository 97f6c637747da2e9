# Scheduler classes
import heapq
import itertools
import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from core.errors import ConfigFormatError, InvalidStateTransition
from core.program import Program

logger = logging.getLogger(__name__)

SCHEDULING_CODES = ('FIFO', 'SJF', 'SRTF-N')


class Scheduler:
    # True: a dispatched program runs until it exits
    run_to_completion = True

    def enqueue_ready(self, program: Program):
        raise NotImplementedError

    def requeue(self, program: Program):
        self.enqueue_ready(program)

    def has_ready(self) -> bool:
        raise NotImplementedError

    def pick_next(self) -> Optional[Program]:
        raise NotImplementedError


class FIFOScheduler(Scheduler):
    run_to_completion = True

    def __init__(self):
        self.ready_queue: Deque[Program] = deque()

    def enqueue_ready(self, program: Program):
        self.ready_queue.append(program)

    def has_ready(self) -> bool:
        return bool(self.ready_queue)

    def pick_next(self) -> Optional[Program]:
        if self.ready_queue:
            return self.ready_queue.popleft()
        return None


class SRTFScheduler(Scheduler):
    """Non-preemptive shortest remaining time: one operation per dispatch.

    The ranking key is taken from the program's running time when it is first
    admitted and reused on every requeue, so ties keep admission order and a
    requeued program never loses its place.
    """
    run_to_completion = False

    def __init__(self):
        self.ready_queue: List[Tuple[int, int, Program]] = []
        self._keys: Dict[int, Tuple[int, int]] = {}
        self._sequence = itertools.count()

    def enqueue_ready(self, program: Program):
        entry = self._keys.get(id(program))
        if entry is None:
            entry = (program.running_time, next(self._sequence))
            self._keys[id(program)] = entry
            logger.debug("admitted %r with key %s", program, entry)
        heapq.heappush(self.ready_queue, (entry[0], entry[1], program))

    def requeue(self, program: Program):
        if id(program) not in self._keys:
            raise InvalidStateTransition(f"{program!r} was never admitted")
        self.enqueue_ready(program)

    def has_ready(self) -> bool:
        return bool(self.ready_queue)

    def pick_next(self) -> Optional[Program]:
        if not self.ready_queue:
            return None
        _, _, program = heapq.heappop(self.ready_queue)
        return program


def make_scheduler(code: str) -> Scheduler:
    if code == 'FIFO':
        return FIFOScheduler()
    if code in ('SJF', 'SRTF-N'):
        return SRTFScheduler()
    raise ConfigFormatError(f"Unrecognized scheduling code '{code}'")
