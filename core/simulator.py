import logging
from dataclasses import dataclass
from typing import List, Optional, TextIO

from core.clock import SimulationContext
from core.config import SimConfig
from core.eventlog import EventLog
from core.executor import OperationExecutor
from core.program import Program, ProgramState
from core.scheduler import Scheduler, make_scheduler
from simio.parser import load_simulation

logger = logging.getLogger(__name__)


@dataclass
class ProgramRecord:
    id: int
    admission: int
    operations: int
    running_time: int   # msec, the scheduling estimate
    started: float      # elapsed seconds at first dispatch
    finished: Optional[float] = None
    dispatches: int = 0


class Simulator:
    def __init__(self, config: SimConfig, programs: List[Program], clock=None,
                 sinks: Optional[List[TextIO]] = None):
        self.config = config
        self.programs = programs
        self.context = SimulationContext(clock)
        self.scheduler: Scheduler = make_scheduler(config.scheduling_code)
        self.sinks = sinks
        self.records: List[ProgramRecord] = []
        self.event_log: Optional[EventLog] = None

    @classmethod
    def from_config_file(cls, path: str, clock=None, sinks: Optional[List[TextIO]] = None) -> 'Simulator':
        """Load the config, then its meta-data, before anything is scheduled."""
        config, programs = load_simulation(path)
        return cls(config, programs, clock=clock, sinks=sinks)

    def _open_log(self) -> EventLog:
        if self.sinks is not None:
            return EventLog(self.context, self.sinks)
        return EventLog.open(self.context, self.config.log_target, self.config.log_path)

    def run(self) -> List[str]:
        """Run every program to completion. Returns the event trace."""
        with self._open_log() as log, OperationExecutor(self.context, log) as executor:
            self.event_log = log
            self.context.begin()
            log.record("Simulator program starting")

            log.record("OS: preparing all processes")
            for program in self.programs:
                program.transition(ProgramState.READY)
                self.scheduler.enqueue_ready(program)

            by_program = {}
            next_pid = 0
            while self.scheduler.has_ready():
                log.record("OS: selecting next process")
                program = self.scheduler.pick_next()
                if program.assign_id(next_pid + 1):
                    next_pid += 1
                    record = ProgramRecord(program.id, program.admission, program.operation_count,
                                           program.running_time, started=self.context.elapsed())
                    by_program[id(program)] = record
                    self.records.append(record)
                record = by_program[id(program)]
                logger.debug("dispatching %r", program)

                program.transition(ProgramState.RUNNING)
                record.dispatches += 1
                if self.scheduler.run_to_completion:
                    while not program.done():
                        executor.dispatch(program)
                else:
                    executor.dispatch(program)

                if program.done():
                    program.transition(ProgramState.EXIT)
                    record.finished = self.context.elapsed()
                else:
                    program.transition(ProgramState.READY)
                    self.scheduler.requeue(program)

            log.record("Simulator program ending")
        return list(log.history)
