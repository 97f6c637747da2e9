# Runs one dispatch step of a program: "executing" an operation means waiting
# on the simulation clock for the operation's duration.
import logging
from concurrent.futures import ThreadPoolExecutor

from core.clock import SimulationContext
from core.errors import UnrecognizedOperation
from core.eventlog import EventLog
from core.operation import Operation, OperationKind
from core.program import Program
from core.timing import normalize_device

logger = logging.getLogger(__name__)


class OperationExecutor:
    def __init__(self, context: SimulationContext, event_log: EventLog):
        self.context = context
        self.log = event_log
        # I/O gets its own execution context but is always joined before we go on
        self._io_pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix='io')

    def dispatch(self, program: Program) -> None:
        pid = program.id
        operation = program.next_operation()

        if operation.is_program_start:
            self.log.record(f"OS: starting process {pid}")
            operation = program.next_operation()

        if operation.is_program_end:
            # program without any work between its brackets
            self.log.record(f"OS: removing process {pid}")
            return

        self.execute(operation, pid)

        # the only thing left must be A(end)
        if program.remaining_operations() == 1 and program.peek_operation().is_program_end:
            program.next_operation()
            self.log.record(f"OS: removing process {pid}")

    def execute(self, operation: Operation, pid: int) -> None:
        if operation.kind is OperationKind.PROCESSING:
            self._process(operation, pid)
        elif operation.kind.is_io:
            logger.debug("process %s: offloading %s to I/O worker", pid, operation)
            future = self._io_pool.submit(self._process_io, operation, pid)
            future.result()
        else:
            raise UnrecognizedOperation(f"Process {pid}: cannot execute operation {operation}")

    def _process(self, operation: Operation, pid: int) -> None:
        self.log.record(f"Process {pid}: start processing action")
        self.context.wait(operation.duration)
        self.log.record(f"Process {pid}: end processing action")

    def _process_io(self, operation: Operation, pid: int) -> None:
        access = 'input' if operation.kind is OperationKind.INPUT else 'output'
        device = normalize_device(operation.description)
        self.log.record(f"Process {pid}: start {device} {access}")
        self.context.wait(operation.duration)
        self.log.record(f"Process {pid}: end {device} {access}")

    def close(self) -> None:
        self._io_pool.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
