from collections import deque
from enum import Enum
from typing import Deque, Iterable, Optional

from core.errors import InvalidStateTransition, MetaDataFormatError
from core.operation import Operation, OperationKind


class ProgramState(Enum):
    START = 'START'
    READY = 'READY'
    RUNNING = 'RUNNING'
    EXIT = 'EXIT'


# RUNNING -> READY only happens when SRTF-N puts a program back in the queue
_TRANSITIONS = {
    ProgramState.START: {ProgramState.READY},
    ProgramState.READY: {ProgramState.RUNNING},
    ProgramState.RUNNING: {ProgramState.READY, ProgramState.EXIT},
    ProgramState.EXIT: set(),
}


class Program:
    def __init__(self, operations: Iterable[Operation], admission: int = 0):
        ops = list(operations)
        if len(ops) < 2 or not ops[0].is_program_start or not ops[-1].is_program_end:
            raise MetaDataFormatError(
                f"Program {admission + 1} must begin with A(start) and end with A(end)")
        if any(op.kind is OperationKind.PROGRAM or op.kind is OperationKind.OS for op in ops[1:-1]):
            raise MetaDataFormatError(
                f"Program {admission + 1} contains a control operation between A(start) and A(end)")
        self.operations: Deque[Operation] = deque(ops)
        self.operation_count = len(ops)
        self.admission = admission
        self.state = ProgramState.START
        self.id: Optional[int] = None
        # estimated burst time, fixed at load time
        self.running_time = sum(op.duration for op in ops if op.kind is not OperationKind.PROGRAM)

    def transition(self, state: ProgramState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise InvalidStateTransition(
                f"Program {self.id or self.admission + 1}: cannot move from "
                f"{self.state.value} to {state.value}")
        self.state = state

    def assign_id(self, pid: int) -> bool:
        """Give the program its id on first dispatch. Returns False if it already had one."""
        if self.id is not None:
            return False
        self.id = pid
        return True

    def next_operation(self) -> Operation:
        return self.operations.popleft()

    def peek_operation(self) -> Optional[Operation]:
        return self.operations[0] if self.operations else None

    def remaining_operations(self) -> int:
        return len(self.operations)

    def done(self) -> bool:
        return not self.operations

    def __repr__(self) -> str:
        return (f"Program(id={self.id}, admission={self.admission}, state={self.state.value}, "
                f"running_time={self.running_time}, remaining={len(self.operations)})")
