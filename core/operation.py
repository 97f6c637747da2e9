from dataclasses import dataclass
from enum import Enum

from core.errors import UnrecognizedOperation


class OperationKind(Enum):
    OS = 'S'
    PROGRAM = 'A'
    PROCESSING = 'P'
    INPUT = 'I'
    OUTPUT = 'O'

    @classmethod
    def from_code(cls, code: str) -> 'OperationKind':
        try:
            return cls(code)
        except ValueError:
            raise UnrecognizedOperation(f"Unrecognized operation type '{code}'") from None

    @property
    def is_io(self) -> bool:
        return self in (OperationKind.INPUT, OperationKind.OUTPUT)


@dataclass
class Operation:
    kind: OperationKind
    description: str   # start/end/run or a device name
    cycles: int
    cycle_time: int = 0   # msec per cycle, resolved at load time

    @property
    def duration(self) -> int:
        return self.cycles * self.cycle_time

    @property
    def is_program_start(self) -> bool:
        return self.kind is OperationKind.PROGRAM and self.description == 'start'

    @property
    def is_program_end(self) -> bool:
        return self.kind is OperationKind.PROGRAM and self.description == 'end'

    def __str__(self):
        return f"{self.kind.value}({self.description}){self.cycles}"
