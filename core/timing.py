# Maps an operation onto its configured cycle time
from dataclasses import dataclass

from core.errors import UnrecognizedOperation
from core.operation import Operation, OperationKind


@dataclass(frozen=True)
class CycleTimes:
    processor: int
    monitor: int
    hard_drive: int
    printer: int
    keyboard: int

    def for_device(self, device: str) -> int:
        name = normalize_device(device)
        table = {
            'hard drive': self.hard_drive,
            'keyboard': self.keyboard,
            'monitor': self.monitor,
            'printer': self.printer,
        }
        if name not in table:
            raise UnrecognizedOperation(f"Unrecognized device '{device}'")
        return table[name]


def normalize_device(description: str) -> str:
    return description.strip().lower().replace('-', ' ')


def resolve_cycle_time(kind: OperationKind, description: str, cycle_times: CycleTimes) -> int:
    if kind is OperationKind.PROCESSING:
        return cycle_times.processor
    if kind.is_io:
        try:
            return cycle_times.for_device(description)
        except UnrecognizedOperation:
            raise UnrecognizedOperation(
                f"Unrecognized operation {kind.value}({description}), check meta-data file") from None
    if kind in (OperationKind.PROGRAM, OperationKind.OS):
        return 0
    raise UnrecognizedOperation(f"Unrecognized operation type '{kind}'")


def resolve(operation: Operation, cycle_times: CycleTimes) -> Operation:
    """Cache the cycle time on the operation. Done once, when the meta-data is loaded."""
    operation.cycle_time = resolve_cycle_time(operation.kind, operation.description, cycle_times)
    return operation
