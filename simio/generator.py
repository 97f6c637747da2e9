# Random meta-data generator
import random
from typing import List, Optional

from core.operation import Operation, OperationKind
from simio.parser import METADATA_FOOTER, METADATA_HEADER

IO_DEVICES = {
    OperationKind.INPUT: ('hard drive', 'keyboard'),
    OperationKind.OUTPUT: ('hard drive', 'monitor', 'printer'),
}
TOKENS_PER_LINE = 6


def generate_program(rng: random.Random, max_operations: int = 8, max_cycles: int = 10) -> List[Operation]:
    ops = [Operation(OperationKind.PROGRAM, 'start', 0)]
    for _ in range(rng.randint(1, max_operations)):
        kind = rng.choice([OperationKind.PROCESSING, OperationKind.INPUT, OperationKind.OUTPUT])
        if kind is OperationKind.PROCESSING:
            description = 'run'
        else:
            description = rng.choice(IO_DEVICES[kind])
        ops.append(Operation(kind, description, rng.randint(1, max_cycles)))
    ops.append(Operation(OperationKind.PROGRAM, 'end', 0))
    return ops


def generate_programs(count: int, rng: Optional[random.Random] = None,
                      max_operations: int = 8, max_cycles: int = 10) -> List[List[Operation]]:
    rng = rng or random.Random()
    return [generate_program(rng, max_operations, max_cycles) for _ in range(count)]


def format_metadata(programs: List[List[Operation]]) -> str:
    tokens = [str(Operation(OperationKind.OS, 'start', 0))]
    for ops in programs:
        tokens.extend(str(op) for op in ops)
    tokens.append(str(Operation(OperationKind.OS, 'end', 0)))

    lines = []
    for i in range(0, len(tokens), TOKENS_PER_LINE):
        chunk = tokens[i:i + TOKENS_PER_LINE]
        last = i + TOKENS_PER_LINE >= len(tokens)
        lines.append('; '.join(chunk) + ('.' if last else ';'))
    return '\n'.join([METADATA_HEADER] + lines + [METADATA_FOOTER]) + '\n'


def write_metadata(path: str, programs: List[List[Operation]]) -> None:
    with open(path, 'w') as fh:
        fh.write(format_metadata(programs))
