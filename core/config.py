from dataclasses import dataclass
from typing import Optional

from core.eventlog import LogTarget
from core.timing import CycleTimes

SIMULATOR_VERSION = 3.0


@dataclass
class SimConfig:
    version: float
    metadata_path: str
    scheduling_code: str
    quantum: int   # read but not used by FIFO or SRTF-N
    cycle_times: CycleTimes
    log_target: LogTarget = LogTarget.SCREEN
    log_path: Optional[str] = None
