"""
ossim.py


Operating system simulator: runs one batch of programs under FIFO or
non-preemptive shortest-remaining-time scheduling and prints a timestamped
trace of OS and process events.


Operation "execution" is modelled by waiting for cycles * cycle time
milliseconds; I/O operations wait on a separate worker thread that the
scheduler joins before making its next decision.


Usage:
python ossim.py config.conf [-v] [--summary]
"""


import argparse
import logging
import sys

from tabulate import tabulate

from core.errors import SimulatorError
from core.simulator import Simulator


def print_summary(simulator: Simulator) -> None:
    rows = [
        (r.id, r.operations, r.running_time, r.dispatches, f"{r.started:.6f}", f"{r.finished:.6f}")
        for r in simulator.records
    ]
    headers = ['Process', 'Operations', 'Running time (ms)', 'Dispatches', 'Started', 'Finished']
    print(tabulate(rows, headers=headers, tablefmt='simple', disable_numparse=True))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='ossim (operating system simulator)')
    parser.add_argument('config', help='Path to configuration file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging on stderr')
    parser.add_argument('--summary', action='store_true', help='Print a per-process table after the run')
    args = parser.parse_args(argv)

    logging.basicConfig(format='%(levelname)s: %(message)s',
                        level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        simulator = Simulator.from_config_file(args.config)
        simulator.run()
    except SimulatorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.summary:
        print_summary(simulator)
    return 0


# ------------------------------- CLI ---------------------------------
if __name__ == '__main__':
    sys.exit(main())
