"""
program_generator.py

Writes a random but well-formed meta-data file for the simulator.

Usage:
python program_generator.py output.mdf -n 5 --seed 42
"""

import argparse
import random

from simio.generator import generate_programs, write_metadata


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Generate a random simulator meta-data file')
    parser.add_argument('output', help='Path of the meta-data file to write')
    parser.add_argument('-n', '--programs', type=int, default=5, help='Number of programs')
    parser.add_argument('--max-operations', type=int, default=8, help='Most operations per program')
    parser.add_argument('--max-cycles', type=int, default=10, help='Most cycles per operation')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for repeatable output')
    args = parser.parse_args()
    if args.programs < 0:
        parser.error("--programs must not be negative")
    if args.max_operations < 1:
        parser.error("--max-operations must be at least 1")
    if args.max_cycles < 1:
        parser.error("--max-cycles must be at least 1")

    programs = generate_programs(args.programs, random.Random(args.seed),
                                 max_operations=args.max_operations, max_cycles=args.max_cycles)
    write_metadata(args.output, programs)
    print(f"wrote {len(programs)} programs to {args.output}")
