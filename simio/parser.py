# Config + meta-data file parser
import logging
import os
import re
from typing import List, Tuple

from core.config import SIMULATOR_VERSION, SimConfig
from core.errors import (ConfigFormatError, ConfigIOError, MetaDataFormatError,
                         MetaDataIOError)
from core.eventlog import LogTarget
from core.operation import Operation, OperationKind
from core.program import Program
from core.scheduler import SCHEDULING_CODES
from core.timing import CycleTimes, resolve

logger = logging.getLogger(__name__)

CONFIG_HEADER = 'Start Simulator Configuration File'
METADATA_HEADER = 'Start Program Meta-Data Code:'
METADATA_FOOTER = 'End Program Meta-Data Code.'

# (key prefix, field name) in the order they must appear
CONFIG_KEYS = [
    ('version/phase', 'version'),
    ('file path', 'metadata_path'),
    ('cpu scheduling code', 'scheduling_code'),
    ('processor quantum number', 'quantum'),
    ('processor cycle time', 'processor'),
    ('monitor display time', 'monitor'),
    ('hard drive cycle time', 'hard_drive'),
    ('printer cycle time', 'printer'),
    ('keyboard cycle time', 'keyboard'),
    ('log file path', 'log_path'),
    ('log', 'log_target'),
]
CONFIG_ORDER = ['version', 'metadata_path', 'scheduling_code', 'quantum', 'processor',
                'monitor', 'hard_drive', 'printer', 'keyboard', 'log_target', 'log_path']

TOKEN_RE = re.compile(r'^([A-Za-z])\(([^()]*)\)\s*(\d+)$')


def _read(path: str, io_error) -> str:
    try:
        with open(path, 'r') as fh:
            return fh.read()
    except OSError as exc:
        raise io_error(f"Unable to open file {path}: {exc.strerror}") from exc


def _config_field(key: str) -> str:
    key = key.strip().lower()
    # 'log file path' has to be tried before 'log'
    for prefix, name in CONFIG_KEYS:
        if key.startswith(prefix):
            return name
    raise ConfigFormatError(f"Unknown configuration key '{key}'")


def _non_negative_int(name: str, value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise ConfigFormatError(f"Expected an integer for {name}, got '{value}'") from None
    if number < 0:
        raise ConfigFormatError(f"{name} must not be negative, got {number}")
    return number


def _resolve_path(base_dir: str, path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(base_dir, path)


def parse_config(path: str) -> SimConfig:
    text = _read(path, ConfigIOError)
    config = parse_config_text(text, base_dir=os.path.dirname(os.path.abspath(path)))
    logger.debug("loaded config %s: %s", path, config)
    return config


def parse_config_text(text: str, base_dir: str = '.') -> SimConfig:
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    if not lines or lines[0] != CONFIG_HEADER:
        raise ConfigFormatError("Incorrect config file format: missing header line")
    if len(lines) < 2 or lines[-1].split()[0] != 'End':
        raise ConfigFormatError("Incorrect config file format: missing End line")

    body = lines[1:-1]
    if len(body) != len(CONFIG_ORDER):
        raise ConfigFormatError(
            f"Incorrect config file format: expected {len(CONFIG_ORDER)} settings, found {len(body)}")

    values = {}
    for expected, line in zip(CONFIG_ORDER, body):
        if ':' not in line:
            raise ConfigFormatError(f"Incorrect config file format: no ':' in '{line}'")
        key, value = line.split(':', 1)
        name = _config_field(key)
        if name != expected:
            raise ConfigFormatError(
                f"Incorrect config file format: expected {expected} but found '{key.strip()}'")
        values[name] = value.strip()

    try:
        version = float(values['version'])
    except ValueError:
        raise ConfigFormatError(f"Invalid simulator version '{values['version']}'") from None
    if version != SIMULATOR_VERSION:
        raise ConfigFormatError(
            f"Wrong simulator version: expected {SIMULATOR_VERSION}, got {version}")

    code = values['scheduling_code']
    if code not in SCHEDULING_CODES:
        raise ConfigFormatError(f"Unrecognized scheduling code '{code}'")

    if not values['metadata_path']:
        raise ConfigFormatError("Missing meta-data file path")

    cycle_times = CycleTimes(*(
        _non_negative_int(name, values[name])
        for name in ('processor', 'monitor', 'hard_drive', 'printer', 'keyboard')))

    log_target = LogTarget.from_config(values['log_target'])
    log_path = values['log_path'] or None
    if log_target is not LogTarget.SCREEN and log_path is None:
        raise ConfigFormatError("A log file path is required when logging to a file")

    return SimConfig(
        version=version,
        metadata_path=_resolve_path(base_dir, values['metadata_path']),
        scheduling_code=code,
        quantum=_non_negative_int('quantum', values['quantum']),
        cycle_times=cycle_times,
        log_target=log_target,
        log_path=_resolve_path(base_dir, log_path) if log_path else None,
    )


def parse_token(token: str) -> Operation:
    m = TOKEN_RE.match(token.strip())
    if not m:
        raise MetaDataFormatError(f"Malformed operation '{token.strip()}'")
    code, description, cycles = m.groups()
    return Operation(OperationKind.from_code(code), description.strip(), int(cycles))


def _split_tokens(body: str) -> Tuple[List[str], str]:
    """Split the token stream; the final token is terminated by '.' rather than ';'."""
    body = body.strip()
    if not body.endswith('.'):
        raise MetaDataFormatError("Incorrect meta-data file format: S(end)0. is missing")
    tokens = [t.strip() for t in body[:-1].split(';')]
    if any(not t for t in tokens):
        raise MetaDataFormatError("Incorrect meta-data file format: empty operation")
    return tokens[:-1], tokens[-1]


def parse_metadata(path: str, cycle_times: CycleTimes) -> List[Program]:
    text = _read(path, MetaDataIOError)
    programs = parse_metadata_text(text, cycle_times)
    logger.debug("loaded %d programs from %s", len(programs), path)
    return programs


def parse_metadata_text(text: str, cycle_times: CycleTimes) -> List[Program]:
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    if not lines or lines[0] != METADATA_HEADER:
        raise MetaDataFormatError("Incorrect meta-data file format: header line is missing")
    if len(lines) < 2 or lines[-1] != METADATA_FOOTER:
        raise MetaDataFormatError(
            "Incorrect meta-data file format: meta-data file does not end after simulator operations end")

    tokens, last = _split_tokens(' '.join(lines[1:-1]))
    if not tokens or parse_token(tokens[0]) != Operation(OperationKind.OS, 'start', 0):
        raise MetaDataFormatError("Incorrect meta-data file format: simulator start flag is missing")
    if parse_token(last) != Operation(OperationKind.OS, 'end', 0):
        raise MetaDataFormatError("Incorrect meta-data file format: simulator end flag is missing")

    programs: List[Program] = []
    current: List[Operation] = []
    in_program = False
    for token in tokens[1:]:
        operation = parse_token(token)
        if operation.kind is OperationKind.OS:
            raise MetaDataFormatError(f"Unexpected OS operation '{token}' inside the meta-data body")
        if operation.is_program_start:
            if in_program:
                raise MetaDataFormatError(f"Program {len(programs) + 1} starts before the previous one ended")
            in_program = True
        elif not in_program:
            raise MetaDataFormatError(f"Operation '{token}' is outside of any program")
        current.append(resolve(operation, cycle_times))
        if operation.is_program_end:
            programs.append(Program(current, admission=len(programs)))
            current = []
            in_program = False
    if in_program:
        raise MetaDataFormatError(f"Program {len(programs) + 1} is missing A(end)0")
    return programs


def load_simulation(config_path: str) -> Tuple[SimConfig, List[Program]]:
    """Read the config file and the meta-data it points at, before anything is scheduled."""
    config = parse_config(config_path)
    programs = parse_metadata(config.metadata_path, config.cycle_times)
    return config, programs
