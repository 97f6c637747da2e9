import pytest

from core.timing import CycleTimes

CONFIG_TEMPLATE = """Start Simulator Configuration File
Version/Phase: {version}
File Path: {metadata}
CPU Scheduling Code: {code}
Processor Quantum Number: 3
Processor cycle time (msec): {processor}
Monitor display time (msec): {monitor}
Hard drive cycle time (msec): {hard_drive}
Printer cycle time (msec): {printer}
Keyboard cycle time (msec): {keyboard}
Log: {log}
Log File Path: {log_path}
{end}
"""


def metadata_text(*programs):
    tokens = ['S(start)0']
    for ops in programs:
        tokens.append('A(start)0')
        tokens.extend(ops)
        tokens.append('A(end)0')
    tokens.append('S(end)0')
    return "Start Program Meta-Data Code:\n" + '; '.join(tokens) + ".\nEnd Program Meta-Data Code.\n"


def config_text(**overrides):
    values = dict(version='3.0', metadata='test.mdf', code='FIFO', processor=10, monitor=20,
                  hard_drive=5, printer=25, keyboard=50, log='Log to Monitor',
                  log_path='test.lgf', end='End Simulator Configuration File')
    values.update(overrides)
    return CONFIG_TEMPLATE.format(**values)


@pytest.fixture
def cycle_times():
    return CycleTimes(processor=10, monitor=20, hard_drive=5, printer=25, keyboard=50)


@pytest.fixture
def write_config(tmp_path):
    """Write a config file (and optionally its meta-data file) and return the config path."""
    def _write(programs=None, metadata=None, **overrides):
        mdf = tmp_path / 'test.mdf'
        if metadata is not None:
            mdf.write_text(metadata)
        elif programs is not None:
            mdf.write_text(metadata_text(*programs))
        cnf = tmp_path / 'test.conf'
        cnf.write_text(config_text(**overrides))
        return str(cnf)
    return _write
