import os

import pytest

from conftest import config_text, metadata_text
from core.errors import (ConfigFormatError, ConfigIOError, MetaDataFormatError,
                         MetaDataIOError, UnrecognizedOperation)
from core.eventlog import LogTarget
from core.operation import OperationKind
from simio.parser import (load_simulation, parse_config, parse_config_text,
                          parse_metadata_text, parse_token)


def test_parse_config(write_config, tmp_path):
    config = parse_config(write_config(code='SRTF-N', log='Log to Both'))
    assert config.version == 3.0
    assert config.scheduling_code == 'SRTF-N'
    assert config.quantum == 3
    assert config.cycle_times.processor == 10
    assert config.cycle_times.monitor == 20
    assert config.cycle_times.hard_drive == 5
    assert config.cycle_times.printer == 25
    assert config.cycle_times.keyboard == 50
    assert config.log_target is LogTarget.BOTH
    assert config.metadata_path == os.path.join(str(tmp_path), 'test.mdf')
    assert config.log_path == os.path.join(str(tmp_path), 'test.lgf')


@pytest.mark.parametrize('log,target', [
    ('Log to Both', LogTarget.BOTH),
    ('Log to File', LogTarget.FILE),
    ('Log to Monitor', LogTarget.SCREEN),
])
def test_log_target(log, target):
    assert parse_config_text(config_text(log=log)).log_target is target


@pytest.mark.parametrize('overrides', [
    {'end': ''},
    {'end': 'Finish'},
    {'version': '2.0'},
    {'version': 'three'},
    {'code': 'RR'},
    {'processor': 'fast'},
    {'keyboard': '-5'},
])
def test_config_format_errors(overrides):
    with pytest.raises(ConfigFormatError):
        parse_config_text(config_text(**overrides))


def test_config_missing_header():
    text = config_text().replace('Start Simulator Configuration File', 'Simulator Configuration')
    with pytest.raises(ConfigFormatError):
        parse_config_text(text)


def test_config_settings_out_of_order():
    lines = config_text().splitlines()
    lines[5], lines[6] = lines[6], lines[5]
    with pytest.raises(ConfigFormatError):
        parse_config_text('\n'.join(lines))


def test_config_missing_file(tmp_path):
    with pytest.raises(ConfigIOError):
        parse_config(str(tmp_path / 'nope.conf'))


def test_missing_metadata_file(write_config):
    with pytest.raises(MetaDataIOError):
        load_simulation(write_config())


def test_parse_token():
    op = parse_token(' I(hard drive)2 ')
    assert op.kind is OperationKind.INPUT
    assert op.description == 'hard drive'
    assert op.cycles == 2


@pytest.mark.parametrize('token', ['P(run)', 'P run 3', 'P(run)x', '(run)3', 'P(run)-1'])
def test_malformed_token(token):
    with pytest.raises(MetaDataFormatError):
        parse_token(token)


def test_parse_metadata(cycle_times):
    programs = parse_metadata_text(
        metadata_text(['P(run)3', 'I(hard drive)2'], [], ['O(printer)1']), cycle_times)
    assert len(programs) == 3
    assert [p.admission for p in programs] == [0, 1, 2]
    assert [str(op) for op in programs[0].operations] == ['A(start)0', 'P(run)3', 'I(hard drive)2', 'A(end)0']
    assert programs[0].running_time == 40
    assert programs[1].running_time == 0
    assert programs[2].running_time == 25


def test_parse_metadata_without_programs(cycle_times):
    assert parse_metadata_text(metadata_text(), cycle_times) == []


def test_tokens_may_span_lines(cycle_times):
    text = ("Start Program Meta-Data Code:\n"
            "S(start)0; A(start)0; P(run)3;\n"
            "O(monitor)2; A(end)0; S(end)0.\n"
            "End Program Meta-Data Code.\n")
    programs = parse_metadata_text(text, cycle_times)
    assert programs[0].running_time == 70


@pytest.mark.parametrize('text', [
    metadata_text(['P(run)3']).replace('Start Program Meta-Data Code:', 'Program Meta-Data Code:'),
    metadata_text(['P(run)3']).replace('End Program Meta-Data Code.', ''),
    metadata_text(['P(run)3']).replace('S(start)0; ', ''),
    metadata_text(['P(run)3']).replace('S(end)0.', 'A(start)0.'),
    metadata_text(['P(run)3']).replace('A(end)0; ', ''),
    metadata_text(['P(run)3']).replace('A(start)0; ', ''),
    metadata_text(['A(start)0', 'P(run)3']),
    metadata_text(['S(start)0']),
    metadata_text(['P(run)3']).replace('; P(run)3', '; P(run)three'),
])
def test_metadata_format_errors(text, cycle_times):
    with pytest.raises(MetaDataFormatError):
        parse_metadata_text(text, cycle_times)


def test_unrecognized_operation(cycle_times):
    with pytest.raises(UnrecognizedOperation):
        parse_metadata_text(metadata_text(['M(allocate)2']), cycle_times)
    with pytest.raises(UnrecognizedOperation):
        parse_metadata_text(metadata_text(['I(scanner)2']), cycle_times)
    with pytest.raises(UnrecognizedOperation):
        parse_metadata_text(metadata_text(['p(run)3']), cycle_times)


@pytest.mark.parametrize('token', ['p(run)3', 'i(keyboard)1', 'a(start)0'])
def test_lowercase_letters_are_unrecognized(token):
    with pytest.raises(UnrecognizedOperation):
        parse_token(token)
