import datetime

import pytest

from .errors import OfxError, TimestampError
from .timestamp import parse_ofx_time

UTC = datetime.timezone.utc

# OFX 1.6, 3.2.8.2: 19961005132200.124[-5:EST] is 6:22 p.m. GMT.
EST_EXAMPLE = datetime.datetime(1996, 10, 5, 18, 22, 0, 124000, tzinfo=UTC)


@pytest.mark.parametrize('literal,expected', [
    ('19961005132200.124[-5:EST]', EST_EXAMPLE),
    ('19961005132200.124[-5]', EST_EXAMPLE),
    ('19961005132200.124',
     datetime.datetime(1996, 10, 5, 13, 22, 0, 124000, tzinfo=UTC)),
    ('19961005132200', datetime.datetime(1996, 10, 5, 13, 22, tzinfo=UTC)),
    ('19961005', datetime.datetime(1996, 10, 5, tzinfo=UTC)),
    ('20190510', datetime.datetime(2019, 5, 10, tzinfo=UTC)),
])
def test_parse_date_ofx_examples(literal, expected):
    assert parse_ofx_time(literal) == expected


@pytest.mark.parametrize('literal', [
    '19961005132200.124[-5:EST]',
    '19961005132200.124[-5]',
    '19961005132200.124[-5:]',
    '19961005132200.124[-5.0:EST]',
    '19961005212200.124[+3:EST]',
    '19961005212200.124[+3]',
    '19961005212200.124[+3:]',
    '19961005212200.124[+3.0:EST]',
    '19961006035200.124[+9.5:ACST]',
])
def test_alt_timezone_formats(literal):
    assert parse_ofx_time(literal) == EST_EXAMPLE


def test_result_is_utc():
    parsed = parse_ofx_time('19961005132200[-5:EST]')
    assert parsed.utcoffset() == datetime.timedelta(0)
    assert parsed.hour == 18


def test_date_only_with_offset():
    assert parse_ofx_time('20200101[-8:PST]') == datetime.datetime(
        2020, 1, 1, 8, tzinfo=UTC)


@pytest.mark.parametrize('literal', [
    '19961005[12]',
    '19961005[-12:GMT-12]',
    '19961005[+12.0]',
])
def test_offset_bounds_inclusive(literal):
    parse_ofx_time(literal)


@pytest.mark.parametrize('literal', [
    '19961005[13]',
    '19961005[-12.5:X]',
    '19961005[+14]',
    '19961005[nan]',
    '19961005[inf]',
])
def test_offset_out_of_range(literal):
    with pytest.raises(TimestampError):
        parse_ofx_time(literal)


@pytest.mark.parametrize('literal', [
    '1996100',
    '199610051',
    '1996100513220',
    '19961005132200.1',
    '19961005132200.12',
    '19961005132200.1245',
    '',
])
def test_invalid_length(literal):
    with pytest.raises(TimestampError) as exc_info:
        parse_ofx_time(literal)
    assert exc_info.value.literal == literal


@pytest.mark.parametrize('literal', [
    # Seen in a real Bradesco export.
    '00000000000000',
    '00000000',
    '19961305',
    '19960230',
    '19961005256100',
    '1996-10-',
    '19961005132200,124',
    # Non-standard timezone bracket.
    '20100108000000.000[-:EST]',
    '20100108000000.000[:EST]',
    '20100108000000.000[-5:EST',
])
def test_malformed(literal):
    with pytest.raises(TimestampError):
        parse_ofx_time(literal)


def test_error_is_ofx_error():
    with pytest.raises(OfxError) as exc_info:
        parse_ofx_time('19961005[15]')
    assert exc_info.value.kind == 'timestamp'
    assert isinstance(exc_info.value, ValueError)
