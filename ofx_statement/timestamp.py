"""Decoding of OFX date/time literals.

The complete form of an OFX 1.x date is:

    YYYYMMDDHHMMSS.XXX[gmt offset[:tz name]]

e.g. `19961005132200.124[-5:EST]`, which is 6:22 p.m. GMT.  The time part and
the fractional seconds may be left off, and so may the bracketed offset, in
which case GMT is assumed.
"""

import datetime
import re

import dateutil.tz

from .errors import TimestampError

MAX_OFFSET_HOURS = 12.0

_FORMATS = {
    8: (re.compile(r'[0-9]{8}'), '%Y%m%d'),
    14: (re.compile(r'[0-9]{14}'), '%Y%m%d%H%M%S'),
    18: (re.compile(r'[0-9]{14}\.[0-9]{3}'), '%Y%m%d%H%M%S.%f'),
}


def parse_offset(offset_str: str, literal: str) -> datetime.tzinfo:
    """Parses the contents of the `[...]` suffix into a fixed-offset zone.

    The zone name after the colon, if any, only names the zone; the numeric
    offset alone determines the instant.
    """
    offset_part, _, zone_name = offset_str.partition(':')
    try:
        hours = float(offset_part)
    except ValueError:
        raise TimestampError(
            'invalid timezone offset format: %r' % offset_str,
            literal) from None
    # Also rejects NaN.
    if not abs(hours) <= MAX_OFFSET_HOURS:
        raise TimestampError(
            'timezone offset too large or small: %s' % offset_part, literal)
    return dateutil.tz.tzoffset(zone_name.strip() or None,
                                round(hours * 3600))


def parse_ofx_time(date_str: str) -> datetime.datetime:
    """Parse an OFX time string and return a datetime object.

    Args:
      date_str: A string, the date to be parsed.
    Returns:
      A timezone-aware datetime.datetime instance in UTC.
    Raises:
      TimestampError: if the literal is malformed, the offset is out of range,
        or the date does not exist.
    """
    bracket = date_str.find('[')
    if bracket == -1:
        dt_str = date_str
        tzinfo = dateutil.tz.tzoffset(None, 0)
    else:
        if not date_str.endswith(']'):
            raise TimestampError(
                'unterminated timezone in %r' % date_str, date_str)
        dt_str = date_str[:bracket]
        tzinfo = parse_offset(date_str[bracket + 1:-1], date_str)

    try:
        pattern, fmt = _FORMATS[len(dt_str)]
    except KeyError:
        raise TimestampError('invalid datetime: %r' % dt_str,
                             date_str) from None
    if pattern.fullmatch(dt_str) is None:
        raise TimestampError('invalid datetime: %r' % dt_str, date_str)
    try:
        naive = datetime.datetime.strptime(dt_str, fmt)
    except ValueError as e:
        raise TimestampError(
            'unable to parse %r as datetime: %s' % (date_str, e),
            date_str) from e
    try:
        return naive.replace(tzinfo=tzinfo).astimezone(dateutil.tz.UTC)
    except OverflowError as e:
        raise TimestampError('%r is out of range' % date_str,
                             date_str) from e
