"""Parses the header block that precedes the `<OFX>` body.

OFX 1.x files normally use one `KEY:VALUE` pair per line:

    OFXHEADER:100
    DATA:OFXSGML
    VERSION:102
    ...

Some institutions instead emit an XML-style processing instruction:

    <?OFX OFXHEADER="200" VERSION="211" SECURITY="NONE" ...?>

Both forms are accepted and produce the same `Header`.  Per the 1.6 spec,
section 2.2, all headers are required, but in practice only some of them are
reliably present, so `DATA`, `SECURITY`, `ENCODING` and `COMPRESSION` fall back
to defaults.
"""

from typing import Dict, Type, TypeVar
import dataclasses
import enum
import logging
import re

from .errors import (HeaderError, MissingHeaderFieldError,
                     UnknownVersionError, UnsupportedVersionError)

logger = logging.getLogger('ofx_header')

PROLOG_START = '<?OFX '
PROLOG_END = '?>'


class Data(enum.Enum):
    OFXSGML = 'OFXSGML'


class Version(enum.Enum):
    V102 = '102'
    V103 = '103'
    V151 = '151'
    V160 = '160'


class Security(enum.Enum):
    NONE = 'NONE'
    TYPE1 = 'TYPE1'


class Encoding(enum.Enum):
    UNICODE = 'UNICODE'
    USASCII = 'USASCII'


@dataclasses.dataclass(frozen=True)
class Header:
    ofxheader: int
    data: Data
    version: Version
    security: Security
    encoding: Encoding
    charset: str
    compression: str
    oldfileuid: str
    newfileuid: str


E = TypeVar('E', bound=enum.Enum)


def split_prolog(contents: str) -> Dict[str, str]:
    start = contents.find(PROLOG_START) + len(PROLOG_START)
    end = contents.find(PROLOG_END, start)
    if end == -1:
        raise HeaderError('invalid OFX header: unterminated %r' %
                          PROLOG_START.strip())
    headers = dict()  # type: Dict[str, str]
    for pair in contents[start:end].split('" '):
        pair = pair.strip()
        if not pair:
            continue
        key, sep, value = pair.partition('=')
        if not sep:
            raise HeaderError('invalid OFX header at %r' % pair)
        headers[key.strip()] = value.strip().strip('"')
    return headers


def split_lines(contents: str) -> Dict[str, str]:
    headers = dict()  # type: Dict[str, str]
    for line in contents.splitlines():
        line = line.strip()
        if not line:
            continue
        key, sep, value = line.partition(':')
        if not sep:
            raise HeaderError('invalid OFX header at %r' % line)
        headers[key.strip()] = value.strip()
    return headers


def split_header(contents: str) -> Dict[str, str]:
    """Returns the raw `KEY -> VALUE` mapping of either header syntax."""
    if PROLOG_START in contents:
        logger.debug('parsing OFX prolog header')
        return split_prolog(contents)
    return split_lines(contents)


def parse_version(value: str) -> Version:
    try:
        return Version(value)
    except ValueError:
        pass
    # Will need to change if OFX ever reaches version 10.
    if value.startswith('1'):
        raise UnknownVersionError(
            'OFX version %s is not known to this parser; please report it '
            'so support can be added' % value, value)
    raise UnsupportedVersionError(
        'OFX version %s is not supported' % value, value)


def parse_enum(headers: Dict[str, str], key: str, enum_type: Type[E],
               default: E) -> E:
    value = headers.get(key)
    if value is None:
        return default
    try:
        return enum_type(value)
    except ValueError:
        raise HeaderError('invalid %s value %r' % (key, value),
                          field=key, literal=value) from None


def parse_ofxheader(value: str) -> int:
    if re.fullmatch(r'[0-9]+', value) is None or int(value) == 0:
        raise HeaderError('OFXHEADER must be a positive integer, got %r' %
                          value, field='OFXHEADER', literal=value)
    return int(value)


def required(headers: Dict[str, str], key: str) -> str:
    try:
        return headers[key]
    except KeyError:
        raise MissingHeaderFieldError(key) from None


def parse_header(contents: str) -> Header:
    """Parses the text preceding `<OFX>` into a `Header`.

    Raises:
      MissingHeaderFieldError: if OFXHEADER, VERSION, CHARSET, OLDFILEUID or
        NEWFILEUID is absent.
      HeaderError: if a field is malformed; `VersionError` subclasses for an
        unrecognized VERSION.
    """
    headers = split_header(contents)
    logger.debug('header fields: %r', sorted(headers))
    return Header(
        ofxheader=parse_ofxheader(required(headers, 'OFXHEADER')),
        data=parse_enum(headers, 'DATA', Data, Data.OFXSGML),
        version=parse_version(required(headers, 'VERSION')),
        security=parse_enum(headers, 'SECURITY', Security, Security.NONE),
        encoding=parse_enum(headers, 'ENCODING', Encoding, Encoding.USASCII),
        charset=required(headers, 'CHARSET'),
        compression=headers.get('COMPRESSION', ''),
        oldfileuid=required(headers, 'OLDFILEUID'),
        newfileuid=required(headers, 'NEWFILEUID'),
    )
