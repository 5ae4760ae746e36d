import pytest

from .errors import (HeaderError, MissingHeaderFieldError, OfxError,
                     UnknownVersionError, UnsupportedVersionError,
                     VersionError)
from .header import (Data, Encoding, Header, Security, Version,
                     parse_header, split_header)

LINE_HEADER = '''OFXHEADER:100
DATA:OFXSGML
VERSION:102
SECURITY:NONE
ENCODING:USASCII
CHARSET:1252
COMPRESSION:NONE
OLDFILEUID:NONE
NEWFILEUID:NONE

'''

PROLOG_HEADER = (
    '<?OFX OFXHEADER="100" DATA="OFXSGML" VERSION="102" SECURITY="NONE" '
    'ENCODING="USASCII" CHARSET="1252" COMPRESSION="NONE" '
    'OLDFILEUID="NONE" NEWFILEUID="NONE"?>\n')


def make_lines(**fields):
    return '\n'.join('%s:%s' % (k, v) for k, v in fields.items()) + '\n'


REQUIRED_ONLY = dict(
    OFXHEADER='100',
    VERSION='102',
    CHARSET='1252',
    OLDFILEUID='NONE',
    NEWFILEUID='NONE',
)


def test_parses_header():
    header = parse_header(LINE_HEADER)
    assert header.ofxheader == 100
    assert header.version == Version.V102
    assert header.security == Security.NONE
    assert header.oldfileuid == 'NONE'
    assert header.newfileuid == 'NONE'
    assert header.data == Data.OFXSGML
    assert header.encoding == Encoding.USASCII
    assert header.charset == '1252'
    assert header.compression == 'NONE'


def test_prolog_and_line_syntax_agree():
    assert parse_header(PROLOG_HEADER) == parse_header(LINE_HEADER)


def test_prolog_split():
    assert split_header(PROLOG_HEADER)['NEWFILEUID'] == 'NONE'
    assert split_header(PROLOG_HEADER)['OFXHEADER'] == '100'


def test_blank_lines_and_crlf_are_tolerated():
    text = LINE_HEADER.replace('\n', '\r\n\r\n')
    assert parse_header(text) == parse_header(LINE_HEADER)


def test_no_blank_separator_line():
    assert parse_header(LINE_HEADER.rstrip()) == parse_header(LINE_HEADER)


def test_value_split_on_first_colon():
    header = parse_header(
        make_lines(**dict(REQUIRED_ONLY, NEWFILEUID='a:b:c')))
    assert header.newfileuid == 'a:b:c'


def test_defaults():
    header = parse_header(make_lines(**REQUIRED_ONLY))
    assert header == Header(
        ofxheader=100,
        data=Data.OFXSGML,
        version=Version.V102,
        security=Security.NONE,
        encoding=Encoding.USASCII,
        charset='1252',
        compression='',
        oldfileuid='NONE',
        newfileuid='NONE',
    )


def test_optional_values():
    header = parse_header(
        make_lines(**dict(REQUIRED_ONLY, SECURITY='TYPE1',
                          ENCODING='UNICODE', VERSION='160')))
    assert header.security == Security.TYPE1
    assert header.encoding == Encoding.UNICODE
    assert header.version == Version.V160


@pytest.mark.parametrize('missing', sorted(REQUIRED_ONLY))
def test_missing_required_field(missing):
    fields = dict(REQUIRED_ONLY)
    del fields[missing]
    with pytest.raises(MissingHeaderFieldError) as exc_info:
        parse_header(make_lines(**fields))
    assert exc_info.value.field == missing
    assert missing in str(exc_info.value)
    assert exc_info.value.kind == 'structural'


def test_keys_are_case_sensitive():
    fields = dict(REQUIRED_ONLY)
    del fields['CHARSET']
    fields['charset'] = '1252'
    with pytest.raises(MissingHeaderFieldError):
        parse_header(make_lines(**fields))


@pytest.mark.parametrize('version', ['102', '103', '151', '160'])
def test_supported_versions(version):
    header = parse_header(make_lines(**dict(REQUIRED_ONLY, VERSION=version)))
    assert header.version.value == version


@pytest.mark.parametrize('version', ['100', '161', '1'])
def test_unknown_version(version):
    with pytest.raises(UnknownVersionError) as exc_info:
        parse_header(make_lines(**dict(REQUIRED_ONLY, VERSION=version)))
    assert exc_info.value.literal == version
    assert isinstance(exc_info.value, VersionError)


@pytest.mark.parametrize('version', ['200', '211', '', 'abc'])
def test_unsupported_version(version):
    with pytest.raises(UnsupportedVersionError):
        parse_header(make_lines(**dict(REQUIRED_ONLY, VERSION=version)))


def test_xml_prolog_is_unsupported():
    text = ('<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n'
            '<?OFX OFXHEADER="200" VERSION="211" SECURITY="NONE" '
            'OLDFILEUID="NONE" NEWFILEUID="NONE"?>\n')
    with pytest.raises(UnsupportedVersionError):
        parse_header(text)


@pytest.mark.parametrize('key,value', [
    ('OFXHEADER', 'abc'),
    ('OFXHEADER', '-1'),
    ('OFXHEADER', '0'),
    ('DATA', 'OFXXML'),
    ('SECURITY', 'TYPE2'),
    ('ENCODING', 'UTF-8'),
])
def test_invalid_field_value(key, value):
    with pytest.raises(HeaderError) as exc_info:
        parse_header(make_lines(**dict(REQUIRED_ONLY, **{key: value})))
    assert exc_info.value.field == key
    assert exc_info.value.literal == value
    assert exc_info.value.kind == 'header'


def test_line_without_colon():
    with pytest.raises(HeaderError):
        parse_header(LINE_HEADER + 'GARBAGE\n')


def test_unterminated_prolog():
    with pytest.raises(OfxError):
        parse_header('<?OFX OFXHEADER="100" VERSION="102"')
