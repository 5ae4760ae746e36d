"""Top-level entry points: text or file -> `Document`."""

from typing import List, Optional
import codecs
import dataclasses
import logging

import bs4

from .body import Body, parse_body
from .errors import ParseError
from .header import Header, parse_header, split_header
from .tag_tree import parse_tag_tree

logger = logging.getLogger('ofx_document')

BODY_START = '<OFX>'


@dataclasses.dataclass(frozen=True)
class Document:
    header: Header
    body: Body


def parse_ofx(contents: str) -> Document:
    """Parses the decoded text of an OFX 1.x file.

    Per the 1.6 spec, 1.2.1, a blank line separates the headers from the body,
    but some banks omit it, so the split is made at the first `<OFX>` instead.
    """
    start = contents.find(BODY_START)
    if start == -1:
        raise ParseError('no `%s` found' % BODY_START)
    header = parse_header(contents[:start])
    logger.debug('parsed header: version %s', header.version.value)
    body = parse_body(parse_tag_tree(contents[start:]))
    return Document(header=header, body=body)


def declared_encodings(raw: bytes) -> List[str]:
    """Returns the codecs named by the `ENCODING`/`CHARSET` headers, if any."""
    start = raw.find(BODY_START.encode('ascii'))
    if start == -1:
        return []
    try:
        headers = split_header(raw[:start].decode('latin-1'))
    except ValueError:
        return []
    candidates = []  # type: List[str]
    if headers.get('ENCODING', '').upper() in ('UTF-8', 'UNICODE'):
        candidates.append('utf-8')
    charset = headers.get('CHARSET', '')
    if charset.isdigit():
        charset = 'cp' + charset
    encodings = []  # type: List[str]
    for name in candidates + [charset]:
        try:
            encodings.append(codecs.lookup(name).name)
        except LookupError:
            continue
    return encodings


def load_ofx_file(filename: str, encoding: Optional[str] = None) -> Document:
    with open(filename, 'rb') as f:
        raw = f.read()
    known = [encoding] if encoding else declared_encodings(raw)
    dammit = bs4.UnicodeDammit(raw, known_definite_encodings=known)
    if dammit.unicode_markup is None:
        raise ParseError('unable to decode %s' % filename)
    logger.debug('decoded %s as %s', filename, dammit.original_encoding)
    return parse_ofx(dammit.unicode_markup)
