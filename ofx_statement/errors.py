"""Errors raised while parsing OFX documents.

Every error is an `OfxError`, which is a `ValueError`.  The `kind` attribute
tells callers which stage failed:

  - `'structural'`: the input could not be split into header and body, or a
    required header field is missing.
  - `'header'`: a header field is present but its value is not acceptable.
  - `'timestamp'`: a date/time literal could not be decoded.
  - `'schema'`: the body tag tree does not fit the statement model.
"""

from typing import Optional


class OfxError(ValueError):
    kind = 'structural'


class ParseError(OfxError):
    """The input is not an OFX document this package can read."""


class HeaderError(OfxError):
    kind = 'header'

    def __init__(self, message: str, field: Optional[str] = None,
                 literal: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.literal = literal


class MissingHeaderFieldError(HeaderError):
    kind = 'structural'

    def __init__(self, field: str) -> None:
        super().__init__('headers missing %r' % field, field=field)


class VersionError(HeaderError):
    def __init__(self, message: str, literal: str) -> None:
        super().__init__(message, field='VERSION', literal=literal)


class UnknownVersionError(VersionError):
    """A 1.x version that is not in the supported set."""


class UnsupportedVersionError(VersionError):
    """A version outside the 1.x SGML family, e.g. the 2.x XML dialect."""


class TimestampError(OfxError):
    kind = 'timestamp'

    def __init__(self, message: str, literal: str) -> None:
        super().__init__(message)
        self.literal = literal


class SchemaError(OfxError):
    kind = 'schema'

    def __init__(self, message: str, entity: str, field: str) -> None:
        super().__init__('%s.%s: %s' % (entity, field, message))
        self.entity = entity
        self.field = field


class MissingFieldError(SchemaError):
    def __init__(self, entity: str, field: str, tag: str) -> None:
        super().__init__('missing required <%s>' % tag, entity, field)
        self.tag = tag


class DuplicateFieldError(SchemaError):
    def __init__(self, entity: str, field: str, tag: str) -> None:
        super().__init__('<%s> occurs more than once' % tag, entity, field)
        self.tag = tag


class EnumValueError(SchemaError):
    def __init__(self, enum: str, literal: str, entity: str,
                 field: str) -> None:
        super().__init__('%r is not a valid %s' % (literal, enum), entity,
                         field)
        self.enum = enum
        self.literal = literal


class FieldValueError(SchemaError):
    def __init__(self, entity: str, field: str, literal: str,
                 reason: str) -> None:
        super().__init__('invalid value %r: %s' % (literal, reason), entity,
                         field)
        self.literal = literal
