"""Projection of a generic `TagNode` tree onto typed, frozen dataclasses.

Each record type declares, per field, how it is found and decoded:

    @dataclasses.dataclass(frozen=True)
    class Currency:
        rate: Decimal = ofx_field(parse_decimal, tag='CURRATE')
        symbol: str = ofx_field(str, tag='CURSYM')

`project` is the only routine that interprets those declarations:

  - the child tag defaults to the field name upper-cased;
  - `optional=True` fields become `None` when the tag is absent, other fields
    raise `MissingFieldError`;
  - `repeated=True` fields collect every matching child, in document order,
    into a tuple;
  - the `kind` is either a nested dataclass (projected recursively), an
    `enum.Enum` subclass (matched by upper-cased value), or a callable that
    decodes the leaf text and raises `ValueError` on bad input.

Unknown tags are ignored.
"""

from typing import Any, Callable, Dict, List, NamedTuple, Optional, Type, TypeVar, Union
import dataclasses
import decimal
import enum
import re

import pycountry
from beancount.core.number import D

from .errors import (DuplicateFieldError, EnumValueError, FieldValueError,
                     MissingFieldError)
from .tag_tree import TagNode

T = TypeVar('T')

SCHEMA_KEY = 'ofx_schema'

Kind = Union[type, Callable[[str], Any]]


class FieldSpec(NamedTuple):
    kind: Kind
    tag: Optional[str]
    optional: bool
    repeated: bool


def ofx_field(kind: Kind,
              tag: Optional[str] = None,
              optional: bool = False,
              repeated: bool = False) -> Any:
    return dataclasses.field(
        metadata={SCHEMA_KEY: FieldSpec(kind, tag, optional, repeated)})


class Language(NamedTuple):
    """An ISO 639-1 or ISO 639-3 language code, lower-cased."""
    code: str
    name: str


def parse_decimal(x: str) -> decimal.Decimal:
    if not x.strip():
        raise ValueError('empty number')
    value = D(x.strip())
    if not value.is_finite():
        raise ValueError('%r is not a finite number' % x)
    return value


def parse_unsigned(x: str) -> int:
    x = x.strip()
    if re.fullmatch(r'[0-9]+', x) is None:
        raise ValueError('%r is not an unsigned integer' % x)
    return int(x)


def parse_language(x: str) -> Language:
    code = x.strip().lower()
    if len(code) == 2:
        language = pycountry.languages.get(alpha_2=code)
    elif len(code) == 3:
        language = pycountry.languages.get(alpha_3=code)
    else:
        language = None
    if language is None:
        raise ValueError('%r is not an ISO 639-1 or ISO 639-3 code' % x)
    return Language(code=code, name=language.name)


def parse_enum(literal: str, enum_type: Type[enum.Enum], entity: str,
               field: str) -> enum.Enum:
    try:
        return enum_type(literal.strip().upper())
    except ValueError:
        raise EnumValueError(enum_type.__name__, literal, entity,
                             field) from None


def decode(node: TagNode, kind: Kind, entity: str, field: str) -> Any:
    if dataclasses.is_dataclass(kind):
        return project(node, kind)
    if isinstance(kind, type) and issubclass(kind, enum.Enum):
        return parse_enum(node.text, kind, entity, field)
    try:
        return kind(node.text)
    except ValueError as e:
        raise FieldValueError(entity, field, node.text, str(e)) from e


def project(node: TagNode, cls: Type[T]) -> T:
    """Builds an instance of the dataclass `cls` from the children of `node`.

    Args:
      node: The aggregate element corresponding to `cls`.
      cls: A dataclass whose fields are all declared with `ofx_field`.
    Returns:
      An instance of `cls`.
    Raises:
      SchemaError: if a required field is missing, a non-repeated field occurs
        twice, or a value cannot be decoded.
    """
    entity = cls.__name__
    values = dict()  # type: Dict[str, Any]
    for field in dataclasses.fields(cls):
        spec = field.metadata[SCHEMA_KEY]
        tag = spec.tag or field.name.upper()
        matches = list(node.find_all(tag))  # type: List[TagNode]
        if spec.repeated:
            values[field.name] = tuple(
                decode(child, spec.kind, entity, field.name)
                for child in matches)
        elif not matches:
            if not spec.optional:
                raise MissingFieldError(entity, field.name, tag)
            values[field.name] = None
        elif len(matches) > 1:
            raise DuplicateFieldError(entity, field.name, tag)
        else:
            values[field.name] = decode(matches[0], spec.kind, entity,
                                        field.name)
    return cls(**values)  # type: ignore
