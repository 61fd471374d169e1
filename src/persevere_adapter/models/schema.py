# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record kind metadata: a statically declared attribute schema per record type.

Example::

    book = RecordKind(
        "Book",
        [
            Attribute("title", AttributeType.STRING),
            Attribute("author", AttributeType.STRING),
            Attribute("year", AttributeType.INTEGER),
            Attribute("created_at", AttributeType.DATETIME),
        ],
    )
    book.collection_name  # 'Books'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

from ..common.constants import DEFAULT_KEY
from ..core._error_codes import VALIDATION_UNKNOWN_ATTRIBUTE
from ..core.errors import ValidationError
from ..data._naming import collection_name as _collection_name
from ..data._naming import collection_path as _collection_path


class AttributeType(str, Enum):
    """Semantic type of a record attribute."""

    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    DATE = "date"
    OBJECT = "object"

    @property
    def is_textual(self) -> bool:
        return self in (AttributeType.STRING, AttributeType.TEXT)


@dataclass(frozen=True)
class Attribute:
    """
    A named, typed attribute of a record kind.

    :param name: Attribute name used on records.
    :type name: str
    :param type: Semantic type values are coerced to.
    :type type: AttributeType
    :param field: Wire field name, when it differs from ``name``.
    :type field: str | None
    """

    name: str
    type: AttributeType = AttributeType.STRING
    field: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("attribute name is required")
        if not isinstance(self.type, AttributeType):
            object.__setattr__(self, "type", AttributeType(self.type))

    @property
    def field_name(self) -> str:
        return self.field or self.name


AttributeSpec = Union[Attribute, Tuple[str, Union[AttributeType, str]]]


@dataclass(frozen=True, init=False)
class RecordKind:
    """
    Type descriptor for a family of records.

    :param name: Kind name; the collection name is derived from it.
    :type name: str
    :param attributes: Ordered attribute declarations. ``(name, type)``
        tuples are accepted.
    :type attributes: Iterable[Attribute | tuple[str, AttributeType | str]]
    :param key: Name of the identifier attribute (default ``"id"``). Declared
        as a string attribute when ``attributes`` does not declare it.
    :type key: str
    """

    name: str
    attributes: Tuple[Attribute, ...] = ()
    key: str = DEFAULT_KEY
    _by_name: Dict[str, Attribute] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __init__(self, name: str, attributes: Iterable[AttributeSpec] = (), key: str = DEFAULT_KEY) -> None:
        if not name:
            raise ValueError("record kind name is required")
        normalized = []
        for spec in attributes:
            if isinstance(spec, Attribute):
                normalized.append(spec)
            else:
                attr_name, attr_type = spec
                normalized.append(Attribute(attr_name, AttributeType(attr_type)))
        names = [a.name for a in normalized]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate attribute names in record kind {name!r}")
        if key not in names:
            normalized.insert(0, Attribute(key, AttributeType.STRING))
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "attributes", tuple(normalized))
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "_by_name", {a.name: a for a in normalized})

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self.attributes)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def key_attribute(self) -> Attribute:
        return self._by_name[self.key]

    @property
    def value_attributes(self) -> Tuple[Attribute, ...]:
        """Declared attributes other than the identifier."""
        return tuple(a for a in self.attributes if a.name != self.key)

    @property
    def collection_name(self) -> str:
        return _collection_name(self.name)

    @property
    def collection_path(self) -> str:
        return _collection_path(self.collection_name)

    def attribute(self, name: str) -> Attribute:
        """
        Look up a declared attribute.

        :raises ~persevere_adapter.core.errors.ValidationError: If the kind does not declare ``name``.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise ValidationError(
                f"Record kind {self.name!r} has no attribute {name!r}.",
                subcode=VALIDATION_UNKNOWN_ATTRIBUTE,
                details={"kind": self.name, "attribute": name},
            ) from None


__all__ = ["AttributeType", "Attribute", "AttributeSpec", "RecordKind"]
