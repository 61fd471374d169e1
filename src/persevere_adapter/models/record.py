# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record data model for Persevere collections.

Provides a typed record bound to its :class:`~persevere_adapter.models.schema.RecordKind`
with dict-like access to attribute values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Union

from ..core._error_codes import VALIDATION_IDENTIFIER_REASSIGNED
from ..core.errors import ValidationError
from .schema import RecordKind

# Type aliases for semantic clarity
RecordId = Union[str, int]


@dataclass
class Record:
    """
    A typed record of some record kind.

    The identifier is unset until the store assigns one on create; once set it
    cannot change.

    :param kind: Record kind describing the attribute schema.
    :type kind: RecordKind
    :param id: Store-assigned identifier.
    :type id: str | int | None
    :param data: Attribute values keyed by attribute name.
    :type data: dict[str, Any]

    Example:
        Structured access::

            book = Record(BOOK, data={"title": "Dune", "author": "Herbert"})
            adapter.create([book])
            print(book.id)         # store-assigned identifier
            print(book.kind.name)  # "Book"

        Dict-like access::

            print(book["title"])
            book["year"] = 1965
            for name in book:
                print(name, book[name])
    """

    kind: RecordKind
    id: Optional[RecordId] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_new(self) -> bool:
        """True until the record has an identifier."""
        return self.id is None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id":
            current = getattr(self, "id", None)
            if current is not None and (value is None or str(current) != str(value)):
                raise ValidationError(
                    f"Record identifier is immutable (has {current!r}, got {value!r}).",
                    subcode=VALIDATION_IDENTIFIER_REASSIGNED,
                    details={"kind": self.kind.name, "id": current, "new_id": value},
                )
        object.__setattr__(self, name, value)

    def assign_id(self, value: RecordId) -> None:
        """
        Set the identifier.

        Assigning the identifier a record already has is a no-op. Plain
        ``record.id = ...`` assignment goes through the same check.

        :raises ~persevere_adapter.core.errors.ValidationError: If the record
            already has a different identifier.
        """
        self.id = value

    # Dict-like access

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.data[key] = value

    def __delitem__(self, key: str) -> None:
        del self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def keys(self):
        return self.data.keys()

    def values(self):
        return self.data.values()

    def items(self):
        return self.data.items()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a plain dictionary of attribute values (identifier excluded).

        :rtype: dict[str, Any]
        """
        return dict(self.data)

    def to_full_dict(self) -> Dict[str, Any]:
        """
        Convert to a dictionary including the identifier and kind name.

        :return: Dictionary with ``id``, ``kind`` and ``data``.
        :rtype: dict[str, Any]
        """
        return {
            "id": self.id,
            "kind": self.kind.name,
            "data": dict(self.data),
        }


__all__ = ["Record", "RecordId"]
