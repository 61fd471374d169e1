# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Declarative queries against a record kind.

A :class:`Query` is an immutable target kind, an ordered list of
:class:`Condition` and the attributes to project. :class:`QueryBuilder`
assembles one fluently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple, Union, TYPE_CHECKING

from .schema import Attribute, RecordKind

if TYPE_CHECKING:
    from ..core.results import OperationResult
    from .record import Record


class Operator(str, Enum):
    """Abstract comparison operators a condition can use."""

    EQL = "eql"
    LT = "lt"
    GT = "gt"
    LTE = "lte"
    GTE = "gte"
    NOT = "not"
    LIKE = "like"


@dataclass(frozen=True)
class Condition:
    """
    A single ``(operator, attribute, value)`` constraint.

    ``operator`` is usually an :class:`Operator`; a plain string is kept as-is
    so that an unsupported comparison is reported when the query is translated.
    A condition with no attribute or a ``None`` value constrains nothing.
    """

    operator: Union[Operator, str]
    attribute: Optional[Attribute]
    value: Any

    def __post_init__(self) -> None:
        if isinstance(self.operator, str) and not isinstance(self.operator, Operator):
            try:
                object.__setattr__(self, "operator", Operator(self.operator))
            except ValueError:
                pass


@dataclass(frozen=True)
class Query:
    """
    Immutable query over one record kind.

    :param kind: Record kind to read.
    :type kind: RecordKind
    :param conditions: Conditions, translated in order.
    :type conditions: tuple[Condition, ...]
    :param fields: Attributes to project; empty means every declared attribute.
    :type fields: tuple[Attribute, ...]
    """

    kind: RecordKind
    conditions: Tuple[Condition, ...] = ()
    fields: Tuple[Attribute, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "conditions", tuple(self.conditions))
        object.__setattr__(self, "fields", tuple(self.fields))

    @property
    def projected_fields(self) -> Tuple[Attribute, ...]:
        return self.fields or self.kind.attributes


@dataclass
class QueryBuilder:
    """
    Fluent interface for building queries.

    :param kind: Record kind to query.
    :type kind: RecordKind

    Example:
        Build and execute a query (via adapter)::

            books = (adapter.query.builder(BOOK)
                     .select("title", "year")
                     .filter_eq("author", "Herbert")
                     .filter_gt("year", 1960)
                     .execute())

        Build a standalone query::

            query = QueryBuilder(BOOK).filter_contains("title", "Dune").build()
            records = adapter.read_many(query).value
    """

    kind: RecordKind
    _fields: List[Attribute] = field(default_factory=list)
    _conditions: List[Condition] = field(default_factory=list)
    _query_ops: Any = field(default=None, compare=False, repr=False)

    def select(self, *names: str) -> "QueryBuilder":
        """
        Project specific attributes (the identifier is always read).

        :raises ~persevere_adapter.core.errors.ValidationError: If the kind does not declare a name.
        """
        self._fields.extend(self.kind.attribute(n) for n in names)
        return self

    def where(self, operator: Union[Operator, str], name: str, value: Any) -> "QueryBuilder":
        """
        Add a condition with an explicit operator.

        :param operator: Comparison operator.
        :param name: Attribute name.
        :param value: Literal compared against; cast to the attribute's type on translation.
        :return: Self for method chaining.
        """
        self._conditions.append(Condition(operator, self.kind.attribute(name), value))
        return self

    def filter_eq(self, name: str, value: Any) -> "QueryBuilder":
        return self.where(Operator.EQL, name, value)

    def filter_ne(self, name: str, value: Any) -> "QueryBuilder":
        return self.where(Operator.NOT, name, value)

    def filter_lt(self, name: str, value: Any) -> "QueryBuilder":
        return self.where(Operator.LT, name, value)

    def filter_gt(self, name: str, value: Any) -> "QueryBuilder":
        return self.where(Operator.GT, name, value)

    def filter_le(self, name: str, value: Any) -> "QueryBuilder":
        return self.where(Operator.LTE, name, value)

    def filter_ge(self, name: str, value: Any) -> "QueryBuilder":
        return self.where(Operator.GTE, name, value)

    def filter_contains(self, name: str, value: str) -> "QueryBuilder":
        """Add a substring match (``name~'*value*'``)."""
        return self.where(Operator.LIKE, name, value)

    def build(self) -> Query:
        return Query(self.kind, tuple(self._conditions), tuple(self._fields))

    def execute(self) -> "OperationResult[List[Record]]":
        """
        Run the query through the adapter that created this builder.

        :raises RuntimeError: If the builder was not created via ``adapter.query.builder()``.
        """
        if self._query_ops is None:
            raise RuntimeError(
                "Cannot execute: query was not created via adapter.query.builder(). "
                "Use adapter.read_many(builder.build()) instead."
            )
        return self._query_ops.read_many(self.build())


__all__ = ["Operator", "Condition", "Query", "QueryBuilder"]
