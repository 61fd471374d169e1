# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Query operations namespace."""

from __future__ import annotations

import logging
from typing import List, Optional, TYPE_CHECKING

from ..common.constants import STATUS_OK
from ..core._error_codes import DECODE_UNEXPECTED_SHAPE
from ..core.errors import DecodeError, PersevereError, _http_error_from_response
from ..core.results import OperationResult
from ..data._filters import build_filter_string
from ..data._mapping import from_wire
from ..models.query import Query, QueryBuilder
from ..models.record import Record
from ..models.schema import RecordKind

if TYPE_CHECKING:
    import pandas as pd

    from ..adapter import PersevereAdapter, _CallScope

logger = logging.getLogger(__name__)


class QueryOperations:
    """
    Query operations for retrieving records.

    Accessed via ``adapter.query``.

    Example:
        Fluent query builder::

            books = (adapter.query.builder(BOOK)
                     .filter_eq("author", "Herbert")
                     .filter_gt("year", 1960)
                     .execute())
            for book in books:
                print(book["title"])

        Prebuilt query::

            result = adapter.query.read_many(Query(BOOK))
            if result.failed:
                print(result.error.to_dict())
    """

    def __init__(self, adapter: "PersevereAdapter") -> None:
        self._adapter = adapter

    def builder(self, kind: RecordKind) -> QueryBuilder:
        """
        Start a fluent query bound to this adapter (``.execute()`` runs it).

        :param kind: Record kind to query.
        :rtype: ~persevere_adapter.models.query.QueryBuilder
        """
        return QueryBuilder(kind, _query_ops=self)

    def read_many(self, query: Query) -> OperationResult[List[Record]]:
        """
        Read every record of ``query.kind`` matching its conditions.

        Records come back in the store's order with only the query's fields
        read. A failed read is a failed result, never an empty list.

        :param query: Query to run.
        :type query: ~persevere_adapter.models.query.Query
        :return: OperationResult containing the matching records.
        :rtype: OperationResult[list[Record]]
        """
        if not isinstance(query, Query):
            raise TypeError("query must be a Query")
        with self._adapter._scoped_call("query.read_many") as scope:
            try:
                records = self._fetch(scope, query)
            except PersevereError as exc:
                logger.warning("Reading %s failed: %s", query.kind.collection_name, exc.message)
                return OperationResult.failure(exc, scope.metadata())
            return OperationResult.success(records, scope.metadata())

    def read_one(self, query: Query) -> OperationResult[Optional[Record]]:
        """
        First record matching ``query``, or ``None`` when nothing matches.

        :rtype: OperationResult[Record | None]
        """
        result = self.read_many(query)
        if result.failed:
            return OperationResult.failure(result.error, result.metadata)
        records = result.result or []
        return OperationResult.success(records[0] if records else None, result.metadata)

    def to_dataframe(self, query: Query) -> "pd.DataFrame":
        """
        Run ``query`` and return the records as a DataFrame.

        :raises ~persevere_adapter.core.errors.PersevereError: If the read failed.
        """
        from ..utils._pandas import records_to_dataframe

        return records_to_dataframe(query.kind, self.read_many(query).value, fields=query.fields or None)

    def _fetch(self, scope: "_CallScope", query: Query) -> List[Record]:
        path = query.kind.collection_path + build_filter_string(query.conditions, encode=True)
        response = scope.send(self._adapter._transport.retrieve, path)
        if response.status_code != STATUS_OK:
            raise _http_error_from_response("GET", path, response)
        body = response.json()
        if not isinstance(body, list):
            raise DecodeError(
                f"Expected a JSON array from {path}, got {type(body).__name__}.",
                subcode=DECODE_UNEXPECTED_SHAPE,
                details={"path": path},
            )
        fields = query.fields or None
        return [from_wire(query.kind, item, fields) for item in body]


__all__ = ["QueryOperations"]
