# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Record CRUD operations namespace."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union, TYPE_CHECKING

from ..common.constants import STATUS_CREATED, STATUS_NOT_FOUND, STATUS_OK
from ..core._error_codes import VALIDATION_MISSING_IDENTIFIER
from ..core.errors import PersevereError, ValidationError, _http_error_from_response
from ..core.results import OperationResult
from ..data._mapping import apply_wire, from_wire, to_wire
from ..models.query import Query
from ..models.record import Record
from ..models.schema import RecordKind

if TYPE_CHECKING:
    import pandas as pd

    from ..adapter import PersevereAdapter, _CallScope

logger = logging.getLogger(__name__)

RecordsOrQuery = Union[Query, Record, Sequence[Record]]


def _as_records(records: Union[Record, Sequence[Record]]) -> List[Record]:
    if isinstance(records, Record):
        return [records]
    if isinstance(records, (str, bytes, Mapping)):
        raise TypeError("records must be a Record or a sequence of Records")
    items = list(records)
    if not all(isinstance(r, Record) for r in items):
        raise TypeError("records must be a Record or a sequence of Records")
    return items


def _record_path(record: Record) -> str:
    if record.id is None:
        raise ValidationError(
            f"{record.kind.name} record has no identifier.",
            subcode=VALIDATION_MISSING_IDENTIFIER,
            details={"kind": record.kind.name},
        )
    return f"{record.kind.collection_path}{record.id}"


class RecordOperations:
    """
    Record CRUD operations.

    Accessed via ``adapter.records``. Every method returns an
    :class:`~persevere_adapter.core.results.OperationResult`.

    Example::

        book = Record(BOOK, data={"title": "Dune", "author": "Herbert"})
        adapter.records.create([book]).value   # 1
        print(book.id)

        adapter.records.update([book], {"year": 1965})
        adapter.records.get(BOOK, book.id).value["year"]   # 1965
        adapter.records.delete([book]).value   # 1
    """

    def __init__(self, adapter: "PersevereAdapter") -> None:
        self._adapter = adapter

    # ------------------------------------------------------------------ create

    def create(self, records: Union[Record, Sequence[Record]]) -> OperationResult[int]:
        """
        Store new records, registering their collection's class when needed.

        Each record gets its store-assigned identifier (and any server-computed
        attributes) on success. The first failure aborts the batch: the result
        is failed, ``error.details["completed"]`` tells how many records were
        stored before it, and later records are left untouched.

        :param records: A record or a sequence of records without identifiers.
        :return: OperationResult containing the number of records created.
        :rtype: OperationResult[int]
        :raises TypeError: If ``records`` holds anything but records.
        """
        items = _as_records(records)
        with self._adapter._scoped_call("records.create") as scope:
            created = 0
            for record in items:
                try:
                    self._create_one(scope, record)
                except PersevereError as exc:
                    exc.details.setdefault("completed", created)
                    logger.warning(
                        "Create batch aborted after %d of %d records (correlation_id=%s): %s",
                        created,
                        len(items),
                        scope.correlation_id,
                        exc.message,
                    )
                    return OperationResult.failure(exc, scope.metadata())
                created += 1
            return OperationResult.success(created, scope.metadata())

    def create_from_dataframe(self, kind: RecordKind, df: "pd.DataFrame") -> OperationResult[List[Record]]:
        """
        Create one record per DataFrame row.

        :return: OperationResult containing the created records, identifiers assigned.
        """
        from ..utils._pandas import dataframe_to_records

        items = dataframe_to_records(kind, df)
        result = self.create(items)
        if result.failed:
            return OperationResult.failure(result.error, result.metadata)
        return OperationResult.success(items, result.metadata)

    def _create_one(self, scope: "_CallScope", record: Record) -> None:
        if not record.is_new:
            raise ValidationError(
                f"{record.kind.name} record already has identifier {record.id!r}.",
                details={"kind": record.kind.name, "id": record.id},
            )
        kind = record.kind
        scope.ensure_registered(kind.collection_name)
        payload = to_wire(record)
        path = kind.collection_path
        response = scope.send(self._adapter._transport.create, path, payload)
        if response.status_code != STATUS_CREATED:
            raise _http_error_from_response("POST", path, response)
        apply_wire(record, response.json())

    # --------------------------------------------------------------------- get

    def get(self, kind: RecordKind, record_id: Any) -> OperationResult[Optional[Record]]:
        """
        Fetch a single record by identifier.

        :return: OperationResult containing the record, or ``None`` if the store has no such record.
        :rtype: OperationResult[Record | None]
        """
        if record_id is None or record_id == "":
            raise ValueError("record_id is required")
        path = f"{kind.collection_path}{record_id}"
        with self._adapter._scoped_call("records.get") as scope:
            try:
                response = scope.send(self._adapter._transport.retrieve, path)
                if response.status_code == STATUS_NOT_FOUND:
                    return OperationResult.success(None, scope.metadata())
                if response.status_code != STATUS_OK:
                    raise _http_error_from_response("GET", path, response)
                record = from_wire(kind, response.json())
            except PersevereError as exc:
                return OperationResult.failure(exc, scope.metadata())
            return OperationResult.success(record, scope.metadata())

    # ------------------------------------------------------------------ update

    def update(
        self,
        target: RecordsOrQuery,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> OperationResult[int]:
        """
        Write records back to the store.

        ``target`` is either records that already have identifiers or a query,
        which is read first. ``attributes`` (optional) are written with every
        resolved record and assigned onto it once its PUT succeeds. The first
        failure aborts the batch and returns a failed result.

        :param target: Records or a query selecting them.
        :param attributes: Attribute values to apply, keyed by attribute name.
        :return: OperationResult containing the number of records updated.
        :rtype: OperationResult[int]
        """
        with self._adapter._scoped_call("records.update") as scope:
            try:
                items = self._resolve(scope, target)
                changes = self._validate_changes(items, attributes)
            except PersevereError as exc:
                return OperationResult.failure(exc, scope.metadata())
            updated = 0
            for record in items:
                try:
                    path = _record_path(record)
                    payload = to_wire(Record(record.kind, record.id, {**record.data, **changes}))
                    response = scope.send(self._adapter._transport.update, path, payload)
                    if not response.ok:
                        raise _http_error_from_response("PUT", path, response)
                    record.data.update(changes)
                except PersevereError as exc:
                    exc.details.setdefault("completed", updated)
                    logger.warning(
                        "Update batch aborted after %d of %d records (correlation_id=%s): %s",
                        updated,
                        len(items),
                        scope.correlation_id,
                        exc.message,
                    )
                    return OperationResult.failure(exc, scope.metadata())
                updated += 1
            return OperationResult.success(updated, scope.metadata())

    @staticmethod
    def _validate_changes(items: List[Record], attributes: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
        changes = dict(attributes or {})
        for record in items:
            for name in changes:
                if name == record.kind.key:
                    raise ValidationError(
                        "The identifier cannot be updated.",
                        details={"kind": record.kind.name, "attribute": name},
                    )
                record.kind.attribute(name)
        return changes

    # ------------------------------------------------------------------ delete

    def delete(self, target: RecordsOrQuery) -> OperationResult[int]:
        """
        Delete records from the store.

        Same ``target`` rules as :meth:`update`. A record whose delete fails is
        skipped (and listed in ``metadata.failed_ids``); the count only
        includes confirmed deletions.

        :return: OperationResult containing the number of records deleted.
        :rtype: OperationResult[int]
        """
        with self._adapter._scoped_call("records.delete") as scope:
            try:
                items = self._resolve(scope, target)
            except PersevereError as exc:
                return OperationResult.failure(exc, scope.metadata())
            deleted = 0
            for record in items:
                try:
                    path = _record_path(record)
                    response = scope.send(self._adapter._transport.delete, path)
                    if not response.ok:
                        raise _http_error_from_response("DELETE", path, response)
                except PersevereError as exc:
                    logger.warning("Skipping %s %r: %s", record.kind.name, record.id, exc.message)
                    scope.failed_ids.append(str(record.id))
                    continue
                deleted += 1
            return OperationResult.success(deleted, scope.metadata())

    def _resolve(self, scope: "_CallScope", target: RecordsOrQuery) -> List[Record]:
        if isinstance(target, Query):
            return self._adapter.query._fetch(scope, target)
        return _as_records(target)


__all__ = ["RecordOperations"]
