# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Mapping, Optional, Sequence, Union

import requests

from .core.config import PersevereConfig, build_base_url
from .core.errors import PersevereError
from .core.protocols import Transport, TransportResponse
from .core.results import OperationResult, RequestMetadata
from .data._registry import _SchemaRegistry
from .data._transport import PersevereTransport
from .models.query import Query
from .models.record import Record
from .models.schema import RecordKind
from .operations.classes import ClassOperations
from .operations.query import QueryOperations
from .operations.records import RecordOperations

logger = logging.getLogger(__name__)


class _CallScope:
    """Bookkeeping for one adapter operation: correlation id, request count, timing."""

    def __init__(self, adapter: "PersevereAdapter", operation: str) -> None:
        self._adapter = adapter
        self.operation = operation
        self.correlation_id = str(uuid.uuid4())
        self.request_count = 0
        self.last_status: Optional[int] = None
        self.failed_ids: List[str] = []
        self._start = time.perf_counter()

    def send(self, call: Callable[..., TransportResponse], *args: Any) -> TransportResponse:
        self.request_count += 1
        response = call(*args)
        self.last_status = response.status_code
        return response

    def ensure_registered(self, collection: str) -> bool:
        sent = self._adapter._registry.ensure_registered(collection)
        if sent:
            self.request_count += 1
        return sent

    def metadata(self) -> RequestMetadata:
        return RequestMetadata(
            correlation_id=self.correlation_id,
            request_count=self.request_count,
            http_status_code=self.last_status,
            timing_ms=(time.perf_counter() - self._start) * 1000.0,
            failed_ids=list(self.failed_ids),
        )


class PersevereAdapter:
    """
    Persistence adapter for a Persevere document store.

    Translates typed records and declarative queries into REST calls against
    per-kind collections (``/Books/``), registering a collection's class on
    first write.

    **Namespace API**:

        - ``adapter.records``: create, get, update, delete
        - ``adapter.query``: read_many, read_one, fluent builder, DataFrame export
        - ``adapter.classes``: known classes, refresh, register

    The capability interface (``create``, ``read_one``, ``read_many``,
    ``update``, ``delete``, ``get``) is also available on the adapter itself.

    :param uri_or_options: Store URL (``"http://localhost:8080"``) or a mapping
        with ``host``/``port``/``scheme``/``path``. Not needed when
        ``transport`` is given.
    :type uri_or_options: str or Mapping or None
    :param config: Optional configuration for timeouts, retries, class sync and logging.
    :type config: ~persevere_adapter.core.config.PersevereConfig or None
    :param transport: Pre-built transport to use instead of the HTTP transport.
    :type transport: ~persevere_adapter.core.protocols.Transport or None

    .. note::
        Construction lists the store's existing classes (unless
        ``config.sync_classes_on_init`` is False). A failed listing does not
        raise: it is logged and kept on :attr:`startup_error`, and later
        writes simply register the classes they need.

    Example::

        from persevere_adapter import PersevereAdapter, Record, RecordKind, Attribute, AttributeType

        BOOK = RecordKind("Book", [
            Attribute("title", AttributeType.STRING),
            Attribute("author", AttributeType.STRING),
        ])

        with PersevereAdapter({"host": "localhost", "port": 8080}) as adapter:
            book = Record(BOOK, data={"title": "Dune", "author": "Herbert"})
            adapter.create([book]).value    # 1
            dune = adapter.query.builder(BOOK).filter_eq("title", "Dune").execute().value
    """

    def __init__(
        self,
        uri_or_options: Optional[Union[str, Mapping[str, Any]]] = None,
        config: Optional[PersevereConfig] = None,
        *,
        transport: Optional[Transport] = None,
    ) -> None:
        self._config = config or PersevereConfig.from_env()
        if self._config.enable_logging:
            logging.getLogger(self._config.logger_name).setLevel(getattr(logging, self._config.log_level.upper()))

        self._session: Optional[requests.Session] = None
        self._owns_transport = transport is None
        if transport is None:
            if uri_or_options is None:
                raise ValueError("uri_or_options is required when no transport is given.")
            self.base_url: Optional[str] = build_base_url(uri_or_options)
            transport = PersevereTransport(self.base_url, self._config)
        else:
            self.base_url = getattr(transport, "base_url", None)
        self._transport: Transport = transport

        self._registry = _SchemaRegistry(self._transport)
        self.startup_error: Optional[PersevereError] = None
        if self._config.sync_classes_on_init:
            self.startup_error = self._registry.load()

        self.records = RecordOperations(self)
        self.query = QueryOperations(self)
        self.classes = ClassOperations(self)

    def __enter__(self) -> "PersevereAdapter":
        """
        Enter the context manager.

        Gives the HTTP transport a session for connection pooling.
        """
        if self._owns_transport and self._session is None:
            self._session = requests.Session()
            self._transport.use_session(self._session)  # type: ignore[attr-defined]
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Release transport resources. Safe to call multiple times.

        Transports passed in by the caller are left open.
        """
        if self._owns_transport:
            self._transport.close()  # type: ignore[attr-defined]
        self._session = None

    @contextmanager
    def _scoped_call(self, operation: str) -> Iterator[_CallScope]:
        scope = _CallScope(self, operation)
        logger.debug("%s started (correlation_id=%s)", operation, scope.correlation_id)
        try:
            yield scope
        finally:
            logger.debug(
                "%s finished: %d request(s) (correlation_id=%s)",
                operation,
                scope.request_count,
                scope.correlation_id,
            )

    # ------------------------------------------------------ capability interface

    def create(self, records: Union[Record, Sequence[Record]]) -> OperationResult[int]:
        """Create records. See :meth:`~persevere_adapter.operations.records.RecordOperations.create`."""
        return self.records.create(records)

    def read_one(self, query: Query) -> OperationResult[Optional[Record]]:
        """First match of ``query``. See :meth:`~persevere_adapter.operations.query.QueryOperations.read_one`."""
        return self.query.read_one(query)

    def read_many(self, query: Query) -> OperationResult[List[Record]]:
        """All matches of ``query``. See :meth:`~persevere_adapter.operations.query.QueryOperations.read_many`."""
        return self.query.read_many(query)

    read = read_many

    def update(
        self,
        target: Union[Query, Record, Sequence[Record]],
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> OperationResult[int]:
        """Update records. See :meth:`~persevere_adapter.operations.records.RecordOperations.update`."""
        return self.records.update(target, attributes)

    def delete(self, target: Union[Query, Record, Sequence[Record]]) -> OperationResult[int]:
        """Delete records. See :meth:`~persevere_adapter.operations.records.RecordOperations.delete`."""
        return self.records.delete(target)

    def get(self, kind: RecordKind, record_id: Any) -> OperationResult[Optional[Record]]:
        """Fetch one record by identifier. See :meth:`~persevere_adapter.operations.records.RecordOperations.get`."""
        return self.records.get(kind, record_id)


__all__ = ["PersevereAdapter"]
