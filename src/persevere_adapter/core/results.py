# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Result types for Persevere adapter operations.

Every public adapter operation returns an :class:`OperationResult`, a typed
result channel carrying either the operation's value or the
:class:`~persevere_adapter.core.errors.PersevereError` that stopped it, plus
:class:`RequestMetadata` for diagnostics.

Example::

    result = adapter.read_many(query)
    if result.succeeded:
        for record in result:
            print(record["title"])
    else:
        print(result.error.to_dict())

    # Or let the error propagate
    records = adapter.read_many(query).value
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterator, List, Optional, TypeVar

from .errors import PersevereError

T = TypeVar("T")


@dataclass(frozen=True)
class RequestMetadata:
    """
    Request metadata for diagnostics and tracing.

    :param correlation_id: Adapter-generated ID shared by every HTTP request
        issued within one operation.
    :type correlation_id: :class:`str` | None
    :param request_count: Number of transport calls issued by the operation.
    :type request_count: :class:`int`
    :param http_status_code: Status code of the last transport call.
    :type http_status_code: :class:`int` | None
    :param timing_ms: Operation duration in milliseconds.
    :type timing_ms: :class:`float` | None
    :param failed_ids: Record identifiers whose request failed but did not
        abort the operation (deletes only).
    :type failed_ids: :class:`list` of :class:`str`
    """

    correlation_id: Optional[str] = None
    request_count: int = 0
    http_status_code: Optional[int] = None
    timing_ms: Optional[float] = None
    failed_ids: List[str] = field(default_factory=list)


@dataclass
class AdapterResponse(Generic[T]):
    """
    Operation result combined with telemetry data.

    :param result: The operation value (``None`` when the operation failed).
    :param error: The error that stopped the operation, if any.
    :param telemetry: ``correlation_id``, ``request_count``,
        ``http_status_code``, ``timing_ms`` and ``failed_ids``.
    """

    result: Optional[T]
    error: Optional[PersevereError] = None
    telemetry: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """
    Outcome of an adapter operation: a value or an explicit error.

    A failed result never masquerades as a value: ``value`` re-raises the
    stored error, so "no matches" (``[]``) and "store unreachable" stay
    distinguishable.

    :param result: The operation value when it succeeded.
    :param error: The error that stopped the operation.
    :param metadata: Request metadata.
    """

    result: Optional[T] = None
    error: Optional[PersevereError] = None
    metadata: RequestMetadata = field(default_factory=RequestMetadata)

    @classmethod
    def success(cls, result: T, metadata: Optional[RequestMetadata] = None) -> "OperationResult[T]":
        return cls(result=result, metadata=metadata or RequestMetadata())

    @classmethod
    def failure(cls, error: PersevereError, metadata: Optional[RequestMetadata] = None) -> "OperationResult[T]":
        return cls(error=error, metadata=metadata or RequestMetadata())

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def value(self) -> T:
        """
        The operation value.

        :raises ~persevere_adapter.core.errors.PersevereError: The stored error, if the operation failed.
        """
        self.raise_for_error()
        return self.result  # type: ignore[return-value]

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error

    def with_detail_response(self) -> AdapterResponse[T]:
        """
        Return the result together with its telemetry.

        Example::

            response = adapter.create([book]).with_detail_response()
            print(response.result)  # 1
            print(response.telemetry["request_count"])  # 2 (class registration + create)
        """
        telemetry: Dict[str, Any] = {
            "correlation_id": self.metadata.correlation_id,
            "request_count": self.metadata.request_count,
            "http_status_code": self.metadata.http_status_code,
            "timing_ms": self.metadata.timing_ms,
            "failed_ids": list(self.metadata.failed_ids),
        }
        return AdapterResponse(result=self.result, error=self.error, telemetry=telemetry)

    def __iter__(self) -> Iterator:
        """
        Iterate the value when it is a sequence.

        :raises ~persevere_adapter.core.errors.PersevereError: If the operation failed.
        """
        value = self.value
        if isinstance(value, (list, tuple)):
            return iter(value)
        return iter([value])

    def __getitem__(self, key: Any) -> Any:
        return self.value[key]  # type: ignore[index]

    def __repr__(self) -> str:
        if self.error is not None:
            return f"OperationResult(error={self.error!r})"
        return f"OperationResult({self.result!r})"


__all__ = ["RequestMetadata", "AdapterResponse", "OperationResult"]
