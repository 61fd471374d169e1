# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Seams between the adapter and its collaborators.

:class:`Transport` is what the CRUD operations consume to talk to the store;
:class:`DataAdapter` is the capability interface every store-backed adapter
exposes to the persistence layer.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union, runtime_checkable

from ._error_codes import DECODE_INVALID_JSON
from .errors import DecodeError

if TYPE_CHECKING:
    from ..models.query import Query
    from ..models.record import Record
    from ..models.schema import RecordKind
    from .results import OperationResult


@dataclass
class TransportResponse:
    """
    Status code and raw body of one transport call.

    :param status_code: HTTP status code.
    :type status_code: int
    :param body: Raw response body.
    :type body: str
    :param headers: Response headers.
    :type headers: dict[str, str]
    """

    status_code: int
    body: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """
        Decode the body as JSON.

        :raises ~persevere_adapter.core.errors.DecodeError: If the body is not valid JSON.
        """
        try:
            return json.loads(self.body)
        except (TypeError, ValueError) as exc:
            raise DecodeError(
                f"Response body is not valid JSON (status={self.status_code}).",
                subcode=DECODE_INVALID_JSON,
                details={"body_excerpt": (self.body or "")[:200]},
            ) from exc


@runtime_checkable
class Transport(Protocol):
    """
    REST transport the CRUD operations run on.

    Paths are store-relative (``/Books/``, ``/Books/?title='Dune'``). Connection
    level failures raise :class:`~persevere_adapter.core.errors.TransportError`;
    any HTTP answer comes back as a :class:`TransportResponse`.
    """

    def create(self, path: str, payload: Mapping[str, Any]) -> TransportResponse:
        ...

    def retrieve(self, path: str) -> TransportResponse:
        ...

    def update(self, path: str, payload: Mapping[str, Any]) -> TransportResponse:
        ...

    def delete(self, path: str) -> TransportResponse:
        ...


@runtime_checkable
class DataAdapter(Protocol):
    """Capability interface of a store-backed adapter."""

    def create(self, records: Sequence["Record"]) -> "OperationResult[int]":
        ...

    def read_one(self, query: "Query") -> "OperationResult[Optional[Record]]":
        ...

    def read_many(self, query: "Query") -> "OperationResult[List[Record]]":
        ...

    def update(
        self,
        target: Union["Query", Sequence["Record"]],
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> "OperationResult[int]":
        ...

    def delete(self, target: Union["Query", Sequence["Record"]]) -> "OperationResult[int]":
        ...

    def get(self, kind: "RecordKind", record_id: Any) -> "OperationResult[Optional[Record]]":
        ...


__all__ = ["TransportResponse", "Transport", "DataAdapter"]
