# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Class metadata operations namespace for the Persevere adapter."""

from __future__ import annotations

from typing import List, Union, TYPE_CHECKING

from ..core.errors import PersevereError
from ..core.results import OperationResult
from ..models.schema import RecordKind

if TYPE_CHECKING:
    from ..adapter import PersevereAdapter


__all__ = ["ClassOperations"]


class ClassOperations:
    """Namespace for the store's class (collection schema) metadata.

    Accessed via ``adapter.classes``.

    Example::

        adapter.classes.list()            # ['Authors', 'Books']
        adapter.classes.register(BOOK)    # OperationResult(False): already known
        adapter.classes.refresh()         # re-read the store's class listing
    """

    def __init__(self, adapter: PersevereAdapter) -> None:
        self._adapter = adapter

    def list(self) -> List[str]:
        """Collection names this adapter knows to have a class, sorted."""
        return self._adapter._registry.known

    def __contains__(self, name: object) -> bool:
        if isinstance(name, RecordKind):
            name = name.collection_name
        return name in self._adapter._registry

    def refresh(self) -> OperationResult[List[str]]:
        """
        Re-read the store's class listing.

        On failure the known set is kept as it was.

        :rtype: OperationResult[list[str]]
        """
        with self._adapter._scoped_call("classes.refresh") as scope:
            scope.request_count += 1
            error = self._adapter._registry.load()
            if error is not None:
                return OperationResult.failure(error, scope.metadata())
            return OperationResult.success(self._adapter._registry.known, scope.metadata())

    def register(self, kind: Union[RecordKind, str]) -> OperationResult[bool]:
        """
        Make sure the store has a class for ``kind``'s collection.

        :param kind: Record kind, or a collection name.
        :return: OperationResult containing True if a class was registered, False if it already existed.
        :rtype: OperationResult[bool]
        """
        name = kind.collection_name if isinstance(kind, RecordKind) else kind
        if not name:
            raise ValueError("collection name is required")
        with self._adapter._scoped_call("classes.register") as scope:
            try:
                sent = scope.ensure_registered(name)
            except PersevereError as exc:
                return OperationResult.failure(exc, scope.metadata())
            return OperationResult.success(sent, scope.metadata())
