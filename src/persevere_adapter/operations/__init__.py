# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespaces for the Persevere adapter.

- ``adapter.records``: :class:`~persevere_adapter.operations.records.RecordOperations`
- ``adapter.query``: :class:`~persevere_adapter.operations.query.QueryOperations`
- ``adapter.classes``: :class:`~persevere_adapter.operations.classes.ClassOperations`
"""

__all__ = []
