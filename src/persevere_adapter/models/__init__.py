# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and type definitions for the Persevere adapter.

- :class:`~persevere_adapter.models.schema.RecordKind`: Attribute schema of a record type.
- :class:`~persevere_adapter.models.record.Record`: Typed record with dict-like access.
- :class:`~persevere_adapter.models.query.Query`: Immutable declarative query.
- :class:`~persevere_adapter.models.query.QueryBuilder`: Fluent query builder.

Import models from their modules; this package does not re-export them.
"""

__all__ = []
