# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Persevere document-store adapter.

Stores typed records in a Persevere server's per-kind collections and reads
them back through declarative queries.
"""

from .adapter import PersevereAdapter
from .core.config import PersevereConfig
from .core.errors import (
    DecodeError,
    HttpError,
    PersevereError,
    RegistrationError,
    TransportError,
    TypeCoercionError,
    UnknownOperatorError,
    ValidationError,
)
from .core.results import OperationResult
from .models.query import Condition, Operator, Query, QueryBuilder
from .models.record import Record
from .models.schema import Attribute, AttributeType, RecordKind

__version__ = "0.1.0"

__all__ = [
    "PersevereAdapter",
    "PersevereConfig",
    "PersevereError",
    "ValidationError",
    "TypeCoercionError",
    "UnknownOperatorError",
    "DecodeError",
    "RegistrationError",
    "TransportError",
    "HttpError",
    "OperationResult",
    "Operator",
    "Condition",
    "Query",
    "QueryBuilder",
    "Record",
    "Attribute",
    "AttributeType",
    "RecordKind",
    "__version__",
]
