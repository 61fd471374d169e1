# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Persevere adapter.

This module contains the foundational components including configuration,
the HTTP client, result types, collaborator protocols, and error handling.
"""

from .config import PersevereConfig, build_base_url
from .errors import (
    PersevereError,
    ValidationError,
    TypeCoercionError,
    UnknownOperatorError,
    DecodeError,
    RegistrationError,
    TransportError,
    HttpError,
)
from .protocols import DataAdapter, Transport, TransportResponse
from .results import AdapterResponse, OperationResult, RequestMetadata

__all__ = [
    "PersevereConfig",
    "build_base_url",
    "PersevereError",
    "ValidationError",
    "TypeCoercionError",
    "UnknownOperatorError",
    "DecodeError",
    "RegistrationError",
    "TransportError",
    "HttpError",
    "DataAdapter",
    "Transport",
    "TransportResponse",
    "AdapterResponse",
    "OperationResult",
    "RequestMetadata",
]
