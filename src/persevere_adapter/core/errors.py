# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured error types for the Persevere adapter.

Every failure surfaced by the adapter is a :class:`PersevereError` carrying a
stable ``code`` and an optional ``subcode`` (see
:mod:`persevere_adapter.core._error_codes`).
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from ._error_codes import _http_subcode, _is_transient_status


class PersevereError(Exception):
    """Base structured error for the Persevere adapter."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(PersevereError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class TypeCoercionError(ValidationError):
    """A value could not be cast to its declared attribute type."""


class UnknownOperatorError(ValidationError):
    """A query condition used a comparison the store's filter syntax lacks."""


class DecodeError(PersevereError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="decode_error", subcode=subcode, details=details, source="server")


class RegistrationError(PersevereError):
    """Registering a class for a collection failed."""

    def __init__(
        self,
        message: str,
        *,
        collection: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        d = dict(details or {})
        d["collection"] = collection
        super().__init__(
            message,
            code="registration_error",
            subcode=subcode,
            status_code=status_code,
            details=d,
            source="server",
        )
        self.collection = collection


class TransportError(PersevereError):
    """The request never produced a usable response (connection, timeout, ...)."""

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        is_transient: bool = True,
        code: str = "transport_error",
        source: str = "client",
    ) -> None:
        super().__init__(
            message,
            code=code,
            subcode=subcode,
            status_code=status_code,
            details=details,
            source=source,
            is_transient=is_transient,
        )


class HttpError(TransportError):
    """The store answered with a status code the operation does not accept."""

    def __init__(
        self,
        message: str,
        status_code: int,
        *,
        method: Optional[str] = None,
        path: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = dict(details or {})
        if method is not None:
            d["method"] = method
        if path is not None:
            d["path"] = path
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        super().__init__(
            message,
            code="http_error",
            subcode=_http_subcode(status_code),
            status_code=status_code,
            details=d,
            source="server",
            is_transient=_is_transient_status(status_code),
        )


def _http_error_from_response(method: str, path: str, response: Any) -> HttpError:
    """Build an :class:`HttpError` for a response whose status the operation does not accept."""
    status = int(getattr(response, "status_code", 0) or 0)
    body = getattr(response, "body", "") or ""
    return HttpError(
        f"{method} {path} failed with status {status}.",
        status,
        method=method,
        path=path,
        body_excerpt=body[:200] if body else None,
    )


__all__ = [
    "PersevereError",
    "ValidationError",
    "TypeCoercionError",
    "UnknownOperatorError",
    "DecodeError",
    "RegistrationError",
    "TransportError",
    "HttpError",
]
