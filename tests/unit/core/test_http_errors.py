# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import pytest

from persevere_adapter.core._error_codes import _http_subcode, _is_transient_status
from persevere_adapter.core.errors import (
    DecodeError,
    HttpError,
    PersevereError,
    RegistrationError,
    TransportError,
    TypeCoercionError,
    UnknownOperatorError,
    ValidationError,
    _http_error_from_response,
)
from persevere_adapter.core.protocols import TransportResponse


def test_http_error_from_response_404():
    err = _http_error_from_response("GET", "/Books/1", TransportResponse(404, "Not found"))
    assert isinstance(err, HttpError)
    assert err.status_code == 404
    assert err.subcode == "http_404"
    assert err.is_transient is False
    assert err.source == "server"
    assert err.details == {"method": "GET", "path": "/Books/1", "body_excerpt": "Not found"}
    assert "404" in err.message


def test_http_error_transient_statuses():
    assert HttpError("throttled", 429).subcode == "http_429"
    assert HttpError("throttled", 429).is_transient is True
    assert HttpError("server", 500).subcode == "http_500"
    assert HttpError("server", 500).is_transient is True
    assert HttpError("bad", 400).is_transient is False


def test_body_excerpt_truncated():
    err = _http_error_from_response("POST", "/Books/", TransportResponse(500, "x" * 1000))
    assert len(err.details["body_excerpt"]) == 200


def test_empty_body_has_no_excerpt():
    err = _http_error_from_response("DELETE", "/Books/1", TransportResponse(409, ""))
    assert "body_excerpt" not in err.details


def test_http_subcode_format():
    assert _http_subcode(404) == "http_404"
    assert _http_subcode(418) == "http_418"


def test_is_transient_status():
    assert _is_transient_status(429)
    assert _is_transient_status(503)
    assert not _is_transient_status(404)


def test_hierarchy():
    assert issubclass(HttpError, TransportError)
    assert issubclass(TypeCoercionError, ValidationError)
    assert issubclass(UnknownOperatorError, ValidationError)
    for cls in (ValidationError, DecodeError, RegistrationError, TransportError):
        assert issubclass(cls, PersevereError)


def test_codes_and_sources():
    assert ValidationError("v").code == "validation_error"
    assert ValidationError("v").source == "client"
    assert DecodeError("d").code == "decode_error"
    assert DecodeError("d").source == "server"
    assert TransportError("t").code == "transport_error"
    assert TransportError("t").is_transient is True


def test_registration_error_carries_collection():
    err = RegistrationError("rejected", collection="Books", status_code=403, details={"body_excerpt": "no"})
    assert err.collection == "Books"
    assert err.details == {"body_excerpt": "no", "collection": "Books"}
    assert err.code == "registration_error"


def test_to_dict():
    err = ValidationError("bad value", subcode="validation_coercion_failed", details={"type": "integer"})
    d = err.to_dict()
    assert d["message"] == "bad value"
    assert d["code"] == "validation_error"
    assert d["subcode"] == "validation_coercion_failed"
    assert d["details"] == {"type": "integer"}
    assert d["is_transient"] is False
    assert d["timestamp"]


def test_errors_are_raisable():
    with pytest.raises(PersevereError) as exc_info:
        raise UnknownOperatorError("between")
    assert str(exc_info.value) == "between"
