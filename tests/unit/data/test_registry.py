# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import threading

import pytest

from persevere_adapter.core.errors import DecodeError, HttpError, RegistrationError, TransportError
from persevere_adapter.data._registry import _SchemaRegistry, _class_names

from tests.unit.test_helpers import ScriptedTransport


class TestClassNames:
    def test_keeps_last_segment(self):
        assert _class_names(["Class/Books", "/Class/Authors/", "Object"]) == ["Books", "Authors", "Object"]

    def test_rejects_non_list(self):
        with pytest.raises(DecodeError):
            _class_names({"Books": True})

    def test_rejects_non_string_entries(self):
        with pytest.raises(DecodeError):
            _class_names([{"id": "Class/Books"}])


class TestSchemaRegistry:
    def test_load_seeds_known_set(self):
        transport = ScriptedTransport([(200, ["Class/Books", "Class/Authors"])])
        registry = _SchemaRegistry(transport)

        assert registry.load() is None

        assert transport.methods() == [("GET", "/Class[=id]")]
        assert registry.known == ["Authors", "Books"]
        assert "Books" in registry
        assert len(registry) == 2

    def test_load_replaces_previous_set(self):
        transport = ScriptedTransport([(200, ["Class/Books"]), (200, ["Class/Authors"])])
        registry = _SchemaRegistry(transport)
        registry.load()
        registry.load()
        assert registry.known == ["Authors"]

    @pytest.mark.parametrize(
        "response,error_type",
        [
            ((500, "down"), HttpError),
            ((200, "not json"), DecodeError),
            ((200, {"a": 1}), DecodeError),
            (TransportError("refused"), TransportError),
        ],
    )
    def test_load_failure_is_returned_not_raised(self, response, error_type):
        transport = ScriptedTransport([(200, ["Class/Books"]), response])
        registry = _SchemaRegistry(transport)
        registry.load()

        error = registry.load()

        assert isinstance(error, error_type)
        assert registry.known == ["Books"]

    def test_listing_http_error_details(self):
        registry = _SchemaRegistry(ScriptedTransport([(404, "missing")]))
        error = registry.load()
        assert error.status_code == 404
        assert error.details["reason"] == "registration_listing_failed"
        assert error.details["path"] == "/Class[=id]"

    def test_ensure_registered_posts_class(self):
        transport = ScriptedTransport([(201, {"id": "Books"})])
        registry = _SchemaRegistry(transport)

        assert registry.ensure_registered("Books") is True

        assert transport.calls == [("POST", "/Class/", {"id": "Books", "extends": {"$ref": "/Class/Object"}})]
        assert "Books" in registry

    def test_ensure_registered_is_idempotent(self):
        transport = ScriptedTransport([(201, "")])
        registry = _SchemaRegistry(transport)

        assert registry.ensure_registered("Books") is True
        assert registry.ensure_registered("Books") is False
        assert len(transport.calls) == 1

    def test_known_class_is_not_registered(self):
        transport = ScriptedTransport([(200, ["Class/Books"])])
        registry = _SchemaRegistry(transport)
        registry.load()

        assert registry.ensure_registered("Books") is False
        assert len(transport.calls) == 1

    def test_rejected_registration(self):
        transport = ScriptedTransport([(400, "bad class"), (201, "")])
        registry = _SchemaRegistry(transport)

        with pytest.raises(RegistrationError) as exc_info:
            registry.ensure_registered("Books")
        assert exc_info.value.subcode == "registration_rejected"
        assert exc_info.value.status_code == 400
        assert "Books" not in registry

        assert registry.ensure_registered("Books") is True

    def test_transport_error_propagates(self):
        registry = _SchemaRegistry(ScriptedTransport([TransportError("refused")]))
        with pytest.raises(TransportError):
            registry.ensure_registered("Books")
        assert len(registry) == 0

    def test_concurrent_registration_sends_one_request(self):
        transport = ScriptedTransport([(201, "")])
        registry = _SchemaRegistry(transport)
        results = []

        def worker():
            results.append(registry.ensure_registered("Books"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(transport.calls) == 1
        assert sorted(results) == [False] * 7 + [True]
