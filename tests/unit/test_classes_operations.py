# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest

from persevere_adapter.core.errors import HttpError, RegistrationError
from persevere_adapter.operations.classes import ClassOperations

from tests.unit.test_helpers import AUTHOR, BOOK, make_adapter


class TestClassOperations(unittest.TestCase):
    """Unit tests for the adapter.classes namespace."""

    def test_namespace_exists(self):
        adapter, _ = make_adapter()
        self.assertIsInstance(adapter.classes, ClassOperations)

    def test_list_after_startup_sync(self):
        adapter, _ = make_adapter(classes=["Books", "Authors", "Object"])
        self.assertEqual(adapter.classes.list(), ["Authors", "Books", "Object"])

    def test_contains_accepts_kind_or_name(self):
        adapter, _ = make_adapter(classes=["Books"])
        self.assertIn(BOOK, adapter.classes)
        self.assertIn("Books", adapter.classes)
        self.assertNotIn(AUTHOR, adapter.classes)

    def test_register_new_class(self):
        adapter, transport = make_adapter([(201, {"id": "Authors"})])

        result = adapter.classes.register(AUTHOR)

        self.assertIs(result.value, True)
        self.assertEqual(transport.calls, [("POST", "/Class/", {"id": "Authors", "extends": {"$ref": "/Class/Object"}})])
        self.assertEqual(result.metadata.request_count, 1)
        self.assertIn("Authors", adapter.classes)

    def test_register_known_class_is_noop(self):
        adapter, transport = make_adapter(classes=["Books"])

        result = adapter.classes.register(BOOK)

        self.assertIs(result.value, False)
        self.assertEqual(len(transport.calls), 1)
        self.assertEqual(result.metadata.request_count, 0)

    def test_register_by_name(self):
        adapter, transport = make_adapter([(200, "")])

        self.assertTrue(adapter.classes.register("Invoices").value)
        self.assertEqual(transport.calls[0][2]["id"], "Invoices")

    def test_register_rejected(self):
        adapter, _ = make_adapter([(500, "nope")])

        result = adapter.classes.register(BOOK)

        self.assertIsInstance(result.error, RegistrationError)
        self.assertEqual(result.error.details["collection"], "Books")
        self.assertEqual(result.error.details["body_excerpt"], "nope")
        self.assertNotIn(BOOK, adapter.classes)

    def test_register_requires_name(self):
        adapter, _ = make_adapter()
        with self.assertRaises(ValueError):
            adapter.classes.register("")

    def test_refresh_replaces_known_set(self):
        adapter, transport = make_adapter([(200, ["Class/Authors"])], classes=["Books"])

        result = adapter.classes.refresh()

        self.assertEqual(result.value, ["Authors"])
        self.assertEqual(adapter.classes.list(), ["Authors"])
        self.assertEqual(transport.methods(), [("GET", "/Class[=id]"), ("GET", "/Class[=id]")])

    def test_refresh_failure_keeps_known_set(self):
        adapter, _ = make_adapter([(503, "")], classes=["Books"])

        result = adapter.classes.refresh()

        self.assertTrue(result.failed)
        self.assertIsInstance(result.error, HttpError)
        self.assertEqual(adapter.classes.list(), ["Books"])


if __name__ == "__main__":
    unittest.main()
