# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import datetime as _dt
import unittest
from decimal import Decimal

import pandas as pd

from persevere_adapter.core.errors import DecodeError, HttpError, UnknownOperatorError
from persevere_adapter.models.query import Condition, Operator, Query, QueryBuilder
from persevere_adapter.models.record import Record
from persevere_adapter.operations.query import QueryOperations

from tests.unit.test_helpers import BOOK, book_json, make_adapter


class TestQueryOperations(unittest.TestCase):
    """Unit tests for the adapter.query namespace."""

    def test_namespace_exists(self):
        adapter, _ = make_adapter()
        self.assertIsInstance(adapter.query, QueryOperations)

    def test_builder_returns_bound_query_builder(self):
        adapter, _ = make_adapter()
        builder = adapter.query.builder(BOOK)
        self.assertIsInstance(builder, QueryBuilder)
        self.assertIs(builder._query_ops, adapter.query)

    def test_read_many_without_conditions_returns_all_in_order(self):
        adapter, transport = make_adapter(
            [
                (
                    200,
                    [
                        book_json("Books/1", "A", "X", "1999", price="4.50", in_print="true"),
                        book_json("Books/2", "B", "Y", 2005, created_at="2020-01-01T00:00:00"),
                        book_json("Books/3", "C", "Z"),
                    ],
                )
            ]
        )

        records = adapter.query.read_many(Query(BOOK)).value

        self.assertEqual(transport.methods(), [("GET", "/Books/")])
        self.assertEqual([r.id for r in records], ["1", "2", "3"])
        self.assertEqual(records[0]["year"], 1999)
        self.assertEqual(records[0]["price"], Decimal("4.50"))
        self.assertIs(records[0]["in_print"], True)
        self.assertEqual(records[1]["created_at"], _dt.datetime(2020, 1, 1))
        self.assertNotIn("year", records[2])
        self.assertTrue(all(isinstance(r, Record) for r in records))

    def test_read_many_with_conditions_builds_filter(self):
        adapter, transport = make_adapter([(200, [])])
        query = Query(
            BOOK,
            [
                Condition(Operator.EQL, BOOK.attribute("title"), "Hello, World!"),
                Condition(Operator.GT, BOOK.attribute("year"), 1999),
            ],
        )

        result = adapter.query.read_many(query)

        self.assertEqual(result.value, [])
        self.assertEqual(transport.calls[0][1], "/Books/?title='Hello%2C%20World%21'&year>1999")

    def test_read_many_encodes_reserved_characters(self):
        adapter, transport = make_adapter([(200, [])])
        query = Query(BOOK, [Condition(Operator.EQL, BOOK.attribute("title"), "C# & .NET")])

        adapter.query.read_many(query)

        self.assertEqual(transport.calls[0][1], "/Books/?title='C%23%20%26%20.NET'")

    def test_read_many_projects_fields(self):
        adapter, _ = make_adapter([(200, [book_json("1", "A", "X", 2000)])])
        query = Query(BOOK, fields=[BOOK.attribute("title")])

        record = adapter.query.read_many(query).value[0]

        self.assertEqual(record.id, "1")
        self.assertEqual(record.to_dict(), {"title": "A"})

    def test_read_many_failure_is_not_empty_list(self):
        adapter, _ = make_adapter([(500, "Internal Server Error")])

        result = adapter.query.read_many(Query(BOOK))

        self.assertTrue(result.failed)
        self.assertIsNone(result.result)
        self.assertIsInstance(result.error, HttpError)
        self.assertEqual(result.error.details["path"], "/Books/")
        with self.assertRaises(HttpError):
            list(result)

    def test_read_many_non_array_body(self):
        adapter, _ = make_adapter([(200, {"id": "1"})])

        result = adapter.query.read_many(Query(BOOK))

        self.assertIsInstance(result.error, DecodeError)
        self.assertEqual(result.error.subcode, "decode_unexpected_shape")

    def test_read_many_undecodable_value(self):
        adapter, _ = make_adapter([(200, [book_json("1", "A", "X", "not-a-year")])])

        result = adapter.query.read_many(Query(BOOK))

        self.assertIsInstance(result.error, DecodeError)
        self.assertEqual(result.error.subcode, "decode_coercion_failed")
        self.assertEqual(result.error.details["field"], "year")

    def test_read_many_unknown_operator_sends_nothing(self):
        adapter, transport = make_adapter()
        query = Query(BOOK, [Condition("between", BOOK.attribute("year"), 2000)])

        result = adapter.query.read_many(query)

        self.assertIsInstance(result.error, UnknownOperatorError)
        self.assertEqual(transport.calls, [])

    def test_read_many_rejects_non_query(self):
        adapter, _ = make_adapter()
        with self.assertRaises(TypeError):
            adapter.query.read_many(BOOK)

    def test_read_one_returns_first(self):
        adapter, _ = make_adapter([(200, [book_json("1", "A", "X"), book_json("2", "B", "Y")])])

        record = adapter.query.read_one(Query(BOOK)).value

        self.assertEqual(record.id, "1")

    def test_read_one_no_match(self):
        adapter, _ = make_adapter([(200, [])])

        result = adapter.query.read_one(Query(BOOK))

        self.assertTrue(result.succeeded)
        self.assertIsNone(result.value)

    def test_read_one_failure(self):
        adapter, _ = make_adapter([(502, "")])

        result = adapter.query.read_one(Query(BOOK))

        self.assertTrue(result.failed)
        self.assertEqual(result.error.subcode, "http_502")

    def test_builder_execute(self):
        adapter, transport = make_adapter([(200, [book_json("1", "Dune", "Herbert", 1965)])])

        result = (
            adapter.query.builder(BOOK)
            .select("title", "year")
            .filter_contains("title", "Dun")
            .filter_le("year", 1970)
            .execute()
        )

        self.assertEqual(transport.calls[0][1], "/Books/?title~'*Dun*'&year<=1970")
        self.assertEqual(result.value[0].to_dict(), {"title": "Dune", "year": 1965})

    def test_to_dataframe(self):
        adapter, _ = make_adapter([(200, [book_json("1", "A", "X", 2000), book_json("2", "B", "Y", 2010)])])
        query = QueryBuilder(BOOK).select("title", "year").build()

        df = adapter.query.to_dataframe(query)

        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(list(df.columns), ["id", "title", "year"])
        self.assertEqual(df["title"].tolist(), ["A", "B"])

    def test_to_dataframe_raises_on_failure(self):
        adapter, _ = make_adapter([(500, "")])
        with self.assertRaises(HttpError):
            adapter.query.to_dataframe(Query(BOOK))


if __name__ == "__main__":
    unittest.main()
