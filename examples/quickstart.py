# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Walk through create / query / update / delete against a running Persevere server.

Usage::

    python examples/quickstart.py http://localhost:8080
"""

import logging
import sys
from datetime import datetime
from decimal import Decimal

from persevere_adapter import (
    Attribute,
    AttributeType,
    PersevereAdapter,
    PersevereConfig,
    PersevereError,
    Query,
    Record,
    RecordKind,
)

BOOK = RecordKind(
    "Book",
    [
        Attribute("title", AttributeType.STRING),
        Attribute("author", AttributeType.STRING),
        Attribute("year", AttributeType.INTEGER),
        Attribute("price", AttributeType.DECIMAL),
        Attribute("created_at", AttributeType.DATETIME),
    ],
)


def log_call(call: str) -> None:
    print({"call": call})


def main() -> int:
    base_url = sys.argv[1] if len(sys.argv) > 1 else input("Persevere URL (e.g. http://localhost:8080): ").strip()
    if not base_url:
        print("No URL entered; exiting.")
        return 1

    logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = PersevereConfig(enable_logging=True, log_level="INFO")

    with PersevereAdapter(base_url, config) as adapter:
        if adapter.startup_error is not None:
            print(f"Could not list classes: {adapter.startup_error.message}")
        print({"known_classes": adapter.classes.list()})

        books = [
            Record(BOOK, data={"title": "Dune", "author": "Herbert", "year": 1965, "price": Decimal("9.99")}),
            Record(BOOK, data={"title": "Hyperion", "author": "Simmons", "year": "1989"}),
            Record(BOOK, data={"title": "Neuromancer", "author": "Gibson", "year": 1984, "created_at": datetime.now()}),
        ]

        log_call("adapter.create(books)")
        created = adapter.create(books).with_detail_response()
        print({"created": created.result, "requests": created.telemetry["request_count"]})
        print({"ids": [b.id for b in books]})

        log_call("adapter.query.builder(BOOK).filter_gt('year', 1970).execute()")
        for book in adapter.query.builder(BOOK).filter_gt("year", 1970).execute():
            print({"id": book.id, "title": book["title"], "year": book["year"]})

        log_call("adapter.query.to_dataframe(Query(BOOK))")
        print(adapter.query.to_dataframe(Query(BOOK)))

        log_call("adapter.update(query, {'price': 7.5})")
        query = adapter.query.builder(BOOK).filter_contains("title", "Dune").build()
        print({"updated": adapter.update(query, {"price": 7.5}).value})

        log_call("adapter.delete(books)")
        deleted = adapter.delete(books)
        print({"deleted": deleted.value, "failed_ids": deleted.metadata.failed_ids})

        log_call(f"adapter.get(BOOK, {books[0].id!r})")
        print({"after_delete": adapter.get(BOOK, books[0].id).value})
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except PersevereError as ex:
        print({"error": ex.to_dict()})
        sys.exit(1)
