# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Collection naming: record kind name -> classified, pluralized collection name.

``"book"``, ``"Book"``, ``"books"`` and ``"library.Book"`` all map to the
``Books`` collection; ``"blog_post"`` maps to ``BlogPosts``. English
inflection rules come from the ``inflection`` package.
"""

from __future__ import annotations

import re

import inflection

_NON_WORD = re.compile(r"[^A-Za-z0-9]+")


def classify(name: str) -> str:
    """
    Class-style name for a record kind.

    Drops any module prefix, singularizes the remainder and CamelCases it.

    :raises ValueError: If ``name`` holds no word characters.
    """
    short = re.split(r"\.|::", (name or "").strip())[-1]
    words = _NON_WORD.sub("_", short).strip("_")
    if not words:
        raise ValueError(f"Cannot derive a class name from {name!r}")
    return inflection.camelize(inflection.singularize(inflection.underscore(words)))


def collection_name(kind_name: str) -> str:
    """Pluralized class name under which records of ``kind_name`` are stored."""
    return inflection.pluralize(classify(kind_name))


def collection_path(name: str) -> str:
    """Store-relative path of a collection: ``/<CollectionName>/``."""
    return f"/{name}/"


__all__ = ["classify", "collection_name", "collection_path"]
