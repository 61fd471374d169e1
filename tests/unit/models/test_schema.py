# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import pytest

from persevere_adapter.core.errors import ValidationError
from persevere_adapter.models.schema import Attribute, AttributeType, RecordKind


class TestAttribute:
    def test_defaults(self):
        attribute = Attribute("title")
        assert attribute.type is AttributeType.STRING
        assert attribute.field_name == "title"

    def test_field_override(self):
        assert Attribute("title", field="name").field_name == "name"

    def test_type_from_string(self):
        assert Attribute("year", "integer").type is AttributeType.INTEGER

    def test_requires_name(self):
        with pytest.raises(ValueError):
            Attribute("")

    def test_textual_types(self):
        assert AttributeType.TEXT.is_textual
        assert not AttributeType.INTEGER.is_textual


class TestRecordKind:
    def test_key_is_declared_when_missing(self):
        kind = RecordKind("Book", [Attribute("title")])
        assert [a.name for a in kind] == ["id", "title"]
        assert kind.key_attribute.type is AttributeType.STRING
        assert [a.name for a in kind.value_attributes] == ["title"]

    def test_declared_key_kept(self):
        kind = RecordKind("Counter", [Attribute("n", AttributeType.INTEGER), Attribute("id", AttributeType.INTEGER)])
        assert [a.name for a in kind.attributes] == ["n", "id"]
        assert kind.key_attribute.type is AttributeType.INTEGER

    def test_custom_key(self):
        kind = RecordKind("Book", [Attribute("title")], key="isbn")
        assert kind.key == "isbn"
        assert "isbn" in kind

    def test_tuple_specs(self):
        kind = RecordKind("Book", [("title", "string"), ("year", AttributeType.INTEGER)])
        assert kind.attribute("year").type is AttributeType.INTEGER

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError):
            RecordKind("Book", [Attribute("title"), Attribute("title", AttributeType.TEXT)])

    def test_requires_name(self):
        with pytest.raises(ValueError):
            RecordKind("")

    def test_unknown_attribute(self):
        kind = RecordKind("Book", [Attribute("title")])
        with pytest.raises(ValidationError) as exc_info:
            kind.attribute("isbn")
        assert exc_info.value.subcode == "validation_unknown_attribute"
        assert exc_info.value.details == {"kind": "Book", "attribute": "isbn"}

    def test_collection_naming(self):
        kind = RecordKind("blog_post")
        assert kind.collection_name == "BlogPosts"
        assert kind.collection_path == "/BlogPosts/"

    def test_frozen_and_hashable(self):
        kind = RecordKind("Book", [Attribute("title")])
        with pytest.raises(AttributeError):
            kind.name = "Other"
        assert kind == RecordKind("Book", [Attribute("title")])
        assert hash(kind) == hash(RecordKind("Book", [Attribute("title")]))
