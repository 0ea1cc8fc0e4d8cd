"""Tests for the graphql-core schema adapter."""

from __future__ import annotations

import pytest
from graphql import GraphQLBoolean, GraphQLList, GraphQLNonNull, GraphQLString

from docquery.exceptions import FieldNotFoundError
from docquery.schema import (
    describe_type,
    is_boolean,
    is_list_valued,
    lookup_field_type,
    possible_type_names,
)


class TestDescribeType:
    def test_non_null_list(self) -> None:
        info = describe_type(GraphQLNonNull(GraphQLList(GraphQLNonNull(GraphQLString))))
        assert info.is_list is True
        assert info.named_type is GraphQLString
        assert info.name is None

    def test_scalar(self) -> None:
        info = describe_type(GraphQLNonNull(GraphQLBoolean))
        assert info.is_list is False
        assert info.name == "Boolean"
        assert info.is_boolean is True

    def test_missing_type(self) -> None:
        info = describe_type(None)
        assert info.is_list is False
        assert info.named_type is None

    def test_shortcuts(self) -> None:
        assert is_list_valued(GraphQLList(GraphQLString))
        assert not is_list_valued(GraphQLString)
        assert is_boolean(GraphQLBoolean)
        assert not is_boolean(GraphQLList(GraphQLBoolean))


class TestLookupFieldType:
    def test_field_on_object(self, schema) -> None:
        field_type = lookup_field_type(schema.get_type("MarkdownRemark"), "frontmatter")
        assert field_type is schema.get_type("Frontmatter")

    def test_field_through_list_wrapper(self, schema) -> None:
        authors = lookup_field_type(schema.get_type("MarkdownRemark"), "authors")
        assert lookup_field_type(authors, "name") is GraphQLString

    def test_field_on_interface(self, schema) -> None:
        assert lookup_field_type(schema.get_type("Node"), "hidden") is GraphQLBoolean

    def test_unknown_field(self, schema) -> None:
        with pytest.raises(FieldNotFoundError) as exc_info:
            lookup_field_type(schema.get_type("File"), "nmae", full_path="nmae")
        assert exc_info.value.type_name == "File"
        assert "name" in exc_info.value.suggestions

    def test_scalar_has_no_fields(self) -> None:
        with pytest.raises(FieldNotFoundError):
            lookup_field_type(GraphQLString, "length")


class TestPossibleTypeNames:
    def test_object_type(self, schema) -> None:
        assert possible_type_names(schema, schema.get_type("File")) == ["File"]

    def test_interface(self, schema) -> None:
        names = possible_type_names(schema, schema.get_type("Node"))
        assert sorted(names) == ["File", "MarkdownRemark"]

    def test_union(self, schema) -> None:
        names = possible_type_names(schema, schema.get_type("Content"))
        assert names == ["MarkdownRemark", "File"]

    def test_single_implementation(self, schema) -> None:
        assert possible_type_names(schema, schema.get_type("Routable")) == ["SitePage"]
