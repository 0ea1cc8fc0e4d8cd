"""Tests for flattening target trees into dotted-path clauses."""

from __future__ import annotations

import pytest

from docquery.ast import Clause, ElemMatch
from docquery.exceptions import FilterCompileError
from docquery.flattener import flatten_values, to_dotted_fields
from docquery.operators import TargetOperator


class TestToDottedFields:
    def test_nested_paths_are_joined(self) -> None:
        tree = {
            "a": {"b": {"c": Clause({TargetOperator.EQ: 1})}},
            "d": Clause({TargetOperator.NE: 2}),
            "e": {"f": Clause({TargetOperator.IN: [3]})},
        }
        assert to_dotted_fields(tree) == {
            "a.b.c": {"$eq": 1},
            "d": {"$ne": 2},
            "e.f": {"$in": [3]},
        }

    def test_clause_wire_form_keeps_all_operators(self) -> None:
        tree = {"n": Clause({TargetOperator.GT: 1, TargetOperator.LTE: 5})}
        assert to_dotted_fields(tree) == {"n": {"$gt": 1, "$lte": 5}}

    def test_elem_match_is_flattened_independently(self) -> None:
        tree = {
            "authors": ElemMatch(
                {"address": {"city": Clause({TargetOperator.EQ: "Oslo"})}}
            )
        }
        assert to_dotted_fields(tree) == {
            "authors": {"$elemMatch": {"address.city": {"$eq": "Oslo"}}}
        }

    def test_nested_elem_match_under_path(self) -> None:
        tree = {"post": {"comments": ElemMatch({"score": Clause({TargetOperator.GT: 3})})}}
        assert to_dotted_fields(tree) == {
            "post.comments": {"$elemMatch": {"score": {"$gt": 3}}}
        }

    def test_empty_tree(self) -> None:
        assert to_dotted_fields({}) == {}

    def test_root_clause_rejected(self) -> None:
        with pytest.raises(FilterCompileError, match="scoped to a field"):
            to_dotted_fields(Clause({TargetOperator.EQ: 1}))


class TestFlattenValues:
    def test_leaves(self) -> None:
        values = {"fields": {"slug": "/a/", "meta": {"time": 3}}, "excerpt": "x"}
        assert flatten_values(values) == {
            "fields.slug": "/a/",
            "fields.meta.time": 3,
            "excerpt": "x",
        }

    def test_lists_and_empty_dicts_are_leaves(self) -> None:
        assert flatten_values({"a": [1, {"b": 2}], "c": {}}) == {
            "a": [1, {"b": 2}],
            "c": {},
        }
