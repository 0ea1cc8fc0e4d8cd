"""Tests for lifting filters on resolved fields."""

from __future__ import annotations

import re

from docquery.adapters.memory import DocumentMatcher
from docquery.predicates import AllOf, NeTruePredicate, RegexPredicate
from docquery.resolved import RESOLVED_NAMESPACE, lift_resolved_fields


def test_namespace() -> None:
    assert RESOLVED_NAMESPACE == "$resolved"


def test_exact_path_is_lifted() -> None:
    result = lift_resolved_fields({"excerpt": {"$eq": "x"}}, {"excerpt": "x"})
    assert result == {"$resolved.excerpt": {"$eq": "x"}}


def test_only_resolved_leaves_are_lifted() -> None:
    compiled = {"fields.readingTime": {"$gt": 2}, "fields.slug": {"$eq": "/a/"}}
    result = lift_resolved_fields(compiled, {"fields": {"readingTime": 3}})
    assert result == {
        "$resolved.fields.readingTime": {"$gt": 2},
        "fields.slug": {"$eq": "/a/"},
    }


def test_ne_true_on_resolved_leaf_is_lifted() -> None:
    where = {"$where": NeTruePredicate(["draft"])}
    result = lift_resolved_fields({"frontmatter": where}, {"frontmatter": {"draft": False}})
    assert result == {"$resolved.frontmatter": where}


def test_ne_true_on_stored_sibling_stays() -> None:
    compiled = {
        "frontmatter": {
            "$where": AllOf(NeTruePredicate(["draft"]), NeTruePredicate(["title"]))
        }
    }
    result = lift_resolved_fields(compiled, {"frontmatter": {"draft": False}})
    assert result == {
        "$resolved.frontmatter": {"$where": NeTruePredicate(["draft"])},
        "frontmatter": {"$where": NeTruePredicate(["title"])},
    }


def test_ne_true_below_resolved_object() -> None:
    where = {"$where": NeTruePredicate(["meta", "flag"])}
    result = lift_resolved_fields({"fields": where}, {"fields": {"meta": []}})
    assert result == {"$resolved.fields": where}


def test_other_operators_on_ancestor_key_stay() -> None:
    compiled = {"frontmatter": {"$ne": None, "$where": NeTruePredicate(["draft"])}}
    result = lift_resolved_fields(compiled, {"frontmatter": {"draft": True}})
    assert result == {
        "$resolved.frontmatter": {"$where": NeTruePredicate(["draft"])},
        "frontmatter": {"$ne": None},
    }


def test_opaque_where_on_ancestor_is_not_lifted() -> None:
    compiled = {"frontmatter": {"$where": RegexPredicate(re.compile("x"))}}
    assert lift_resolved_fields(compiled, {"frontmatter": {"draft": False}}) == compiled


def test_stored_ne_true_is_not_dropped() -> None:
    compiled = lift_resolved_fields(
        {
            "frontmatter": {
                "$where": AllOf(NeTruePredicate(["draft"]), NeTruePredicate(["title"]))
            }
        },
        {"frontmatter": {"draft": False}},
    )
    matcher = DocumentMatcher()
    resolved = {"frontmatter": {"draft": False}}
    assert not matcher.matches(
        {"frontmatter": {"title": True}, "$resolved": resolved}, compiled
    )
    assert matcher.matches(
        {"frontmatter": {"title": "Hi"}, "$resolved": resolved}, compiled
    )


def test_string_prefix_is_not_an_ancestor() -> None:
    compiled = {"field": {"$eq": 1}}
    assert lift_resolved_fields(compiled, {"fields": {"slug": "/"}}) == compiled


def test_no_resolved_fields() -> None:
    compiled = {"a": {"$eq": 1}}
    assert lift_resolved_fields(compiled, None) == compiled
    assert lift_resolved_fields(compiled, {}) == compiled
    assert lift_resolved_fields(compiled, None) is not compiled
