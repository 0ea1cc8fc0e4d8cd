"""Shared fixtures: a small content schema and a populated node store."""

from __future__ import annotations

import copy
from typing import Any

import pytest
from graphql import (
    GraphQLBoolean,
    GraphQLField,
    GraphQLID,
    GraphQLInt,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
    GraphQLUnionType,
)

from docquery.adapters.memory import NodeStore

NodeInterface = GraphQLInterfaceType(
    "Node",
    {
        "id": GraphQLField(GraphQLNonNull(GraphQLID)),
        "hidden": GraphQLField(GraphQLBoolean),
    },
)

RoutableInterface = GraphQLInterfaceType(
    "Routable",
    {"path": GraphQLField(GraphQLString)},
)

Frontmatter = GraphQLObjectType(
    "Frontmatter",
    {
        "title": GraphQLField(GraphQLString),
        "date": GraphQLField(GraphQLString),
        "draft": GraphQLField(GraphQLBoolean),
        "tags": GraphQLField(GraphQLList(GraphQLString)),
        "rating": GraphQLField(GraphQLInt),
    },
)

MarkdownFields = GraphQLObjectType(
    "MarkdownFields",
    {
        "slug": GraphQLField(GraphQLString),
        "readingTime": GraphQLField(GraphQLInt),
    },
)

Author = GraphQLObjectType(
    "Author",
    {
        "name": GraphQLField(GraphQLString),
        "email": GraphQLField(GraphQLString),
    },
)

MarkdownRemark = GraphQLObjectType(
    "MarkdownRemark",
    {
        "id": GraphQLField(GraphQLNonNull(GraphQLID)),
        "hidden": GraphQLField(GraphQLBoolean),
        "frontmatter": GraphQLField(Frontmatter),
        "fields": GraphQLField(MarkdownFields),
        "authors": GraphQLField(GraphQLList(Author)),
        "tags": GraphQLField(GraphQLNonNull(GraphQLList(GraphQLNonNull(GraphQLString)))),
        "wordCount": GraphQLField(GraphQLInt),
        "excerpt": GraphQLField(GraphQLString),
    },
    interfaces=[NodeInterface],
)

File = GraphQLObjectType(
    "File",
    {
        "id": GraphQLField(GraphQLNonNull(GraphQLID)),
        "hidden": GraphQLField(GraphQLBoolean),
        "name": GraphQLField(GraphQLString),
        "size": GraphQLField(GraphQLInt),
    },
    interfaces=[NodeInterface],
)

SitePage = GraphQLObjectType(
    "SitePage",
    {
        "id": GraphQLField(GraphQLNonNull(GraphQLID)),
        "path": GraphQLField(GraphQLString),
    },
    interfaces=[RoutableInterface],
)

ContentUnion = GraphQLUnionType("Content", [MarkdownRemark, File])

QueryType = GraphQLObjectType(
    "Query",
    {
        "node": GraphQLField(NodeInterface),
        "routable": GraphQLField(RoutableInterface),
        "content": GraphQLField(ContentUnion),
        "allMarkdownRemark": GraphQLField(GraphQLList(MarkdownRemark)),
    },
)

MARKDOWN_DOCUMENTS: list[dict[str, Any]] = [
    {
        "id": "md1",
        "hidden": False,
        "frontmatter": {
            "title": "Hello World",
            "date": "2020-01-01",
            "draft": False,
            "tags": ["python", "graphql"],
            "rating": 5,
        },
        "fields": {"slug": "/hello/"},
        "authors": [{"name": "Ann", "email": "ann@example.com"}],
        "tags": ["python"],
        "wordCount": 100,
        "$resolved": {"excerpt": "hello excerpt"},
    },
    {
        "id": "md2",
        "hidden": True,
        "frontmatter": {
            "title": "Second Post",
            "date": "2021-06-01",
            "draft": True,
            "tags": ["js"],
            "rating": 3,
        },
        "fields": {"slug": "/second/"},
        "authors": [{"name": "Bob"}, {"name": "Ann"}],
        "tags": ["js", "graphql"],
        "wordCount": 250,
        "$resolved": {"excerpt": "another excerpt"},
    },
    {
        "id": "md3",
        "frontmatter": {
            "title": "Drafts",
            "date": "2020-01-01",
            "draft": None,
            "rating": None,
        },
        "fields": {"slug": "/blog/drafts/"},
        "authors": [],
        "tags": [],
        "wordCount": 100,
    },
    {
        "id": "md4",
        "hidden": None,
        "fields": {"slug": "/blog/2021/recap/"},
        "tags": ["python", "js"],
        "wordCount": 50,
    },
]

FILE_DOCUMENTS: list[dict[str, Any]] = [
    {"id": "f1", "hidden": False, "name": "logo.png", "size": 10},
    {"id": "f2", "hidden": True, "name": "notes.md", "size": 20},
]

PAGE_DOCUMENTS: list[dict[str, Any]] = [
    {"id": "p1", "path": "/about/"},
    {"id": "p2", "path": "/blog/"},
]


@pytest.fixture
def schema() -> GraphQLSchema:
    return GraphQLSchema(
        query=QueryType,
        types=[MarkdownRemark, File, SitePage, ContentUnion],
    )


@pytest.fixture
def store() -> NodeStore:
    """Node store holding fresh copies of the sample documents."""
    node_store = NodeStore()
    node_store.add_documents("MarkdownRemark", copy.deepcopy(MARKDOWN_DOCUMENTS))
    node_store.add_documents("File", copy.deepcopy(FILE_DOCUMENTS))
    node_store.add_documents("SitePage", copy.deepcopy(PAGE_DOCUMENTS))
    return node_store
