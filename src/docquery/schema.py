"""
Schema lookups backed by graphql-core.

The compiler only needs three facts from the schema layer: the type of a
field on its parent type, whether a type is list-valued once its non-null
wrapper is removed, and the concrete members of an interface/union type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from graphql import (
    GraphQLBoolean,
    get_named_type,
    get_nullable_type,
    is_abstract_type,
    is_list_type,
)

from .exceptions import FieldNotFoundError

if TYPE_CHECKING:
    from graphql import GraphQLNamedType, GraphQLSchema, GraphQLType


@dataclass(frozen=True)
class FieldTypeInfo:
    """Nullable wrapper, named type and list-ness of a schema type."""

    nullable_type: GraphQLType | None
    named_type: GraphQLNamedType | None
    is_list: bool

    @property
    def name(self) -> str | None:
        return getattr(self.nullable_type, "name", None)

    @property
    def is_boolean(self) -> bool:
        return self.name == GraphQLBoolean.name


def describe_type(gql_type: GraphQLType | None) -> FieldTypeInfo:
    nullable = get_nullable_type(gql_type)  # type: ignore[arg-type]
    return FieldTypeInfo(
        nullable_type=nullable,
        named_type=get_named_type(nullable) if nullable is not None else None,
        is_list=nullable is not None and is_list_type(nullable),
    )


def lookup_field_type(
    parent_type: GraphQLType | None,
    field_name: str,
    *,
    full_path: str | None = None,
) -> GraphQLType:
    """
    Return the type of ``field_name`` on the named type of ``parent_type``.

    Raises:
        FieldNotFoundError: If the named type has no such field.
    """
    named = get_named_type(parent_type) if parent_type is not None else None
    fields: dict[str, Any] = getattr(named, "fields", None) or {}
    if field_name not in fields:
        raise FieldNotFoundError(
            field_name,
            getattr(named, "name", "<unknown>"),
            list(fields),
            full_path=full_path,
        )
    return fields[field_name].type


def is_list_valued(gql_type: GraphQLType | None) -> bool:
    return describe_type(gql_type).is_list


def is_boolean(gql_type: GraphQLType | None) -> bool:
    return describe_type(gql_type).is_boolean


def possible_type_names(schema: GraphQLSchema, gql_type: GraphQLNamedType) -> list[str]:
    """Concrete type names a query against ``gql_type`` must cover."""
    if is_abstract_type(gql_type):
        return [t.name for t in schema.get_possible_types(gql_type)]  # type: ignore[arg-type]
    return [gql_type.name]
