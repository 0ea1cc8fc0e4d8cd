"""Query execution against a node store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .advisor import FieldIndexAdvisor
from .compiler import FilterCompiler
from .exceptions import QueryError
from .models import QueryArgs
from .schema import possible_type_names
from .sort import to_sort_fields
from .targets import MergedViewTarget, SingleCollectionTarget
from .usage import DELETE_CACHE, FIELD_INDEX_THRESHOLD, FieldUsageTable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from graphql import GraphQLNamedType, GraphQLSchema

    from .ports.signals import ISignalBus
    from .ports.storage import INodeStore
    from .targets import QueryTarget

logger = logging.getLogger(__name__)


class QueryExecutor:
    """
    Runs structured filter/sort queries for a schema type.

    Concrete types query their own collection and feed the index
    advisor.  Interface and union types with several implementations
    query a merged view over all of them.
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        store: INodeStore,
        *,
        advisor: FieldIndexAdvisor | None = None,
        compiler: FilterCompiler | None = None,
    ) -> None:
        self.schema = schema
        self.store = store
        self.advisor = advisor if advisor is not None else FieldIndexAdvisor()
        self.compiler = compiler if compiler is not None else FilterCompiler()

    async def run_query(
        self,
        gql_type: GraphQLNamedType | str,
        query_args: QueryArgs | Mapping[str, Any],
        *,
        first_only: bool = False,
        resolved_fields: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Execute a query and return matching documents.

        Args:
            gql_type: Schema type (or its name) being queried.
            query_args: ``{"filter": ..., "sort": ...}`` or a :class:`QueryArgs`.
            first_only: Materialise at most the first match in store order.
            resolved_fields: Precomputed values of computed fields, nested
                like the filter; matching keys are redirected to them.

        Returns:
            The result set, possibly empty (also when ``first_only``).

        Raises:
            FilterCompileError: If the filter cannot be compiled.
            pydantic.ValidationError: If ``query_args`` is malformed.
        """
        args = (
            query_args
            if isinstance(query_args, QueryArgs)
            else QueryArgs.model_validate(query_args)
        )
        named_type = self._named_type(gql_type)
        compiled = self.compiler.compile(args.filter, named_type, resolved_fields)
        sort_pairs = to_sort_fields(args.sort) if args.sort is not None else []

        target = self._resolve_target(named_type)
        logger.debug("Running query on %r", target)
        target.prepare(compiled, sort_pairs)

        chain = target.chain().find(compiled, first_only)
        if sort_pairs:
            chain = chain.compoundsort(sort_pairs)
        results = chain.data()
        logger.debug("Query on %s returned %d result(s)", named_type.name, len(results))
        return results

    def _named_type(self, gql_type: GraphQLNamedType | str) -> GraphQLNamedType:
        if not isinstance(gql_type, str):
            return gql_type
        named = self.schema.get_type(gql_type)
        if named is None:
            raise QueryError(f"Unknown type '{gql_type}'")
        return named

    def _resolve_target(self, gql_type: GraphQLNamedType) -> QueryTarget:
        type_names = possible_type_names(self.schema, gql_type)
        if len(type_names) > 1:
            return MergedViewTarget(self.store.get_view(type_names), type_names)
        # An abstract type with no implementations queries an empty collection.
        name = type_names[0] if type_names else gql_type.name
        return SingleCollectionTarget(self.store.get_collection(name), self.advisor)


def build_query_executor(
    schema: GraphQLSchema,
    store: INodeStore,
    *,
    bus: ISignalBus | None = None,
    usage_table: FieldUsageTable | None = None,
    threshold: int = FIELD_INDEX_THRESHOLD,
) -> QueryExecutor:
    """
    Wire a usage table, index advisor, compiler and executor.

    When ``bus`` is given the usage table is cleared on ``DELETE_CACHE``.
    """
    table = usage_table if usage_table is not None else FieldUsageTable()
    if bus is not None:
        table.subscribe(bus, DELETE_CACHE)
    advisor = FieldIndexAdvisor(table, threshold=threshold)
    return QueryExecutor(schema, store, advisor=advisor, compiler=FilterCompiler())
