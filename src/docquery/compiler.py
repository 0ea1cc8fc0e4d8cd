"""Filter pipeline: translate, flatten, reconcile, lift."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .flattener import to_dotted_fields
from .reconciler import fix_ne_true
from .resolved import lift_resolved_fields
from .translator import OperatorTranslator

if TYPE_CHECKING:
    from collections.abc import Mapping

    from graphql import GraphQLType

    from .ast import CompiledFilter

logger = logging.getLogger(__name__)


class FilterCompiler:
    """
    Compiles a schema-scoped filter tree into a store-ready filter.

    Example::

        compiler = FilterCompiler()
        compiled = compiler.compile(
            {"frontmatter": {"draft": {"ne": True}}}, schema.get_type("MarkdownRemark")
        )
        # {"frontmatter": {"$where": NeTruePredicate('draft')}}
    """

    def __init__(self, translator: OperatorTranslator | None = None) -> None:
        self.translator = translator if translator is not None else OperatorTranslator()

    def compile(
        self,
        filter_node: Mapping[str, Any],
        gql_type: GraphQLType,
        resolved_fields: Mapping[str, Any] | None = None,
    ) -> CompiledFilter:
        tree = self.translator.translate(filter_node, gql_type)
        compiled = fix_ne_true(to_dotted_fields(tree))
        compiled = lift_resolved_fields(compiled, resolved_fields)
        logger.debug(
            "Compiled filter on %s: %s",
            getattr(gql_type, "name", gql_type),
            sorted(compiled),
        )
        return compiled


def compile_filter(
    filter_node: Mapping[str, Any],
    gql_type: GraphQLType,
    resolved_fields: Mapping[str, Any] | None = None,
) -> CompiledFilter:
    """Compile with a default :class:`FilterCompiler`."""
    return FilterCompiler().compile(filter_node, gql_type, resolved_fields)
