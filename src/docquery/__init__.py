"""
docquery — filter/sort compiler and adaptive-indexing executor for
schema-typed, in-memory document collections.
"""

from .advisor import FieldIndexAdvisor
from .ast import UNDEFINED, Clause, CompiledFilter, ElemMatch, SortPair, TargetTree
from .compiler import FilterCompiler, compile_filter
from .exceptions import (
    FieldNotFoundError,
    FilterCompileError,
    InvalidPatternError,
    OperatorNotFoundError,
    QueryError,
    StorageError,
    UnsupportedStoreOperatorError,
)
from .executor import QueryExecutor, build_query_executor
from .flattener import to_dotted_fields
from .models import QueryArgs, SortSpec
from .operators import SourceOperator, TargetOperator
from .predicates import AllOf, NeTruePredicate, RegexPredicate
from .reconciler import fix_ne_true
from .resolved import RESOLVED_NAMESPACE, lift_resolved_fields
from .sort import to_sort_fields
from .targets import MergedViewTarget, QueryTarget, SingleCollectionTarget
from .translator import OperatorTranslator
from .usage import DELETE_CACHE, FIELD_INDEX_THRESHOLD, FieldUsageTable

__all__ = [
    # Execution
    "QueryExecutor",
    "build_query_executor",
    "QueryTarget",
    "SingleCollectionTarget",
    "MergedViewTarget",
    # Compilation
    "FilterCompiler",
    "compile_filter",
    "OperatorTranslator",
    "to_dotted_fields",
    "fix_ne_true",
    "lift_resolved_fields",
    "to_sort_fields",
    "RESOLVED_NAMESPACE",
    # Indexing
    "FieldIndexAdvisor",
    "FieldUsageTable",
    "FIELD_INDEX_THRESHOLD",
    "DELETE_CACHE",
    # Types
    "QueryArgs",
    "SortSpec",
    "SourceOperator",
    "TargetOperator",
    "Clause",
    "ElemMatch",
    "TargetTree",
    "CompiledFilter",
    "SortPair",
    "UNDEFINED",
    "AllOf",
    "NeTruePredicate",
    "RegexPredicate",
    # Errors
    "QueryError",
    "FilterCompileError",
    "OperatorNotFoundError",
    "FieldNotFoundError",
    "InvalidPatternError",
    "StorageError",
    "UnsupportedStoreOperatorError",
]
