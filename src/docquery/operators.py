from enum import Enum


class SourceOperator(str, Enum):
    """Operators accepted in schema-driven filter trees."""

    # Comparison
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"

    # Membership
    IN = "in"
    NIN = "nin"

    # Pattern matching
    REGEX = "regex"
    GLOB = "glob"

    # Sub-document match
    ELEM_MATCH = "elemMatch"


class TargetOperator(str, Enum):
    """Operators understood by the document store query algebra."""

    EQ = "$eq"
    NE = "$ne"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"
    IN = "$in"
    NIN = "$nin"

    # List / string / mapping containment
    CONTAINS = "$contains"
    CONTAINS_ANY = "$containsAny"
    CONTAINS_NONE = "$containsNone"

    REGEX = "$regex"
    WHERE = "$where"
    ELEM_MATCH = "$elemMatch"


# Source operators translated verbatim by prefixing ``$``.
PASSTHROUGH: dict[SourceOperator, TargetOperator] = {
    SourceOperator.EQ: TargetOperator.EQ,
    SourceOperator.NE: TargetOperator.NE,
    SourceOperator.GT: TargetOperator.GT,
    SourceOperator.GTE: TargetOperator.GTE,
    SourceOperator.LT: TargetOperator.LT,
    SourceOperator.LTE: TargetOperator.LTE,
    SourceOperator.IN: TargetOperator.IN,
    SourceOperator.NIN: TargetOperator.NIN,
}
