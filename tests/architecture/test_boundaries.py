from pytest_archon import archrule


def test_compiler_independent_of_adapters() -> None:
    """
    The filter pipeline must not import the in-memory store.
    It targets the store dialect only through plain compiled filters.
    """
    (
        archrule("compiler_independence")
        .match("docquery.translator")
        .match("docquery.flattener")
        .match("docquery.reconciler")
        .match("docquery.resolved")
        .match("docquery.sort")
        .match("docquery.compiler")
        .match("docquery.predicates")
        .match("docquery.patterns")
        .match("docquery.schema")
        .should_not_import("docquery.adapters*")
        .check("docquery")
    )


def test_compiler_independent_of_execution() -> None:
    """
    Compilation is usable without the executor or index advisor.
    """
    (
        archrule("compiler_below_executor")
        .match("docquery.translator")
        .match("docquery.flattener")
        .match("docquery.reconciler")
        .match("docquery.resolved")
        .match("docquery.compiler")
        .should_not_import("docquery.executor")
        .should_not_import("docquery.targets")
        .should_not_import("docquery.advisor")
        .should_not_import("docquery.usage")
        .check("docquery")
    )


def test_execution_uses_ports_not_adapters() -> None:
    """
    Executor, targets and advisor talk to storage through the ports.
    """
    (
        archrule("execution_through_ports")
        .match("docquery.executor")
        .match("docquery.targets")
        .match("docquery.advisor")
        .match("docquery.usage")
        .should_not_import("docquery.adapters*")
        .check("docquery")
    )


def test_ports_layering() -> None:
    """
    Ports (interfaces) should not depend on Adapters (implementations).
    """
    (
        archrule("ports_layering")
        .match("docquery.ports*")
        .should_not_import("docquery.adapters*")
        .should_not_import("docquery.executor")
        .check("docquery")
    )


def test_memory_adapter_is_a_leaf() -> None:
    """
    The in-memory store evaluates compiled filters; it never compiles them.
    """
    (
        archrule("memory_adapter_leaf")
        .match("docquery.adapters*")
        .should_not_import("docquery.translator")
        .should_not_import("docquery.compiler")
        .should_not_import("docquery.executor")
        .should_not_import("docquery.schema")
        .should_not_import("graphql*")
        .check("docquery")
    )
