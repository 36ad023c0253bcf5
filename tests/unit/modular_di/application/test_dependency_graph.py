"""Unit tests for DependencyGraph."""

import pytest

from modular_di.application.dependency_graph import DependencyGraph
from modular_di.domain import (
    DependencyErrorCode,
    GraphKind,
    IDependencyGraph,
    InvalidDependencyListError,
)


def build_graph(edges):
    """Build a graph from a mapping of name to dependency names."""
    graph = DependencyGraph()
    for name, dependencies in edges.items():
        graph.add_resource(name)
        graph.add_dependencies(name, dependencies)
    return graph


def assert_topological(graph, order):
    """Assert every dependency appears before its dependent."""
    position = {name: index for index, name in enumerate(order)}
    for name in order:
        for dependency in graph.get_dependencies(name):
            assert position[dependency] < position[name], f"{dependency} must precede {name}"


class TestGraphConstruction:
    """Test cases for adding resources and edges."""

    def test_graph_implements_interface(self):
        """Test that DependencyGraph implements IDependencyGraph."""
        assert isinstance(DependencyGraph(), IDependencyGraph)

    def test_default_kind_is_service(self):
        """Test that graphs hold services unless told otherwise."""
        assert DependencyGraph().kind == GraphKind.SERVICE
        assert DependencyGraph(GraphKind.MODULE).kind == GraphKind.MODULE

    def test_add_resource(self):
        """Test that add_resource creates a node."""
        graph = DependencyGraph()
        graph.add_resource("a")
        assert graph.is_resource("a")
        assert "a" in graph
        assert len(graph) == 1

    def test_add_resource_is_idempotent(self):
        """Test that adding an existing resource keeps its edges."""
        graph = DependencyGraph()
        graph.add_dependencies("a", ["b"])
        graph.add_resource("a")
        assert graph.get_dependencies("a") == ["b"]
        assert len(graph) == 1

    def test_add_dependencies_creates_resource(self):
        """Test that add_dependencies creates the dependent but not the targets."""
        graph = DependencyGraph()
        graph.add_dependencies("a", ["b", "c"])
        assert graph.is_resource("a")
        assert not graph.is_resource("b")
        assert not graph.is_resource("c")

    def test_add_dependencies_appends(self):
        """Test that edges are appended in order."""
        graph = DependencyGraph()
        graph.add_dependencies("a", ["b"])
        graph.add_dependencies("a", ("c", "b"))
        assert graph.get_dependencies("a") == ["b", "c", "b"]

    def test_add_dependencies_rejects_string(self):
        """Test that a bare string is not a dependency list."""
        graph = DependencyGraph()
        with pytest.raises(InvalidDependencyListError):
            graph.add_dependencies("a", "b")
        assert not graph.is_resource("a")

    def test_get_dependencies_of_unknown_resource(self):
        """Test that unknown names have no dependencies."""
        assert DependencyGraph().get_dependencies("missing") == []

    def test_get_dependencies_returns_copy(self):
        """Test that mutating the returned list does not change the graph."""
        graph = build_graph({"a": ["b"]})
        graph.get_dependencies("a").append("c")
        assert graph.get_dependencies("a") == ["b"]

    def test_resources_keep_insertion_order(self):
        """Test resources() and iteration order."""
        graph = build_graph({"c": [], "a": [], "b": []})
        assert graph.resources() == ["c", "a", "b"]
        assert list(graph) == ["c", "a", "b"]

    def test_clear(self):
        """Test that clear removes resources and the last result."""
        graph = build_graph({"a": []})
        graph.run_dependency_check("a")
        graph.clear()
        assert len(graph) == 0
        assert graph.get_dependency_resolve_order() == ()


class TestDependencyCheck:
    """Test cases for run_dependency_check ordering."""

    def test_single_node(self):
        """Test that a node without dependencies resolves to itself."""
        graph = build_graph({"a": []})
        result = graph.run_dependency_check("a")
        assert result.succeeded
        assert result.root == "a"
        assert result.order == ("a",)

    def test_chain(self):
        """Test a linear chain resolves dependencies first."""
        graph = build_graph({"a": ["b"], "b": ["c"], "c": []})
        assert graph.run_dependency_check("a").order == ("c", "b", "a")

    def test_long_chain_does_not_hit_recursion_limit(self):
        """Test that a chain deeper than the interpreter recursion limit resolves."""
        size = 5000
        graph = build_graph({f"n{index}": [f"n{index - 1}"] if index else [] for index in range(size)})
        result = graph.run_dependency_check(f"n{size - 1}")
        assert result.succeeded
        assert result.order == tuple(f"n{index}" for index in range(size))

    def test_long_cycle_detected(self):
        """Test that a cycle closing at the far end of a long chain is reported."""
        size = 5000
        graph = build_graph({f"n{index}": [f"n{(index + 1) % size}"] for index in range(size)})
        result = graph.run_dependency_check("n0")
        assert result.error.code == DependencyErrorCode.CIRCULAR_DEPENDENCY
        assert result.error.resource == "n0"

    def test_declared_order_breaks_ties(self):
        """Test independent dependencies keep declared order."""
        graph = build_graph({"app": ["log", "db", "cache"], "log": [], "db": [], "cache": []})
        assert graph.run_dependency_check("app").order == ("log", "db", "cache", "app")

    def test_diamond_visits_shared_node_once(self):
        """Test that a shared dependency appears only once."""
        graph = build_graph({"a": ["b", "c"], "b": ["d"], "c": ["d"], "d": []})
        order = graph.run_dependency_check("a").order
        assert order == ("d", "b", "c", "a")

    def test_duplicate_dependencies_tolerated(self):
        """Test that duplicate edges do not duplicate nodes in the order."""
        graph = build_graph({"a": ["b", "b"], "b": []})
        assert graph.run_dependency_check("a").order == ("b", "a")

    def test_order_restricted_to_closure(self):
        """Test that unrelated resources are excluded."""
        graph = build_graph({"a": ["b"], "b": [], "x": ["y"], "y": []})
        assert graph.run_dependency_check("a").order == ("b", "a")

    def test_unrelated_missing_resource_is_ignored(self):
        """Test that missing names outside the closure do not fail the check."""
        graph = build_graph({"a": [], "x": ["missing"]})
        assert graph.run_dependency_check("a").succeeded

    def test_order_is_topological_for_larger_graph(self):
        """Test the topological property on a wider acyclic graph."""
        graph = build_graph(
            {
                "app": ["api", "worker"],
                "api": ["auth", "db", "log"],
                "worker": ["queue", "db"],
                "auth": ["db", "cache"],
                "queue": ["log"],
                "cache": ["log"],
                "db": ["config", "log"],
                "log": ["config"],
                "config": [],
            }
        )
        result = graph.run_dependency_check("app")
        assert result.succeeded
        assert len(result.order) == len(graph)
        assert result.order[-1] == "app"
        assert_topological(graph, result.order)

    def test_check_does_not_modify_graph(self):
        """Test that a check can be repeated with the same outcome."""
        graph = build_graph({"a": ["b"], "b": []})
        first = graph.run_dependency_check("a")
        second = graph.run_dependency_check("a")
        assert first == second


class TestDependencyCheckErrors:
    """Test cases for missing resources and cycles."""

    def test_missing_root(self):
        """Test that an unknown root is reported as not found."""
        result = DependencyGraph().run_dependency_check("ghost")
        assert not result.succeeded
        assert result.error.code == DependencyErrorCode.NOT_FOUND
        assert result.error.resource == "ghost"
        assert result.order == ()

    def test_missing_transitive_dependency(self):
        """Test that the missing name, not the root, is reported."""
        graph = build_graph({"a": ["b"], "b": ["c"]})
        result = graph.run_dependency_check("a")
        assert result.error.code == DependencyErrorCode.NOT_FOUND
        assert result.error.resource == "c"

    def test_self_dependency_is_circular(self):
        """Test that a node listing itself is a cycle."""
        graph = build_graph({"a": ["a"]})
        result = graph.run_dependency_check("a")
        assert result.error.code == DependencyErrorCode.CIRCULAR_DEPENDENCY
        assert result.error.resource == "a"

    def test_two_node_cycle(self):
        """Test that a two-node cycle is detected."""
        graph = build_graph({"x": ["y"], "y": ["x"]})
        result = graph.run_dependency_check("x")
        assert result.error.code == DependencyErrorCode.CIRCULAR_DEPENDENCY
        assert result.error.resource in ("x", "y")
        assert result.order == ()

    def test_cycle_reported_at_closing_node(self):
        """Test that the node closing the cycle is reported."""
        graph = build_graph({"a": ["b"], "b": ["c"], "c": ["d"], "d": ["b"]})
        result = graph.run_dependency_check("a")
        assert result.error.code == DependencyErrorCode.CIRCULAR_DEPENDENCY
        assert result.error.resource == "b"

    def test_cycle_below_shared_dependency(self):
        """Test that a cycle reached through a second branch is detected."""
        graph = build_graph({"a": ["b", "c"], "b": [], "c": ["d"], "d": ["c"]})
        result = graph.run_dependency_check("a")
        assert result.error.code == DependencyErrorCode.CIRCULAR_DEPENDENCY

    def test_first_error_wins(self):
        """Test that only the first fault encountered is reported."""
        graph = build_graph({"a": ["missing", "b"], "b": ["b"]})
        result = graph.run_dependency_check("a")
        assert result.error.code == DependencyErrorCode.NOT_FOUND
        assert result.error.resource == "missing"

    def test_error_cleared_after_fixing_graph(self):
        """Test that a later check succeeds once the missing node exists."""
        graph = build_graph({"a": ["b"]})
        assert not graph.run_dependency_check("a").succeeded
        graph.add_resource("b")
        assert graph.run_dependency_check("a").order == ("b", "a")


class TestLastCheckAccessors:
    """Test cases for stored check results."""

    def test_accessors_before_any_check(self):
        """Test that nothing is reported before a check ran."""
        graph = DependencyGraph()
        assert graph.get_dependency_error() is None
        assert graph.get_dependency_resolve_order() == ()

    def test_accessors_after_success(self):
        """Test that order is stored after a successful check."""
        graph = build_graph({"a": ["b"], "b": []})
        graph.run_dependency_check("a")
        assert graph.get_dependency_error() is None
        assert graph.get_dependency_resolve_order() == ("b", "a")

    def test_accessors_after_failure(self):
        """Test that the error is stored after a failed check."""
        graph = build_graph({"a": ["a"]})
        graph.run_dependency_check("a")
        assert graph.get_dependency_error().code == DependencyErrorCode.CIRCULAR_DEPENDENCY
        assert graph.get_dependency_resolve_order() == ()

    def test_reset_dependency_check(self):
        """Test that reset forgets the stored result."""
        graph = build_graph({"a": []})
        graph.run_dependency_check("a")
        graph.reset_dependency_check()
        assert graph.get_dependency_resolve_order() == ()
        assert graph.get_dependency_error() is None

    def test_reset_keeps_edges(self):
        """Test that reset does not touch resources or edges."""
        graph = build_graph({"a": ["b"], "b": []})
        graph.run_dependency_check("a")
        graph.reset_dependency_check()
        assert graph.get_dependencies("a") == ["b"]
