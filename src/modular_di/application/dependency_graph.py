"""Application layer - Dependency graph with cycle detection and topological ordering."""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from modular_di.domain import (
    DependencyCheckError,
    DependencyCheckResult,
    DependencyErrorCode,
    GraphKind,
    GraphNode,
    IDependencyGraph,
    normalize_dependencies,
)

logger = logging.getLogger(__name__)


class _Traversal:
    """Depth-first walk state, local to a single dependency check.

    The walk keeps its own stack of frames instead of recursing, so the depth
    of a dependency chain is not bounded by the interpreter recursion limit.

    Attributes:
        on_stack: Names currently on the walk stack.
        processed: Names whose dependencies were fully resolved.
        order: Resolution order built so far, dependencies first.
    """

    def __init__(self, nodes: Dict[str, GraphNode]) -> None:
        self._nodes = nodes
        self.on_stack: Set[str] = set()
        self.processed: Set[str] = set()
        self.order: List[str] = []
        self._frames: List[Tuple[str, Iterator[str]]] = []

    def visit(self, root: str) -> Optional[DependencyCheckError]:
        error = self._enter(root)
        while error is None and self._frames:
            name, dependencies = self._frames[-1]
            dependency = next(dependencies, None)
            if dependency is None:
                self._frames.pop()
                self.on_stack.discard(name)
                self.processed.add(name)
                self.order.append(name)
            elif dependency not in self.processed:
                error = self._enter(dependency)
        return error

    def _enter(self, name: str) -> Optional[DependencyCheckError]:
        node = self._nodes.get(name)
        if node is None:
            return DependencyCheckError(code=DependencyErrorCode.NOT_FOUND, resource=name)
        if name in self.on_stack:
            return DependencyCheckError(code=DependencyErrorCode.CIRCULAR_DEPENDENCY, resource=name)
        self.on_stack.add(name)
        self._frames.append((name, iter(node.dependencies)))
        return None


class DependencyGraph(IDependencyGraph):
    """Directed graph of named resources and their dependency edges.

    Dependencies are recorded by name only; a dependency target does not have
    to exist until a check is run. Resources keep insertion order so that
    resolution order is deterministic.

    Attributes:
        kind: The namespace this graph holds (modules or services).
        _nodes: Mapping of resource names to nodes.
        _last_result: Result of the most recent dependency check.
    """

    def __init__(self, kind: GraphKind = GraphKind.SERVICE) -> None:
        """Initialize an empty graph.

        Args:
            kind: The namespace this graph holds, used in log messages.
        """
        self.kind = kind
        self._nodes: Dict[str, GraphNode] = {}
        self._last_result: Optional[DependencyCheckResult] = None

    def add_resource(self, name: str) -> None:
        """Ensure a resource with this name exists.

        Existing dependency edges are left untouched.

        Args:
            name: The resource name.
        """
        if name not in self._nodes:
            self._nodes[name] = GraphNode(name=name)

    def add_dependencies(self, name: str, dependencies: Sequence[str]) -> None:
        """Append dependency edges to a resource, creating it if absent.

        Args:
            name: The dependent resource.
            dependencies: Names the resource depends on, in order.

        Raises:
            InvalidDependencyListError: If ``dependencies`` is not a list or tuple of names.
        """
        names = normalize_dependencies(name, dependencies)
        self.add_resource(name)
        self._nodes[name].dependencies.extend(names)

    def is_resource(self, name: str) -> bool:
        return name in self._nodes

    def get_dependencies(self, name: str) -> List[str]:
        """Return a copy of the direct dependencies of ``name``.

        Unknown names have no dependencies.
        """
        node = self._nodes.get(name)
        if node is None:
            return []
        return list(node.dependencies)

    def run_dependency_check(self, root: str) -> DependencyCheckResult:
        """Compute the resolution order of ``root`` and its transitive dependencies.

        Walks the graph depth-first from ``root``. The first missing resource or
        cycle aborts the walk; only that single fault is reported.

        Args:
            root: The resource to resolve.

        Returns:
            A result holding either the resolution order (every dependency
            placed before its dependents) or the error that aborted the walk.

        Example:
            >>> graph = DependencyGraph()
            >>> graph.add_dependencies("api", ["db"])
            >>> graph.add_resource("db")
            >>> graph.run_dependency_check("api").order
            ('db', 'api')
        """
        traversal = _Traversal(self._nodes)
        error = traversal.visit(root)

        if error is None:
            result = DependencyCheckResult(root=root, order=tuple(traversal.order))
            logger.debug("Resolved %s %r: %s", self.kind.value, root, " -> ".join(result.order))
        else:
            result = DependencyCheckResult(root=root, error=error)
            logger.debug(
                "Dependency check of %s %r failed with %s at %r",
                self.kind.value,
                root,
                error.code.name,
                error.resource,
            )

        self._last_result = result
        return result

    def get_dependency_error(self) -> Optional[DependencyCheckError]:
        if self._last_result is None:
            return None
        return self._last_result.error

    def get_dependency_resolve_order(self) -> Tuple[str, ...]:
        if self._last_result is None:
            return ()
        return self._last_result.order

    def reset_dependency_check(self) -> None:
        self._last_result = None

    def resources(self) -> List[str]:
        """Return all resource names in insertion order."""
        return list(self._nodes)

    def clear(self) -> None:
        """Remove every resource and the stored check result."""
        self._nodes.clear()
        self._last_result = None

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._nodes))

    def __len__(self) -> int:
        return len(self._nodes)
