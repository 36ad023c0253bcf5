from typing import Any, Iterator, List, Tuple

from modular_di.application.dependency_graph import DependencyGraph
from modular_di.application.service_registry import ServiceRegistry
from modular_di.domain import ILifetimeManager


class ServiceResolver:
    """Resolves service dependencies depth-first and instantiates services.

    Callers must run a dependency check on the service graph first; the
    resolver itself does not look for cycles or missing services.

    Attributes:
        _graph: The service dependency graph.
        _registry: Registered service declarations.
        _lifetime_manager: Component applying singleton/transient rules.
    """

    def __init__(
        self,
        graph: DependencyGraph,
        registry: ServiceRegistry,
        lifetime_manager: ILifetimeManager,
    ) -> None:
        self._graph = graph
        self._registry = registry
        self._lifetime_manager = lifetime_manager

    def resolve_arguments(self, service_id: str) -> List[Any]:
        """Resolve the direct dependencies of a service, in declared order.

        Args:
            service_id: The service whose factory arguments are needed.

        Returns:
            One instance per declared dependency.
        """
        return [self.resolve(dependency) for dependency in self._graph.get_dependencies(service_id)]

    def resolve(self, service_id: str) -> Any:
        """Resolve a service, building its dependencies first.

        Dependencies are always walked, even under a cached singleton, so
        transient dependencies are built once per resolution. The walk uses an
        explicit stack of frames, one per service being resolved, each holding
        the pending dependency names and the instances resolved so far.

        Example:
            >>> # db has no dependencies, repo depends on db
            >>> repo = resolver.resolve("repo")  # builds db, then repo(db)
        """
        frames: List[Tuple[str, Iterator[str], List[Any]]] = [
            (service_id, iter(self._graph.get_dependencies(service_id)), [])
        ]
        while True:
            name, pending, args = frames[-1]
            dependency = next(pending, None)
            if dependency is not None:
                frames.append((dependency, iter(self._graph.get_dependencies(dependency)), []))
                continue

            frames.pop()
            instance = self.instantiate(name, args)
            if not frames:
                return instance
            frames[-1][2].append(instance)

    def instantiate(self, service_id: str, args: List[Any]) -> Any:
        """Build or fetch a service instance from already resolved arguments.

        Args:
            service_id: The service to build.
            args: Resolved dependency instances, in declared order.
        """
        descriptor = self._registry.get(service_id)
        instance = self._lifetime_manager.get_or_create(descriptor, args)
        self._registry.record_resolution(service_id)
        return instance
