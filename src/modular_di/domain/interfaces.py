from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

from modular_di.domain.enums import BuildType, ServiceType
from modular_di.domain.models import (
    DependencyCheckError,
    DependencyCheckResult,
    ServiceBlueprint,
    ServiceDescriptor,
)


class IDependencyGraph(ABC):
    """Abstract interface for a graph of named resources and their dependencies."""

    @abstractmethod
    def add_resource(self, name: str) -> None:
        """Ensure a resource with this name exists.

        Args:
            name: The resource name.
        """

    @abstractmethod
    def add_dependencies(self, name: str, dependencies: Sequence[str]) -> None:
        """Append dependency edges to a resource, creating it if absent.

        Args:
            name: The dependent resource.
            dependencies: Names the resource depends on.
        """

    @abstractmethod
    def is_resource(self, name: str) -> bool:
        """Return whether a resource with this name exists."""

    @abstractmethod
    def get_dependencies(self, name: str) -> List[str]:
        """Return the direct dependencies of a resource."""

    @abstractmethod
    def run_dependency_check(self, root: str) -> DependencyCheckResult:
        """Compute the resolution order of ``root`` and its transitive dependencies.

        Args:
            root: The resource to resolve.

        Returns:
            The resolution order, or the first error found.
        """

    @abstractmethod
    def get_dependency_error(self) -> Optional[DependencyCheckError]:
        """Return the error of the most recent check, if any."""

    @abstractmethod
    def get_dependency_resolve_order(self) -> Tuple[str, ...]:
        """Return the resolution order of the most recent check."""

    @abstractmethod
    def reset_dependency_check(self) -> None:
        """Forget the result of the most recent check."""


class ILifetimeManager(ABC):
    """Abstract interface for managing service build types."""

    @abstractmethod
    def get_or_create(self, descriptor: ServiceDescriptor, args: Sequence[Any]) -> Any:
        """Get existing instance or build a new one based on build type.

        Args:
            descriptor: The service declaration.
            args: Resolved dependency instances, in declared order.
        """

    @abstractmethod
    def clear_cache(self) -> None:
        """Clear any cached instances managed by this lifetime manager."""


class IEngine(ABC):
    """Abstract interface for the module and service resolution engine."""

    @abstractmethod
    def load_module(self, module_id: str) -> "IEngine":
        """Load a module and its module dependencies into the engine."""

    @abstractmethod
    def inject(self, service_id: str) -> Any:
        """Resolve and return a service instance."""

    @abstractmethod
    def invoke(self, service_id: str) -> None:
        """Resolve a service for its side effects only."""

    @abstractmethod
    def execute(self) -> None:
        """Fire the exec hooks of every loaded module."""

    @abstractmethod
    def is_service(self, service_id: str) -> bool:
        """Return whether a service is registered."""

    @abstractmethod
    def get_service_type(self, service_id: str) -> Optional[ServiceType]:
        """Return how a registered service was declared."""

    @abstractmethod
    def get_service_build_type(self, service_id: str) -> Optional[BuildType]:
        """Return the build type of a registered service."""

    @abstractmethod
    def get_service_blueprints(self) -> Dict[str, ServiceBlueprint]:
        """Return how every registered service is built."""

    @abstractmethod
    def destroy(self) -> None:
        """Clear all modules, services and cached instances."""
