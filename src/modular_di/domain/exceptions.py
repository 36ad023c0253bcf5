from typing import Optional

from modular_di.domain.enums import GraphKind


class DIException(Exception):
    """Base exception for DI-related errors."""


class ResourceNotFoundError(DIException):
    """Raised when a referenced module or service is not registered.

    Attributes:
        graph: The graph the lookup was performed on.
        name: The name that could not be found.
        requested: The name whose resolution was requested, if different.
    """

    def __init__(self, graph: GraphKind, name: str, requested: Optional[str] = None) -> None:
        self.graph = graph
        self.name = name
        self.requested = requested or name
        message = f"Could not find the {graph.value} {name!r}"
        if self.requested != name:
            message += f" while resolving {self.requested!r}"
        super().__init__(message)


class ModuleNotFound(ResourceNotFoundError):
    """Raised when a module, or one of its module dependencies, is not defined."""

    def __init__(self, name: str, requested: Optional[str] = None) -> None:
        super().__init__(GraphKind.MODULE, name, requested)


class ServiceNotFound(ResourceNotFoundError):
    """Raised when a service, or one of its dependencies, is not registered."""

    def __init__(self, name: str, requested: Optional[str] = None) -> None:
        super().__init__(GraphKind.SERVICE, name, requested)


class CircularDependencyError(DIException):
    """Raised when a circular dependency is detected.

    Only the node at which the cycle was closed is reported, not the full cycle.

    Attributes:
        graph: The graph the cycle was found in.
        name: The name at which the cycle was detected.
        requested: The name whose resolution was requested.
    """

    def __init__(self, graph: GraphKind, name: str, requested: Optional[str] = None) -> None:
        self.graph = graph
        self.name = name
        self.requested = requested or name
        message = (
            f"Circular dependency detected in the {graph.value} graph at {name!r} "
            f"while resolving {self.requested!r}"
        )
        super().__init__(message)


class CircularModuleDependency(CircularDependencyError):
    """Raised when module dependencies form a cycle."""

    def __init__(self, name: str, requested: Optional[str] = None) -> None:
        super().__init__(GraphKind.MODULE, name, requested)


class CircularServiceDependency(CircularDependencyError):
    """Raised when service dependencies form a cycle."""

    def __init__(self, name: str, requested: Optional[str] = None) -> None:
        super().__init__(GraphKind.SERVICE, name, requested)


class RegistrationError(DIException):
    """Raised for invalid module or service registrations.

    This occurs when:
    - Declaring a service name that is already declared or registered.
    - Defining or declaring services on a module that is already loaded.
    """


class InvalidDependencyListError(RegistrationError):
    """Raised when a dependency list is not a sequence of names."""

    def __init__(self, owner: str, dependencies: object) -> None:
        self.owner = owner
        self.dependencies = dependencies
        super().__init__(
            f"Dependencies of {owner!r} must be a list or tuple of names, got {dependencies!r}"
        )


class ServiceFactoryError(DIException):
    """Raised when a service factory fails while building an instance.

    Attributes:
        name: The service whose factory failed.
        reason: Description of the underlying failure.
    """

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to build service {name!r}. Reason: {reason}")
