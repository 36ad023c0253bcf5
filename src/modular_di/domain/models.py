from typing import Any, Callable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modular_di.domain.enums import BuildType, DependencyErrorCode, ServiceType
from modular_di.domain.exceptions import InvalidDependencyListError


def normalize_dependencies(owner: str, dependencies: Optional[Sequence[str]]) -> Tuple[str, ...]:
    """Validate a dependency argument and return it as a tuple of names.

    Args:
        owner: Name of the module or service declaring the dependencies.
        dependencies: The declared dependencies. ``None`` means no dependencies.

    Returns:
        The dependency names, in declared order.

    Raises:
        InvalidDependencyListError: If ``dependencies`` is not a list or tuple of strings.
    """
    if dependencies is None:
        return ()
    if not isinstance(dependencies, (list, tuple)):
        raise InvalidDependencyListError(owner, dependencies)
    if not all(isinstance(name, str) and name for name in dependencies):
        raise InvalidDependencyListError(owner, dependencies)
    return tuple(dependencies)


class GraphNode(BaseModel):
    """A named resource and its direct dependency edges.

    Attributes:
        name: Unique name of the resource within its graph.
        dependencies: Direct dependency names, in declared order.
    """

    name: str = Field(..., description="Unique name of the resource.")
    dependencies: List[str] = Field(
        default_factory=list,
        description="Direct dependency names in declared order.",
    )


class DependencyCheckError(BaseModel):
    """Value object describing why a dependency check failed.

    Attributes:
        code: What went wrong.
        resource: The name that was missing or closed the cycle.
    """

    model_config = ConfigDict(frozen=True)

    code: DependencyErrorCode = Field(..., description="The kind of failure.")
    resource: str = Field(..., description="The offending resource name.")


class DependencyCheckResult(BaseModel):
    """Outcome of a single dependency check.

    Attributes:
        root: The resource the check was rooted at.
        order: Resolution order, dependencies first. Empty when the check failed.
        error: The first error found, if any.
    """

    model_config = ConfigDict(frozen=True)

    root: str = Field(..., description="Root of the check.")
    order: Tuple[str, ...] = Field(default=(), description="Topological resolution order.")
    error: Optional[DependencyCheckError] = Field(default=None, description="First error found.")

    @property
    def succeeded(self) -> bool:
        return self.error is None


class ServiceDescriptor(BaseModel):
    """Value object representing a service declaration.

    Attributes:
        name: Unique service name.
        build_type: Singleton or transient.
        service_type: How the service was declared.
        dependencies: Names of the services injected into the factory, in order.
        factory: Callable receiving the resolved dependencies positionally.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, description="Unique service name.")
    build_type: BuildType = Field(default=BuildType.SINGLETON, description="How instances are built.")
    service_type: ServiceType = Field(default=ServiceType.SERVICE, description="Declaration kind.")
    dependencies: Tuple[str, ...] = Field(default=(), description="Dependency service names.")
    factory: Callable[..., Any] = Field(..., description="Factory building the service instance.")


class ModuleDescriptor(BaseModel):
    """A module awaiting load: its dependencies and the services it declares.

    Attributes:
        name: Unique module name.
        dependencies: Names of the modules this module depends on.
        services: Services declared on this module, in declaration order.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, description="Unique module name.")
    dependencies: Tuple[str, ...] = Field(default=(), description="Module dependency names.")
    services: List[ServiceDescriptor] = Field(default_factory=list, description="Declared services.")


class ServiceMetadata(BaseModel):
    """Tracks a registered service and how often it was resolved.

    Attributes:
        descriptor: The service declaration.
        resolution_count: Number of times this service has been instantiated or fetched.
    """

    descriptor: ServiceDescriptor = Field(..., description="The service declaration.")
    resolution_count: int = Field(default=0, description="Number of resolutions.")


class ServiceBlueprint(BaseModel):
    """Public description of how a registered service is built."""

    model_config = ConfigDict(frozen=True)

    service_type: ServiceType
    build_type: BuildType


class EngineSettings(BaseModel):
    """Configuration for a ``ResolutionEngine``.

    Attributes:
        run_hook_suffix: Suffix naming a module's run hook service.
        exec_hook_suffix: Suffix naming a module's exec hook service.
        thread_safe: Guard engine operations with a single re-entrant lock.
        wrap_factory_errors: Wrap non-DI factory failures in ``ServiceFactoryError``.
    """

    model_config = ConfigDict(frozen=True)

    run_hook_suffix: str = Field(default="_run", description="Run hook name suffix.")
    exec_hook_suffix: str = Field(default="_exec", description="Exec hook name suffix.")
    thread_safe: bool = Field(default=True, description="Serialize engine operations.")
    wrap_factory_errors: bool = Field(default=True, description="Wrap factory failures.")

    @field_validator("run_hook_suffix", "exec_hook_suffix")
    @classmethod
    def _suffix_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("hook suffix must not be empty")
        return value

    def run_hook_name(self, module_id: str) -> str:
        return f"{module_id}{self.run_hook_suffix}"

    def exec_hook_name(self, module_id: str) -> str:
        return f"{module_id}{self.exec_hook_suffix}"
