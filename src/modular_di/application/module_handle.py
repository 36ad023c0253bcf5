from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

from modular_di.domain import BuildType, ServiceDescriptor, ServiceType, normalize_dependencies

if TYPE_CHECKING:
    from modular_di.application.engine import ResolutionEngine


class ModuleHandle:
    """Declares services on a module defined through ``ResolutionEngine.module``.

    Every declaration method returns the handle so calls can be chained.

    Example:
        >>> engine.module("storage").service(
        ...     "db", lambda: Database()
        ... ).factory(
        ...     "session", lambda db: Session(db), ["db"]
        ... )
    """

    def __init__(self, engine: "ResolutionEngine", name: str) -> None:
        self._engine = engine
        self.name = name

    def service(
        self,
        name: str,
        factory: Callable[..., Any],
        dependencies: Optional[Sequence[str]] = None,
        build_type: BuildType = BuildType.SINGLETON,
    ) -> "ModuleHandle":
        """Declare a service built by ``factory``.

        Args:
            name: Unique service name.
            factory: Callable receiving the resolved dependencies positionally.
            dependencies: Names of the services to inject, in order.
            build_type: Singleton (default) or transient.

        Raises:
            InvalidDependencyListError: If ``dependencies`` is not a list or tuple of names.
            RegistrationError: If the name is taken or the module is already loaded.
        """
        return self._declare(name, factory, dependencies, BuildType(build_type), ServiceType.SERVICE)

    def factory(
        self,
        name: str,
        factory: Callable[..., Any],
        dependencies: Optional[Sequence[str]] = None,
    ) -> "ModuleHandle":
        """Declare a transient service; ``factory`` runs on every resolution."""
        return self._declare(name, factory, dependencies, BuildType.TRANSIENT, ServiceType.FACTORY)

    def value(self, name: str, value: Any) -> "ModuleHandle":
        """Declare a service that always resolves to ``value``."""
        return self._declare(name, lambda: value, None, BuildType.SINGLETON, ServiceType.VALUE)

    def run(self, factory: Callable[..., Any], dependencies: Optional[Sequence[str]] = None) -> "ModuleHandle":
        """Declare the hook fired once when this module is loaded."""
        name = self._engine.settings.run_hook_name(self.name)
        return self._declare(name, factory, dependencies, BuildType.TRANSIENT, ServiceType.RUN)

    def exec(self, factory: Callable[..., Any], dependencies: Optional[Sequence[str]] = None) -> "ModuleHandle":
        """Declare the hook fired by ``ResolutionEngine.execute``."""
        name = self._engine.settings.exec_hook_name(self.name)
        return self._declare(name, factory, dependencies, BuildType.TRANSIENT, ServiceType.EXEC)

    def _declare(
        self,
        name: str,
        factory: Callable[..., Any],
        dependencies: Optional[Sequence[str]],
        build_type: BuildType,
        service_type: ServiceType,
    ) -> "ModuleHandle":
        descriptor = ServiceDescriptor(
            name=name,
            build_type=build_type,
            service_type=service_type,
            dependencies=normalize_dependencies(name, dependencies),
            factory=factory,
        )
        self._engine.declare_service(self.name, descriptor)
        return self

    def __repr__(self) -> str:
        return f"ModuleHandle({self.name!r})"
