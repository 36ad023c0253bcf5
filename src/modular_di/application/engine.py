import logging
import threading
from contextlib import nullcontext
from typing import Any, ContextManager, Dict, List, Optional, Sequence, Tuple

from modular_di.application.dependency_graph import DependencyGraph
from modular_di.application.lifetime_manager import LifetimeManager
from modular_di.application.module_handle import ModuleHandle
from modular_di.application.module_registry import ModuleRegistry
from modular_di.application.resolver import ServiceResolver
from modular_di.application.service_registry import ServiceRegistry
from modular_di.domain import (
    BuildType,
    CircularModuleDependency,
    CircularServiceDependency,
    DependencyCheckError,
    DependencyErrorCode,
    DIException,
    EngineSettings,
    GraphKind,
    IEngine,
    ModuleNotFound,
    RegistrationError,
    ServiceBlueprint,
    ServiceDescriptor,
    ServiceNotFound,
    ServiceType,
)

logger = logging.getLogger(__name__)


class ResolutionEngine(IEngine):
    """Main dependency injection engine.

    Owns the module and service dependency graphs, the registries, the
    singleton cache and the list of loaded modules. One engine is one
    independent environment; ``destroy`` returns it to a blank state.

    Attributes:
        settings: Engine configuration.
        _module_graph: Dependency graph of module names.
        _service_graph: Dependency graph of service names.
        _module_registry: Modules defined but not loaded yet.
        _service_registry: Services of loaded modules.
        _lifetime_manager: Component applying singleton/transient rules.
        _resolver: Component building services and their dependencies.
        _loaded_modules: Names of loaded modules, in load order.
        _lock: Coarse lock serializing engine operations.
    """

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        """Initialize an empty engine.

        Args:
            settings: Engine configuration. Defaults are used if omitted.
        """
        self.settings = settings if settings is not None else EngineSettings()
        self._module_graph = DependencyGraph(GraphKind.MODULE)
        self._service_graph = DependencyGraph(GraphKind.SERVICE)
        self._module_registry = ModuleRegistry(self._module_graph)
        self._service_registry = ServiceRegistry()
        self._lifetime_manager = LifetimeManager(self.settings.wrap_factory_errors)
        self._resolver = ServiceResolver(self._service_graph, self._service_registry, self._lifetime_manager)
        self._loaded_modules: List[str] = []
        self._lock: ContextManager[Any] = threading.RLock() if self.settings.thread_safe else nullcontext()

    def module(self, name: str, dependencies: Optional[Sequence[str]] = None) -> ModuleHandle:
        """Define a module, or fetch an already defined one, to declare services on.

        Args:
            name: Unique module name.
            dependencies: Names of the modules this module depends on. Only
                recorded the first time the module is defined.

        Returns:
            Handle used to declare the module's services.

        Raises:
            InvalidDependencyListError: If ``dependencies`` is not a list or tuple of names.
            RegistrationError: If the module is already loaded.

        Example:
            >>> engine.module("storage").service("db", lambda: Database())
            >>> engine.module("api", ["storage"]).factory("handler", Handler, ["db"])
            >>> engine.load_module("api")
        """
        with self._lock:
            if name in self._loaded_modules:
                raise RegistrationError(f"Module {name!r} is already loaded")
            self._module_registry.define_module(name, dependencies)
            return ModuleHandle(self, name)

    def declare_service(self, module_name: str, descriptor: ServiceDescriptor) -> None:
        """Add a service declaration to a module that is not loaded yet.

        Raises:
            RegistrationError: If the module is loaded or the service name is taken.
            ModuleNotFound: If the module was never defined.
        """
        with self._lock:
            if module_name in self._loaded_modules:
                raise RegistrationError(
                    f"Cannot declare service {descriptor.name!r} on loaded module {module_name!r}"
                )
            if self._service_registry.is_service(descriptor.name):
                raise RegistrationError(f"Service {descriptor.name!r} is already registered")
            self._module_registry.declare_service(module_name, descriptor)

    def load_module(self, module_id: str) -> "ResolutionEngine":
        """Load a module and, first, every module it depends on.

        Services of each newly loaded module are registered, then the run hook
        of each newly loaded module is fired in resolution order. Modules in
        the resolution order that were loaded by an earlier call are skipped
        entirely: their services are not registered again and their run hooks
        do not fire again, so every run hook fires at most once per engine.
        Loading an already loaded module does nothing.

        Args:
            module_id: The module to load.

        Returns:
            The engine, for chaining.

        Raises:
            ModuleNotFound: If the module or one of its dependencies is not defined.
            CircularModuleDependency: If module dependencies form a cycle.
        """
        with self._lock:
            if module_id in self._loaded_modules:
                return self

            result = self._module_graph.run_dependency_check(module_id)
            self._module_graph.reset_dependency_check()
            if result.error is not None:
                raise self._module_error(module_id, result.error)

            newly_loaded: List[str] = []
            for name in result.order:
                if name in self._loaded_modules:
                    continue
                module = self._module_registry.pop_module(name)
                self._loaded_modules.append(name)
                for descriptor in module.services:
                    self._register_service(descriptor)
                newly_loaded.append(name)
                logger.info("Loaded module %r with %d service(s)", name, len(module.services))

            for name in newly_loaded:
                hook = self.settings.run_hook_name(name)
                if self._service_graph.is_resource(hook):
                    self.invoke_service(hook)

            return self

    def _register_service(self, descriptor: ServiceDescriptor) -> None:
        """Insert a service of a loading module into the service graph and registry."""
        self._service_graph.add_resource(descriptor.name)
        self._service_graph.add_dependencies(descriptor.name, descriptor.dependencies)
        self._service_registry.register(descriptor)

    def invoke_service(self, service_id: str, want_return: bool = False) -> Any:
        """Resolve a service and all of its dependencies.

        Args:
            service_id: The service to resolve.
            want_return: Return the instance instead of ``None``.

        Returns:
            The service instance if ``want_return`` is set, otherwise ``None``.

        Raises:
            ServiceNotFound: If the service or one of its dependencies is not registered.
            CircularServiceDependency: If service dependencies form a cycle.
            ServiceFactoryError: If a factory fails.
        """
        with self._lock:
            result = self._service_graph.run_dependency_check(service_id)
            self._service_graph.reset_dependency_check()
            if result.error is not None:
                raise self._service_error(service_id, result.error)

            args = self._resolver.resolve_arguments(service_id)
            instance = self._resolver.instantiate(service_id, args)

            if want_return:
                return instance
            return None

    def inject(self, service_id: str) -> Any:
        """Resolve and return a service instance.

        Example:
            >>> api = engine.inject("api")
        """
        return self.invoke_service(service_id, want_return=True)

    def invoke(self, service_id: str) -> None:
        """Resolve a service for its side effects only."""
        self.invoke_service(service_id)

    def execute(self) -> None:
        """Fire the exec hook of every loaded module that declares one, in load order."""
        with self._lock:
            for module_id in list(self._loaded_modules):
                hook = self.settings.exec_hook_name(module_id)
                if self._service_graph.is_resource(hook):
                    self.invoke_service(hook)

    def is_service(self, service_id: str) -> bool:
        return self._service_registry.is_service(service_id)

    def get_service_type(self, service_id: str) -> Optional[ServiceType]:
        return self._service_registry.get_service_type(service_id)

    def get_service_build_type(self, service_id: str) -> Optional[BuildType]:
        return self._service_registry.get_build_type(service_id)

    def get_service_blueprints(self) -> Dict[str, ServiceBlueprint]:
        return self._service_registry.blueprints()

    @property
    def loaded_modules(self) -> Tuple[str, ...]:
        """Names of the loaded modules, in load order."""
        return tuple(self._loaded_modules)

    def is_module_loaded(self, module_id: str) -> bool:
        return module_id in self._loaded_modules

    def destroy(self) -> None:
        """Clear all modules, services, graphs and cached instances.

        The engine can be used again afterwards as a fresh environment.
        """
        with self._lock:
            self._module_registry.clear()
            self._service_graph.clear()
            self._service_registry.clear()
            self._lifetime_manager.clear_cache()
            self._loaded_modules.clear()
            logger.info("Engine destroyed")

    @staticmethod
    def _module_error(module_id: str, error: DependencyCheckError) -> DIException:
        if error.code == DependencyErrorCode.NOT_FOUND:
            return ModuleNotFound(error.resource, requested=module_id)
        return CircularModuleDependency(error.resource, requested=module_id)

    @staticmethod
    def _service_error(service_id: str, error: DependencyCheckError) -> DIException:
        if error.code == DependencyErrorCode.NOT_FOUND:
            return ServiceNotFound(error.resource, requested=service_id)
        return CircularServiceDependency(error.resource, requested=service_id)

    def __enter__(self) -> "ResolutionEngine":
        """Context manager entry - returns self."""
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Context manager exit - destroys the environment."""
        self.destroy()
        return False
