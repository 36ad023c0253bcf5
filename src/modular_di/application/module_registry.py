import logging
from typing import Dict, Optional, Sequence, Set

from modular_di.application.dependency_graph import DependencyGraph
from modular_di.domain import (
    GraphKind,
    ModuleDescriptor,
    ModuleNotFound,
    RegistrationError,
    ServiceDescriptor,
    normalize_dependencies,
)

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Stores modules that are defined but not yet loaded.

    Module dependency edges are recorded in the module graph when a module is
    first defined. Once a module is loaded its descriptor is popped; its
    services then live in the ``ServiceRegistry``.

    Attributes:
        graph: The module dependency graph.
        _modules: Pending module descriptors, keyed by name.
        _service_names: Every service name declared so far, pending or loaded.
    """

    def __init__(self, graph: Optional[DependencyGraph] = None) -> None:
        """Initialize the registry.

        Args:
            graph: Module graph to record edges in. A new one is created if omitted.
        """
        self.graph = graph if graph is not None else DependencyGraph(GraphKind.MODULE)
        self._modules: Dict[str, ModuleDescriptor] = {}
        self._service_names: Set[str] = set()

    def define_module(self, name: str, dependencies: Optional[Sequence[str]] = None) -> ModuleDescriptor:
        """Create a module descriptor, or fetch the existing one.

        Dependencies are only recorded when the module is created; later calls
        for the same name return the existing descriptor unchanged.

        Args:
            name: Unique module name.
            dependencies: Names of the modules this module depends on.

        Returns:
            The module descriptor.

        Raises:
            InvalidDependencyListError: If ``dependencies`` is not a list or tuple of names.
        """
        if name in self._modules:
            return self._modules[name]

        names = normalize_dependencies(name, dependencies)
        module = ModuleDescriptor(name=name, dependencies=names)
        self._modules[name] = module
        self.graph.add_resource(name)
        self.graph.add_dependencies(name, names)
        logger.debug("Defined module %r depending on %s", name, list(names))
        return module

    def declare_service(self, module_name: str, descriptor: ServiceDescriptor) -> None:
        """Append a service declaration to a pending module.

        Args:
            module_name: The module owning the service.
            descriptor: The service declaration.

        Raises:
            ModuleNotFound: If the module is not defined or already loaded.
            RegistrationError: If a service with the same name was already declared.
        """
        if module_name not in self._modules:
            raise ModuleNotFound(module_name)
        if descriptor.name in self._service_names:
            raise RegistrationError(f"Service {descriptor.name!r} is already declared")

        self._service_names.add(descriptor.name)
        self._modules[module_name].services.append(descriptor)
        logger.debug("Declared service %r on module %r", descriptor.name, module_name)

    def is_defined(self, name: str) -> bool:
        """Return whether ``name`` is a pending, not yet loaded, module."""
        return name in self._modules

    def pop_module(self, name: str) -> ModuleDescriptor:
        """Remove and return a pending module descriptor.

        Raises:
            ModuleNotFound: If the module is not pending.
        """
        if name not in self._modules:
            raise ModuleNotFound(name)
        return self._modules.pop(name)

    def clear(self) -> None:
        self._modules.clear()
        self._service_names.clear()
        self.graph.clear()

    def __len__(self) -> int:
        return len(self._modules)
