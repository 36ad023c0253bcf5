"""
modular-di: Module based Dependency Injection engine with dependency graph resolution.

Public API exports for the modular-di package.
"""

# Application exports
from modular_di.application.dependency_graph import DependencyGraph
from modular_di.application.engine import ResolutionEngine
from modular_di.application.module_handle import ModuleHandle

# Domain exports
from modular_di.domain.enums import BuildType, ServiceType
from modular_di.domain.exceptions import (
    CircularDependencyError,
    CircularModuleDependency,
    CircularServiceDependency,
    DIException,
    InvalidDependencyListError,
    ModuleNotFound,
    RegistrationError,
    ResourceNotFoundError,
    ServiceFactoryError,
    ServiceNotFound,
)
from modular_di.domain.models import EngineSettings

__version__ = "0.1.0"

__all__ = [
    # Engine
    "ResolutionEngine",
    "ModuleHandle",
    "DependencyGraph",
    "EngineSettings",
    # Enums
    "BuildType",
    "ServiceType",
    # Exceptions
    "DIException",
    "ResourceNotFoundError",
    "ModuleNotFound",
    "ServiceNotFound",
    "CircularDependencyError",
    "CircularModuleDependency",
    "CircularServiceDependency",
    "RegistrationError",
    "InvalidDependencyListError",
    "ServiceFactoryError",
]
