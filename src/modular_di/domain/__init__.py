"""
Domain layer - Core business logic and models.

This layer contains the fundamental rules and models for dependency resolution.
It has no dependencies on other layers.
"""

from .enums import BuildType, DependencyErrorCode, GraphKind, ServiceType
from .exceptions import (
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
from .interfaces import IDependencyGraph, IEngine, ILifetimeManager
from .models import (
    DependencyCheckError,
    DependencyCheckResult,
    EngineSettings,
    GraphNode,
    ModuleDescriptor,
    ServiceBlueprint,
    ServiceDescriptor,
    ServiceMetadata,
    normalize_dependencies,
)

__all__ = [
    # Enums
    "BuildType",
    "ServiceType",
    "GraphKind",
    "DependencyErrorCode",
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
    # Interfaces
    "IDependencyGraph",
    "ILifetimeManager",
    "IEngine",
    # Models
    "GraphNode",
    "DependencyCheckError",
    "DependencyCheckResult",
    "ServiceDescriptor",
    "ModuleDescriptor",
    "ServiceMetadata",
    "ServiceBlueprint",
    "EngineSettings",
    "normalize_dependencies",
]
