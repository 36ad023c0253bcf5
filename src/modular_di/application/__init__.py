"""
Application layer - Use cases and orchestration.

This layer contains the graph, registries and the engine orchestrating them.
It depends only on the Domain layer.
"""

from .dependency_graph import DependencyGraph
from .engine import ResolutionEngine
from .lifetime_manager import LifetimeManager
from .module_handle import ModuleHandle
from .module_registry import ModuleRegistry
from .resolver import ServiceResolver
from .service_registry import ServiceRegistry

__all__ = [
    "ResolutionEngine",
    "ModuleHandle",
    "DependencyGraph",
    "ServiceRegistry",
    "ModuleRegistry",
    "ServiceResolver",
    "LifetimeManager",
]
