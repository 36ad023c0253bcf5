import logging
from typing import Any, Dict, Sequence

from modular_di.domain import (
    BuildType,
    DIException,
    ILifetimeManager,
    ServiceDescriptor,
    ServiceFactoryError,
)

logger = logging.getLogger(__name__)


class LifetimeManager(ILifetimeManager):
    """Builds service instances according to their build type.

    Singleton instances are built once and cached by service name; transient
    instances are built on every call and never cached.

    Attributes:
        _singleton_cache: Cache for singleton instances, keyed by service name.
        _wrap_factory_errors: Whether non-DI factory failures are wrapped.
    """

    def __init__(self, wrap_factory_errors: bool = True) -> None:
        """Initialize the lifetime manager with an empty cache.

        Args:
            wrap_factory_errors: Wrap factory failures in ``ServiceFactoryError``.
        """
        self._singleton_cache: Dict[str, Any] = {}
        self._wrap_factory_errors = wrap_factory_errors

    def get_or_create(self, descriptor: ServiceDescriptor, args: Sequence[Any]) -> Any:
        """Get existing instance or build a new one based on build type.

        Args:
            descriptor: The service declaration.
            args: Resolved dependency instances, passed to the factory positionally.

        Returns:
            Instance according to build type rules:
            - Singleton: Returns cached instance or builds and caches a new one
            - Transient: Always builds a new instance

        Raises:
            ServiceFactoryError: If the factory raises a non-DI exception.
        """
        if descriptor.build_type == BuildType.SINGLETON:
            if descriptor.name not in self._singleton_cache:
                self._singleton_cache[descriptor.name] = self._build(descriptor, args)
            return self._singleton_cache[descriptor.name]

        return self._build(descriptor, args)

    def _build(self, descriptor: ServiceDescriptor, args: Sequence[Any]) -> Any:
        logger.debug("Building %s service %r", descriptor.build_type.value, descriptor.name)
        try:
            return descriptor.factory(*args)
        except DIException:
            raise
        except Exception as e:
            if not self._wrap_factory_errors:
                raise
            raise ServiceFactoryError(descriptor.name, str(e)) from e

    def evict(self, name: str) -> None:
        """Drop the cached singleton for ``name``, if any."""
        self._singleton_cache.pop(name, None)

    def clear_cache(self) -> None:
        """Clear all cached singleton instances."""
        self._singleton_cache.clear()
