import logging
from typing import Dict, Iterator, Optional

from modular_di.domain import (
    BuildType,
    ServiceBlueprint,
    ServiceDescriptor,
    ServiceMetadata,
    ServiceNotFound,
    ServiceType,
)

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Stores, per service name, the declaration used to build it.

    Pure bookkeeping; resolution is done by the engine.

    Attributes:
        _services: Mapping of service names to their metadata, in registration order.
    """

    def __init__(self) -> None:
        self._services: Dict[str, ServiceMetadata] = {}

    def register(self, descriptor: ServiceDescriptor) -> None:
        """Register or replace the declaration of a service.

        Args:
            descriptor: The service declaration.
        """
        self._services[descriptor.name] = ServiceMetadata(descriptor=descriptor)
        logger.debug(
            "Registered %s service %r (%s)",
            descriptor.build_type.value,
            descriptor.name,
            descriptor.service_type.value,
        )

    def is_service(self, name: str) -> bool:
        return name in self._services

    def get(self, name: str) -> ServiceDescriptor:
        """Return the declaration of a registered service.

        Raises:
            ServiceNotFound: If no service is registered under ``name``.
        """
        if name not in self._services:
            raise ServiceNotFound(name)
        return self._services[name].descriptor

    def get_build_type(self, name: str) -> Optional[BuildType]:
        if name not in self._services:
            return None
        return self._services[name].descriptor.build_type

    def get_service_type(self, name: str) -> Optional[ServiceType]:
        if name not in self._services:
            return None
        return self._services[name].descriptor.service_type

    def record_resolution(self, name: str) -> None:
        if name in self._services:
            self._services[name].resolution_count += 1

    def resolution_count(self, name: str) -> int:
        """Return how many times ``name`` was resolved, ``0`` if unknown."""
        if name not in self._services:
            return 0
        return self._services[name].resolution_count

    def blueprints(self) -> Dict[str, ServiceBlueprint]:
        """Return how every registered service is built, keyed by name."""
        return {
            name: ServiceBlueprint(
                service_type=metadata.descriptor.service_type,
                build_type=metadata.descriptor.build_type,
            )
            for name, metadata in self._services.items()
        }

    def clear(self) -> None:
        self._services.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._services

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._services))

    def __len__(self) -> int:
        return len(self._services)
