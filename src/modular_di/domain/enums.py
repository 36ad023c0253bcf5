from enum import Enum, IntEnum


class BuildType(str, Enum):
    """Defines how a service instance is built.

    Attributes:
        SINGLETON: Built once and cached for the lifetime of the engine.
        TRANSIENT: New instance built on each resolution.
    """

    SINGLETON = "singleton"
    TRANSIENT = "transient"

    def __str__(self) -> str:
        return self.value


class ServiceType(str, Enum):
    """Describes how a service was declared on its module.

    Attributes:
        SERVICE: Regular service declared with a factory.
        FACTORY: Service declared as a factory producing fresh instances.
        VALUE: Constant value wrapped as a service.
        RUN: Module run hook, fired when the module is loaded.
        EXEC: Module exec hook, fired by ``ResolutionEngine.execute``.
    """

    SERVICE = "service"
    FACTORY = "factory"
    VALUE = "value"
    RUN = "run"
    EXEC = "exec"

    def __str__(self) -> str:
        return self.value


class GraphKind(str, Enum):
    """Namespace a dependency graph belongs to."""

    MODULE = "module"
    SERVICE = "service"

    def __str__(self) -> str:
        return self.value


class DependencyErrorCode(IntEnum):
    """Error codes reported by a dependency check."""

    NOT_FOUND = 1
    CIRCULAR_DEPENDENCY = 2
