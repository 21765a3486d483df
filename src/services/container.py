"""
Service Container for dependency injection.
Holds the repository and the services built on top of it so the web
layer and the CLI resolve the same instances.
"""
from typing import Dict, Any, Callable, Optional
import logging

logger = logging.getLogger(__name__)


class ServiceNotFoundError(Exception):
    """Raised when a requested service is not registered."""
    pass


class ServiceCreationError(Exception):
    """Raised when a service factory fails."""
    pass


class ServiceContainer:
    """
    Minimal dependency injection container.

    Supports:
    - Singleton services (factory called once, instance reused)
    - Pre-built instances
    - Configuration values
    """

    def __init__(self):
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._instances: Dict[str, Any] = {}
        self._config: Dict[str, Any] = {}

    def register_singleton(self, name: str, factory: Callable[[], Any]) -> None:
        self._factories[name] = factory
        self._instances.pop(name, None)
        logger.debug(f"Registered singleton service: {name}")

    def register_instance(self, name: str, instance: Any) -> None:
        self._instances[name] = instance
        logger.debug(f"Registered service instance: {name}")

    def set_config(self, config: Dict[str, Any]) -> None:
        self._config = dict(config)

    def get_config(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def get(self, name: str) -> Any:
        """
        Resolve a service, creating singletons on first use.

        Raises:
            ServiceNotFoundError: If service is not registered
            ServiceCreationError: If the factory raises
        """
        if name in self._instances:
            return self._instances[name]

        factory = self._factories.get(name)
        if factory is None:
            raise ServiceNotFoundError(f"Service '{name}' not found in container")

        try:
            instance = factory()
        except Exception as e:
            logger.error(f"Failed to create service '{name}': {e}")
            raise ServiceCreationError(f"Failed to create service '{name}': {e}") from e
        self._instances[name] = instance
        return instance

    def has_service(self, name: str) -> bool:
        return name in self._factories or name in self._instances

    def list_services(self) -> Dict[str, str]:
        services = {name: "singleton_factory" for name in self._factories}
        services.update({name: "instance" for name in self._instances if name not in self._factories})
        return services

    def clear_singletons(self) -> None:
        """Drop created singletons (useful for testing)."""
        for name in list(self._instances):
            if name in self._factories:
                del self._instances[name]


# Global container instance
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """Get the global service container instance."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """Reset the global container (useful for testing)."""
    global _container
    _container = None
