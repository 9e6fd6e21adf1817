"""Provider registration and lookup system."""

from typing import Callable, Dict

from ...config import ClientConfig
from ...errors import ConfigurationError
from .base import GenerativeClient

ClientFactory = Callable[[ClientConfig], GenerativeClient]


class ProviderRegistry:
    """Registry of client factories keyed by provider id."""

    def __init__(self):
        self._factories: Dict[str, ClientFactory] = {}

    def register(self, provider_id: str, factory: ClientFactory) -> None:
        self._factories[provider_id] = factory

    def get(self, provider_id: str) -> ClientFactory:
        """Get a client factory by provider id.

        Raises:
            ConfigurationError: If provider not found
        """
        if provider_id not in self._factories:
            available = ", ".join(self._factories.keys())
            raise ConfigurationError(
                f"Provider '{provider_id}' not found. "
                f"Available providers: {available or 'none'}"
            )
        return self._factories[provider_id]

    def list(self) -> list[str]:
        return list(self._factories.keys())


# Global registry instance
_registry = ProviderRegistry()


def register_provider(provider_id: str, factory: ClientFactory) -> None:
    """Register a client factory in the global registry."""
    _registry.register(provider_id, factory)


def get_provider(provider_id: str) -> ClientFactory:
    """Get a client factory from the global registry."""
    return _registry.get(provider_id)


def list_providers() -> list[str]:
    """List all registered provider ids."""
    return _registry.list()


def build_client(config: ClientConfig) -> GenerativeClient:
    """Construct the client for ``config.provider``."""
    return get_provider(config.provider)(config)
