"""Chat-completion client implementations."""

from .base import GenerativeClient
from .openai_chat import OpenAIChatClient
from .registry import build_client, get_provider, list_providers, register_provider

# Register providers
register_provider(OpenAIChatClient.id, OpenAIChatClient)

__all__ = [
    "GenerativeClient",
    "OpenAIChatClient",
    "build_client",
    "register_provider",
    "get_provider",
    "list_providers",
]
