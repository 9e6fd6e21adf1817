"""Chat-completion layer: wire codec and pluggable clients."""

from .codec import (
    ChatCompletion,
    ChatMessage,
    Choice,
    CreateChatCompletion,
    ErrorResponse,
    Usage,
)
from .providers import GenerativeClient, OpenAIChatClient, build_client

__all__ = [
    "ChatCompletion",
    "ChatMessage",
    "Choice",
    "CreateChatCompletion",
    "ErrorResponse",
    "Usage",
    "GenerativeClient",
    "OpenAIChatClient",
    "build_client",
]
