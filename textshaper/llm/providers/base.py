"""Base client protocol/interface."""

import threading
from typing import Protocol, runtime_checkable

from ..codec import ChatCompletion, CreateChatCompletion


@runtime_checkable
class GenerativeClient(Protocol):
    """Protocol for chat-completion clients used by the shaping pipeline."""

    def make_request(self, prompt: str) -> CreateChatCompletion:
        """Build a completion request carrying ``prompt`` as the user message."""
        ...

    def send(
        self,
        request: CreateChatCompletion,
        cancel: threading.Event | None = None,
    ) -> ChatCompletion:
        """Execute one completion exchange.

        Args:
            request: Request to send
            cancel: Optional signal that aborts the in-flight exchange

        Returns:
            Decoded completion

        Raises:
            TransportError, UnexpectedStatusCodeError, MalformedBodyError
        """
        ...
