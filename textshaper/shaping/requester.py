"""Completion requests with a bounded continuation-on-truncation policy."""

import dataclasses
import threading

from ..errors import ShaperError
from ..llm.codec import FINISH_REASON_LENGTH, ChatMessage, CreateChatCompletion, Usage
from ..llm.providers.base import GenerativeClient
from ..logger import get_logger

logger = get_logger("requester")

CONTINUE_DIRECTIVE = "Continue from where you left off."


def make_continuation(request: CreateChatCompletion, partial: str) -> CreateChatCompletion:
    """Return a new request that asks the model to continue ``partial``."""
    return dataclasses.replace(
        request,
        messages=request.messages
        + (
            ChatMessage(role="assistant", content=partial),
            ChatMessage(role="system", content=CONTINUE_DIRECTIVE),
        ),
    )


class CompletionRequester:
    """Issue a prompt and accumulate the completion text.

    A response cut off by the service's length limit is continued by
    re-sending the conversation with the partial answer appended, up to
    ``max_attempts`` exchanges in total. The default of one exchange returns
    a truncated completion as-is.
    """

    def __init__(self, client: GenerativeClient, max_attempts: int = 1):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.client = client
        self.max_attempts = max_attempts

    def request(self, prompt: str, cancel: threading.Event | None = None) -> str:
        """Send ``prompt`` and return the completion text."""
        result, _ = self.request_with_usage(prompt, cancel=cancel)
        return result

    def request_with_usage(
        self, prompt: str, cancel: threading.Event | None = None
    ) -> tuple[str, Usage | None]:
        """Send ``prompt`` and return the completion text and token usage.

        A response without choices yields whatever text has accumulated,
        possibly an empty string. Only the first choice is used. Usage is
        summed over continuation exchanges and is None when the service
        reported none.

        Raises:
            ShaperError: Any client failure, with request context attached
        """
        result = ""
        usage = None
        request = self.client.make_request(prompt)

        for attempt in range(1, self.max_attempts + 1):
            try:
                completion = self.client.send(request, cancel=cancel)
            except ShaperError as e:
                e.add_note("failed to send chat message")
                raise

            if completion.usage is not None:
                usage = completion.usage if usage is None else usage + completion.usage

            if not completion.choices:
                break

            # use the first choice only
            choice = completion.choices[0]
            result += choice.message.content
            if choice.finish_reason != FINISH_REASON_LENGTH:
                break

            if attempt == self.max_attempts:
                logger.warning(
                    "completion truncated",
                    attempts=attempt,
                    result_length=len(result),
                )
                break

            logger.info("completion truncated, requesting continuation", attempt=attempt)
            request = make_continuation(request, choice.message.content)

        return result, usage
