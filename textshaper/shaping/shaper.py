"""Shaping orchestrator: one instruction plus input in, one ShapeResult out."""

import threading
from dataclasses import dataclass

from ..config import ShapingConfig
from ..llm.codec import Usage
from ..llm.providers.base import GenerativeClient
from ..logger import get_logger
from .prompt import optimize_prompt
from .requester import CompletionRequester
from .response import optimize_response

logger = get_logger("shaper")


def ensure_trailing_newline(text: str) -> str:
    if not text.endswith("\n"):
        return text + "\n"
    return text


@dataclass(frozen=True)
class ShapeResult:
    """Outcome of one shaping call.

    ``result`` always ends with a line terminator; one is appended when
    missing and existing ones are left alone. ``usage`` is the token usage
    reported for the call, for cost accounting.
    """

    prompt: str
    raw_result: str
    result: str
    usage: Usage | None = None

    def __post_init__(self):
        object.__setattr__(self, "result", ensure_trailing_newline(self.result))


class Shaper:
    """Run the shaping pipeline against a generative client.

    Direct mode (empty input, prompt optimization off) sends the prompt as-is
    and returns the raw completion. Otherwise the prompt is wrapped with the
    input, and the completion is cleaned before it is returned.
    """

    def __init__(self, client: GenerativeClient, config: ShapingConfig | None = None):
        self.client = client
        self.config = config or ShapingConfig()
        self.requester = CompletionRequester(
            client, max_attempts=self.config.max_completion_repeat_count
        )

    def is_direct(self, input_text: str) -> bool:
        return input_text == "" and not self.config.prompt_optimize

    def shape_text(
        self,
        prompt: str,
        input_text: str,
        cancel: threading.Event | None = None,
    ) -> ShapeResult:
        """Shape ``input_text`` according to ``prompt``.

        Raises:
            ShaperError: From the requester or the response optimizer
        """
        if self.is_direct(input_text):
            logger.debug("shaping", mode="direct")
            raw_result, usage = self.requester.request_with_usage(prompt, cancel=cancel)
            return ShapeResult(
                prompt=prompt, raw_result=raw_result, result=raw_result, usage=usage
            )

        logger.debug("shaping", mode="optimized", input_length=len(input_text))
        optimized = optimize_prompt(prompt, input_text)
        raw_result, usage = self.requester.request_with_usage(optimized, cancel=cancel)
        result = optimize_response(raw_result, self.config.use_first_code_block)
        return ShapeResult(
            prompt=optimized, raw_result=raw_result, result=result, usage=usage
        )
