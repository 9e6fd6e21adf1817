"""Text shaping pipeline."""

from .prompt import optimize_prompt
from .requester import CompletionRequester
from .response import optimize_response
from .runner import run_inputs
from .shaper import Shaper, ShapeResult

__all__ = [
    "CompletionRequester",
    "Shaper",
    "ShapeResult",
    "optimize_prompt",
    "optimize_response",
    "run_inputs",
]
