"""Response post-processing.

Code block detection is a single regular expression, not a markdown parser:
nested fences or fence-like text inside a block will confuse it.
"""

import functools
import re

from ..errors import ResponseOptimizeError

CODE_FENCE = "```"
FIRST_CODE_BLOCK_PATTERN = r"(?s)```[a-zA-Z0-9]*?\n(.*?\n)```"


@functools.lru_cache(maxsize=None)
def _compile_first_code_block() -> re.Pattern:
    try:
        return re.compile(FIRST_CODE_BLOCK_PATTERN)
    except re.error as e:
        raise ResponseOptimizeError(f"error compiling regex: {e}") from e


def strip_enclosing_fence(text: str) -> str:
    """Drop the opening and closing fence lines of a fully fenced text.

    Texts with two lines or fewer are returned unchanged.
    """
    if text.startswith(CODE_FENCE) and text.endswith(CODE_FENCE):
        lines = text.split("\n")
        if len(lines) > 2:
            return "\n".join(lines[1:-1])
    return text


def find_first_code_block(text: str) -> str | None:
    """Return the interior of the first fenced code block, or None."""
    match = _compile_first_code_block().search(text)
    if match:
        return match.group(1)
    return None


def optimize_response(raw_result: str, use_first_code_block: bool) -> str:
    """Clean a raw completion for display.

    Raises:
        ResponseOptimizeError: If the code block pattern cannot be compiled
    """
    result = strip_enclosing_fence(raw_result)

    if use_first_code_block:
        try:
            code_block = find_first_code_block(result)
        except ResponseOptimizeError as e:
            e.add_note("error finding first code block")
            raise
        if code_block:
            result = code_block
    return result
