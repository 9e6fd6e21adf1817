"""Drive a Shaper over several inputs with per-input callbacks."""

from typing import Callable, Iterable

from ..logger import get_logger
from .shaper import Shaper, ShapeResult

logger = get_logger("runner")

BeforeCallback = Callable[[str], None]
AfterCallback = Callable[[str, ShapeResult | None], None]


def run_inputs(
    shaper: Shaper,
    prompt: str,
    inputs: Iterable[tuple[str, str]],
    on_before: BeforeCallback | None = None,
    on_after: AfterCallback | None = None,
) -> list[ShapeResult]:
    """Shape each ``(name, text)`` pair in order.

    ``on_after`` receives the result, or None when shaping failed; the
    failure is then re-raised and the remaining inputs are not processed.

    Returns:
        Results in input order
    """
    results = []
    for name, text in inputs:
        if on_before:
            on_before(name)

        try:
            result = shaper.shape_text(prompt, text)
        except Exception as e:
            logger.error(
                "shaping failed",
                input=name,
                error_type=type(e).__name__,
                error_message=str(e),
                error_context=getattr(e, "__notes__", []),
            )
            if on_after:
                on_after(name, None)
            raise

        if on_after:
            on_after(name, result)
        results.append(result)
    return results
