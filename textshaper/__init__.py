"""Shape and transform text with a chat-completion model."""

from .config import AppConfig, ClientConfig, ShapingConfig, load_config
from .errors import (
    ConfigurationError,
    ShaperError,
    TransportError,
    UnexpectedStatusCodeError,
)
from .llm import build_client
from .shaping import Shaper, ShapeResult


def create_shaper(config: AppConfig) -> Shaper:
    """Build a Shaper wired to the client named in ``config``."""
    return Shaper(build_client(config.client), config.shaping)


__all__ = [
    "AppConfig",
    "ClientConfig",
    "ConfigurationError",
    "Shaper",
    "ShaperError",
    "ShapeResult",
    "ShapingConfig",
    "TransportError",
    "UnexpectedStatusCodeError",
    "create_shaper",
    "load_config",
]
