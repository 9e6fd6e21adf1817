"""Configuration loading and API key resolution."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_API_KEY_ENV = "OPENAI_API_KEY"
DEFAULT_API_KEY_FILE = Path("~/.config/textshaper/apikey")
API_LOG_LEVELS = (None, "info", "debug")


@dataclass(frozen=True)
class ClientConfig:
    """Settings for a chat-completion client. Read-only after construction."""

    api_key: str = field(repr=False)
    model: str = DEFAULT_MODEL
    provider: str = "openai"
    endpoint: str = DEFAULT_ENDPOINT
    api_log_level: str | None = None
    max_tokens: int | None = None
    timeout_s: float | None = None

    def __post_init__(self):
        # A non-positive token cap means "let the service decide"
        if self.max_tokens is not None and self.max_tokens <= 0:
            object.__setattr__(self, "max_tokens", None)


@dataclass(frozen=True)
class ShapingConfig:
    """Settings for the shaping pipeline."""

    prompt_optimize: bool = True
    use_first_code_block: bool = False
    max_completion_repeat_count: int = 1


@dataclass(frozen=True)
class AppConfig:
    client: ClientConfig
    shaping: ShapingConfig
    api_key_env: str = DEFAULT_API_KEY_ENV
    api_key_file: Path = DEFAULT_API_KEY_FILE


def get_api_key_file_path(api_key_file: str | Path | None = None) -> Path:
    return Path(api_key_file or DEFAULT_API_KEY_FILE).expanduser()


def resolve_api_key(
    api_key_env: str = DEFAULT_API_KEY_ENV,
    api_key_file: str | Path | None = None,
) -> str:
    """Find the API key.

    The environment variable wins (a ``.env`` file in the working directory
    is loaded first); otherwise the first line of the key file is used.

    Raises:
        ConfigurationError: If neither source yields a key
    """
    load_dotenv()
    api_key = os.getenv(api_key_env)
    if api_key:
        return api_key.strip()

    path = get_api_key_file_path(api_key_file)
    if not path.is_file():
        raise ConfigurationError(
            f"API key file not found: {path} (and {api_key_env} is not set)"
        )

    content = path.read_text().strip()
    if not content:
        raise ConfigurationError(f"API key file is empty: {path}")
    return content.splitlines()[0].strip()


def parse_config(data: dict[str, Any], *, api_key: str = "") -> AppConfig:
    """Build an ``AppConfig`` from the ``textshaper`` section of a config mapping.

    Raises:
        ConfigurationError: If a value is invalid
    """
    section = data.get("textshaper")
    if section is None:
        raise ConfigurationError("Configuration missing 'textshaper' section")
    if not isinstance(section, dict):
        raise ConfigurationError("'textshaper' section must be a mapping")

    api_log_level = section.get("api_log_level")
    if api_log_level not in API_LOG_LEVELS:
        raise ConfigurationError(
            f"api_log_level must be one of info, debug; got {api_log_level!r}"
        )

    repeat_count = section.get("max_completion_repeat_count", 1)
    if not isinstance(repeat_count, int) or repeat_count < 1:
        raise ConfigurationError(
            f"max_completion_repeat_count must be a positive integer, got {repeat_count!r}"
        )

    max_tokens = section.get("max_tokens")
    if max_tokens is not None and not isinstance(max_tokens, int):
        raise ConfigurationError(f"max_tokens must be an integer, got {max_tokens!r}")

    timeout_s = section.get("timeout_s")
    if timeout_s is not None and (
        isinstance(timeout_s, bool)
        or not isinstance(timeout_s, (int, float))
        or timeout_s <= 0
    ):
        raise ConfigurationError(
            f"timeout_s must be a positive number of seconds, got {timeout_s!r}"
        )

    flags = {}
    for name, default in (("prompt_optimize", True), ("use_first_code_block", False)):
        value = section.get(name, default)
        if not isinstance(value, bool):
            raise ConfigurationError(f"{name} must be true or false, got {value!r}")
        flags[name] = value

    client = ClientConfig(
        api_key=api_key,
        model=section.get("model", DEFAULT_MODEL),
        provider=section.get("provider", "openai"),
        endpoint=section.get("endpoint", DEFAULT_ENDPOINT),
        api_log_level=api_log_level,
        max_tokens=max_tokens,
        timeout_s=timeout_s,
    )
    shaping = ShapingConfig(
        prompt_optimize=flags["prompt_optimize"],
        use_first_code_block=flags["use_first_code_block"],
        max_completion_repeat_count=repeat_count,
    )
    return AppConfig(
        client=client,
        shaping=shaping,
        api_key_env=section.get("api_key_env", DEFAULT_API_KEY_ENV),
        api_key_file=get_api_key_file_path(section.get("api_key_file")),
    )


def load_config(path: str | Path, *, resolve_key: bool = True) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to YAML configuration file
        resolve_key: Look up the API key now (the doctor skips this)

    Returns:
        Validated configuration

    Raises:
        FileNotFoundError: If config file not found
        ConfigurationError: If configuration is invalid or the key is missing
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("Configuration missing 'textshaper' section")

    config = parse_config(data)
    if not resolve_key:
        return config

    api_key = resolve_api_key(config.api_key_env, config.api_key_file)
    return parse_config(data, api_key=api_key)
