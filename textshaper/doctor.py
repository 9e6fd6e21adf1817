"""
Configuration Doctor - Validates textshaper configuration and credentials.

Usage:
    python -m textshaper.doctor --config config/textshaper.yaml
"""

import argparse
import sys
from pathlib import Path
from typing import Dict

from .config import AppConfig, load_config, resolve_api_key
from .errors import ConfigurationError


def check_provider(config: AppConfig) -> Dict:
    """Check the configured provider is registered and has a key.

    Returns:
        Dict with:
        - available: bool
        - error: str (if not available)
        - warnings: list of str
    """
    from .llm.providers import get_provider

    result = {
        "available": False,
        "error": None,
        "warnings": []
    }

    try:
        get_provider(config.client.provider)
        resolve_api_key(config.api_key_env, config.api_key_file)
        result["available"] = True
    except ConfigurationError as e:
        result["error"] = str(e)

    return result


def check_settings(config: AppConfig) -> Dict:
    """Check model and shaping settings.

    Returns:
        Dict with:
        - valid: bool
        - error: str (if invalid)
        - warnings: list of str
    """
    result = {
        "valid": False,
        "error": None,
        "warnings": []
    }

    if not config.client.model:
        result["error"] = "No model specified"
        return result

    if config.client.max_tokens is None:
        result["warnings"].append("max_tokens not set; completions may be long")

    if config.shaping.max_completion_repeat_count > 1:
        result["warnings"].append(
            f"Continuation enabled: up to {config.shaping.max_completion_repeat_count} "
            "requests per shaping call"
        )

    if config.client.timeout_s is None:
        result["warnings"].append("timeout_s not set; requests may block indefinitely")

    result["valid"] = True
    return result


def check_config(config_path: str) -> Dict:
    """Validate configuration.

    Returns:
        Dict with:
        - valid: bool
        - provider: status
        - settings: status
        - errors: [str]
        - warnings: [str]
    """
    result = {
        "valid": False,
        "provider": {},
        "settings": {},
        "errors": [],
        "warnings": []
    }

    if not Path(config_path).exists():
        result["errors"].append(f"Configuration file not found: {config_path}")
        return result

    try:
        config = load_config(config_path, resolve_key=False)
    except ConfigurationError as e:
        result["errors"].append(f"Failed to parse configuration: {e}")
        return result

    result["provider"] = check_provider(config)
    if not result["provider"]["available"]:
        result["errors"].append(
            f"Provider '{config.client.provider}' unavailable: {result['provider']['error']}"
        )

    result["settings"] = check_settings(config)
    if not result["settings"]["valid"]:
        result["errors"].append(f"Settings invalid: {result['settings']['error']}")
    result["warnings"].extend(result["settings"]["warnings"])

    result["valid"] = len(result["errors"]) == 0
    return result


def format_status(ok: bool) -> str:
    """Format status with a check mark."""
    return "✓" if ok else "✗"


def print_report(config_path: str, check_result: Dict) -> None:
    """Print configuration validation report."""
    print("textshaper Configuration Doctor")
    print("=" * 40)
    print()
    print(f"Config: {config_path}")
    print()

    if check_result["provider"]:
        available = check_result["provider"]["available"]
        print(f"Provider: {format_status(available)}", end="")
        print(" Available" if available else f" {check_result['provider']['error']}")

    if check_result["settings"]:
        print(f"Settings: {format_status(check_result['settings']['valid'])}")
    print()

    if check_result["errors"]:
        print("Errors:")
        for error in check_result["errors"]:
            print(f"  - {error}")
        print()

    if check_result["warnings"]:
        print("Warnings:")
        for warning in check_result["warnings"]:
            print(f"  - {warning}")
        print()

    if check_result["valid"]:
        print("Status: ✓ VALID")
    else:
        print(f"Status: ✗ INVALID ({len(check_result['errors'])} error(s))")


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Validate textshaper configuration and credentials"
    )
    parser.add_argument(
        "--config",
        default="config/textshaper.yaml",
        help="Path to configuration file (default: config/textshaper.yaml)"
    )

    args = parser.parse_args(argv)

    result = check_config(args.config)
    print_report(args.config, result)

    sys.exit(0 if result["valid"] else 1)


if __name__ == "__main__":
    main()
