"""CLI entry point for configuration introspection.

Usage:
    python -m gemini_studio.config
    python -m gemini_studio.config --check
    python -m gemini_studio.config --json
"""

import argparse
import json
import sys

from gemini_studio.exceptions import ConfigurationError, MissingCredentialError

from .api import require_api_key, resolve_config

# ruff: noqa: T201


def main(argv: list[str] | None = None) -> int:
    """Print the effective configuration with secrets redacted."""
    parser = argparse.ArgumentParser(
        prog="python -m gemini_studio.config",
        description="Show effective studio client configuration",
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Exit non-zero when no API key is available",
    )
    parser.add_argument("--env-file", default=None, help="Optional .env file")
    args = parser.parse_args(argv)

    try:
        config = resolve_config(env_file=args.env_file)
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 2

    if args.json:
        info = {
            "api_key": "[SET]" if config.api_key else "[NOT SET]",
            "text_model": config.text_model,
            "fast_model": config.fast_model,
            "maps_model": config.maps_model,
            "tts_model": config.tts_model,
            "image_model": config.image_model,
            "video_model": config.video_model,
            "poll_interval_seconds": config.poll_interval_seconds,
            "thinking_budget": config.thinking_budget,
            "origin": dict(config.origin),
        }
        print(json.dumps(info, indent=2, sort_keys=True))
    else:
        print("=== Effective Configuration ===")
        print(config.audit())

    if args.check:
        try:
            require_api_key(config)
        except MissingCredentialError as e:
            print(str(e), file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
