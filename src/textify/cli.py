#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/textify/cli.py
"""Command-line interface for rendering HTML as Markdown-style text.

Examples
--------
Render a file to stdout:
    $ textify page.html

Read from stdin and write to a file:
    $ curl -s https://example.com | textify - --out page.txt

Tables without borders, narrower rules:
    $ textify page.html --no-table-borders --hr-width 40

Use environment variables for defaults:
    $ export TEXTIFY_HR_WIDTH=40
    $ export TEXTIFY_BORDER_CORNERS=true
    $ textify page.html  # Will use 40-wide rules and '+' corners
"""

import argparse
import logging
import os
import sys
from dataclasses import MISSING, fields
from pathlib import Path
from typing import Any, Dict, Optional

from . import __version__
from .api import textify
from .constants import ENV_PREFIX
from .exceptions import TextifyError
from .logging_utils import configure_logging
from .options import TextifyOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_INPUT_ERROR = 1
EXIT_CONVERSION_ERROR = 2

_TRUTHY = ("true", "1", "yes", "on")


def get_env_var_value(key: str) -> Optional[str]:
    """Get environment variable with TEXTIFY_ prefix.

    Parameters
    ----------
    key : str
        The parameter name (e.g., 'hr_width', 'debug')

    Returns
    -------
    Optional[str]
        Environment variable value or None if not set
    """
    env_key = f"{ENV_PREFIX}{key.upper().replace('-', '_')}"
    return os.environ.get(env_key)


def apply_env_vars_to_parser(parser: argparse.ArgumentParser) -> None:
    """Apply environment variables as defaults to parser arguments.

    CLI arguments still take precedence over environment variables.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        The argument parser to modify
    """
    for action in parser._actions:
        if not action.dest or action.dest in ("help", "version", "input"):
            continue

        env_value = get_env_var_value(action.dest)
        if env_value is None:
            continue

        env_name = f"{ENV_PREFIX}{action.dest.upper()}"
        if action.type is int:
            try:
                action.default = int(env_value)
            except ValueError:
                logger.warning("Invalid integer value for %s: %s", env_name, env_value)
        elif action.choices:
            if env_value in action.choices:
                action.default = env_value
            else:
                logger.warning("Invalid choice for %s: %s. Choices: %s", env_name, env_value, list(action.choices))
        elif isinstance(action, (argparse._StoreTrueAction, argparse._StoreFalseAction)):
            # The variable names the option field, so "true" always means enabled
            action.default = env_value.lower() in _TRUTHY
        else:
            action.default = env_value


def _option_argument(field: Any) -> tuple[str, Dict[str, Any]]:
    """Build the flag name and argparse kwargs for one option field."""
    metadata = field.metadata or {}
    cli_name = "--" + metadata.get("cli_name", field.name.replace("_", "-"))
    kwargs: Dict[str, Any] = {"help": metadata.get("help", f"Configure {field.name}"), "dest": field.name}

    if field.type in (bool, "bool"):
        kwargs["action"] = "store_false" if cli_name.startswith("--no-") else "store_true"
        kwargs["default"] = field.default
    elif "choices" in metadata:
        kwargs["choices"] = metadata["choices"]
        kwargs["default"] = field.default
    else:
        if metadata.get("type") is int:
            kwargs["type"] = int
            kwargs["metavar"] = "N"
        if field.default is not MISSING:
            kwargs["default"] = field.default
    return cli_name, kwargs


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser, with TEXTIFY_* environment defaults applied."""
    parser = argparse.ArgumentParser(
        prog="textify",
        description="Render HTML as Markdown-flavored plain text.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples\n--------\n", 1)[-1],
    )
    parser.add_argument("input", nargs="?", default="-", help="HTML file to render, or '-' for stdin (default)")
    parser.add_argument("--out", "-o", help="Write output to this file instead of stdout")

    group = parser.add_argument_group("Rendering options")
    for field in fields(TextifyOptions):
        cli_name, kwargs = _option_argument(field)
        group.add_argument(cli_name, **kwargs)

    logging_group = parser.add_argument_group("Logging")
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log records to this file")
    logging_group.add_argument("--trace", action="store_true", help="Timestamped log records with logger names")

    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")

    apply_env_vars_to_parser(parser)
    return parser


def options_from_args(parsed_args: argparse.Namespace) -> TextifyOptions:
    """Map parsed arguments onto a :class:`TextifyOptions` instance."""
    values = {field.name: getattr(parsed_args, field.name) for field in fields(TextifyOptions)}
    return TextifyOptions(**values)


def _read_input(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def main(args: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    log_level = "DEBUG" if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        options = options_from_args(parsed_args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        markup = _read_input(parsed_args.input)
    except OSError as e:
        print(f"Error reading {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    if not markup:
        print("Error: No input received", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        text = textify(markup, options=options)
    except TextifyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONVERSION_ERROR

    if parsed_args.out:
        output_path = Path(parsed_args.out)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error writing {output_path}: {e}", file=sys.stderr)
            return EXIT_INPUT_ERROR
        logger.info("Rendered %s -> %s", parsed_args.input, output_path)
    else:
        print(text)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
