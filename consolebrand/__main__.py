"""Entry point for `python -m consolebrand`."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from consolebrand.branding.constants import DEFAULT_LOCALE
from consolebrand.branding.keys import parse_message_key
from consolebrand.config.settings import ENV_ETC_DIR, EngineSettings
from consolebrand.errors import ConsoleBrandError, ErrorCode


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="consolebrand", description="Inspect installed console branding.")
    parser.add_argument("--etc-dir", type=Path, help="engine etc directory (overrides configuration)")
    parser.add_argument("--locale", default=DEFAULT_LOCALE, help=f"message locale (default {DEFAULT_LOCALE})")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("themes", help="list the active branding themes in precedence order")
    message = commands.add_parser("message", help="look up a single obrand.<scope>.<name> message")
    message.add_argument("key")
    messages = commands.add_parser("messages", help="print the merged messages of a scope as JSON")
    messages.add_argument("scope")
    return parser


def main(argv: list[str] | None = None) -> int:
    from consolebrand.app import configure_logger, create_branding_manager

    args = build_parser().parse_args(argv)
    environ = None
    if args.etc_dir is not None:
        environ = {**os.environ, ENV_ETC_DIR: str(args.etc_dir)}
    settings = EngineSettings(environ=environ)
    configure_logger(settings)
    manager = create_branding_manager(settings)

    if args.command == "themes":
        for theme in manager.list_themes():
            print(theme.path)
        return 0

    if args.command == "message":
        if parse_message_key(args.key) is None:
            print(ConsoleBrandError(ErrorCode.KEY_INVALID, details={"key": args.key}), file=sys.stderr)
            return 2
        text = manager.get_message(args.key, args.locale)
        if not text:
            return 1
        print(text)
        return 0

    rendered = manager.render_messages_json(args.scope, args.locale)
    if rendered is None:
        return 1
    print(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())
