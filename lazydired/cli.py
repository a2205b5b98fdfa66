"""Command-line front door for lazydired.

Parses CLI options, merges them over the persisted settings, configures
logging, and dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import logging
import os

from .config import ConfigStore, DiredSettings, load_settings
from .diagnostics import JsonAnnotationSource
from .logger import setup_logging
from .runtime import run_browser
from .ui_theme import available_theme_names

_LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazydired",
        description="Browse and edit a directory as a text listing.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory (or file) to open. Defaults to the current directory.")
    parser.add_argument("--nopager", action="store_true", help="Print the listing directly without the interactive view.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--style", default=None, help="Pygments style name for listing highlighting.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument(
        "--hidden",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show or hide dotfiles (overrides the config file).",
    )
    parser.add_argument("--no-trash", action="store_true", help="Delete permanently instead of moving to the trash.")
    parser.add_argument("--icons", action="store_true", help="Show nerd-font icons in the gutter.")
    parser.add_argument(
        "--problems",
        metavar="FILE",
        default=None,
        help="JSON diagnostics file to annotate the listing with (reloaded when it changes).",
    )
    parser.add_argument("-v", "--debug", action="count", default=0, help="Increase log verbosity.")
    return parser


def settings_from_args(args: argparse.Namespace, base: DiredSettings) -> DiredSettings:
    """Apply CLI flags on top of the persisted settings for this session."""
    return base.with_overrides(
        show_hidden=args.hidden,
        use_trash=False if args.no_trash else None,
        nerd_font_icons=True if args.icons else None,
        style=args.style,
        theme=args.theme,
    )


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the browser on a directory or file."""
    args = build_parser().parse_args(argv)
    log_path = setup_logging(args.debug)
    settings = settings_from_args(args, load_settings())
    _LOGGER.debug("settings: %s (log file %s)", settings, log_path)

    annotations = None
    if args.problems is not None:
        problems_path = os.path.abspath(os.path.expanduser(args.problems))
        if not os.path.isfile(problems_path):
            raise SystemExit(f"Problems file not found: {args.problems}")
        annotations = JsonAnnotationSource(problems_path)

    if args.path is not None and not os.path.exists(os.path.expanduser(args.path)):
        raise SystemExit(f"Path not found: {args.path}")

    exit_code = run_browser(
        args.path,
        ConfigStore(),
        settings,
        no_color=args.no_color,
        nopager=args.nopager,
        annotations=annotations,
    )
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
