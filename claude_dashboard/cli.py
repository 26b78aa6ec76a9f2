"""
Claude dashboard - CLI entry point.
Renders the status line from stdin by default; also provides a
clear-cache subcommand.
"""

import argparse
import logging
import sys

from .__version__ import __version__
from .constants import USAGE_CACHE_FILE
from .statusline import main as render_main
from .usage_client import clear_cache


def cmd_render(_args):
    """Read the stdin snapshot and print the status lines."""
    render_main()


def cmd_clear_cache(_args):
    """Remove the shared usage-limits cache file."""
    try:
        removed = clear_cache()
    except OSError as e:
        print(f"Could not remove {USAGE_CACHE_FILE}: {e}")
        return
    if removed:
        print(f"Removed usage cache {USAGE_CACHE_FILE}")
    else:
        print("No usage cache to remove.")


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="claude-dashboard",
        description="Claude dashboard - multi-line status bar for Claude Code",
        epilog=(
            "Examples:\n"
            "  claude-dashboard < input.json        Render the status line\n"
            "  claude-dashboard -v < input.json     Render with debug logs on stderr\n"
            "  claude-dashboard clear-cache         Forget cached rate limits\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log lookup failures to stderr"
    )
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("render", help="Render the status line from stdin (default)")
    sub.add_parser("clear-cache", help="Remove the cached usage limits")

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(name)s: %(message)s",
        )

    {
        None: cmd_render,
        "render": cmd_render,
        "clear-cache": cmd_clear_cache,
    }[args.command](args)


if __name__ == "__main__":
    main()
