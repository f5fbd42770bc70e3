"""
Music Mate CLI - Entry point

Starts the interactive chat, or runs one of the non-interactive
playlist/maintenance subcommands.
"""

import argparse
import sys
from typing import Optional

from music_mate import ui
from music_mate.core import config
from music_mate.core.console import get_console
from music_mate.domain.playlists import get_playlist_by_name


def run_playlists(cfg: config.Config) -> int:
    """Print all saved playlists."""
    from .main import build_session

    store = build_session(cfg).store
    ui.render_playlists(get_console(), store.playlists)
    return 0


def run_show(cfg: config.Config, name: str) -> int:
    """Print one playlist's tracks.

    Returns:
        Exit code (0 for success, 1 if no playlist matches)
    """
    from .main import build_session

    store = build_session(cfg).store
    playlist = get_playlist_by_name(store.playlists, name)
    if playlist is None:
        print(f"Playlist not found: {name}", file=sys.stderr)
        return 1
    ui.render_playlist(get_console(), playlist, cfg.ui.show_descriptions)
    return 0


def run_reset(cfg: config.Config) -> int:
    """Clear the saved conversation (playlists are kept)."""
    from .main import build_session

    build_session(cfg).clear()
    print("Conversation cleared.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="music-mate",
        description="Music Mate - Conversational Music Discovery",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global options
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Start with the demo conversation (nothing is saved)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Override the log level from config.toml",
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    subparsers.add_parser("playlists", help="List saved playlists")

    show_parser = subparsers.add_parser("show", help="Show a playlist's tracks")
    show_parser.add_argument("name", nargs="+", help="Playlist name")

    subparsers.add_parser("reset", help="Clear the saved conversation")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the music-mate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.subcommand:
        from .main import init_logging

        cfg = config.load_config()
        init_logging(cfg, args.log_level)

        if args.subcommand == "playlists":
            sys.exit(run_playlists(cfg))

        elif args.subcommand == "show":
            sys.exit(run_show(cfg, " ".join(args.name)))

        elif args.subcommand == "reset":
            sys.exit(run_reset(cfg))

    # No subcommand - start interactive mode
    from .main import interactive_mode

    interactive_mode(sample_mode=args.sample, log_level=args.log_level)


if __name__ == "__main__":
    main()
