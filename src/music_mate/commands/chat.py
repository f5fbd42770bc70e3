"""
Chat command handlers for Music Mate.

Handles: sending messages to the agent, playlists, show, new, delete,
         add, remove, sample, clear
"""

from typing import Optional

from rich.markup import escape

from music_mate import ui
from music_mate.context import AppContext
from music_mate.core.output import log
from music_mate.domain.playlists import Playlist, get_playlist_by_name


def _find_playlist(ctx: AppContext, name: str) -> Optional[Playlist]:
    playlist = get_playlist_by_name(ctx.store.playlists, name)
    if playlist is None:
        log(f"❌ Playlist not found: {escape(name)}", level="error")
    return playlist


def _split_name_and_number(args: list[str]) -> tuple[str, Optional[int]]:
    """Split '<playlist name...> <n>' into (name, n)."""
    if len(args) < 2:
        return " ".join(args), None
    try:
        number = int(args[-1])
    except ValueError:
        return " ".join(args), None
    return " ".join(args[:-1]), number


def handle_send(ctx: AppContext, text: str) -> tuple[AppContext, bool]:
    """
    Send a chat message to the discovery agent and render the reply.

    Args:
        ctx: Application context
        text: What the user typed

    Returns:
        (updated_context, should_continue)
    """
    if ctx.store.sample_mode:
        log("Sample mode is on. Use /sample off to chat with Music Mate.", level="warning")
        return ctx, True

    with ctx.console.status("[green]Finding music...[/green]"):
        outcome = ctx.session.send(text)

    if not outcome.sent:
        return ctx, True

    reply = outcome.reply
    if reply is not None:
        ui.render_turn(ctx.console, reply, ctx.config.ui.show_descriptions)
    if outcome.error:
        log(f"❌ {escape(outcome.error)}", level="error")
    ui.render_notifications(ctx.console, outcome.notifications, ctx.config.ui.use_emoji)

    if outcome.ui_action:
        ctx = ctx.with_ui_action(outcome.ui_action)
    return ctx, True


def handle_playlists_command(ctx: AppContext) -> tuple[AppContext, bool]:
    """Show all playlists."""
    ui.render_playlists(ctx.console, ctx.store.playlists)
    return ctx, True


def handle_show_command(ctx: AppContext, args: list[str]) -> tuple[AppContext, bool]:
    """Show one playlist's tracks (name matched case-insensitively)."""
    if not args:
        log("Usage: /show <playlist name>", level="warning")
        return ctx, True

    playlist = _find_playlist(ctx, " ".join(args))
    if playlist is not None:
        ui.render_playlist(ctx.console, playlist, ctx.config.ui.show_descriptions)
    return ctx, True


def handle_new_command(ctx: AppContext, args: list[str]) -> tuple[AppContext, bool]:
    """Create an empty playlist."""
    playlist = ctx.store.create_playlist(" ".join(args))
    if playlist is None:
        log("Usage: /new <playlist name>", level="warning")
        return ctx, True

    ui.render_notifications(ctx.console, [f'Playlist "{playlist.name}" created'], ctx.config.ui.use_emoji)
    return ctx, True


def handle_delete_command(ctx: AppContext, args: list[str]) -> tuple[AppContext, bool]:
    """Delete the first playlist matching a name."""
    if not args:
        log("Usage: /delete <playlist name>", level="warning")
        return ctx, True

    playlist = _find_playlist(ctx, " ".join(args))
    if playlist is not None and ctx.store.delete_playlist(playlist.id):
        ui.render_notifications(ctx.console, ["Playlist deleted"], ctx.config.ui.use_emoji)
    return ctx, True


def handle_add_command(ctx: AppContext, args: list[str]) -> tuple[AppContext, bool]:
    """
    Add a track from the latest recommendations to a playlist.

    Usage: /add <playlist> <n>, where n is the number shown next to the
    track in the most recent reply that listed tracks.
    """
    name, number = _split_name_and_number(args)
    if not name or number is None:
        log("Usage: /add <playlist name> <track number>", level="warning")
        return ctx, True

    tracks = ctx.store.last_known_tracks
    if not 1 <= number <= len(tracks):
        log(f"❌ No track #{number} in the latest recommendations", level="error")
        return ctx, True

    playlist = _find_playlist(ctx, name)
    if playlist is None:
        return ctx, True

    if ctx.store.add_track_manually(playlist.id, tracks[number - 1]):
        message = f'Added to "{playlist.name}"'
    else:
        message = f'Track already in "{playlist.name}"'
    ui.render_notifications(ctx.console, [message], ctx.config.ui.use_emoji)
    return ctx, True


def handle_remove_command(ctx: AppContext, args: list[str]) -> tuple[AppContext, bool]:
    """Remove a track from a playlist by its position (as shown by /show)."""
    name, position = _split_name_and_number(args)
    if not name or position is None:
        log("Usage: /remove <playlist name> <position>", level="warning")
        return ctx, True

    playlist = _find_playlist(ctx, name)
    if playlist is None:
        return ctx, True

    if ctx.store.remove_track_manually(playlist.id, position - 1):
        ui.render_notifications(ctx.console, ["Track removed from playlist"], ctx.config.ui.use_emoji)
    else:
        log(f"❌ No track at position {position} in \"{escape(playlist.name)}\"", level="error")
    return ctx, True


def handle_sample_command(ctx: AppContext, args: list[str]) -> tuple[AppContext, bool]:
    """Toggle sample mode (/sample, /sample on, /sample off)."""
    if not args:
        enabled = not ctx.store.sample_mode
    elif args[0].lower() in ("on", "off"):
        enabled = args[0].lower() == "on"
    else:
        log("Usage: /sample \\[on|off]", level="warning")
        return ctx, True

    ctx.store.set_sample_mode(enabled)
    if enabled:
        log("Sample mode on: showing demo data. Nothing you do here is saved.", level="info")
        ui.render_turns(ctx.console, ctx.store.turns, ctx.config.ui.show_descriptions)
    else:
        log("Sample mode off: back to your own conversation.", level="info")
    return ctx, True


def handle_clear_command(ctx: AppContext) -> tuple[AppContext, bool]:
    """Clear the conversation (playlists are kept)."""
    if ctx.session.clear():
        log("Conversation cleared.", level="success")
        ui.render_suggestions(ctx.console)
    else:
        log("Nothing to clear in sample mode.", level="warning")
    return ctx, True
