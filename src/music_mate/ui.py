"""
Rich rendering for the chat loop: turns, track lists, playlists, toasts.
"""

from typing import Iterable, Sequence

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from music_mate.domain.agent import STARTER_SUGGESTIONS
from music_mate.domain.playlists import ChatTurn, Playlist
from music_mate.domain.tracks import Track


def tracks_table(tracks: Sequence[Track], title: str = "", show_descriptions: bool = True) -> Table:
    """Numbered track table; numbers are the 1-based indices the agent uses."""
    table = Table(title=title or None, show_lines=False, expand=False)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Artist")
    table.add_column("Genre", style="magenta")
    table.add_column("Source", style="green")
    if show_descriptions:
        table.add_column("Why", style="dim")

    for position, track in enumerate(tracks, 1):
        row = [str(position)] + [escape(value) for value in (track.title, track.artist, track.genre, track.source)]
        if show_descriptions:
            row.append(escape(track.description))
        table.add_row(*row)
    return table


def render_turn(console: Console, turn: ChatTurn, show_descriptions: bool = True) -> None:
    if turn.role == "user":
        console.print(f"[bold cyan]you>[/bold cyan] {escape(turn.content)}")
        return

    console.print(Panel(Markdown(turn.content), title="Music Mate", title_align="left", border_style="green"))
    if turn.tracks:
        console.print(tracks_table(turn.tracks, show_descriptions=show_descriptions))
        for position, track in enumerate(turn.tracks, 1):
            if track.url:
                # Model-supplied URL, kept out of markup
                console.print(Text.assemble("  ", (f"{position}.", "cyan"), " ", (track.url, Style(link=track.url))))


def render_turns(console: Console, turns: Iterable[ChatTurn], show_descriptions: bool = True) -> None:
    for turn in turns:
        render_turn(console, turn, show_descriptions)


def render_suggestions(console: Console) -> None:
    console.print("[dim]Try asking for:[/dim]")
    for suggestion in STARTER_SUGGESTIONS:
        console.print(f"  [yellow]•[/yellow] {suggestion}")


def render_playlists(console: Console, playlists: Sequence[Playlist]) -> None:
    if not playlists:
        console.print("[dim]No playlists yet. Create one with /new <name> or ask Music Mate.[/dim]")
        return

    table = Table(title="Playlists")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Tracks", justify="right")
    table.add_column("Created", style="dim")
    for position, playlist in enumerate(playlists, 1):
        table.add_row(str(position), escape(playlist.name), str(playlist.track_count), playlist.created_at[:10])
    console.print(table)


def render_playlist(console: Console, playlist: Playlist, show_descriptions: bool = True) -> None:
    if not playlist.tracks:
        console.print(f"[bold]{escape(playlist.name)}[/bold] [dim](empty)[/dim]")
        return
    console.print(tracks_table(playlist.tracks, title=escape(playlist.name), show_descriptions=show_descriptions))


def render_notifications(console: Console, notifications: Iterable[str], use_emoji: bool = True) -> None:
    prefix = "✅ " if use_emoji else ""
    for text in notifications:
        console.print(f"{prefix}[green]{escape(text)}[/green]")
