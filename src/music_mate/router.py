"""
Command routing for Music Mate.

Plain text is sent to the discovery agent; lines starting with '/' are
routed to command handlers.
"""

import shlex

from rich.markup import escape

from music_mate.commands import chat
from music_mate.context import AppContext
from music_mate.core.output import log


def print_help(ctx: AppContext) -> None:
    """Display help information for available commands."""
    help_text = """
Music Mate - Conversational Music Discovery

Just type what you're in the mood for, e.g. "chill lo-fi for studying".
Music Mate can also manage playlists for you: "make a playlist called
Focus with tracks 1 and 3".

Commands:
  /playlists                   List all playlists
  /show <name>                 Show a playlist's tracks
  /new <name>                  Create an empty playlist
  /delete <name>               Delete a playlist
  /add <playlist> <n>          Add track n from the latest recommendations
  /remove <playlist> <pos>     Remove the track at a playlist position
  /sample [on|off]             Toggle the demo conversation (nothing is saved)
  /clear                       Clear the conversation
  /help                        Show this help message
  /quit, /exit                 Exit
"""
    ctx.console.print(help_text.strip(), markup=False)


def parse_command(user_input: str) -> tuple[str, list[str]]:
    """Parse '/command arg...' into command name and arguments.

    Quoted arguments are kept together: /new "Late Night" -> ('new', ['Late Night']).
    """
    text = user_input.strip().lstrip("/")
    try:
        parts = shlex.split(text)
    except ValueError:
        # Unbalanced quotes
        parts = text.split()
    if not parts:
        return "", []
    return parts[0].lower(), parts[1:]


def handle_command(ctx: AppContext, command: str, args: list[str]) -> tuple[AppContext, bool]:
    """
    Handle a single slash command with explicit state passing.

    Args:
        ctx: Application context
        command: Command name (without the slash)
        args: Command arguments

    Returns:
        (updated_context, should_continue) - Updated context and whether to continue
    """
    if command in ["quit", "exit"]:
        ctx.console.print("Goodbye!")
        return ctx, False

    elif command == "help":
        print_help(ctx)
        return ctx, True

    elif command == "playlists":
        return chat.handle_playlists_command(ctx)

    elif command == "show":
        return chat.handle_show_command(ctx, args)

    elif command == "new":
        return chat.handle_new_command(ctx, args)

    elif command == "delete":
        return chat.handle_delete_command(ctx, args)

    elif command == "add":
        return chat.handle_add_command(ctx, args)

    elif command == "remove":
        return chat.handle_remove_command(ctx, args)

    elif command == "sample":
        return chat.handle_sample_command(ctx, args)

    elif command == "clear":
        return chat.handle_clear_command(ctx)

    elif command == "":
        return ctx, True

    else:
        log(f"Unknown command: '/{escape(command)}'. Type /help for available commands.", level="warning")
        return ctx, True


def handle_input(ctx: AppContext, user_input: str) -> tuple[AppContext, bool]:
    """Route one line of user input."""
    text = user_input.strip()
    if not text:
        return ctx, True
    if text.startswith("/"):
        command, args = parse_command(text)
        return handle_command(ctx, command, args)
    return chat.handle_send(ctx, text)
