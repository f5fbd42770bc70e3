"""
Music Mate interactive chat loop.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from rich.markup import escape

from music_mate import router, ui
from music_mate.context import AppContext
from music_mate.core import config
from music_mate.core.console import get_console
from music_mate.core.output import setup_loguru
from music_mate.core.storage import SqliteStorage
from music_mate.domain.agent import AgentClient
from music_mate.domain.conversation import ChatSession, ConversationStore


def init_logging(cfg: config.Config, level: Optional[str] = None) -> None:
    """Initialize loguru from config (level overrides config.logging.level)."""
    log_file = (
        Path(cfg.logging.log_file).expanduser()
        if cfg.logging.log_file
        else (config.get_data_dir() / "music-mate.log")
    )
    setup_loguru(
        log_file,
        level=(level or cfg.logging.level).upper(),
        max_file_size_mb=cfg.logging.max_file_size_mb,
        backup_count=cfg.logging.backup_count,
        console_output=cfg.logging.console_output,
    )


def build_session(cfg: config.Config, sample_mode: bool = False) -> ChatSession:
    """Open durable storage and wire the store, agent client and session."""
    storage = SqliteStorage(config.get_database_path(cfg))
    store = ConversationStore(storage, sample_mode=sample_mode)
    client = AgentClient(cfg)
    return ChatSession(store, client, cfg.agent.agent_id)


def apply_ui_action(ctx: AppContext) -> AppContext:
    """Carry out a UI action requested by a command handler, then clear it."""
    if not ctx.ui_action:
        return ctx
    if ctx.ui_action.get("type") == "show_playlists":
        ui.render_playlists(ctx.console, ctx.store.playlists)
    return ctx.clear_ui_action()


def interactive_mode(sample_mode: bool = False, log_level: Optional[str] = None) -> None:
    """Run the interactive chat loop."""
    console = get_console()

    try:
        current_config = config.load_config()
        config.ensure_directories()
        init_logging(current_config, log_level)

        session = build_session(
            current_config, sample_mode=sample_mode or current_config.ui.start_in_sample_mode
        )
        ctx = AppContext.create(current_config, session, console)

        console.print("[bold green]Welcome to Music Mate![/bold green]")
        console.print("Tell me what you'd like to hear. Type /help for commands, or /quit to exit.")
        console.print()

        if ctx.store.turns:
            ui.render_turns(console, ctx.store.turns, current_config.ui.show_descriptions)
        else:
            ui.render_suggestions(console)
        if ctx.store.sample_mode:
            console.print("[yellow]Sample mode is on (demo data, nothing is saved).[/yellow]")

        should_continue = True
        while should_continue:
            try:
                prompt = "sample> " if ctx.store.sample_mode else "you> "
                user_input = input(prompt)
                ctx, should_continue = router.handle_input(ctx, user_input)
                ctx = apply_ui_action(ctx)

            except KeyboardInterrupt:
                console.print("\n[yellow]Use /quit or /exit to leave gracefully.[/yellow]")
            except EOFError:
                console.print("\n[green]Goodbye![/green]")
                break

    except Exception as e:
        logger.exception("Unexpected error in chat loop")
        console.print(f"[red]An unexpected error occurred: {escape(str(e))}[/red]")
        sys.exit(1)
