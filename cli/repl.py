"""REPL with prompt_toolkit for user interaction."""

import asyncio
import os
import sys
from pathlib import Path
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from cli.commands import (
    create_session,
    handle_delete,
    handle_download,
    handle_link,
    handle_list,
    handle_refresh,
    handle_search,
    handle_upload,
)
from cli.completer import VaultCompleter
from cli.config import Config
from cli.constants import (
    CONFIRM_DELETE_TEXT,
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import (
    DeleteCommand,
    DownloadCommand,
    LinkCommand,
    ListCommand,
    RefreshCommand,
    SearchCommand,
    UploadCommand,
)
from cli.parser import ParseError, parse_command
from common.logging_config import get_logger
from vault.models import FileRecord
from vault.notifier import ConsoleNotifier
from vault.session import VaultSession

logger = get_logger(__name__)


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_welcome() -> None:
    print(LOGO)
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def make_confirm(prompt_session: PromptSession):
    """Build the y/n confirmation callback used before deletions."""

    async def confirm(record_id: int, record: Optional[FileRecord]) -> bool:
        name = f"'{record.filename}'" if record else f"file {record_id}"
        try:
            answer = await prompt_session.prompt_async(CONFIRM_DELETE_TEXT.format(name=name))
        except (KeyboardInterrupt, EOFError):
            return False
        return answer.strip().lower() in ("y", "yes")

    return confirm


async def dispatch_command(cmd_obj, session: VaultSession, download_dir: Path) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, ListCommand):
        return handle_list(cmd_obj, session)
    elif isinstance(cmd_obj, RefreshCommand):
        return await handle_refresh(cmd_obj, session)
    elif isinstance(cmd_obj, SearchCommand):
        return handle_search(cmd_obj, session)
    elif isinstance(cmd_obj, UploadCommand):
        return await handle_upload(cmd_obj, session)
    elif isinstance(cmd_obj, DeleteCommand):
        return await handle_delete(cmd_obj, session)
    elif isinstance(cmd_obj, DownloadCommand):
        return await handle_download(cmd_obj, session, download_dir)
    elif isinstance(cmd_obj, LinkCommand):
        return handle_link(cmd_obj, session)
    else:
        return f"Unknown command type: {type(cmd_obj)}"


async def repl_loop(config: Config) -> None:
    """Start interactive REPL with prompt_toolkit."""
    history = InMemoryHistory()
    prompt_session: PromptSession = PromptSession(history=history, style=STYLE)
    session = create_session(config, confirm=make_confirm(prompt_session), notifier=ConsoleNotifier())
    completer = VaultCompleter(store=session.store)
    download_dir = config.get_download_dir()

    clear_screen()
    show_welcome()

    try:
        print(await handle_refresh(RefreshCommand(), session))

        while True:
            try:
                user_input = await prompt_session.prompt_async(
                    [("class:prompt", PROMPT_TEXT)], completer=completer
                )

                if not user_input.strip():
                    continue

                if user_input.strip() == "exit":
                    print("Goodbye!")
                    break

                if user_input.strip() == "help":
                    print(HELP_TEXT)
                    continue

                if user_input.strip() == "clear":
                    clear_screen()
                    show_welcome()
                    continue

                cmd_obj = parse_command(user_input)
                result = await dispatch_command(cmd_obj, session, download_dir)
                print(result)

            except ParseError as e:
                print(f"Error: {e}")
            except KeyboardInterrupt:
                continue
            except EOFError:
                print("\nGoodbye!")
                break
    finally:
        await session.close()


def run(config: Config) -> None:
    asyncio.run(repl_loop(config))
