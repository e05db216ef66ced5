"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from cli.config import Config
from cli.models import (
    DeleteCommand,
    DownloadCommand,
    LinkCommand,
    ListCommand,
    RefreshCommand,
    SearchCommand,
    UploadCommand,
)
from cli.utils import format_file_size, render_file_list
from vault.deletion_coordinator import ConfirmCallback
from vault.file_service import FileServiceClient
from vault.models import LocalFile
from vault.notifier import Notifier
from vault.session import VaultSession

logger = get_logger(__name__)


def create_session(config: Config, confirm: ConfirmCallback, notifier: Optional[Notifier] = None) -> VaultSession:
    """
    Build a VaultSession from the CLI configuration.

    Args:
        config: Loaded CLI configuration
        confirm: Confirmation prompt used before deletions
        notifier: Where outcome messages go

    Returns:
        VaultSession bound to a new FileServiceClient
    """
    service = FileServiceClient(config.to_service_config())
    return VaultSession(service, confirm=confirm, notifier=notifier)


def handle_list(cmd: ListCommand, session: VaultSession) -> str:
    """
    Handle 'list' command.

    Returns:
        Rendered list of the files matching the current search
    """
    return render_file_list(session.visible_files(), session.query)


async def handle_refresh(cmd: RefreshCommand, session: VaultSession) -> str:
    """
    Handle 'refresh' command.

    Returns:
        Rendered list after the refresh (previous list if the refresh failed)
    """
    logger.info("Executing refresh command")
    await session.refresh()
    return render_file_list(session.visible_files(), session.query)


def handle_search(cmd: SearchCommand, session: VaultSession) -> str:
    """
    Handle 'search' command.

    Args:
        cmd: SearchCommand with the query (empty clears the search)
        session: Active vault session

    Returns:
        Rendered list of matching files
    """
    session.set_query(cmd.query)
    return render_file_list(session.visible_files(), session.query)


async def handle_upload(cmd: UploadCommand, session: VaultSession) -> str:
    """
    Handle 'upload' command.

    Every path is checked before anything is sent; a missing or non-regular
    file aborts the whole batch.

    Args:
        cmd: UploadCommand with file_list
        session: Active vault session

    Returns:
        Rendered list after a successful batch, or an error message
    """
    logger.info(f"Executing upload command: {len(cmd.file_list)} file(s)")
    files = []
    for file_path in cmd.file_list:
        try:
            files.append(LocalFile.from_path(file_path))
        except OSError as e:
            return f"Error: {e}"

    result = await session.upload(files)
    if result is None:
        return "Upload failed."
    logger.debug("Upload command completed")
    return render_file_list(session.visible_files(), session.query)


async def handle_delete(cmd: DeleteCommand, session: VaultSession) -> str:
    """
    Handle 'delete' command.

    Args:
        cmd: DeleteCommand with record_id
        session: Active vault session

    Returns:
        Rendered list after deletion, or a short status line
    """
    logger.info(f"Executing delete command: id={cmd.record_id}")
    deleted = await session.delete(cmd.record_id)
    if not deleted:
        return f"File {cmd.record_id} was not deleted."
    return render_file_list(session.visible_files(), session.query)


async def handle_download(cmd: DownloadCommand, session: VaultSession, download_dir: Path) -> str:
    """
    Handle 'download' command.

    Args:
        cmd: DownloadCommand with record_id and optional output_path
        session: Active vault session
        download_dir: Default directory for downloads

    Returns:
        Download summary or error message
    """
    logger.info(f"Executing download command: id={cmd.record_id} output_path={cmd.output_path}")
    if cmd.output_path:
        destination = Path(cmd.output_path).expanduser()
    else:
        download_dir.mkdir(parents=True, exist_ok=True)
        destination = download_dir

    result = await session.download(cmd.record_id, destination)
    if result is None:
        return f"Error: download of file {cmd.record_id} failed"

    return f"Downloaded: {result.path.name} ({format_file_size(result.size)})\nSaved to: {result.path.absolute()}"


def handle_link(cmd: LinkCommand, session: VaultSession) -> str:
    """Handle 'link' command."""
    return session.download_url(cmd.record_id)
