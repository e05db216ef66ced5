"""Formatting helpers for CLI output."""

from datetime import datetime

from cli.constants import DIM, EMPTY_LIST_TEXT, RESET
from vault.models import FileRecord


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"


def format_upload_date(value: str) -> str:
    """Render an ISO timestamp as 'YYYY-MM-DD HH:MM:SS', or the raw value if unparsable."""
    if not value:
        return "unknown"
    try:
        return datetime.fromisoformat(value).strftime('%Y-%m-%d %H:%M:%S')
    except ValueError:
        return value


def render_file_list(files: tuple[FileRecord, ...], query: str = "", color: bool = True) -> str:
    """
    Render file records for the terminal.

    Args:
        files: Records to show, already filtered
        query: Current search query, shown in the header when set
        color: Whether to dim the metadata line

    Returns:
        Multi-line string, or the empty-list text
    """
    if not files:
        return EMPTY_LIST_TEXT

    header = f"{len(files)} file(s)"
    if query:
        header += f" matching '{query}'"

    lines = [header + ":"]
    for record in files:
        meta = (
            f"{format_file_size(record.size)} • {record.mime_type or 'unknown type'} • "
            f"Uploaded: {format_upload_date(record.upload_date)}"
        )
        if color:
            meta = f"{DIM}{meta}{RESET}"
        lines.append(f"  [{record.id}] {record.filename}")
        lines.append(f"      {meta}")
    return "\n".join(lines)
