"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ListCommand:
    """Show files matching the current search."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class RefreshCommand:
    """Reload the file list from the server."""

    command: Literal["refresh"] = "refresh"


@dataclass(frozen=True)
class SearchCommand:
    """Set the search query."""

    query: str
    command: Literal["search"] = "search"


@dataclass(frozen=True)
class UploadCommand:
    """Upload a batch of local files."""

    file_list: tuple[str, ...]
    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete one file record by id."""

    record_id: int
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class DownloadCommand:
    """Download one file record by id."""

    record_id: int
    output_path: str | None = None
    command: Literal["download"] = "download"


@dataclass(frozen=True)
class LinkCommand:
    """Show the download link of a file record."""

    record_id: int
    command: Literal["link"] = "link"


CommandRequest = (
    ListCommand
    | RefreshCommand
    | SearchCommand
    | UploadCommand
    | DeleteCommand
    | DownloadCommand
    | LinkCommand
)
