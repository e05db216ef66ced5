"""Data types shared by the vault core (file records, local files, upload results)."""

import mimetypes
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FileRecord(BaseModel):
    """Metadata of one stored file, as listed by the file service."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    filename: str = Field(min_length=1)
    size: int = Field(ge=0)
    mime_type: str = ""
    upload_date: str = ""


class UploadReceipt(BaseModel):
    """Acknowledgement returned by the file service for one upload."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    hash: Optional[str] = None
    mime: Optional[str] = None
    size: Optional[int] = None
    message: str = ""


@dataclass(frozen=True)
class ServiceConfig:
    """Connection settings handed to the file service client."""

    base_url: str = "http://localhost:8080"
    timeout: float = 30.0


@dataclass(frozen=True)
class LocalFile:
    """A local file handle submitted for upload."""

    name: str
    path: Path
    content_type: Optional[str] = None

    @classmethod
    def from_path(cls, file_path: str | os.PathLike) -> "LocalFile":
        """
        Build a LocalFile from a filesystem path.

        Args:
            file_path: Path to an existing regular file

        Returns:
            LocalFile with name and guessed content type

        Raises:
            FileNotFoundError: If the path does not exist
            IsADirectoryError: If the path is not a regular file
        """
        path = Path(file_path).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if not path.is_file():
            raise IsADirectoryError(f"Not a file: {file_path}")

        content_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, path=path, content_type=content_type)


@dataclass(frozen=True)
class UploadResult:
    """Outcome of a fully successful upload batch."""

    receipts: tuple[UploadReceipt, ...] = field(default_factory=tuple)
    refreshed: bool = False

    @property
    def count(self) -> int:
        return len(self.receipts)


@dataclass(frozen=True)
class DownloadResult:
    """A file written to disk by a download."""

    record_id: int
    path: Path
    size: int
