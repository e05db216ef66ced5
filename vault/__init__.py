"""File vault client core: record store, search filter and sync coordinators."""

from vault.deletion_coordinator import DeletionCoordinator
from vault.file_service import FileServiceClient
from vault.models import FileRecord, LocalFile, ServiceConfig
from vault.search_filter import SearchFilter, filter_records
from vault.session import VaultSession
from vault.store import FileRecordStore
from vault.upload_coordinator import UploadCoordinator

__all__ = [
    "DeletionCoordinator",
    "FileRecord",
    "FileRecordStore",
    "FileServiceClient",
    "LocalFile",
    "SearchFilter",
    "ServiceConfig",
    "UploadCoordinator",
    "VaultSession",
    "filter_records",
]
