"""Custom exception classes for the file vault client."""

from typing import Optional


class VaultError(Exception):
    """
    Base exception class for all vault client errors.
    """
    pass


class ServiceError(VaultError):
    """
    Raised when the file service answers with a non-success status code.
    """

    def __init__(self, status_code: int, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


class ServiceUnavailableError(VaultError):
    """
    Raised when the file service cannot be reached or the request timed out.
    """
    pass


class FetchError(VaultError):
    """
    Raised when the file list could not be refreshed. The store keeps its last snapshot.
    """
    pass


class UploadBatchError(VaultError):
    """
    Raised when at least one upload of a batch failed.

    Uploads that did succeed are not rolled back; they exist on the server
    and show up on the next refresh.
    """

    def __init__(self, message: str, failed: list[str], succeeded: int):
        super().__init__(message)
        self.message = message
        self.failed = failed
        self.succeeded = succeeded


class UploadInProgressError(VaultError):
    """
    Raised when a batch is submitted while another one is still running.
    """
    pass


class DeleteError(VaultError):
    """
    Raised when the file service did not confirm a deletion.
    """

    def __init__(self, record_id: int, message: str):
        super().__init__(message)
        self.record_id = record_id
        self.message = message


class DuplicateRecordError(VaultError):
    """
    Raised when a snapshot contains the same record id more than once.
    """

    def __init__(self, record_id: int):
        super().__init__(f"Duplicate file record id: {record_id}")
        self.record_id = record_id
