"""Async HTTP client for the remote file service."""

import uuid
from email.message import Message
from pathlib import Path
from typing import Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from common.logging_config import get_logger
from vault.exceptions import ServiceError, ServiceUnavailableError
from vault.models import DownloadResult, FileRecord, LocalFile, ServiceConfig, UploadReceipt

logger = get_logger(__name__)

_RECORD_LIST = TypeAdapter(list[FileRecord])

DOWNLOAD_CHUNK_SIZE = 8192


class FileServiceClient:
    """
    Client for the file service API.

    Requests are never retried; a failed call is reported to the caller,
    who decides whether to try again.
    """

    def __init__(self, config: ServiceConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize file service client.

        Args:
            config: Connection settings (base URL, timeout)
            transport: Optional transport override (used by tests)
        """
        self.config = config
        self.base_url = config.base_url.rstrip('/')
        self.session = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=config.timeout,
            transport=transport,
        )
        logger.info(f"Initialized FileServiceClient [base_url={self.base_url}]")

    async def _request(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        """
        Send a request and convert transport failures.

        Args:
            method: HTTP method
            endpoint: API endpoint path
            **kwargs: Extra arguments for httpx

        Returns:
            HTTP response with a success status code

        Raises:
            ServiceUnavailableError: If the server cannot be reached or times out
            ServiceError: If the server answers with a non-2xx status
        """
        request_id = str(uuid.uuid4())
        headers = kwargs.pop('headers', {})
        headers['X-Request-ID'] = request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={request_id}]")
        try:
            response = await self.session.request(method, endpoint, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {method} {endpoint} [request_id={request_id}]")
            raise ServiceUnavailableError("Request timed out. Server may be overloaded.") from e
        except httpx.HTTPError as e:
            logger.error(f"Network error: {method} {endpoint} error={e} [request_id={request_id}]")
            raise ServiceUnavailableError("Cannot connect to file service. Is it running?") from e

        logger.debug(
            f"Response received: {method} {endpoint} status={response.status_code} [request_id={request_id}]"
        )
        if not response.is_success:
            raise self._error_from(response)
        return response

    def _error_from(self, response: httpx.Response) -> ServiceError:
        """
        Build a ServiceError from an error response.

        The service reports errors as ``{"error": ..., "details": ...}``.
        """
        message = None
        details = None
        try:
            body = response.json()
            if isinstance(body, dict):
                message = body.get('error')
                details = body.get('details')
        except ValueError:
            pass

        if not message:
            message = response.reason_phrase or f"HTTP {response.status_code}"

        logger.warning(
            f"Service error: {response.request.method} {response.request.url.path} "
            f"status={response.status_code} error={message}"
        )
        return ServiceError(response.status_code, message, details)

    async def list_files(self) -> list[FileRecord]:
        """
        Fetch every file record, in server order.

        Returns:
            List of FileRecord (empty if the server returns null)
        """
        response = await self._request('GET', '/files')
        try:
            data = response.json()
            records = _RECORD_LIST.validate_python(data or [])
        except (ValueError, ValidationError) as e:
            raise ServiceError(response.status_code, "Malformed file list", str(e)) from e

        logger.debug(f"Listed {len(records)} file record(s)")
        return records

    async def upload_file(self, local_file: LocalFile) -> UploadReceipt:
        """
        Upload one file as multipart form field ``file``.

        Args:
            local_file: File to upload

        Returns:
            UploadReceipt from the server
        """
        logger.info(f"Uploading {local_file.name} from {local_file.path}")
        content_type = local_file.content_type or 'application/octet-stream'
        with open(local_file.path, 'rb') as f:
            response = await self._request(
                'POST',
                '/upload',
                files={'file': (local_file.name, f, content_type)},
            )

        try:
            receipt = UploadReceipt.model_validate(response.json())
        except (ValueError, ValidationError):
            receipt = UploadReceipt(message=response.text)

        logger.info(f"Uploaded {local_file.name} [id={receipt.id}]")
        return receipt

    async def delete_file(self, record_id: int) -> None:
        """
        Delete one file record.

        Args:
            record_id: Server id of the record
        """
        await self._request('DELETE', f'/files/{record_id}')
        logger.info(f"Deleted file record {record_id}")

    def download_url(self, record_id: int) -> str:
        """Build the download link for a record. No request is made."""
        return f"{self.base_url}/files/{record_id}/download"

    async def download(self, record_id: int, destination: Path) -> DownloadResult:
        """
        Stream a file to disk.

        Args:
            record_id: Server id of the record
            destination: Target file, or an existing directory in which case the
                server-provided filename is used

        Returns:
            DownloadResult with the written path and byte count
        """
        endpoint = f'/files/{record_id}/download'
        try:
            async with self.session.stream('GET', endpoint) as response:
                if not response.is_success:
                    await response.aread()
                    raise self._error_from(response)

                output_file = destination
                if destination.is_dir():
                    output_file = destination / self._filename_from(response, record_id)
                output_file.parent.mkdir(parents=True, exist_ok=True)

                # Bytes land in a sibling .part file, renamed only once complete
                partial_file = output_file.with_name(output_file.name + '.part')
                written = 0
                try:
                    with open(partial_file, 'wb') as f:
                        async for chunk in response.aiter_bytes(chunk_size=DOWNLOAD_CHUNK_SIZE):
                            f.write(chunk)
                            written += len(chunk)
                except BaseException:
                    partial_file.unlink(missing_ok=True)
                    raise
                partial_file.replace(output_file)
        except httpx.TimeoutException as e:
            raise ServiceUnavailableError("Download timed out. Server may be overloaded.") from e
        except httpx.HTTPError as e:
            raise ServiceUnavailableError("Cannot connect to file service. Is it running?") from e

        logger.info(f"Downloaded file record {record_id} to {output_file} ({written} bytes)")
        return DownloadResult(record_id=record_id, path=output_file, size=written)

    @staticmethod
    def _filename_from(response: httpx.Response, record_id: int) -> str:
        header = Message()
        header['Content-Disposition'] = response.headers.get('Content-Disposition', '')
        filename = header.get_filename()
        if filename:
            name = Path(filename).name
            if name:
                return name
        return f"file-{record_id}"

    async def close(self) -> None:
        """Close the HTTP session."""
        await self.session.aclose()
