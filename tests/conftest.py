"""Shared pytest fixtures for all tests."""

import asyncio
import re
from typing import Optional

import httpx
import pytest

from cli.config import Config
from vault.file_service import FileServiceClient
from vault.models import FileRecord, ServiceConfig

BASE_URL = 'http://vault.test'

_FILENAME_RE = re.compile(rb'filename="([^"]+)"')


def make_record(record_id: int, filename: str, size: int = 100, mime_type: str = 'text/plain') -> FileRecord:
    """Build a FileRecord with sensible defaults."""
    return FileRecord(
        id=record_id,
        filename=filename,
        size=size,
        mime_type=mime_type,
        upload_date='2024-01-01T00:00:00',
    )


class FakeFileService:
    """
    In-memory stand-in for the file service, served through httpx.MockTransport.

    Records every request as (method, path) in ``calls``. Individual
    operations can be made to fail through ``fail_uploads``, ``fail_list``
    and ``fail_delete``.
    """

    def __init__(self, records: Optional[list[FileRecord]] = None):
        self.records: list[dict] = [r.model_dump() for r in records or []]
        self.next_id = max((r['id'] for r in self.records), default=0) + 1
        self.calls: list[tuple[str, str]] = []
        self.fail_uploads: set[str] = set()
        self.fail_list = False
        self.fail_delete = False
        self.upload_delay = 0.0
        self.list_delay = 0.0
        self.in_flight = 0
        self.max_in_flight = 0
        self.contents: dict[int, bytes] = {}

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self) -> FileServiceClient:
        return FileServiceClient(ServiceConfig(base_url=BASE_URL), transport=self.transport())

    async def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append((request.method, path))

        if request.method == 'GET' and path == '/files':
            snapshot = list(self.records)
            if self.list_delay:
                await asyncio.sleep(self.list_delay)
            if self.fail_list:
                return httpx.Response(500, json={'error': 'cannot query files'})
            return httpx.Response(200, json=snapshot)

        if request.method == 'POST' and path == '/upload':
            return await self._upload(request)

        match = re.fullmatch(r'/files/(\d+)(/download)?', path)
        if match:
            record_id = int(match.group(1))
            if request.method == 'DELETE' and not match.group(2):
                return self._delete(record_id)
            if request.method == 'GET' and match.group(2):
                return self._download(record_id)

        return httpx.Response(404, json={'error': 'not found'})

    async def _upload(self, request: httpx.Request) -> httpx.Response:
        body = request.content
        filename = _FILENAME_RE.search(body).group(1).decode()

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.upload_delay:
                await asyncio.sleep(self.upload_delay)
        finally:
            self.in_flight -= 1

        if filename in self.fail_uploads:
            return httpx.Response(500, json={'error': f'cannot store {filename}'})

        record_id = self.next_id
        self.next_id += 1
        self.records.append({
            'id': record_id,
            'filename': filename,
            'size': len(body),
            'mime_type': 'text/plain',
            'upload_date': '2024-01-02T00:00:00',
        })
        return httpx.Response(200, json={
            'message': 'File uploaded successfully',
            'id': record_id,
            'hash': 'abc123',
            'mime': 'text/plain',
            'size': len(body),
        })

    def _delete(self, record_id: int) -> httpx.Response:
        if self.fail_delete:
            return httpx.Response(500, json={'error': 'cannot delete file record'})
        self.records = [r for r in self.records if r['id'] != record_id]
        return httpx.Response(200, json={'message': 'deleted'})

    def _download(self, record_id: int) -> httpx.Response:
        record = next((r for r in self.records if r['id'] == record_id), None)
        if record is None:
            return httpx.Response(404, json={'error': 'file not found'})
        content = self.contents.get(record_id, b'file content')
        return httpx.Response(
            200,
            content=content,
            headers={'Content-Disposition': f'attachment; filename="{record["filename"]}"'},
        )

    def count(self, method: str, path: str) -> int:
        return self.calls.count((method, path))


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Returns:
        Path to temporary .vault directory
    """
    config_dir = tmp_path / '.vault'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing file uploads.

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'test.txt'
    file_path.write_text('Sample content for testing')
    return file_path


@pytest.fixture
def multiple_sample_files(tmp_path):
    """
    Create multiple sample files for testing batch uploads.

    Returns:
        List of Paths to sample files
    """
    files = []
    for i in range(3):
        file_path = tmp_path / f'test{i}.txt'
        file_path.write_text(f'Sample content {i}')
        files.append(file_path)
    return files


@pytest.fixture
def sample_records():
    return [make_record(1, 'report.pdf', mime_type='application/pdf'), make_record(2, 'photo.png', mime_type='image/png')]


@pytest.fixture
def fake_service(sample_records):
    return FakeFileService(sample_records)


@pytest.fixture
async def service_client(fake_service):
    client = fake_service.client()
    yield client
    await client.close()
