"""Tests for VaultSession: refresh, notifications and the end-to-end flow."""

import asyncio
from unittest.mock import Mock

import pytest

from tests.conftest import make_record
from vault.models import LocalFile
from vault.notifier import RecordingNotifier
from vault.session import VaultSession
from vault.store import FileRecordStore


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def confirm():
    return Mock(return_value=True)


@pytest.fixture
def session(service_client, confirm, notifier):
    return VaultSession(service_client, confirm=confirm, notifier=notifier)


async def test_refresh_loads_records(session):
    assert await session.refresh() is True

    assert [r.id for r in session.visible_files()] == [1, 2]


async def test_injected_empty_store_is_used(service_client, confirm, notifier):
    store = FileRecordStore()
    session = VaultSession(service_client, confirm=confirm, notifier=notifier, store=store)

    await session.refresh()

    assert session.store is store
    assert [r.id for r in store.get_all()] == [1, 2]


async def test_refresh_failure_keeps_previous_snapshot(session, fake_service, notifier):
    await session.refresh()
    before = session.store.get_all()
    fake_service.fail_list = True

    assert await session.refresh() is False

    assert session.store.get_all() is before
    assert notifier.errors == ['Failed to fetch files.']


async def test_refresh_rejects_duplicate_ids(session, fake_service, notifier):
    await session.refresh()
    fake_service.records.append(dict(fake_service.records[0]))

    assert await session.refresh() is False

    assert [r.id for r in session.store.get_all()] == [1, 2]
    assert notifier.errors == ['Failed to fetch files.']


async def test_stale_refresh_does_not_undo_delete(session, fake_service):
    """A list started before a delete must not bring the record back."""
    await session.refresh()
    fake_service.list_delay = 0.05

    refresh_task = asyncio.ensure_future(session.refresh())
    await asyncio.sleep(0.01)
    assert await session.delete(1) is True
    await refresh_task

    assert [r.id for r in session.store.get_all()] == [2]


async def test_upload_success_notifies_and_refreshes(session, multiple_sample_files, notifier):
    files = [LocalFile.from_path(p) for p in multiple_sample_files]

    result = await session.upload(files)

    assert result.count == 3
    assert notifier.successes == ['3 file(s) uploaded successfully!']
    assert len(session.store) == 5
    assert session.busy is False


async def test_upload_failure_notifies_server_message(session, fake_service, multiple_sample_files, notifier):
    await session.refresh()
    before = session.store.get_all()
    fake_service.fail_uploads = {'test1.txt'}
    files = [LocalFile.from_path(p) for p in multiple_sample_files]

    result = await session.upload(files)

    assert result is None
    assert notifier.errors == ['cannot store test1.txt']
    assert session.store.get_all() is before
    assert session.busy is False


async def test_upload_empty_batch_does_nothing(session, fake_service, notifier):
    result = await session.upload([])

    assert result.count == 0
    assert fake_service.calls == []
    assert notifier.messages == []


async def test_upload_then_refresh_failure(session, fake_service, sample_file, notifier):
    fake_service.fail_list = True

    result = await session.upload([LocalFile.from_path(sample_file)])

    assert result is None
    assert notifier.successes == ['1 file(s) uploaded successfully!']
    assert notifier.errors == ['Failed to fetch files.']


async def test_delete_failure_notifies(session, fake_service, notifier):
    await session.refresh()
    fake_service.fail_delete = True

    assert await session.delete(1) is False

    assert notifier.errors == ['Failed to delete file.']
    assert 1 in session.store


async def test_delete_declined_is_silent(session, fake_service, confirm, notifier):
    await session.refresh()
    confirm.return_value = False
    calls_before = list(fake_service.calls)

    assert await session.delete(1) is False

    assert fake_service.calls == calls_before
    assert notifier.messages == []


async def test_download_success(session, tmp_path, notifier):
    result = await session.download(1, tmp_path)

    assert result.path.name == 'report.pdf'
    assert notifier.successes == [f'Downloaded to {result.path}']


async def test_download_failure_notifies(session, tmp_path, notifier):
    assert await session.download(99, tmp_path) is None

    assert len(notifier.errors) == 1
    assert notifier.errors[0].startswith('Failed to download file')


async def test_download_url(session):
    assert session.download_url(3) == 'http://vault.test/files/3/download'


async def test_end_to_end_search_and_delete(session, notifier):
    await session.refresh()

    session.set_query('report')
    assert session.visible_files() == (make_record(1, 'report.pdf', mime_type='application/pdf'),)

    assert await session.delete(1) is True
    assert [r.id for r in session.store.get_all()] == [2]
    assert notifier.successes == ['File deleted successfully!']

    assert session.visible_files() == ()
    session.set_query('')
    assert [r.filename for r in session.visible_files()] == ['photo.png']
