# tests/core/test_directory.py

from unittest.mock import AsyncMock

import pytest

from clusterinfo.core.directory import ApplicationDirectory
from clusterinfo.core.exceptions import LockError
from clusterinfo.models.application import Application, ApplicationId


@pytest.fixture
def repository():
    repo = AsyncMock()
    repo.write_application = AsyncMock(return_value=None)
    return repo


@pytest.mark.asyncio
async def test_store_writes_under_own_lock(repository, application):
    directory = ApplicationDirectory(repository)

    async with directory.lock(application.id) as lock:
        await directory.store(application, lock)

    repository.write_application.assert_awaited_once_with(application)


@pytest.mark.asyncio
async def test_store_rejects_lock_of_another_application(repository, application):
    directory = ApplicationDirectory(repository)
    other_id = ApplicationId(tenant="someone", application="else")

    async with directory.lock(other_id) as lock:
        with pytest.raises(LockError):
            await directory.store(application, lock)

    repository.write_application.assert_not_awaited()


@pytest.mark.asyncio
async def test_store_rejects_released_lock(repository, application):
    directory = ApplicationDirectory(repository)

    async with directory.lock(application.id) as lock:
        pass

    with pytest.raises(LockError):
        await directory.store(application, lock)


@pytest.mark.asyncio
async def test_list_and_get_delegate_to_repository(repository, application):
    repository.list_applications = AsyncMock(return_value=[application])
    repository.get_application = AsyncMock(return_value=application)
    directory = ApplicationDirectory(repository)

    assert await directory.list_applications() == [application]
    assert await directory.get_application(application.id) == application
    assert isinstance(application, Application)
