# tests/storage/test_sqlite_application_repository.py

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from clusterinfo.core.db import DatabaseManager
from clusterinfo.core.exceptions import QueryError
from clusterinfo.models.application import (
    Application,
    ApplicationId,
    ClusterSummary,
    ClusterType,
    Deployment,
)
from clusterinfo.storage.sqlite_application_repository import SQLiteApplicationRepository

# --- Fixtures ---


@pytest.fixture
async def db_manager():
    """An in-memory database with the schema applied."""
    manager = DatabaseManager(db_path=":memory:")
    await manager.connect()
    yield manager
    await manager.close()


@pytest.fixture
async def repo(db_manager):
    return SQLiteApplicationRepository(db_manager)


SUMMARY = ClusterSummary(
    flavor="f1", cost=10, cpu=4, mem=16, disk=16, cluster_type=ClusterType.CONTENT, hostnames=["a", "b"]
)
UPDATED_AT = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


# --- Tests ---


@pytest.mark.asyncio
async def test_write_and_get_application(repo, application, zone, other_zone):
    application = application.with_deployment(
        Deployment(zone=zone, cluster_info={"c1": SUMMARY}, cluster_info_updated_at=UPDATED_AT)
    )

    await repo.write_application(application)
    loaded = await repo.get_application(application.id)

    assert loaded == application
    assert loaded.deployments[str(zone)].cluster_info["c1"].hostnames == ["a", "b"]
    assert loaded.deployments[str(zone)].cluster_info_updated_at == UPDATED_AT
    assert loaded.deployments[str(other_zone)].cluster_info == {}
    assert loaded.deployments[str(other_zone)].cluster_info_updated_at is None


@pytest.mark.asyncio
async def test_write_replaces_cluster_info_wholesale(repo, application, zone):
    first = application.with_deployment(Deployment(zone=zone, cluster_info={"c1": SUMMARY, "c2": SUMMARY}))
    await repo.write_application(first)

    second = application.with_deployment(Deployment(zone=zone, cluster_info={"c3": SUMMARY}))
    await repo.write_application(second)

    loaded = await repo.get_application(application.id)
    assert set(loaded.deployments[str(zone)].cluster_info) == {"c3"}


@pytest.mark.asyncio
async def test_get_unknown_application_returns_none(repo):
    assert await repo.get_application(ApplicationId(tenant="nobody", application="nothing")) is None


@pytest.mark.asyncio
async def test_list_applications(repo, application):
    other = Application(id=ApplicationId(tenant="tenant0", application="app0", instance="canary"))
    await repo.write_application(application)
    await repo.write_application(other)

    applications = await repo.list_applications()

    assert [str(a.id) for a in applications] == ["tenant0.app0.canary", "tenant1.app1.default"]
    assert applications[0].deployments == {}
    assert len(applications[1].deployments) == 2


@pytest.mark.asyncio
async def test_delete_application(repo, application):
    await repo.write_application(application)

    assert await repo.delete_application(application.id) is True
    assert await repo.get_application(application.id) is None
    assert await repo.delete_application(application.id) is False


@pytest.mark.asyncio
async def test_sqlite_error_is_wrapped_in_query_error(application):
    import sqlite3
    from contextlib import asynccontextmanager

    conn = MagicMock()
    conn.execute.side_effect = sqlite3.OperationalError("disk I/O error")
    manager = MagicMock()

    @asynccontextmanager
    async def scope():
        yield conn

    manager.connection_scope = scope

    with pytest.raises(QueryError):
        await SQLiteApplicationRepository(manager).list_applications()
