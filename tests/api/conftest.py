# tests/api/conftest.py
"""
Shared fixtures for API tests.
Uses FastAPI's TestClient with dependency overrides to inject a mock repository.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from clusterinfo.api.app import create_app
from clusterinfo.api.dependencies import get_application_repository
from clusterinfo.models.application import ClusterSummary, ClusterType, Deployment


@pytest.fixture
def stored_application(application, zone):
    summary = ClusterSummary(
        flavor="f1", cost=10, cpu=4, mem=16, disk=16, cluster_type=ClusterType.CONTENT, hostnames=["a", "b"]
    )
    return application.with_deployment(
        Deployment(
            zone=zone,
            cluster_info={"c1": summary},
            cluster_info_updated_at=datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc),
        )
    )


@pytest.fixture
def mock_application_repo(stored_application):
    """Returns a mock ApplicationRepository holding one application."""
    repo = AsyncMock()
    repo.list_applications = AsyncMock(return_value=[stored_application])
    repo.get_application = AsyncMock(
        side_effect=lambda app_id: stored_application if app_id == stored_application.id else None
    )
    return repo


@pytest.fixture
def client(mock_application_repo):
    """Creates a TestClient with the repository dependency overridden."""
    app = create_app()
    app.dependency_overrides[get_application_repository] = lambda: mock_application_repo
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
