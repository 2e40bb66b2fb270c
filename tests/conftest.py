# tests/conftest.py

import pytest

from clusterinfo.models.application import Application, ApplicationId, Deployment, ZoneId
from clusterinfo.models.flavor import Flavor, FlavorCatalog, ZoneCatalogs
from clusterinfo.models.node import NodeMembership, NodeRecord


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Keeps the config predictable and isolated from the actual environment.
    """
    monkeypatch.setenv("DB_TYPE", "sqlite")
    monkeypatch.setenv("DB_PATH", ":memory:")
    monkeypatch.setenv("INVENTORY_API_URL", "https://config.{zone}.test:4443")


def make_node(hostname, cluster_id=None, cluster_type="content", flavor="f1", cost=10):
    membership = NodeMembership(cluster_id=cluster_id, cluster_type=cluster_type) if cluster_id else None
    return NodeRecord(hostname=hostname, membership=membership, flavor=flavor, cost=cost)


@pytest.fixture
def zone():
    return ZoneId(environment="prod", region="us-east-3")


@pytest.fixture
def other_zone():
    return ZoneId(environment="prod", region="eu-west-1")


@pytest.fixture
def scenario_nodes():
    """Two content nodes in c1 and one container node in c2."""
    return [
        make_node("a", "c1", "content", "f1", 10),
        make_node("b", "c1", "content", "f1", 10),
        make_node("x", "c2", "container", "f2", 5),
    ]


@pytest.fixture
def scenario_catalog():
    """Catalog knowing f1 only."""
    return FlavorCatalog(
        flavors={
            "f1": Flavor(name="f1", min_cpu_cores=4, min_main_memory_available_gb=16, min_disk_available_gb=16),
        }
    )


@pytest.fixture
def zone_catalogs(zone, other_zone, scenario_catalog):
    return ZoneCatalogs(catalogs={str(zone): scenario_catalog, str(other_zone): scenario_catalog})


@pytest.fixture
def application(zone, other_zone):
    return Application(
        id=ApplicationId(tenant="tenant1", application="app1"),
        deployments={
            str(zone): Deployment(zone=zone),
            str(other_zone): Deployment(zone=other_zone),
        },
    )


@pytest.fixture
def node_factory():
    return make_node
