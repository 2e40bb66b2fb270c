# tests/models/test_application_models.py

from datetime import datetime, timezone

import pytest

from clusterinfo.core.exceptions import ClusterTypeParseError
from clusterinfo.models.application import ApplicationId, ClusterType, Deployment, ZoneId
from clusterinfo.models.node import NodeRecord


@pytest.mark.parametrize(
    "value, expected",
    [
        ("tenant.app", ApplicationId(tenant="tenant", application="app", instance="default")),
        ("tenant.app.canary", ApplicationId(tenant="tenant", application="app", instance="canary")),
    ],
)
def test_application_id_from_string(value, expected):
    assert ApplicationId.from_string(value) == expected


@pytest.mark.parametrize("value", ["tenant", "a.b.c.d", "tenant..app", ""])
def test_application_id_rejects_malformed(value):
    with pytest.raises(ValueError):
        ApplicationId.from_string(value)


def test_zone_id_round_trip():
    zone = ZoneId.from_string("prod.us-east-3")
    assert zone == ZoneId(environment="prod", region="us-east-3")
    assert str(zone) == "prod.us-east-3"


def test_zone_id_rejects_malformed():
    with pytest.raises(ValueError):
        ZoneId.from_string("prod")


def test_cluster_type_from_string():
    assert ClusterType.from_string("content") is ClusterType.CONTENT
    assert ClusterType.from_string("container") is ClusterType.CONTAINER
    with pytest.raises(ClusterTypeParseError):
        ClusterType.from_string("Content")


def test_with_deployment_returns_copy(application, zone):
    ts = datetime(2026, 10, 19, tzinfo=timezone.utc)
    updated = application.with_deployment(Deployment(zone=zone).with_cluster_info({}, ts))

    assert updated is not application
    assert updated.deployments[str(zone)].cluster_info_updated_at == ts
    assert application.deployments[str(zone)].cluster_info_updated_at is None


def test_node_record_accepts_wire_aliases():
    node = NodeRecord.model_validate(
        {"hostname": "h", "flavor": "f", "cost": 3, "membership": {"clusterid": "c", "clustertype": "content"}}
    )
    assert node.membership.cluster_id == "c"
    assert node.membership.cluster_type == "content"
