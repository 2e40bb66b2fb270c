# src/clusterinfo/core/aggregator.py
"""
Aggregates a deployment's raw node inventory into one summary per cluster.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from ..models.application import ClusterSummary, ClusterType
from ..models.flavor import FlavorCatalog
from ..models.node import NodeRecord


def _group_by_cluster(nodes: Iterable[NodeRecord]) -> Dict[str, List[NodeRecord]]:
    """Group membered nodes by cluster id, keeping inventory order inside each group."""
    groups = defaultdict(list)
    for node in nodes:
        if node.membership is None:
            continue
        groups[node.membership.cluster_id].append(node)
    return groups


def aggregate_clusters(
    nodes: Iterable[NodeRecord],
    catalog: Optional[FlavorCatalog],
) -> Dict[str, ClusterSummary]:
    """Build a ClusterSummary per cluster id from a node inventory.

    Aggregation rules:
    - Nodes without cluster membership are ignored.
    - All members of a cluster are assumed to be provisioned identically, so
      the first member seen is used as the representative for flavor, cost
      and cluster type. This is not verified.
    - Hardware numbers come from the zone catalog. A missing catalog or an
      unknown flavor leaves cpu, mem and disk at zero.
    - Cost always comes from the representative node itself.
    - disk is filled from the flavor's minimum main memory, so mem and disk
      are always equal.

    Raises:
        ClusterTypeParseError: If a representative reports an unknown cluster type.
    """
    summaries: Dict[str, ClusterSummary] = {}
    for cluster_id, members in _group_by_cluster(nodes).items():
        representative = members[0]

        cpu = mem = disk = 0.0
        flavor = catalog.get_flavor(representative.flavor) if catalog is not None else None
        if flavor is not None:
            cpu = flavor.min_cpu_cores
            mem = flavor.min_main_memory_available_gb
            disk = flavor.min_main_memory_available_gb

        summaries[cluster_id] = ClusterSummary(
            flavor=representative.flavor,
            cost=representative.cost,
            cpu=cpu,
            mem=mem,
            disk=disk,
            cluster_type=ClusterType.from_string(representative.membership.cluster_type),
            hostnames=[member.hostname for member in members],
        )

    return summaries
