# src/clusterinfo/models/node.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NodeMembership(BaseModel):
    """
    Cluster membership reported by the inventory service for an allocated node.

    Attributes:
        cluster_id: Identifier of the cluster the node serves
        cluster_type: Raw cluster type string (e.g. 'content', 'container')
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cluster_id: str = Field(..., alias="clusterid", description="Cluster identifier")
    cluster_type: str = Field(..., alias="clustertype", description="Raw cluster type")


class NodeRecord(BaseModel):
    """
    Pydantic model for a single node assigned to a deployment.

    Attributes:
        hostname: Node hostname
        membership: Cluster membership, absent for unassigned or retiring nodes
        flavor: Hardware flavor identifier
        cost: Cost unit of the node
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hostname: str = Field(..., description="Node hostname")
    membership: Optional[NodeMembership] = Field(None, description="Cluster membership")
    flavor: str = Field(..., description="Hardware flavor identifier")
    cost: float = Field(0, description="Cost unit of the node")


class NodeList(BaseModel):
    """Node inventory of one deployment as returned by the inventory service."""

    model_config = ConfigDict(frozen=True)

    nodes: List[NodeRecord] = Field(default_factory=list)
