# src/clusterinfo/models/application.py
"""
This module defines the Pydantic data models for applications, their
deployments and the per-cluster summaries kept on each deployment. These
models are immutable: updates produce new copies which are then committed
through the application directory.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.exceptions import ClusterTypeParseError


class ClusterType(str, Enum):
    """The role served by a cluster of nodes."""

    ADMIN = "admin"
    CONTAINER = "container"
    CONTENT = "content"
    COMBINED = "combined"

    @classmethod
    def from_string(cls, value: str) -> "ClusterType":
        try:
            return cls(value)
        except ValueError as e:
            raise ClusterTypeParseError(value) from e


class ApplicationId(BaseModel):
    """Identity of an application instance: tenant.application.instance."""

    model_config = ConfigDict(frozen=True)

    tenant: str
    application: str
    instance: str = "default"

    @classmethod
    def from_string(cls, value: str) -> "ApplicationId":
        parts = value.split(".")
        if len(parts) not in (2, 3) or not all(parts):
            raise ValueError(f"Invalid application id '{value}'. Use 'tenant.application[.instance]'.")
        return cls(tenant=parts[0], application=parts[1], instance=parts[2] if len(parts) == 3 else "default")

    def __str__(self) -> str:
        return f"{self.tenant}.{self.application}.{self.instance}"


class ZoneId(BaseModel):
    """A zone: environment.region."""

    model_config = ConfigDict(frozen=True)

    environment: str
    region: str

    @classmethod
    def from_string(cls, value: str) -> "ZoneId":
        environment, sep, region = value.partition(".")
        if not sep or not environment or not region:
            raise ValueError(f"Invalid zone '{value}'. Use 'environment.region'.")
        return cls(environment=environment, region=region)

    def __str__(self) -> str:
        return f"{self.environment}.{self.region}"


class DeploymentId(BaseModel):
    """Identity of one deployment: an application in a zone."""

    model_config = ConfigDict(frozen=True)

    application: ApplicationId
    zone: ZoneId

    def __str__(self) -> str:
        return f"{self.application} in {self.zone}"


class ClusterSummary(BaseModel):
    """
    Hardware shape, cost and membership of one cluster, described by a
    representative member node.
    """

    model_config = ConfigDict(frozen=True)

    flavor: str = Field(..., description="Flavor of the representative node.")
    cost: float = Field(..., description="Cost of the representative node.")
    cpu: float = Field(0.0, description="Minimum CPU cores of the flavor.")
    mem: float = Field(0.0, description="Minimum main memory of the flavor in GB.")
    disk: float = Field(0.0, description="Disk of the flavor in GB.")
    cluster_type: ClusterType = Field(..., description="Role served by the cluster.")
    hostnames: List[str] = Field(default_factory=list, description="Member hostnames in inventory order.")


class Deployment(BaseModel):
    """An application running in a zone, with its latest cluster summaries."""

    model_config = ConfigDict(frozen=True)

    zone: ZoneId
    cluster_info: Dict[str, ClusterSummary] = Field(default_factory=dict)
    cluster_info_updated_at: Optional[datetime] = Field(
        None, description="When cluster_info was last refreshed from the inventory."
    )

    def with_cluster_info(self, cluster_info: Dict[str, ClusterSummary], updated_at: datetime) -> "Deployment":
        """Return a copy whose cluster info is replaced wholesale."""
        return self.model_copy(update={"cluster_info": dict(cluster_info), "cluster_info_updated_at": updated_at})


class Application(BaseModel):
    """An application and its deployments, keyed by zone."""

    model_config = ConfigDict(frozen=True)

    id: ApplicationId
    deployments: Dict[str, Deployment] = Field(default_factory=dict)

    def with_deployment(self, deployment: Deployment) -> "Application":
        deployments = dict(self.deployments)
        deployments[str(deployment.zone)] = deployment
        return self.model_copy(update={"deployments": deployments})

    def deployment_id(self, deployment: Deployment) -> DeploymentId:
        return DeploymentId(application=self.id, zone=deployment.zone)
