# src/clusterinfo/api/schemas.py
"""
Pydantic response schemas for the API.
Keeps API-specific response shapes separate from internal domain models.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.application import ClusterSummary


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str = Field(..., description="Health status of the API.")
    version: str = Field(..., description="Current application version.")


class VersionResponse(BaseModel):
    """Response schema for the version endpoint."""

    version: str = Field(..., description="Current application version.")


class ConfigResponse(BaseModel):
    """Non-sensitive configuration values."""

    db_type: str
    log_level: str
    reconcile_interval: str
    reconcile_max_concurrency: int
    inventory_fetch_timeout_seconds: float
    lock_timeout_seconds: float
    flavor_catalog_path: str
    api_host: str
    api_port: int


class DeploymentResponse(BaseModel):
    """A deployment with its stored cluster summaries."""

    zone: str = Field(..., description="Zone of the deployment ('environment.region').")
    cluster_info_updated_at: Optional[datetime] = Field(None, description="Last successful refresh.")
    clusters: Dict[str, ClusterSummary] = Field(default_factory=dict)


class ApplicationResponse(BaseModel):
    """An application and its deployments."""

    id: str = Field(..., description="Application id ('tenant.application.instance').")
    deployments: List[DeploymentResponse] = Field(default_factory=list)
