# src/clusterinfo/models/flavor.py
"""
Hardware flavors and the zone-scoped catalogs they are looked up in.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Flavor(BaseModel):
    """A named hardware shape offered by a zone."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Flavor identifier")
    min_cpu_cores: float = Field(0.0, alias="minCpuCores", description="Minimum CPU cores")
    min_main_memory_available_gb: float = Field(
        0.0, alias="minMainMemoryAvailableGb", description="Minimum main memory available in GB"
    )
    min_disk_available_gb: float = Field(0.0, alias="minDiskAvailableGb", description="Minimum disk available in GB")


class FlavorCatalog(BaseModel):
    """Flavors offered by a single zone, keyed by flavor name."""

    model_config = ConfigDict(frozen=True)

    flavors: Dict[str, Flavor] = Field(default_factory=dict)

    def get_flavor(self, name: str) -> Optional[Flavor]:
        return self.flavors.get(name)


class ZoneCatalogs(BaseModel):
    """Flavor catalogs keyed by zone ('environment.region')."""

    model_config = ConfigDict(frozen=True)

    catalogs: Dict[str, FlavorCatalog] = Field(default_factory=dict)

    def node_flavors(self, zone) -> Optional[FlavorCatalog]:
        """Return the catalog of the zone, or None when the zone exposes none."""
        return self.catalogs.get(str(zone))
