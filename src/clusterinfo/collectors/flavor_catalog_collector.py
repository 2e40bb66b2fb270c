"""
Loads the zone-scoped hardware flavor catalogs from a JSON document.

Expected layout::

    {
        "prod.us-east-3": {
            "flavors": [
                {"name": "d-4-16-100", "minCpuCores": 4, "minMainMemoryAvailableGb": 16, "minDiskAvailableGb": 100}
            ]
        }
    }
"""

import json
import logging
import os
from typing import Dict, List, Optional

import aiofiles
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..core.config import config
from ..core.exceptions import ClusterInfoError
from ..models.flavor import Flavor, FlavorCatalog, ZoneCatalogs
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


class _ZoneEntry(BaseModel):
    flavors: List[Flavor] = Field(default_factory=list)


_CATALOG_DOCUMENT = TypeAdapter(Dict[str, _ZoneEntry])


class FlavorCatalogCollector(BaseCollector):
    """Reads flavor catalogs for every zone from `config.FLAVOR_CATALOG_PATH`."""

    def __init__(self, path: Optional[str] = None):
        self.path = path if path is not None else config.FLAVOR_CATALOG_PATH

    async def collect(self) -> ZoneCatalogs:
        if not os.path.exists(self.path):
            logger.warning("Flavor catalog file %s not found; all zones will report zero hardware.", self.path)
            return ZoneCatalogs()

        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as fh:
                raw = await fh.read()
        except OSError as e:
            raise ClusterInfoError(f"Could not read flavor catalog file {self.path}: {e}") from e

        try:
            return self.parse(json.loads(raw))
        except (ValueError, ValidationError) as e:
            raise ClusterInfoError(f"Invalid flavor catalog file {self.path}: {e}") from e

    @staticmethod
    def parse(document) -> ZoneCatalogs:
        """Validates a decoded catalog document. Raises ValidationError on a malformed shape."""
        entries = _CATALOG_DOCUMENT.validate_python(document)
        catalogs = {
            zone: FlavorCatalog(flavors={flavor.name: flavor for flavor in entry.flavors})
            for zone, entry in entries.items()
        }
        logger.info("Loaded flavor catalogs for %d zone(s).", len(catalogs))
        return ZoneCatalogs(catalogs=catalogs)
