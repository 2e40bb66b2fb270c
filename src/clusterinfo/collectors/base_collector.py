# src/clusterinfo/collectors/base_collector.py
"""
This module defines the abstract base class for the collectors that read
snapshots from external services (the node inventory, the flavor catalogs).
Each collector returns Pydantic models so the core never sees raw payloads.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseCollector(ABC):
    """
    Abstract Base Class for all snapshot collectors.
    """

    @abstractmethod
    async def collect(self, *args, **kwargs) -> Any:
        """
        Fetch data from the collector's source, parse it and return
        Pydantic models. Failures are raised as ClusterInfoError subclasses.
        """
        pass

    async def close(self):
        """
        Clean up resources (e.g., close HTTP sessions or API clients).
        """
        pass
