import asyncio
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..core.config import config
from ..core.exceptions import InvalidDeploymentError, InventoryResponseError, InventoryTransportError
from ..models.application import DeploymentId
from ..models.node import NodeList
from ..utils.http_client import get_async_http_client
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)

NODES_PATH = "/nodes/v2/node/"

# Status codes meaning the inventory does not know the deployment or rejects its id.
INVALID_ARGUMENT_STATUSES = (400, 404)


class InventoryCollector(BaseCollector):
    """
    Fetches the nodes allocated to a deployment from the zone's node inventory service.
    The endpoint is read from `config.INVENTORY_API_URL`, where a '{zone}'
    placeholder is replaced by the deployment's zone.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        verify_certs: Optional[bool] = None,
        token: Optional[str] = None,
        fetch_timeout: Optional[float] = None,
    ):
        self.base_url = base_url if base_url is not None else config.INVENTORY_API_URL
        self.verify_certs = verify_certs if verify_certs is not None else config.INVENTORY_VERIFY_CERTS
        self.token = token if token is not None else config.INVENTORY_API_TOKEN
        self.fetch_timeout = fetch_timeout if fetch_timeout is not None else config.INVENTORY_FETCH_TIMEOUT_SECONDS

    def url_for(self, deployment_id: DeploymentId) -> str:
        if not self.base_url:
            raise InvalidDeploymentError("Inventory API URL is not configured", deployment_id)
        return self.base_url.replace("{zone}", str(deployment_id.zone)).rstrip("/") + NODES_PATH

    async def collect(self, deployment_id: DeploymentId) -> NodeList:
        """
        Fetches the node list of a deployment.

        Raises:
            InvalidDeploymentError: The service rejected the deployment (HTTP 400/404) or no URL is configured.
            InventoryTransportError: The request failed, timed out or the service answered with an error.
            InventoryResponseError: The body was not a valid node list.
        """
        url = self.url_for(deployment_id)
        params = {"recursive": "true", "application": str(deployment_id.application)}

        async with get_async_http_client(verify=self.verify_certs, bearer_token=self.token) as client:
            try:
                resp = await asyncio.wait_for(client.get(url, params=params), timeout=self.fetch_timeout)
            except asyncio.TimeoutError as e:
                raise InventoryTransportError(
                    f"Node inventory request for {deployment_id} timed out after {self.fetch_timeout}s",
                    deployment_id,
                ) from e
            except httpx.HTTPError as e:
                raise InventoryTransportError(
                    f"Node inventory request for {deployment_id} failed: {e}", deployment_id
                ) from e

        if resp.status_code in INVALID_ARGUMENT_STATUSES:
            raise InvalidDeploymentError(
                f"Node inventory rejected {deployment_id} with HTTP {resp.status_code}: {resp.text[:200]}",
                deployment_id,
            )
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise InventoryTransportError(
                f"Node inventory answered HTTP {resp.status_code} for {deployment_id}", deployment_id
            ) from e

        try:
            node_list = NodeList.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            logger.debug("Raw inventory response for %s: %s", deployment_id, resp.text[:500])
            raise InventoryResponseError(
                f"Could not parse node inventory for {deployment_id}: {e}", deployment_id
            ) from e

        logger.debug("Fetched %d nodes for %s", len(node_list.nodes), deployment_id)
        return node_list
