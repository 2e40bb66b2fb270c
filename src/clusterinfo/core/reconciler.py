# src/clusterinfo/core/reconciler.py
"""
The cluster info reconciliation loop.

Once per tick, every deployment of every known application gets its node
inventory fetched, aggregated into per-cluster summaries and committed on the
application record. Failures are isolated per deployment: a deployment that
cannot be refreshed keeps its previous summaries until a later tick succeeds.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..collectors.base_collector import BaseCollector
from ..models.application import Application, ApplicationId, Deployment, DeploymentId
from ..models.flavor import ZoneCatalogs
from ..utils.date_utils import utc_now
from .aggregator import aggregate_clusters
from .config import config
from .directory import ApplicationDirectory
from .exceptions import ClusterInfoError, ClusterTypeParseError, FetchError, LockError, StorageError
from .locks import ApplicationLock
from .telemetry import deployments_skipped_counter, deployments_updated_counter, tracer

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    UPDATED = "updated"
    SKIPPED = "skipped"


@dataclass
class DeploymentOutcome:
    deployment_id: DeploymentId
    status: OutcomeStatus
    clusters: int = 0
    reason: Optional[str] = None


@dataclass
class ReconciliationReport:
    """What one tick did, deployment by deployment."""

    started_at: datetime
    finished_at: Optional[datetime] = None
    outcomes: List[DeploymentOutcome] = field(default_factory=list)
    failed_applications: Dict[str, str] = field(default_factory=dict)

    @property
    def updated(self) -> int:
        return sum(1 for o in self.outcomes if o.status == OutcomeStatus.UPDATED)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status == OutcomeStatus.SKIPPED)


class ClusterInfoReconciler:
    """Keeps the cluster info of every deployment in sync with the node inventory."""

    def __init__(
        self,
        directory: ApplicationDirectory,
        inventory: BaseCollector,
        catalogs: BaseCollector,
        max_concurrency: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            directory: Lists, locks and stores application records.
            inventory: Collector whose collect(deployment_id) returns a NodeList.
            catalogs: Collector whose collect() returns the ZoneCatalogs snapshot for a tick.
            max_concurrency: How many applications are processed at once. Defaults to config.
            clock: Source of the refresh timestamps written on deployments.
        """
        self.directory = directory
        self.inventory = inventory
        self.catalogs = catalogs
        self.max_concurrency = max_concurrency or config.RECONCILE_MAX_CONCURRENCY
        self.clock = clock

    async def run(self) -> ReconciliationReport:
        """Performs one full pass over all applications and returns what happened."""
        with tracer.start_as_current_span("clusterinfo.reconcile") as span:
            report = ReconciliationReport(started_at=self.clock())
            logger.info("--- Starting cluster info reconciliation ---")

            zone_catalogs = await self._load_catalogs()
            applications = await self.directory.list_applications()
            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def _guarded(application_id: ApplicationId):
                async with semaphore:
                    await self._reconcile_application(application_id, zone_catalogs, report)

            ids = [application.id for application in applications]
            results = await asyncio.gather(*(_guarded(app_id) for app_id in ids), return_exceptions=True)
            for app_id, result in zip(ids, results):
                if isinstance(result, Exception):
                    logger.error(f"Unexpected error reconciling {app_id}: {result}", exc_info=result)
                    report.failed_applications[str(app_id)] = str(result)

            report.finished_at = self.clock()
            span.set_attribute("clusterinfo.applications", len(applications))
            span.set_attribute("clusterinfo.deployments.updated", report.updated)
            span.set_attribute("clusterinfo.deployments.skipped", report.skipped)
            logger.info(
                "--- Finished cluster info reconciliation: %d updated, %d skipped, %d application(s) failed ---",
                report.updated,
                report.skipped,
                len(report.failed_applications),
            )
            return report

    async def _load_catalogs(self) -> ZoneCatalogs:
        try:
            return await self.catalogs.collect()
        except ClusterInfoError as e:
            logger.warning(f"Flavor catalogs unavailable, reporting zero hardware this tick: {e}", exc_info=True)
            return ZoneCatalogs()

    async def _reconcile_application(
        self, application_id: ApplicationId, zone_catalogs: ZoneCatalogs, report: ReconciliationReport
    ) -> None:
        try:
            async with self.directory.lock(application_id) as lock:
                # Re-read under the lock so commits build on the latest stored record.
                application = await self.directory.get_application(application_id)
                if application is None:
                    logger.info("Application %s was removed before it could be reconciled.", application_id)
                    return
                for deployment in list(application.deployments.values()):
                    application = await self._reconcile_deployment(
                        application, deployment, zone_catalogs, lock, report
                    )
        except (LockError, StorageError) as e:
            logger.warning(f"Skipping application {application_id} this tick: {e}")
            report.failed_applications[str(application_id)] = str(e)

    async def _reconcile_deployment(
        self,
        application: Application,
        deployment: Deployment,
        zone_catalogs: ZoneCatalogs,
        lock: ApplicationLock,
        report: ReconciliationReport,
    ) -> Application:
        """Refreshes one deployment and returns the application as it is now stored."""
        deployment_id = application.deployment_id(deployment)
        try:
            node_list = await self.inventory.collect(deployment_id)
            cluster_info = aggregate_clusters(node_list.nodes, zone_catalogs.node_flavors(deployment.zone))
            updated = application.with_deployment(deployment.with_cluster_info(cluster_info, self.clock()))
            await self.directory.store(updated, lock)
        except (FetchError, ClusterTypeParseError, StorageError) as e:
            logger.warning(f"Failed to get cluster info for {deployment_id}: {e}")
            report.outcomes.append(DeploymentOutcome(deployment_id, OutcomeStatus.SKIPPED, reason=str(e)))
            deployments_skipped_counter.add(1, {"reason": type(e).__name__})
            return application

        report.outcomes.append(DeploymentOutcome(deployment_id, OutcomeStatus.UPDATED, clusters=len(cluster_info)))
        deployments_updated_counter.add(1)
        return updated
