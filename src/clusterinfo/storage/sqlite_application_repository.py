# src/clusterinfo/storage/sqlite_application_repository.py

"""
Repository for managing application records in SQLite.
"""

import json
import logging
import sqlite3
from typing import Dict, List, Optional

import aiosqlite

from ..core.exceptions import QueryError
from ..models.application import Application, ApplicationId, ClusterSummary, Deployment, ZoneId
from ..utils.date_utils import parse_iso_date, to_iso_z
from .base_repository import ApplicationRepository

logger = logging.getLogger(__name__)


def _encode_cluster_info(cluster_info: Dict[str, ClusterSummary]) -> str:
    return json.dumps({cluster_id: summary.model_dump(mode="json") for cluster_id, summary in cluster_info.items()})


def _decode_cluster_info(raw: Optional[str]) -> Dict[str, ClusterSummary]:
    if not raw:
        return {}
    return {cluster_id: ClusterSummary.model_validate(item) for cluster_id, item in json.loads(raw).items()}


class SQLiteApplicationRepository(ApplicationRepository):
    """
    SQLite implementation of ApplicationRepository.
    """

    def __init__(self, db_manager):
        self.db_manager = db_manager

    async def list_applications(self) -> List[Application]:
        try:
            async with self.db_manager.connection_scope() as conn:
                conn.row_factory = aiosqlite.Row
                async with conn.execute(
                    "SELECT application_id, tenant, application, instance FROM applications ORDER BY application_id"
                ) as cursor:
                    app_rows = await cursor.fetchall()
                async with conn.execute(
                    """
                    SELECT application_id, zone, cluster_info, cluster_info_updated_at
                    FROM deployments
                    ORDER BY application_id, zone
                """
                ) as cursor:
                    deployment_rows = await cursor.fetchall()
        except sqlite3.Error as e:
            logging.error(f"Could not list applications: {e}")
            raise QueryError(f"Could not list applications: {e}") from e

        deployments_by_app: Dict[str, List[Deployment]] = {}
        for row in deployment_rows:
            deployments_by_app.setdefault(row["application_id"], []).append(self._row_to_deployment(row))

        return [
            Application(
                id=ApplicationId(tenant=row["tenant"], application=row["application"], instance=row["instance"]),
                deployments={str(d.zone): d for d in deployments_by_app.get(row["application_id"], [])},
            )
            for row in app_rows
        ]

    async def get_application(self, application_id: ApplicationId) -> Optional[Application]:
        key = str(application_id)
        try:
            async with self.db_manager.connection_scope() as conn:
                conn.row_factory = aiosqlite.Row
                async with conn.execute("SELECT 1 FROM applications WHERE application_id = ?", (key,)) as cursor:
                    if await cursor.fetchone() is None:
                        return None
                async with conn.execute(
                    """
                    SELECT application_id, zone, cluster_info, cluster_info_updated_at
                    FROM deployments
                    WHERE application_id = ?
                    ORDER BY zone
                """,
                    (key,),
                ) as cursor:
                    rows = await cursor.fetchall()
        except sqlite3.Error as e:
            logging.error(f"Could not retrieve application {key}: {e}")
            raise QueryError(f"Could not retrieve application {key}: {e}") from e

        deployments = [self._row_to_deployment(row) for row in rows]
        return Application(id=application_id, deployments={str(d.zone): d for d in deployments})

    async def write_application(self, application: Application) -> None:
        key = str(application.id)
        try:
            async with self.db_manager.connection_scope() as conn:
                try:
                    await conn.execute(
                        """
                        INSERT INTO applications (application_id, tenant, application, instance)
                        VALUES (?, ?, ?, ?)
                        ON CONFLICT(application_id) DO NOTHING;
                    """,
                        (key, application.id.tenant, application.id.application, application.id.instance),
                    )
                    await conn.execute("DELETE FROM deployments WHERE application_id = ?", (key,))
                    await conn.executemany(
                        """
                        INSERT INTO deployments (application_id, zone, cluster_info, cluster_info_updated_at)
                        VALUES (?, ?, ?, ?)
                    """,
                        [
                            (
                                key,
                                str(deployment.zone),
                                _encode_cluster_info(deployment.cluster_info),
                                to_iso_z(deployment.cluster_info_updated_at)
                                if deployment.cluster_info_updated_at
                                else None,
                            )
                            for deployment in application.deployments.values()
                        ],
                    )
                    await conn.commit()
                except sqlite3.Error:
                    await conn.rollback()
                    raise
        except sqlite3.Error as e:
            logging.error(f"Could not write application {key}: {e}")
            raise QueryError(f"Could not write application {key}: {e}") from e

    async def delete_application(self, application_id: ApplicationId) -> bool:
        key = str(application_id)
        try:
            async with self.db_manager.connection_scope() as conn:
                await conn.execute("DELETE FROM deployments WHERE application_id = ?", (key,))
                cursor = await conn.execute("DELETE FROM applications WHERE application_id = ?", (key,))
                await conn.commit()
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            logging.error(f"Could not delete application {key}: {e}")
            raise QueryError(f"Could not delete application {key}: {e}") from e

    @staticmethod
    def _row_to_deployment(row) -> Deployment:
        return Deployment(
            zone=ZoneId.from_string(row["zone"]),
            cluster_info=_decode_cluster_info(row["cluster_info"]),
            cluster_info_updated_at=parse_iso_date(row["cluster_info_updated_at"]),
        )
