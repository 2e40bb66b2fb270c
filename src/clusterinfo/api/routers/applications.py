# src/clusterinfo/api/routers/applications.py
"""
API routes for reading the cluster info stored on deployments.
"""

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException

from ...core.exceptions import StorageError
from ...models.application import Application, ApplicationId, ClusterSummary
from ...storage.base_repository import ApplicationRepository
from ..dependencies import get_application_repository
from ..schemas import ApplicationResponse, DeploymentResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(application: Application) -> ApplicationResponse:
    return ApplicationResponse(
        id=str(application.id),
        deployments=[
            DeploymentResponse(
                zone=zone,
                cluster_info_updated_at=deployment.cluster_info_updated_at,
                clusters=deployment.cluster_info,
            )
            for zone, deployment in sorted(application.deployments.items())
        ],
    )


async def _get_application(repo: ApplicationRepository, application_id: str) -> Application:
    try:
        app_id = ApplicationId.from_string(application_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    try:
        application = await repo.get_application(app_id)
    except StorageError as e:
        logger.error(f"Could not read application {app_id}: {e}")
        raise HTTPException(status_code=503, detail="Application store unavailable.")
    if application is None:
        raise HTTPException(status_code=404, detail=f"Application {app_id} not found.")
    return application


@router.get("/applications", response_model=List[ApplicationResponse])
async def list_applications(
    repo: ApplicationRepository = Depends(get_application_repository),
):
    """Return every application with the cluster info of its deployments."""
    try:
        applications = await repo.list_applications()
    except StorageError as e:
        logger.error(f"Could not list applications: {e}")
        raise HTTPException(status_code=503, detail="Application store unavailable.")
    return [_to_response(application) for application in applications]


@router.get("/applications/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: str,
    repo: ApplicationRepository = Depends(get_application_repository),
):
    """Return one application."""
    return _to_response(await _get_application(repo, application_id))


@router.get(
    "/applications/{application_id}/deployments/{zone}/clusters",
    response_model=Dict[str, ClusterSummary],
)
async def get_deployment_clusters(
    application_id: str,
    zone: str,
    repo: ApplicationRepository = Depends(get_application_repository),
):
    """Return the cluster summaries of one deployment, keyed by cluster id."""
    application = await _get_application(repo, application_id)
    deployment = application.deployments.get(zone)
    if deployment is None:
        raise HTTPException(status_code=404, detail=f"Application {application.id} has no deployment in {zone}.")
    return deployment.cluster_info
