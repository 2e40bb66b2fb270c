# src/clusterinfo/cli/show.py
"""
Displays the cluster info stored on application deployments.
"""

import asyncio
import logging
from typing import List, Optional

import typer
from typing_extensions import Annotated

from ..core.factory import get_application_repository
from ..models.application import Application, ApplicationId
from ..reporters.console_reporter import ConsoleReporter

logger = logging.getLogger(__name__)

app = typer.Typer(name="show", help="Show stored cluster info.")


async def _load(application_id: Optional[ApplicationId]) -> List[Application]:
    from ..core.db import db_manager

    await db_manager.connect()
    try:
        repository = get_application_repository()
        if application_id is None:
            return await repository.list_applications()
        application = await repository.get_application(application_id)
        return [application] if application else []
    finally:
        await db_manager.close()


@app.callback(invoke_without_command=True)
def show(
    ctx: typer.Context,
    application: Annotated[
        Optional[str],
        typer.Option("--application", "-a", help="Only show this application ('tenant.application[.instance]')."),
    ] = None,
) -> None:
    """
    Print the cluster summaries of every deployment.
    """
    if ctx.invoked_subcommand is not None:
        return

    application_id = None
    if application:
        try:
            application_id = ApplicationId.from_string(application)
        except ValueError as e:
            raise typer.BadParameter(str(e))

    try:
        applications = asyncio.run(_load(application_id))
    except Exception as e:
        logger.error(f"Could not read cluster info: {e}")
        raise typer.Exit(code=1)

    if application_id is not None and not applications:
        typer.echo(f"Application {application_id} not found.", err=True)
        raise typer.Exit(code=1)

    ConsoleReporter().report_applications(applications)
