# src/clusterinfo/cli/start.py
"""
Start command for the clusterinfo CLI.

Runs the cluster info reconciliation on a fixed interval until SIGTERM or
SIGINT is received.
"""

import asyncio
import logging
import signal
import traceback

import typer
from typing_extensions import Annotated

from ..core.config import config
from ..core.factory import get_reconciler
from ..core.scheduler import Scheduler
from ..core.telemetry import initialize_telemetry

logger = logging.getLogger(__name__)

app = typer.Typer(name="start", help="Start the cluster info reconciliation service.")


async def _async_start(interval: str, telemetry: bool) -> None:
    from ..core.db import db_manager

    if telemetry:
        initialize_telemetry()

    await db_manager.connect()
    logger.info("✅ Database connection successful and schema is ready.")

    reconciler = get_reconciler()

    async def reconcile_cluster_info():
        await reconciler.run()

    shutdown_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(signum, shutdown_requested.set)

    scheduler = Scheduler()
    scheduler.add_job_from_string(reconcile_cluster_info, interval)
    logger.info("Cluster info maintainer is running every %s. Press CTRL+C to exit.", interval)

    try:
        await shutdown_requested.wait()
        logger.info("🛑 Shutdown requested, stopping scheduler...")
    finally:
        await scheduler.stop()
        await db_manager.close()


@app.callback(invoke_without_command=True)
def start(
    ctx: typer.Context,
    interval: Annotated[
        str,
        typer.Option("--interval", help="Time between reconciliations (e.g. '30s', '10m', '1h')."),
    ] = None,
    telemetry: Annotated[
        bool,
        typer.Option("--telemetry/--no-telemetry", help="Export traces and metrics over OTLP."),
    ] = False,
) -> None:
    """
    Initialize the database (if needed) and run the reconciliation loop.
    """
    if ctx.invoked_subcommand is not None:
        return

    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    logger.info("🚀 Initializing cluster info maintainer...")

    try:
        asyncio.run(_async_start(interval or config.RECONCILE_INTERVAL, telemetry))
        logger.info("🛑 Cluster info maintainer stopped gracefully.")
    except KeyboardInterrupt:
        logger.info("\n🛑 Shutting down cluster info maintainer.")
        raise typer.Exit()
    except Exception as e:
        logger.error(f"❌ An unexpected error occurred during startup: {e}")
        logger.error("Startup failed: %s", traceback.format_exc())
        raise typer.Exit(code=1)
