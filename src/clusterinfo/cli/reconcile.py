# src/clusterinfo/cli/reconcile.py
"""
Runs a single reconciliation tick and prints what it did.
"""

import asyncio
import logging

import typer

from ..core.factory import get_reconciler
from ..core.reconciler import ReconciliationReport
from ..reporters.console_reporter import ConsoleReporter

logger = logging.getLogger(__name__)

app = typer.Typer(name="reconcile", help="Refresh the cluster info of every deployment once.")


async def _run_once() -> ReconciliationReport:
    from ..core.db import db_manager

    await db_manager.connect()
    try:
        return await get_reconciler().run()
    finally:
        await db_manager.close()


@app.callback(invoke_without_command=True)
def reconcile(ctx: typer.Context) -> None:
    """
    Run one reconciliation pass over all applications.
    """
    if ctx.invoked_subcommand is not None:
        return

    try:
        report = asyncio.run(_run_once())
    except Exception as e:
        logger.error(f"Reconciliation failed: {e}")
        raise typer.Exit(code=1)

    ConsoleReporter().report_reconciliation(report)
    if report.failed_applications:
        raise typer.Exit(code=2)
