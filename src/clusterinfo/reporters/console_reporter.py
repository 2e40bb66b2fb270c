# src/clusterinfo/reporters/console_reporter.py
"""
Renders stored cluster info and reconciliation results to the console.
"""

import logging
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..core.reconciler import OutcomeStatus, ReconciliationReport
from ..models.application import Application

logger = logging.getLogger(__name__)


class ConsoleReporter:
    """
    Renders cluster info data to the console using the 'rich' library.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def report_applications(self, applications: List[Application]):
        """
        Displays one row per cluster of every deployment.
        """
        rows = [
            (application, zone, cluster_id, summary, deployment.cluster_info_updated_at)
            for application in applications
            for zone, deployment in sorted(application.deployments.items())
            for cluster_id, summary in sorted(deployment.cluster_info.items())
        ]
        if not rows:
            self.console.print("No cluster info to report.", style="yellow")
            return

        table = Table(title="Cluster Info", header_style="bold magenta", show_lines=True)
        table.add_column("Application", style="cyan")
        table.add_column("Zone", style="cyan")
        table.add_column("Cluster", style="bold")
        table.add_column("Type")
        table.add_column("Flavor")
        table.add_column("Cost", style="green", justify="right")
        table.add_column("CPU", style="blue", justify="right")
        table.add_column("Mem (GB)", style="blue", justify="right")
        table.add_column("Disk (GB)", style="blue", justify="right")
        table.add_column("Hosts", justify="right")
        table.add_column("Updated", style="dim")

        for application, zone, cluster_id, summary, updated_at in rows:
            table.add_row(
                str(application.id),
                zone,
                cluster_id,
                summary.cluster_type.value,
                summary.flavor,
                f"{summary.cost:g}",
                f"{summary.cpu:g}",
                f"{summary.mem:g}",
                f"{summary.disk:g}",
                str(len(summary.hostnames)),
                updated_at.isoformat() if updated_at else "never",
            )

        self.console.print(table)

    def report_reconciliation(self, report: ReconciliationReport):
        """
        Displays the outcome of one reconciliation tick.
        """
        if not report.outcomes and not report.failed_applications:
            self.console.print("No deployments to reconcile.", style="yellow")
            return

        table = Table(title="Reconciliation Result", header_style="bold magenta")
        table.add_column("Deployment", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Clusters", justify="right")
        table.add_column("Reason", style="dim")

        for outcome in report.outcomes:
            style = "green" if outcome.status == OutcomeStatus.UPDATED else "yellow"
            table.add_row(
                str(outcome.deployment_id),
                f"[{style}]{outcome.status.value}[/]",
                str(outcome.clusters),
                outcome.reason or "",
            )
        for application_id, reason in sorted(report.failed_applications.items()):
            table.add_row(application_id, "[red]failed[/]", "-", reason)

        self.console.print(table)
        self.console.print(f"{report.updated} updated, {report.skipped} skipped.")
