"""Display manager for DNS diagnostic results.

This module provides the DiagnosticDisplay class for formatting and displaying
diagnostic reports, record tables and propagation results using Rich.
"""

from typing import Dict

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dns_doctor.console.output import ConsoleManager
from dns_doctor.console.themes import ICONS, SEVERITY_COLORS, SEVERITY_ICONS
from dns_doctor.models import DiagnosticRun, DomainResultSet, DiagnosticReport, ResolverOutcome


class DiagnosticDisplay:
    """Display manager for diagnostic runs.

    Attributes:
        console_manager: ConsoleManager instance for output
        console: Rich Console instance
    """

    # Payloads longer than this are truncated in tables
    MAX_VALUE_LENGTH = 60

    def __init__(self, console_manager: ConsoleManager):
        self.console_manager = console_manager
        self.console = console_manager.console

    def display_run(self, run: DiagnosticRun, show_records: bool = True) -> None:
        """Display a complete diagnostic run.

        Shows the summary panel, the record table (optional) and the issue list.

        Args:
            run: DiagnosticRun to display
            show_records: If True, include the per-type record table
        """
        self.display_summary(run)
        if show_records:
            self.display_record_table(run.results)
        self.display_issues(run.report)

    def display_summary(self, run: DiagnosticRun) -> None:
        """Display a summary panel with severity counts."""
        summary = run.report.summary

        summary_text = Text()
        summary_text.append(f"{ICONS['domain']} Domain: ", style="info")
        summary_text.append(f"{run.domain}\n\n", style="bold cyan")

        summary_text.append(f"  {ICONS['error']} Errors: ", style="red")
        summary_text.append(f"{summary.errors}\n", style="white")
        summary_text.append(f"  {ICONS['warning']} Warnings: ", style="yellow")
        summary_text.append(f"{summary.warnings}\n", style="white")
        summary_text.append(f"  {ICONS['info']} Info: ", style="info")
        summary_text.append(f"{summary.info}\n", style="white")

        summary_text.append("\n", style="white")
        summary_text.append(f"{ICONS['time']} Checked: ", style="dim")
        summary_text.append(f"{run.timestamp.strftime('%Y-%m-%d %H:%M:%S')}", style="white")
        summary_text.append(f" ({run.execution_time:.2f}s)", style="dim")

        if summary.errors:
            border_style = "red"
        elif summary.warnings:
            border_style = "yellow"
        else:
            border_style = "green"

        panel = Panel(
            summary_text,
            title="[bold]DNS Diagnostics Summary[/bold]",
            border_style=border_style,
            padding=(1, 2)
        )

        self.console.print(panel)
        self.console.print()

    def display_record_table(self, results: DomainResultSet) -> None:
        """Display primary records and propagation status per record type."""
        table = Table(
            title="DNS Records",
            show_header=True,
            header_style="bold cyan",
            border_style="blue",
            show_lines=True
        )

        table.add_column("Type", style="magenta", no_wrap=True, width=7)
        table.add_column("Value", style="white", width=40)
        table.add_column("TTL", justify="right", width=8)
        table.add_column("Propagation", width=30)

        for record_type, result in results.items():
            if result.primary_records:
                values = "\n".join(self._truncate(record.data) for record in result.primary_records)
                ttls = "\n".join(str(record.ttl) for record in result.primary_records)
            else:
                values = "[dim]No records[/dim]"
                ttls = "[dim]-[/dim]"

            table.add_row(
                record_type,
                values,
                ttls,
                self._format_propagation(result.propagation)
            )

        self.console.print(table)
        self.console.print()

    def display_issues(self, report: DiagnosticReport) -> None:
        """Display the ordered issue list with severity color coding."""
        if not report.issues:
            self.console_manager.print_success("No issues found")
            return

        table = Table(
            title="Issues",
            show_header=True,
            header_style="bold cyan",
            border_style="blue"
        )

        table.add_column("Severity", justify="center", width=10)
        table.add_column("Issue", style="magenta", no_wrap=True)
        table.add_column("Message", style="white")

        for issue in report.issues:
            severity_text = Text()
            style = SEVERITY_COLORS.get(issue.severity, "white")
            severity_text.append(f"{SEVERITY_ICONS.get(issue.severity, '')} ", style=style)
            severity_text.append(issue.severity.upper(), style=style)

            table.add_row(severity_text, issue.kind, escape(issue.message))

        self.console.print(table)
        self.console.print()

    def display_propagation(self, domain: str, record_type: str, propagation: Dict[str, ResolverOutcome]) -> None:
        """Display one record type's outcome per resolver.

        Args:
            domain: Queried domain
            record_type: Queried record type
            propagation: Mapping of resolver name to outcome
        """
        table = Table(
            title=f"{record_type} records for {domain}",
            show_header=True,
            header_style="bold cyan",
            border_style="blue",
            show_lines=True
        )

        table.add_column("Resolver", style="cyan", no_wrap=True, width=14)
        table.add_column("Status", justify="center", width=12)
        table.add_column("Values", style="white", width=40)
        table.add_column("Response Time", justify="right", width=14)

        for name, outcome in propagation.items():
            status_text = Text()
            if outcome.failed:
                status_text.append(f"{ICONS['warning']} ", style="bold yellow")
                status_text.append("Failed", style="bold yellow")
                values = f"[dim]{escape(outcome.error)}[/dim]"
                response_time = "[dim]N/A[/dim]"
            else:
                if outcome.records:
                    status_text.append(f"{ICONS['success']} ", style="bold green")
                    status_text.append("Answered", style="bold green")
                    values = "\n".join(self._truncate(record.data) for record in outcome.records)
                else:
                    status_text.append(f"{ICONS['info']} ", style="dim")
                    status_text.append("Empty", style="dim")
                    values = "[dim]No records[/dim]"
                response_time = f"{outcome.response_time:.3f}s"

            table.add_row(name, status_text, values, response_time)

        self.console.print(table)
        self.console.print()

    def _format_propagation(self, propagation: Dict[str, ResolverOutcome]) -> str:
        if not propagation:
            return "[dim]Not checked[/dim]"

        parts = []
        for name, outcome in propagation.items():
            if outcome.failed:
                parts.append(f"[yellow]{ICONS['warning']} {name}[/yellow]")
            elif outcome.records:
                parts.append(f"[green]{ICONS['success']} {name}[/green]")
            else:
                parts.append(f"[red]{ICONS['error']} {name}[/red]")
        return " ".join(parts)

    def _truncate(self, value: str) -> str:
        if len(value) > self.MAX_VALUE_LENGTH:
            value = value[:self.MAX_VALUE_LENGTH - 3] + "..."
        return escape(value)
