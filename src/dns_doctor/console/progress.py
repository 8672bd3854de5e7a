"""Progress tracking for multi-domain diagnostics."""

import time
from typing import List, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)


class ProgressTracker:
    """Progress bar over a batch of domains, with a closing outcome line.

    Attributes:
        domains_with_errors: Domains whose report has error-severity issues
        failed_domains: Domains whose diagnostic run raised
    """

    def __init__(self, console: Console, total_domains: int):
        """
        Initialize progress tracker.

        Args:
            console: Rich Console instance
            total_domains: Number of domains to diagnose
        """
        self.console = console
        self.total_domains = total_domains
        self.start_time: Optional[float] = None
        self.task_id: Optional[int] = None
        self.domains_with_errors: List[str] = []
        self.failed_domains: List[str] = []

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        )

    def start(self) -> None:
        self.start_time = time.time()
        self.progress.start()
        self.task_id = self.progress.add_task("[cyan]Resolving records...", total=self.total_domains)

    def update_domain(self, domain: str) -> None:
        """Show the domain currently being resolved."""
        if self.task_id is not None:
            self.progress.update(self.task_id, description=f"[cyan]Resolving {domain}...")

    def complete_domain(self, domain: str, errors: int = 0) -> None:
        """Advance the bar for a finished run, remembering domains with errors."""
        if errors:
            self.domains_with_errors.append(domain)
        if self.task_id is not None:
            self.progress.advance(self.task_id, 1)

    def fail_domain(self, domain: str) -> None:
        self.failed_domains.append(domain)
        if self.task_id is not None:
            self.progress.advance(self.task_id, 1)

    def finish(self, total_time: Optional[float] = None) -> None:
        """
        Stop the progress display and print the batch outcome.

        Args:
            total_time: Total execution time in seconds, computed if None
        """
        if total_time is None and self.start_time is not None:
            total_time = time.time() - self.start_time

        self.progress.stop()

        outcome = f"[bold green]✓[/bold green] Diagnosed {self.total_domains} domain(s)"
        if total_time is not None:
            outcome += f" in [bold cyan]{total_time:.2f}[/bold cyan] seconds"
        self.console.print(outcome)

        if self.domains_with_errors:
            self.console.print(f"  [red]✗ With errors:[/red] {', '.join(self.domains_with_errors)}")
        if self.failed_domains:
            self.console.print(f"  [yellow]⚠ Failed:[/yellow] {', '.join(self.failed_domains)}")
        self.console.print()
