"""
Reporter layer for DNS diagnostics.

Displays diagnostic runs on the console and exports them as JSON for
downstream consumers.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console

from .console.output import ConsoleManager
from .display import DiagnosticDisplay
from .models import DiagnosticRun


logger = logging.getLogger(__name__)


class Reporter:
    """
    Reporter for diagnostic runs.

    Handles Rich display and JSON export of one or more runs.
    """

    def __init__(self, runs: List[DiagnosticRun], console_manager: Optional[ConsoleManager] = None):
        """
        Initialize the reporter.

        Args:
            runs: DiagnosticRun objects from the executor
            console_manager: ConsoleManager instance for Rich output
        """
        self.runs = runs
        self.console_manager = console_manager or ConsoleManager()
        self.console = self.console_manager.console
        self.display = DiagnosticDisplay(self.console_manager)

    def display_results(self, show_records: bool = True) -> None:
        for run in self.runs:
            self.display.display_run(run, show_records=show_records)

    def print_json(self, console: Optional[Console] = None) -> None:
        """Print the JSON tree of all runs, to the given console or the reporter's own."""
        (console or self.console).print_json(json.dumps(self.to_dict(), default=str))

    def export_json(self, file_path: str) -> None:
        """
        Export runs to a JSON file.

        Args:
            file_path: Path where JSON file should be created

        Raises:
            OSError: If the file cannot be written
        """
        try:
            self.console.print(f"[cyan]Exporting to JSON:[/cyan] {file_path}")

            data = self.to_dict()

            output_path = Path(file_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)

            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, default=str)

            size_kb = output_path.stat().st_size / 1024

            logger.info(f"Results exported to JSON: {file_path}")
            self.console_manager.print_success(f"Results exported to: {file_path} ({size_kb:.2f} KB)")

        except OSError as e:
            error_msg = f"Failed to export JSON: {str(e)}"
            logger.error(error_msg, exc_info=True)
            self.console_manager.print_error(
                error_msg,
                details={'file_path': file_path}
            )
            raise

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert runs to a JSON-serializable dictionary.

        Returns:
            Dictionary with one entry per diagnosed domain
        """
        return {
            "total_domains": len(self.runs),
            "domains": [run.to_dict() for run in self.runs],
        }
