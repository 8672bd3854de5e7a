"""Central console output manager for Rich-formatted output.

This module provides the ConsoleManager class that coordinates all Rich console
output throughout the application, ensuring consistent formatting and handling
debug mode appropriately.
"""

from typing import Optional, Dict, List, Any
import traceback
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text
from .themes import get_theme, ICONS


class ConsoleManager:
    """Central console output manager.

    Attributes:
        console: Rich Console instance
        debug_mode: Whether debug mode is enabled
        theme: Rich Theme for consistent styling
    """

    def __init__(self, debug_mode: bool = False, console: Optional[Console] = None):
        """Initialize the ConsoleManager.

        Args:
            debug_mode: If True, show stack traces under error panels
            console: Optional Rich Console to write to (a themed one is created if omitted)
        """
        self.debug_mode = debug_mode
        self.theme = get_theme()
        if console is None:
            console = Console(theme=self.theme)
        else:
            console.push_theme(self.theme)
        self.console = console

    def print_banner(
        self,
        version: str,
        domains: List[str],
        primary: str,
        resolvers: List[str],
        config_path: Optional[str] = None
    ) -> None:
        """Display application startup banner.

        Args:
            version: Application version string
            domains: Domains to be diagnosed
            primary: Name of the primary resolver
            resolvers: Names of all configured resolvers
            config_path: Configuration file in use, if any
        """
        banner_text = Text()
        banner_text.append("DNS Doctor\n", style="bold cyan")
        banner_text.append(f"Version: {version}\n\n", style="dim")

        banner_text.append(f"{ICONS['domain']} Domains: ", style="info")
        banner_text.append(f"{', '.join(domains)}\n", style="white")

        banner_text.append(f"{ICONS['check']} Resolvers: ", style="info")
        banner_text.append(", ".join(resolvers), style="record_type")
        banner_text.append(f" (primary: {primary})\n", style="dim")

        banner_text.append(f"{ICONS['info']} Config: ", style="info")
        banner_text.append(config_path or "built-in defaults", style="white")

        if self.debug_mode:
            banner_text.append("\n\n", style="white")
            banner_text.append(f"{ICONS['warning']} Debug Mode: ", style="warning")
            banner_text.append("ENABLED", style="bold yellow")

        panel = Panel(
            banner_text,
            title="[bold]DNS Diagnostics[/bold]",
            border_style="cyan",
            padding=(1, 2)
        )

        self.console.print(panel)
        self.console.print()

    def print_error(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        exception: Optional[Exception] = None,
        show_traceback: bool = False
    ) -> None:
        """Display error message in Rich Panel format.

        In debug mode, the exception's stack trace is shown as well.

        Args:
            message: Error message to display
            details: Optional dictionary with additional context (domain, record type, etc.)
            exception: Optional exception object for extracting traceback
            show_traceback: Force showing traceback even in non-debug mode
        """
        error_text = Text()
        error_text.append(f"{ICONS['error']} ", style="error")
        error_text.append(message, style="error")

        if details:
            error_text.append("\n\n", style="white")
            error_text.append("Context:\n", style="bold dim")
            for key, value in details.items():
                error_text.append(f"  {key.replace('_', ' ').title()}: ", style="dim")
                error_text.append(f"{value}\n", style="white")

        suggestion = self._get_error_suggestion(message)
        if suggestion:
            error_text.append("\n", style="white")
            error_text.append(f"{ICONS['info']} Suggestion: ", style="info")
            error_text.append(suggestion, style="cyan")

        panel = Panel(
            error_text,
            title="[bold red]Error[/bold red]",
            border_style="red",
            padding=(1, 2)
        )

        self.console.print(panel)

        if (self.debug_mode or show_traceback) and exception:
            self._print_traceback(exception)

    def _get_error_suggestion(self, message: str) -> Optional[str]:
        """Get actionable suggestion for common errors.

        Args:
            message: Error message

        Returns:
            Suggestion string or None if no suggestion available
        """
        message_lower = message.lower()

        if 'file not found' in message_lower or 'no such file' in message_lower:
            return "Check that the file path is correct and the file exists. Use absolute paths if needed."

        if 'timeout' in message_lower or 'timed out' in message_lower:
            return "Check your network connection and firewall settings. The resolver may be slow or unreachable."

        if 'invalid domain' in message_lower:
            return "Verify the domain name format is correct (e.g., example.com without http:// or trailing slashes)."

        if 'primary resolver' in message_lower or ('resolver' in message_lower and 'url' in message_lower):
            return "Check the 'resolvers' and 'primary' entries of your configuration file."

        if 'permission denied' in message_lower:
            return "Check file/directory permissions. You may need elevated privileges to access this resource."

        return None

    def _print_traceback(self, exception: Exception) -> None:
        """Print exception traceback with syntax highlighting."""
        if not hasattr(exception, '__traceback__'):
            return

        tb_lines = traceback.format_exception(
            type(exception),
            exception,
            exception.__traceback__
        )
        tb_text = ''.join(tb_lines)

        syntax = Syntax(
            tb_text,
            "python",
            theme="monokai",
            line_numbers=True,
            word_wrap=True
        )

        self.console.print()
        self.console.print(Panel(
            syntax,
            title="[bold red]Stack Trace[/bold red]",
            border_style="red",
            padding=(1, 2)
        ))

    def print_success(self, message: str) -> None:
        self.console.print(f"{ICONS['success']} {message}", style="success")

    def print_warning(self, message: str) -> None:
        self.console.print(f"{ICONS['warning']} {message}", style="warning")
