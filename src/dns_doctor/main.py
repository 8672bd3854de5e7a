"""
CLI entry point for DNS Doctor.

Provides command-line interface for running DNS diagnostics and one-off
propagation checks, with configuration file, JSON export and logging options.
"""

import asyncio
import logging
import sys
from typing import Optional, Tuple

import click
from rich.console import Console

from . import __version__
from .config import DoctorConfig, get_default_config_path, load_config
from .console.output import ConsoleManager
from .display import DiagnosticDisplay
from .executor import DiagnosticExecutor
from .models import SUPPORTED_RECORD_TYPES
from .reporter import Reporter
from .validation import validate_domain


logger = logging.getLogger(__name__)

LOG_FILE = 'dns-doctor.log'


def setup_logging(log_level: str, debug_mode: bool = False) -> None:
    """
    Configure logging with specified level and debug mode.

    The log file always receives every record at the configured level.
    The console only shows log records in debug mode.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        debug_mode: If True, also display logs on the console
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    if debug_mode:
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
    else:
        console_handler.setLevel(logging.CRITICAL + 1)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(f"Logging initialized at {log_level} level (debug_mode={debug_mode})")


def resolve_config(file_path: Optional[str]) -> Tuple[DoctorConfig, Optional[str]]:
    """
    Load the configuration file, falling back to defaults.

    If file_path is not given, dns-doctor.yaml/.json in the current directory
    is used when present; otherwise the built-in resolver set applies.

    Returns:
        Tuple of (DoctorConfig, path of the file used or None)

    Raises:
        click.ClickException: If the configuration file is invalid
    """
    path = file_path or get_default_config_path()
    if path is None:
        return DoctorConfig(), None

    try:
        logger.info(f"Loading configuration from: {path}")
        return load_config(path), path
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(f"Configuration error in '{path}': {e}")


def _validate_domains(domains: Tuple[str, ...]) -> list:
    validated = []
    for domain in domains:
        try:
            validated.append(validate_domain(domain))
        except ValueError as e:
            raise click.ClickException(str(e))
    return validated


@click.group()
@click.version_option(version=__version__, prog_name='dns-doctor')
def cli() -> None:
    """
    DNS Doctor

    Resolve a domain's DNS records across several DNS-over-HTTPS resolvers
    and diagnose common misconfigurations.
    """
    pass


@cli.command(name='diagnose')
@click.argument('domains', nargs=-1, required=True)
@click.option(
    '-c', '--config',
    type=click.Path(exists=True),
    help='Path to configuration file (YAML/JSON)'
)
@click.option(
    '-o', '--output',
    type=click.Path(),
    help='Export results to a JSON file'
)
@click.option(
    '--json', 'as_json',
    is_flag=True,
    default=False,
    help='Print results as JSON instead of tables'
)
@click.option(
    '--no-records',
    is_flag=True,
    default=False,
    help='Hide the DNS record table'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Logging level (default: INFO)'
)
@click.option(
    '--debug',
    is_flag=True,
    default=False,
    help='Enable debug mode with verbose console output'
)
def diagnose_command(
    domains: Tuple[str, ...],
    config: Optional[str],
    output: Optional[str],
    as_json: bool,
    no_records: bool,
    log_level: str,
    debug: bool
) -> None:
    """
    Run DNS diagnostics for one or more domains.

    Exits with status 1 when any domain has error-severity issues.

    Examples:

        # Diagnose a single domain
        dns-doctor diagnose example.com

        # Diagnose several domains and export the results
        dns-doctor diagnose example.com example.org -o report.json

        # Use a custom resolver configuration
        dns-doctor diagnose example.com -c dns-doctor.yaml
    """
    setup_logging(log_level, debug_mode=debug)
    # In JSON mode stdout carries only the JSON tree; status and errors go to stderr
    console_manager = ConsoleManager(debug_mode=debug, console=Console(stderr=True) if as_json else None)

    validated = _validate_domains(domains)
    if output and not output.lower().endswith('.json'):
        raise click.ClickException("Unsupported output format. Please use a .json extension.")

    doctor_config, config_path = resolve_config(config)

    if not as_json:
        console_manager.print_banner(
            version=__version__,
            domains=validated,
            primary=doctor_config.primary,
            resolvers=[resolver.name for resolver in doctor_config.resolvers],
            config_path=config_path
        )

    executor = DiagnosticExecutor(
        doctor_config,
        console_manager=None if as_json else console_manager
    )

    try:
        runs = asyncio.run(executor.diagnose_all(validated))
    except Exception as e:
        error_msg = str(e) if str(e) else f"{type(e).__name__} occurred"
        logger.error(f"Unexpected error: {error_msg}", exc_info=True)
        console_manager.print_error(
            error_msg,
            details={'error_type': type(e).__name__, 'log_file': LOG_FILE},
            exception=e
        )
        sys.exit(1)

    reporter = Reporter(runs, console_manager=console_manager)

    if as_json:
        reporter.print_json(console=Console())
    else:
        reporter.display_results(show_records=not no_records)

    if output:
        reporter.export_json(output)

    failed = len(validated) - len(runs)
    if failed:
        console_manager.print_warning(f"{failed} domain(s) could not be diagnosed, see {LOG_FILE} for details")
        sys.exit(1)
    if any(run.report.has_errors for run in runs):
        sys.exit(1)

    logger.info("Diagnostics completed successfully")


@cli.command(name='propagation')
@click.argument('domain')
@click.option(
    '-t', '--type', 'record_type',
    type=click.Choice(SUPPORTED_RECORD_TYPES, case_sensitive=False),
    default='A',
    help='DNS record type (default: A)'
)
@click.option(
    '-c', '--config',
    type=click.Path(exists=True),
    help='Path to configuration file (YAML/JSON)'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Logging level (default: INFO)'
)
def propagation_command(
    domain: str,
    record_type: str,
    config: Optional[str],
    log_level: str
) -> None:
    """
    Compare one record type across every configured resolver.

    Examples:

        dns-doctor propagation example.com

        dns-doctor propagation example.com --type MX
    """
    setup_logging(log_level)
    console_manager = ConsoleManager()

    domain = _validate_domains((domain,))[0]
    doctor_config, _ = resolve_config(config)

    executor = DiagnosticExecutor(doctor_config)
    propagation = asyncio.run(
        executor.propagation_checker.check_propagation(domain, record_type.upper())
    )

    DiagnosticDisplay(console_manager).display_propagation(domain, record_type.upper(), propagation)


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == '__main__':
    main()
