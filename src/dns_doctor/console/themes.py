"""Theme configuration for Rich console output.

This module defines color schemes, icons, and Rich themes for consistent
visual presentation throughout the application.
"""

from rich.theme import Theme

# Issue severity color mappings
SEVERITY_COLORS = {
    'error': 'bold red',
    'warning': 'yellow',
    'info': 'cyan',
}

# Unicode icons for various status indicators
ICONS = {
    'success': '✓',
    'error': '✗',
    'warning': '⚠',
    'info': 'ℹ',
    'time': '⏱',
    'domain': '🌐',
    'check': '🔍'
}

SEVERITY_ICONS = {
    'error': ICONS['error'],
    'warning': ICONS['warning'],
    'info': ICONS['info'],
}


def get_theme() -> Theme:
    """Get the Rich theme with custom styles.

    Returns:
        Theme: Rich Theme object with custom style definitions
    """
    return Theme({
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "record_type": "magenta",
    })
