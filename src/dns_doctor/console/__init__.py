"""
Rich console output package for DNS Doctor.

Provides themed console output, error panels and progress tracking.
"""

from .output import ConsoleManager
from .progress import ProgressTracker
from .themes import get_theme, SEVERITY_COLORS, SEVERITY_ICONS, ICONS

__all__ = [
    'ConsoleManager',
    'ProgressTracker',
    'get_theme',
    'SEVERITY_COLORS',
    'SEVERITY_ICONS',
    'ICONS',
]
