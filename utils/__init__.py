"""
Utility modules for the intake form.
"""

from .formatting import format_step_label, format_errors
from .config import Config, configure_logging

__all__ = ["format_step_label", "format_errors", "Config", "configure_logging"]
