"""
Shared utilities: settings and logging.
"""

from tablecheck.utils.config import Settings, get_settings, settings
from tablecheck.utils.logger import setup_logger, log_error

__all__ = ['Settings', 'get_settings', 'settings', 'setup_logger', 'log_error']
