"""Utility modules for Rastro.

Provides:
- logger: get_logger for logging
"""

from rastro.utils.logger import get_logger

__all__ = ["get_logger"]
