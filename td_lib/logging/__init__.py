"""
Logging module for the TD library.

This module provides JSON-formatted logging functionality for the TD library.
"""

from td_lib.logging.logger import (
    setup_logger,
    get_logger,
    log_phase,
    log_progress,
    log_sample,
    log_table_summary,
    JsonFormatter
)

__all__ = [
    "setup_logger",
    "get_logger",
    "log_phase",
    "log_progress",
    "log_sample",
    "log_table_summary",
    "JsonFormatter"
]
