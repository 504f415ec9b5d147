"""
Logger implementation for the TD library.

This module provides JSON-formatted logging for the TD library. Once
setup_logger has been called, records are written to timestamped files in a
'logs' directory.
"""

import os
import json
import logging
import datetime
from typing import Dict, Any, Optional, Iterable

import numpy as np

LOGGER_NAME = "td_lib"

class JsonFormatter(logging.Formatter):
    """JSON formatter that can handle numpy values, samples and other complex types."""

    def _serialize(self, obj: Any) -> Any:
        """Serialize objects to JSON-compatible format."""
        if isinstance(obj, np.ndarray):
            if obj.size > 100:  # Only show a sample for large arrays
                shape_str = 'x'.join(str(dim) for dim in obj.shape)
                sample = obj.flatten()[:5].tolist()
                return f"ndarray({shape_str}): sample={sample}..."
            return obj.tolist()
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, (list, tuple)):
            if len(obj) > 100:  # Only show a sample for large lists
                return [self._serialize(item) for item in list(obj)[:5]] + ["..."]
            return [self._serialize(item) for item in obj]
        elif isinstance(obj, dict):
            return {str(k): self._serialize(v) for k, v in obj.items()}
        elif isinstance(obj, (str, int, float, bool)) or obj is None:
            return obj
        elif hasattr(obj, '__dict__'):
            return {
                "__type": obj.__class__.__name__,
                **{k: self._serialize(v) for k, v in obj.__dict__.items()
                   if not k.startswith('_')}
            }
        return str(obj)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_data = {
            'timestamp': datetime.datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'thread': record.threadName,
        }

        if isinstance(record.msg, dict):
            log_data['data'] = self._serialize(record.msg)
        else:
            log_data['message'] = record.getMessage()
            if hasattr(record, 'data'):
                log_data['data'] = self._serialize(record.data)

        return json.dumps(log_data)


_configured = False

def setup_logger(
    debug: bool = False,
    log_level: str = "info",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up the logger with the specified configuration.

    Only the first call has an effect; later calls return the same logger.

    Args:
        debug: Whether to enable debugging
        log_level: The log level (debug, info, warning, error)
        log_file: Optional custom log file path

    Returns:
        Configured logger instance
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    if _configured:
        return logger

    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR
    }

    if debug:
        logger.setLevel(level_map.get(log_level.lower(), logging.INFO))
    else:
        logger.setLevel(logging.WARNING)  # Minimal logging when debug is False

    logs_dir = os.path.join(os.getcwd(), "logs")
    os.makedirs(logs_dir, exist_ok=True)

    if log_file is None:
        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = os.path.join(logs_dir, f"td_lib_{timestamp}.json")
    elif not os.path.isabs(log_file):
        log_file = os.path.join(logs_dir, log_file)

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    _configured = True

    if debug:
        logger.info({
            "event": "logger_initialized",
            "log_level": log_level,
            "log_file": log_file
        })

    return logger


def get_logger() -> logging.Logger:
    """
    Get the library logger.

    Until setup_logger is called the logger has no handlers of its own and
    records only propagate to whatever the application configured.

    Returns:
        Logger instance
    """
    return logging.getLogger(LOGGER_NAME)


# Helper functions for common logging patterns

def log_phase(phase: str, details: Optional[Dict[str, Any]] = None) -> None:
    """
    Log the start or end of a processing phase.

    Args:
        phase: Name of the phase
        details: Optional details about the phase
    """
    log_data = {
        "event": "phase",
        "phase": phase
    }

    if details:
        log_data["details"] = details

    get_logger().info(log_data)


def log_progress(
    elapsed: float,
    duration: float,
    metrics: Dict[str, Any]
) -> None:
    """
    Log progress of a time-bounded run.

    Args:
        elapsed: Seconds since the run started
        duration: Total seconds the run is allowed
        metrics: Dictionary of metrics to log
    """
    get_logger().info({
        "event": "run_progress",
        "elapsed": round(elapsed, 3),
        "duration": duration,
        "progress": f"{elapsed:.1f}/{duration:.1f}s ({min(elapsed / duration, 1.0) if duration else 1.0:.1%})",
        "metrics": metrics
    })


def log_sample(
    sample: Any,
    step_count: int,
    log_frequency: int = 1000
) -> None:
    """
    Log transitions at a specified frequency.

    Args:
        sample: The (state, action, next_state, reward) transition
        step_count: Current step count (for frequency calculation)
        log_frequency: How often to log
    """
    logger = get_logger()

    if step_count % log_frequency == 0 and logger.isEnabledFor(logging.DEBUG):
        state, action, next_state, reward = sample
        logger.debug({
            "event": "transition",
            "step": step_count,
            "state": str(state),
            "action": str(action),
            "next_state": str(next_state),
            "reward": reward
        })


def log_table_summary(items: Iterable, name: str = "table") -> None:
    """
    Log a summary of stored values (count, mean, min, max, etc.).

    Args:
        items: Iterable of ((state, action), value) pairs, e.g. Table.items()
        name: Name to identify these values in the log
    """
    values = np.fromiter((value for _, value in items), dtype=float)

    if values.size == 0:
        get_logger().info({"event": f"{name}_summary", "pairs": 0})
        return

    get_logger().info({
        "event": f"{name}_summary",
        "pairs": int(values.size),
        "mean": float(np.mean(values)),
        "std": float(np.std(values)),
        "min": float(np.min(values)),
        "max": float(np.max(values))
    })
