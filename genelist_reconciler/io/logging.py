"""Logging utilities for GeneList-Reconciler.

Provides per-run file logs and structured run records (JSON lines, YAML).
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml

PathLike = Union[str, Path]

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_timestamped_log_path(log_path: PathLike) -> Path:
    """Insert a run timestamp before the suffix.

    Example: reconcile.log -> reconcile_20260301_101500.log
    """
    log_path = Path(log_path)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return log_path.with_name(f"{log_path.stem}_{stamp}{log_path.suffix or '.log'}")


def get_logger(
    name: str,
    log_path: PathLike,
    level: int = logging.INFO,
    timestamped: bool = True,
) -> Tuple[logging.Logger, Path]:
    """Attach a file handler for one reconciliation run.

    Parameters
    ----------
    name : str
        Logger name. Child loggers (e.g. ``genelist_reconciler.core``)
        propagate into it.
    log_path : PathLike
        Base path for the log file.
    level : int
        Logging level (default: INFO).
    timestamped : bool
        Keep earlier runs by timestamping the file name; otherwise the file
        is replaced.

    Returns
    -------
    Tuple[logging.Logger, Path]
        The logger and the file it writes to.
    """
    actual_path = get_timestamped_log_path(log_path) if timestamped else Path(log_path)
    if not timestamped:
        actual_path.unlink(missing_ok=True)
    actual_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    remove_file_handlers(logger)
    handler = logging.FileHandler(actual_path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    return logger, actual_path


def remove_file_handlers(logger: logging.Logger) -> None:
    """Detach and close every file handler on ``logger``."""
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            logger.removeHandler(handler)
            handler.close()


def log_json(log_path: PathLike, record: Dict[str, Any]) -> None:
    """Append ``record`` as one JSON line."""
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record, default=str))
        handle.write("\n")


def log_yaml(
    log_path: PathLike,
    record: Dict[str, Any],
    *,
    logger: logging.Logger | None = None,
) -> None:
    """Append ``record`` as a YAML document, or emit it through ``logger``."""
    message = yaml.safe_dump(record, sort_keys=False).rstrip("\n") + "\n---"
    if logger is not None:
        logger.info("%s", message)
        return

    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(message)
        handle.write("\n")
