# -*- coding: utf-8 -*-
"""
Logging setup for the scan CLI.

Engine modules only call logging.getLogger(__name__). Handlers are attached
once, by scripts/run_scan.py, and write to stderr because stdout carries the
scan JSON.

Example:
    setup_logging(level=SCAN_CONFIG['log_level'])
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

_logging_configured = False


def _resolve_level(level: Union[int, str]) -> int:
    """Accept logging levels as ints or names ("DEBUG", "warning")."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[str] = None,
    format_string: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
) -> None:
    """
    Attach stderr (and optionally file) handlers to the root logger.

    Only the first call has any effect.

    Args:
        level: Level as int or name; unknown names mean WARNING
        log_file: Optional log file, parent directories created
        format_string: Record format for every handler
    """
    global _logging_configured

    if _logging_configured:
        return

    level = _resolve_level(level)
    formatter = logging.Formatter(format_string)

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
