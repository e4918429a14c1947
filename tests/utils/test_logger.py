# -*- coding: utf-8 -*-
"""
Logging setup tests.

Run: pytest tests/utils/test_logger.py -v
"""
import logging

import pytest

from canonscan.utils import logger as logger_module
from canonscan.utils.logger import _resolve_level, get_logger, setup_logging


@pytest.mark.parametrize('level,expected', [
    (logging.DEBUG, logging.DEBUG),
    ('debug', logging.DEBUG),
    ('WARNING', logging.WARNING),
    ('not-a-level', logging.WARNING),
])
def test_resolve_level(level, expected):
    assert _resolve_level(level) == expected


def test_setup_logging_is_idempotent(tmp_path, monkeypatch):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    monkeypatch.setattr(logger_module, '_logging_configured', False)
    log_file = tmp_path / 'logs' / 'scan.log'

    setup_logging(level='INFO', log_file=str(log_file))
    root_handlers = list(logging.getLogger().handlers)
    setup_logging(level='DEBUG')

    assert logging.getLogger().handlers == root_handlers
    get_logger('canonscan.test').info('written to file')
    for handler in root_handlers:
        handler.flush()
    assert 'written to file' in log_file.read_text(encoding='utf-8')

    for handler in root_handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)
