import logging

import pytest

from satvis.core.errors import ValidationError
from satvis.logger import (
    ColoredFormatter,
    LogContext,
    LoggerConfig,
    level_value,
    setup_logger,
    setup_logger_from_config,
)


def test_trace_level_registered():
    assert logging.getLevelName(5) == 'TRACE'
    assert level_value('trace') == 5
    assert level_value('INFO') == logging.INFO
    with pytest.raises(ValidationError):
        level_value('verbose')


def test_setup_logger_replaces_handlers(tmp_path):
    log_file = tmp_path / 'satvis.log'
    logger = setup_logger('satvis.test', 'DEBUG', str(log_file), console=True)
    assert len(logger.handlers) == 2

    logger = setup_logger('satvis.test', 'INFO', None, console=True)
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO


def test_file_output(tmp_path):
    log_file = tmp_path / 'satvis.log'
    logger = setup_logger('satvis.file', 'DEBUG', str(log_file), console=False)
    logger.debug('propagated %s', 'G05')
    for handler in logger.handlers:
        handler.flush()
    assert 'propagated G05' in log_file.read_text()


def test_colored_formatter_leaves_record_untouched():
    record = logging.LogRecord('satvis', logging.WARNING, __file__, 1, 'msg', None, None)
    text = ColoredFormatter('%(levelname)s %(message)s').format(record)
    assert '\033[33m' in text
    assert record.levelname == 'WARNING'


def test_log_context_restores_level():
    logger = logging.getLogger('satvis.context')
    logger.setLevel(logging.WARNING)
    with LogContext(logger, 'DEBUG'):
        assert logger.level == logging.DEBUG
    assert logger.level == logging.WARNING


def test_logger_config_from_dict():
    config = LoggerConfig()
    config.configure_from_dict({
        'default_level': 'WARNING',
        'console': False,
        'module_levels': {'satvis.visibility.engine': 'DEBUG'},
    })
    assert config.get_level_for_module('satvis.visibility.engine') == 'DEBUG'
    assert config.get_level_for_module('satvis.io.rinex') == 'WARNING'
    assert logging.getLogger('satvis.visibility.engine').level == logging.DEBUG


def test_setup_logger_from_config():
    logger = setup_logger_from_config({'default_level': 'ERROR', 'console': True})
    assert logger.name == 'satvis'
    assert logger.level == logging.ERROR
    assert len(logger.handlers) == 1
