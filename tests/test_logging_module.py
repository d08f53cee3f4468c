import logging

from injector import Injector

from logger import CustomFormatter, LoggingModule


def test_default_level():
    logger = Injector([LoggingModule]).get(logging.Logger)
    assert logger.level == logging.INFO
    assert logger.name == 'pr-decorator'


def test_level_from_command_line():
    logger = Injector([LoggingModule('debug')]).get(logging.Logger)
    assert logger.level == logging.DEBUG


def test_formatter_colors():
    record = logging.LogRecord('pr-decorator', logging.ERROR, __file__, 1, "Failed", None, None)

    assert CustomFormatter().format(record).startswith(CustomFormatter.red)
    plain = CustomFormatter(use_colors=False).format(record)
    assert "[ERROR]" in plain
    assert "\x1b[" not in plain
