import logging
from dataclasses import dataclass
from logging import Logger

from injector import Module, provider, singleton

# Adapted from https://stackoverflow.com/a/56944256/782170


class CustomFormatter(logging.Formatter):
    blue = "\x1b[34;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"
    format_style = '%(asctime)s [%(levelname)s] - %(name)s:%(filename)s:%(funcName)s\n%(message)s'

    COLORS = {
        logging.DEBUG: blue,
        logging.WARNING: yellow,
        logging.ERROR: red,
        logging.CRITICAL: bold_red,
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__(self.format_style)
        self.formatters = {}
        if use_colors:
            self.formatters = {level: logging.Formatter(color + self.format_style + self.reset)
                               for level, color in self.COLORS.items()}

    def format(self, record):
        formatter = self.formatters.get(record.levelno)
        if formatter is None:
            return super().format(record)
        return formatter.format(record)


@dataclass
class LoggingModule(Module):
    level: str = 'INFO'
    """
    The initial level. `log_level` in the configuration overrides it once the configuration is loaded.
    """

    use_colors: bool = True

    @provider
    @singleton
    def provide_logger(self) -> Logger:
        result = logging.Logger('pr-decorator')
        result.setLevel(logging.getLevelName(self.level.upper()))
        h = logging.StreamHandler()
        h.setFormatter(CustomFormatter(self.use_colors))
        result.addHandler(h)
        return result
