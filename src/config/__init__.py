from .config import (DEFAULT_ACTIVITY_PAGE_LIMIT, DEFAULT_CLOSED_STATUSES,
                     DEFAULT_REQUEST_TIMEOUT_S, TOKEN_ENV_VAR, Config,
                     DecorationFlags)
from .config_module import ConfigModule
from .loader import ConfigLoader

__all__ = [
    'Config',
    'ConfigLoader',
    'ConfigModule',
    'DEFAULT_ACTIVITY_PAGE_LIMIT',
    'DEFAULT_CLOSED_STATUSES',
    'DEFAULT_REQUEST_TIMEOUT_S',
    'DecorationFlags',
    'TOKEN_ENV_VAR',
]
