import hashlib
import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Optional

import requests
import yaml
from injector import inject

from errors import ConfigurationError
from .config import (DEFAULT_ACTIVITY_PAGE_LIMIT, DEFAULT_CLOSED_STATUSES,
                     DEFAULT_REQUEST_TIMEOUT_S, TOKEN_ENV_VAR, Config)

REQUIRED_KEYS = ('base_url', 'repository_slug')


@dataclass
class ConfigLoadInfo:
    config: Config
    is_fresh: bool


def parse_bool(value: Any, default: bool) -> bool:
    """
    Accept YAML booleans and strings such as `"true"`.
    Any other string is `False`.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == 'true'


@inject
@dataclass
class ConfigLoader:
    config_source: str
    logger: logging.Logger

    config: Config = field(init=False)
    config_hash: Optional[str] = field(default=None, init=False)

    def load_config(self) -> ConfigLoadInfo:
        is_fresh = False
        config_contents: Optional[str] = None
        if self.config_source.startswith('https://') or self.config_source.startswith('http://'):
            max_num_tries = 3
            for try_num in range(max_num_tries):
                try:
                    r = requests.get(self.config_source)
                    r.raise_for_status()
                    config_contents = r.text
                    break
                except requests.RequestException:
                    if try_num == max_num_tries - 1:
                        raise
                    self.logger.exception(f"Error while downloading config from '{self.config_source}'.")
                    time.sleep(1 + try_num * 2)
        else:
            with open(self.config_source, 'r', encoding='utf-8') as f:
                config_contents = f.read()

        assert config_contents is not None
        config_hash = hashlib.sha256(config_contents.encode('utf-8')).hexdigest()
        if config_hash != self.config_hash:
            self.logger.info("Loading configuration from '%s'.", self.config_source)
            config: Config = yaml.safe_load(config_contents) or {}  # type: ignore

            if log_level := config.get('log_level'):
                self.logger.setLevel(logging.getLevelName(log_level.upper()))

            for key in REQUIRED_KEYS:
                if not config.get(key):
                    raise ConfigurationError(f"'{key}' must be set in the configuration from '{self.config_source}'.")
            config['base_url'] = config['base_url'].rstrip('/')

            if not config.get('token'):
                token = os.environ.get(TOKEN_ENV_VAR)
                if not token:
                    raise ConfigurationError(f"No token provided. Please set the environment variable {TOKEN_ENV_VAR} or set 'token' in the config file.")
                config['token'] = token

            for name in ('user_slug', 'project_key', 'comment_user_slug'):
                config[name] = (config.get(name) or '').strip()  # type: ignore

            config['summary_comment_enabled'] = parse_bool(config.get('summary_comment_enabled'), True)
            config['file_comment_enabled'] = parse_bool(config.get('file_comment_enabled'), True)
            config['delete_comments_enabled'] = parse_bool(config.get('delete_comments_enabled'), False)
            config['code_insights_enabled'] = parse_bool(config.get('code_insights_enabled'), False)
            config['is_dry_run'] = parse_bool(config.get('is_dry_run'), False)

            if config.get('activity_page_limit') is None:
                config['activity_page_limit'] = DEFAULT_ACTIVITY_PAGE_LIMIT
            if config.get('request_timeout_s') is None:
                config['request_timeout_s'] = DEFAULT_REQUEST_TIMEOUT_S

            closed_statuses = config.get('closed_statuses')
            if closed_statuses is None:
                config['closed_statuses'] = DEFAULT_CLOSED_STATUSES
            else:
                assert isinstance(closed_statuses, list), f"closed_statuses must be a list. Got: {closed_statuses} with type: {type(closed_statuses)}"
                config['closed_statuses'] = frozenset(s.upper() for s in closed_statuses)

            self.config = config
            is_fresh = True
            self.config_hash = config_hash

            self.logger.info("Loaded configuration for repository '%s'.", config['repository_slug'])
        return ConfigLoadInfo(self.config, is_fresh)
