import logging
from typing import Optional
from unittest import mock

from comment_cleanup import CommentCleaner
from config import DEFAULT_CLOSED_STATUSES, Config, DecorationFlags
from pull_request_decorator import PullRequestDecorator
from models import Activity, ActivityPage, Author, Comment

logger = logging.getLogger('pr-decorator-tests')


def make_config(**overrides) -> Config:
    config = {
        'base_url': 'https://bitbucket.example.com',
        'token': 'test-token',
        'repository_slug': 'my-repo',
        'user_slug': '',
        'project_key': 'PROJ',
        'comment_user_slug': 'bot-slug',
        'summary_comment_enabled': True,
        'file_comment_enabled': True,
        'delete_comments_enabled': True,
        'activity_page_limit': 250,
        'closed_statuses': DEFAULT_CLOSED_STATUSES,
        'code_insights_enabled': False,
        'request_timeout_s': 30,
        'is_dry_run': False,
        'log_level': 'DEBUG',
    }
    config.update(overrides)
    return config  # type: ignore


def make_decorator(client: Optional[mock.MagicMock] = None, **overrides) -> PullRequestDecorator:
    config = make_config(**overrides)
    flags = DecorationFlags.from_config(config)
    client = client or mock.MagicMock()
    cleaner = CommentCleaner(config, flags, logger, client)
    return PullRequestDecorator(config, flags, logger, client, cleaner)


def activity(comment_id: int, version: int = 0, slug: Optional[str] = None) -> Activity:
    author = Author(slug) if slug is not None else None
    return Activity(comment_id, 'COMMENTED', Comment(comment_id, version, author, f"comment {comment_id}"))


def activity_page(*activities: Activity) -> ActivityPage:
    return ActivityPage(tuple(activities))
