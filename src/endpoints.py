import urllib.parse
from dataclasses import dataclass

from config import DEFAULT_ACTIVITY_PAGE_LIMIT, Config
from errors import ConfigurationError

REST_API = '/rest/api/1.0/'
USER_PR_API = 'users/{owner}/repos/{repo}/pull-requests/{pr_id}/'
PROJECT_PR_API = 'projects/{owner}/repos/{repo}/pull-requests/{pr_id}/'


@dataclass(frozen=True)
class PullRequestEndpoints:
    """
    URLs of one pull request.
    A new instance is built for every decoration run.
    """
    comments_url: str
    diff_url: str
    activities_url: str

    def comment_url(self, comment_id: int, version: int) -> str:
        return f'{self.comments_url}/{comment_id}?version={version}'

    @classmethod
    def resolve(cls, config: Config, pull_request_id: str) -> 'PullRequestEndpoints':
        """
        Use the user repository URLs if `user_slug` is set, otherwise the project repository URLs.

        :raises ConfigurationError: If neither `user_slug` nor `project_key` is set.
        """
        user_slug = (config.get('user_slug') or '').strip()
        project_key = (config.get('project_key') or '').strip()
        if user_slug:
            template, owner = USER_PR_API, user_slug
        elif project_key:
            template, owner = PROJECT_PR_API, project_key
        else:
            raise ConfigurationError(
                "Either 'user_slug' for a user repository or 'project_key' for a project repository needs to be set.")

        pr_api = config['base_url'].rstrip('/') + REST_API + template.format(
            owner=urllib.parse.quote(owner),
            repo=urllib.parse.quote(config['repository_slug']),
            pr_id=urllib.parse.quote(str(pull_request_id)))
        limit = config.get('activity_page_limit') or DEFAULT_ACTIVITY_PAGE_LIMIT
        return cls(
            comments_url=pr_api + 'comments',
            diff_url=pr_api + 'diff',
            activities_url=f'{pr_api}activities?limit={limit}',
        )
