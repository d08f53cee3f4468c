from dataclasses import dataclass
from typing import Collection, Optional, TypedDict

DEFAULT_ACTIVITY_PAGE_LIMIT = 250
DEFAULT_CLOSED_STATUSES = frozenset(('CLOSED', 'RESOLVED'))
DEFAULT_REQUEST_TIMEOUT_S = 30
TOKEN_ENV_VAR = 'PRD_BITBUCKET_TOKEN'


class Config(TypedDict):
	base_url: str
	"""
	The URL of the Bitbucket Server instance, e.g. `https://bitbucket.example.com`.
	"""

	token: str
	"""
	Bearer token used for every request.
	Defaults to the value of the `PRD_BITBUCKET_TOKEN` environment variable.
	"""

	repository_slug: str

	user_slug: Optional[str]
	"""
	Set for a repository owned by a user.
	Takes precedence over `project_key`.
	"""

	project_key: Optional[str]
	"""
	Set for a repository in a project.
	"""

	comment_user_slug: Optional[str]
	"""
	The slug of the user that posts the comments.
	Required to delete comments from a previous run: only comments by this user are deleted.
	"""

	summary_comment_enabled: bool
	file_comment_enabled: bool
	delete_comments_enabled: bool

	activity_page_limit: int
	"""
	How many activities to fetch when looking for old comments to delete.
	Only one page is fetched, so older comments are never deleted.
	Default is 250.
	"""

	closed_statuses: Collection[str]
	"""
	Issues with one of these statuses are not commented on.
	Default is `CLOSED` and `RESOLVED`.
	"""

	code_insights_enabled: bool

	request_timeout_s: Optional[float]

	is_dry_run: Optional[bool]

	log_level: Optional[str]


@dataclass(frozen=True)
class DecorationFlags:
	"""
	The optional side effects of a decoration run.
	Read once at the start of a run.
	"""

	summary_comment_enabled: bool = True
	file_comment_enabled: bool = True
	delete_comments_enabled: bool = False
	is_dry_run: bool = False

	@classmethod
	def from_config(cls, config: Config) -> 'DecorationFlags':
		return cls(
			summary_comment_enabled=config['summary_comment_enabled'],
			file_comment_enabled=config['file_comment_enabled'],
			delete_comments_enabled=config['delete_comments_enabled'],
			is_dry_run=bool(config.get('is_dry_run')),
		)
