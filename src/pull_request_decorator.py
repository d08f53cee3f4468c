import logging
from dataclasses import dataclass
from typing import Optional

from injector import inject
from tqdm import tqdm

from analysis import AnalysisResults, Issue, open_issues
from anchors import Anchor, AnchorResolver
from bitbucket_client import BitbucketServerClient
from comment_cleanup import CommentCleaner
from config import DEFAULT_CLOSED_STATUSES, Config, DecorationFlags
from diff_index import DiffIndex
from endpoints import PullRequestEndpoints
from errors import ConfigurationError, DecorationError, ErrorPolicy, TransportError
from models import CommentPayload

log_start = "*" * 100


@dataclass
class DecorationSummary:
	num_deleted: int = 0
	num_comments_posted: int = 0
	summary_posted: bool = False


@inject
@dataclass
class PullRequestDecorator:
	"""
	Decorates a pull request with the results of an analysis:
	deletes the comments of the previous run, posts a summary comment,
	then posts one comment per open issue on the line of the diff it belongs to.
	"""
	config: Config
	flags: DecorationFlags
	logger: logging.Logger
	client: BitbucketServerClient
	cleaner: CommentCleaner

	# Fetching and posting abort the run. Only deleting old comments is isolated (see `CommentCleaner`).
	policy = ErrorPolicy.PROPAGATE

	def decorate(self, results: AnalysisResults) -> DecorationSummary:
		"""
		:raises DecorationError: On the first request that fails, other than deleting an old comment.
			Comments already posted or deleted stay that way.
		"""
		self.logger.info("%s\nDecorating pull request %s with %d issue(s).", log_start, results.pull_request_id, len(results.issues))
		try:
			return self._decorate(results)
		except (ConfigurationError, TransportError) as e:
			raise DecorationError(f"Could not decorate pull request {results.pull_request_id}: {e}") from e

	def _decorate(self, results: AnalysisResults) -> DecorationSummary:
		summary = DecorationSummary()
		endpoints = PullRequestEndpoints.resolve(self.config, results.pull_request_id)
		self.logger.debug("Comment URL is: %s", endpoints.comments_url)
		self.logger.debug("Activity URL is: %s", endpoints.activities_url)
		self.logger.debug("Diff URL is: %s", endpoints.diff_url)

		summary.num_deleted = self.cleaner.delete_old_comments(endpoints)

		summary.summary_posted = self.send_comment(endpoints, CommentPayload(text=results.summary), self.flags.summary_comment_enabled)

		diff_page = self.client.get_diff_page(endpoints.diff_url)
		resolver = AnchorResolver(DiffIndex(diff_page))

		closed_statuses = self.config.get('closed_statuses', DEFAULT_CLOSED_STATUSES)
		issues = open_issues(results.issues, closed_statuses)
		self.logger.debug("Found %d open issue(s).", len(issues))
		for issue in tqdm(issues,
			desc="Commenting on issues",
			unit_scale=True, mininterval=2, unit=" issues"
		):
			anchor = resolver.resolve(issue.path, issue.line)
			comment = self.make_issue_comment(issue, anchor)
			if self.send_comment(endpoints, comment, self.flags.file_comment_enabled):
				summary.num_comments_posted += 1

		self.logger.info("Decorated pull request %s: deleted %d comment(s), posted %d issue comment(s).",
			results.pull_request_id, summary.num_deleted, summary.num_comments_posted)
		return summary

	@staticmethod
	def make_issue_comment(issue: Issue, anchor: Optional[Anchor]) -> CommentPayload:
		comment = CommentPayload(text=issue.text)
		if anchor is not None:
			comment['anchor'] = anchor.to_payload()
		return comment

	def send_comment(self, endpoints: PullRequestEndpoints, comment: CommentPayload, is_enabled: bool) -> bool:
		"""
		:returns: `True` if the comment was posted.
		:raises TransportError: If posting fails.
		"""
		if not is_enabled:
			self.logger.debug("Not posting comment because it is disabled: %s", comment)
			return False
		if self.flags.is_dry_run:
			self.logger.info("Would comment: \"%s\"\nAnchor: %s", comment['text'], comment.get('anchor'))
			return False
		self.logger.info("COMMENTING: \"%s\"\nAnchor: %s", comment['text'], comment.get('anchor'))
		try:
			self.client.post_comment(endpoints.comments_url, comment)
		except TransportError as e:
			self.policy.handle(e, self.logger, "Could not post comment.")
		return True
