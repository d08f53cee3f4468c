import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from injector import inject

from bitbucket_client import BitbucketServerClient
from config import Config, DecorationFlags
from endpoints import PullRequestEndpoints
from errors import ErrorPolicy, TransportError
from models import ActivityPage, Comment


@dataclass(frozen=True)
class DeletionResult:
    comment: Comment
    deleted: bool
    error: Optional[TransportError] = None


@inject
@dataclass
class CommentCleaner:
    """
    Deletes the comments left by a previous run on the same pull request.
    Comments are recognized by their author, so `comment_user_slug` must be configured.
    """
    config: Config
    flags: DecorationFlags
    logger: logging.Logger
    client: BitbucketServerClient

    policy = ErrorPolicy.ISOLATE

    @staticmethod
    def list_bot_comments(activity_page: ActivityPage, author_slug: str) -> list[Comment]:
        """
        :returns: The comments in the feed written by `author_slug`, in feed order.
        """
        result = []
        for activity in activity_page.values:
            comment = activity.comment
            if comment is not None and comment.author is not None and comment.author.slug == author_slug:
                result.append(comment)
        return result

    def delete_old_comments(self, endpoints: PullRequestEndpoints) -> int:
        """
        Delete the comments by `comment_user_slug` from the first page of the activity feed.
        Does nothing unless deleting comments is enabled.

        :returns: The number of comments deleted.
        :raises TransportError: If the activity feed cannot be fetched.
        """
        if not self.flags.delete_comments_enabled:
            return 0
        author_slug = self.config.get('comment_user_slug')
        if not author_slug:
            self.logger.info("No comments deleted because 'comment_user_slug' is not set.")
            return 0

        # Only the first page is checked. Older comments are never deleted.
        activity_page = self.client.get_activity_page(endpoints.activities_url)
        comments = self.list_bot_comments(activity_page, author_slug)
        self.logger.debug("Deleting %d comment(s) by '%s'.", len(comments), author_slug)
        return self.delete_all(endpoints, comments)

    def delete_all(self, endpoints: PullRequestEndpoints, comments: Iterable[Comment]) -> int:
        """
        Try to delete every comment. A failure is logged and the next comment is still deleted.

        :returns: The number of comments deleted.
        """
        num_deleted = 0
        for comment in comments:
            result = self.delete_comment(endpoints, comment)
            if result.deleted:
                num_deleted += 1
        return num_deleted

    def delete_comment(self, endpoints: PullRequestEndpoints, comment: Comment) -> DeletionResult:
        url = endpoints.comment_url(comment.id, comment.version)
        if self.flags.is_dry_run:
            self.logger.info("Would delete comment %s (version %s): \"%s\"", comment.id, comment.version, comment.text)
            return DeletionResult(comment, False)
        try:
            self.logger.info("DELETING COMMENT %s (version %s): \"%s\"", comment.id, comment.version, comment.text)
            self.client.delete_comment(url)
        except TransportError as e:
            self.policy.handle(e, self.logger, "Could not delete comment %s (version %s).", comment.id, comment.version)
            return DeletionResult(comment, False, e)
        self.logger.debug("Comment %s version %s deleted.", comment.id, comment.version)
        return DeletionResult(comment, True)
