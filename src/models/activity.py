from dataclasses import dataclass
from typing import Any, Optional

from errors import ResponseShapeError


@dataclass(frozen=True)
class Author:
    slug: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class Comment:
    id: int
    version: int
    """
    Must be the last version seen from the server, otherwise deleting the comment fails.
    """
    author: Optional[Author] = None
    text: Optional[str] = None


@dataclass(frozen=True)
class Activity:
    id: Optional[int] = None
    action: Optional[str] = None
    comment: Optional[Comment] = None


@dataclass(frozen=True)
class ActivityPage:
    values: tuple[Activity, ...] = ()
    is_last_page: bool = True

    @classmethod
    def from_json(cls, data: Any) -> 'ActivityPage':
        """
        Parse the body of `GET .../pull-requests/{id}/activities`.

        :raises ResponseShapeError: If the body does not look like an activity page.
        """
        if not isinstance(data, dict):
            raise ResponseShapeError(f"Expected a JSON object for the activity page. Got: {type(data).__name__}")
        try:
            values = tuple(_parse_activity(a) for a in data.get('values') or ())
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ResponseShapeError(f"Could not parse the activity page: {e!r}") from e
        return cls(values, bool(data.get('isLastPage', True)))


def _parse_activity(activity: dict) -> Activity:
    comment = None
    if (c := activity.get('comment')) is not None:
        author = None
        if (a := c.get('author')) is not None:
            author = Author(a.get('slug'), a.get('name'))
        comment = Comment(int(c['id']), int(c['version']), author, c.get('text'))
    return Activity(activity.get('id'), activity.get('action'), comment)
