from .activity import Activity, ActivityPage, Author, Comment
from .comment import AnchorPayload, CommentPayload
from .diff import Diff, DiffLine, DiffPage, Hunk, Segment, SegmentType

__all__ = [
    'Activity',
    'ActivityPage',
    'AnchorPayload',
    'Author',
    'Comment',
    'CommentPayload',
    'Diff',
    'DiffLine',
    'DiffPage',
    'Hunk',
    'Segment',
    'SegmentType',
]
