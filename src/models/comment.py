from typing import TypedDict


class AnchorPayload(TypedDict):
    line: int
    lineType: str
    path: str
    fileType: str
    """
    `FROM` or `TO`: the side of the diff the line is on.
    """


class CommentPayload(TypedDict, total=False):
    """
    The body of `POST .../pull-requests/{id}/comments`.
    `anchor` is only set for comments attached to a line.
    """
    text: str
    anchor: AnchorPayload
