from dataclasses import dataclass
from enum import Enum
from typing import Optional

from diff_index import DiffIndex
from models import AnchorPayload, SegmentType


class FileSide(str, Enum):
    FROM = "FROM"
    TO = "TO"


@dataclass(frozen=True)
class Anchor:
    """
    Where a comment attaches within a pull request's diff.
    """
    line: int
    line_type: SegmentType
    file_path: str
    file_side: FileSide

    def to_payload(self) -> AnchorPayload:
        return AnchorPayload(
            line=self.line,
            lineType=self.line_type.value,
            path=self.file_path,
            fileType=self.file_side.value,
        )


FALLBACK_LINE_TYPE = SegmentType.CONTEXT
FALLBACK_FILE_SIDE = FileSide.TO


class AnchorResolver:
    def __init__(self, diff_index: DiffIndex) -> None:
        self.diff_index = diff_index

    def resolve(self, file_path: Optional[str], issue_line: Optional[int]) -> Optional[Anchor]:
        """
        Map an issue to the anchor to use when commenting on it.

        Lines that are not part of the diff get a `CONTEXT` anchor on the `TO` side
        so that a comment can still be posted.

        :returns: `None` for an issue that is not tied to a line of a file.
            The comment should then be posted without an anchor.
        """
        if not file_path or not issue_line:
            return None

        located = self.diff_index.locate(file_path, issue_line)
        if located is None:
            return Anchor(issue_line, FALLBACK_LINE_TYPE, file_path, FALLBACK_FILE_SIDE)

        segment_type, _ = located
        if segment_type == SegmentType.CONTEXT:
            return Anchor(issue_line, SegmentType.CONTEXT, file_path, FileSide.FROM)
        return Anchor(issue_line, segment_type, file_path, FileSide.TO)
