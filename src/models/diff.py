from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, TypedDict

from errors import ResponseShapeError


class SegmentType(str, Enum):
	CONTEXT = "CONTEXT"
	ADDED = "ADDED"
	REMOVED = "REMOVED"


class DiffLineJson(TypedDict, total=False):
	source: Optional[int]
	destination: Optional[int]
	line: str


class SegmentJson(TypedDict):
	type: str
	lines: list[DiffLineJson]


class HunkJson(TypedDict, total=False):
	sourceLine: int
	sourceSpan: int
	destinationLine: int
	destinationSpan: int
	segments: list[SegmentJson]


class PathJson(TypedDict, total=False):
	toString: str


class DiffJson(TypedDict, total=False):
	source: Optional[PathJson]
	destination: Optional[PathJson]
	hunks: list[HunkJson]


@dataclass(frozen=True)
class DiffLine:
	source: Optional[int] = None
	"""
	The line number in the old version of the file.
	Not set for added lines.
	"""

	destination: Optional[int] = None
	"""
	The line number in the new version of the file.
	Not set for removed lines.
	"""


@dataclass(frozen=True)
class Segment:
	type: SegmentType
	lines: tuple[DiffLine, ...] = ()


@dataclass(frozen=True)
class Hunk:
	segments: tuple[Segment, ...] = ()


@dataclass(frozen=True)
class Diff:
	source: Optional[str] = None
	"""
	The path before the change. `None` when the file was added.
	"""

	destination: Optional[str] = None
	"""
	The path after the change. `None` when the file was deleted.
	"""

	hunks: tuple[Hunk, ...] = ()


@dataclass(frozen=True)
class DiffPage:
	diffs: tuple[Diff, ...] = field(default_factory=tuple)

	@classmethod
	def from_json(cls, data: Any) -> 'DiffPage':
		"""
		Parse the body of `GET .../pull-requests/{id}/diff`.

		:raises ResponseShapeError: If the body does not look like a diff page.
		"""
		if not isinstance(data, dict):
			raise ResponseShapeError(f"Expected a JSON object for the diff page. Got: {type(data).__name__}")
		try:
			return cls(tuple(_parse_diff(d) for d in data.get('diffs') or ()))
		except (KeyError, TypeError, ValueError, AttributeError) as e:
			raise ResponseShapeError(f"Could not parse the diff page: {e!r}") from e


def _parse_path(path: Optional[PathJson]) -> Optional[str]:
	if path is None:
		return None
	return path['toString']


def _parse_diff(diff: DiffJson) -> Diff:
	hunks = tuple(
		Hunk(tuple(
			Segment(SegmentType(segment['type']), tuple(
				DiffLine(line.get('source'), line.get('destination'))
				for line in segment.get('lines') or ()))
			for segment in hunk.get('segments') or ()))
		for hunk in diff.get('hunks') or ())
	return Diff(_parse_path(diff.get('source')), _parse_path(diff.get('destination')), hunks)
