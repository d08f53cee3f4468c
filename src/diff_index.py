from collections import defaultdict
from typing import Optional

from models import DiffLine, DiffPage, SegmentType


class DiffIndex:
	"""
	Answers which part of a pull request's diff covers a line of the new version of a file.

	Built once per decoration run from the fetched `DiffPage`.
	"""

	def __init__(self, diff_page: DiffPage) -> None:
		self._lines_by_path: dict[str, dict[int, tuple[SegmentType, DiffLine]]] = defaultdict(dict)
		# Diffs, hunks, segments, then lines in order; the first line for a destination number wins.
		for diff in diff_page.diffs:
			if diff.destination is None:
				# Deleted file: nothing to anchor to in the new version.
				continue
			lines = self._lines_by_path[diff.destination]
			for hunk in diff.hunks:
				for segment in hunk.segments:
					for line in segment.lines:
						if line.destination is not None and line.destination not in lines:
							lines[line.destination] = (segment.type, line)

	def locate(self, file_path: str, destination_line: int) -> Optional[tuple[SegmentType, DiffLine]]:
		"""
		:returns: The type of the segment containing `destination_line` of `file_path` and the line itself,
			or `None` if the line is not part of any hunk.
		"""
		lines = self._lines_by_path.get(file_path)
		if lines is None:
			return None
		return lines.get(destination_line)
