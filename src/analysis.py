import json
from dataclasses import dataclass, field
from typing import Collection, Iterable, Optional

import yaml

from errors import AnalysisResultsError


@dataclass(frozen=True)
class Issue:
    path: Optional[str]
    """
    Path of the file in the new version of the pull request, relative to the repository root.
    `None` if the issue is not tied to a file.
    """

    line: Optional[int]
    """
    Line in the new version of the file. `None` or `0` for an issue on the whole file.
    """

    status: str
    text: str
    """
    The rendered comment for the issue.
    """

    severity: Optional[str] = None
    key: Optional[str] = None


@dataclass(frozen=True)
class AnalysisResults:
    pull_request_id: str
    summary: str
    """
    The rendered summary comment.
    """
    issues: tuple[Issue, ...] = field(default_factory=tuple)
    commit: Optional[str] = None
    """
    The commit that was analysed. Needed to publish a Code Insights report.
    """
    quality_gate: Optional[str] = None
    """
    `PASS` or `FAIL`.
    """


def open_issues(issues: Iterable[Issue], closed_statuses: Collection[str]) -> list[Issue]:
    """
    :returns: The issues whose status is not one of `closed_statuses`, in order.
    """
    closed = {s.upper() for s in closed_statuses}
    return [issue for issue in issues if issue.status.upper() not in closed]


def load_analysis_results(path: str) -> AnalysisResults:
    """
    Load analysis results written by the analysis step as JSON or YAML.

    :raises AnalysisResultsError: If the file cannot be read or parsed.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            contents = f.read()
        if path.endswith('.json'):
            data = json.loads(contents)
        else:
            data = yaml.safe_load(contents)

        issues = tuple(
            Issue(
                path=i.get('path') or None,
                line=i.get('line') or None,
                status=i.get('status') or 'OPEN',
                text=i['text'],
                severity=i.get('severity'),
                key=i.get('key'),
            )
            for i in data.get('issues') or ())
        return AnalysisResults(
            pull_request_id=str(data['pull_request_id']),
            summary=data['summary'],
            issues=issues,
            commit=data.get('commit'),
            quality_gate=data.get('quality_gate'),
        )
    except (OSError, ValueError, KeyError, TypeError, AttributeError, yaml.YAMLError) as e:
        raise AnalysisResultsError(f"Could not load the analysis results from '{path}': {e!r}") from e
