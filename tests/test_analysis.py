import os

import pytest

from analysis import AnalysisResults, Issue, load_analysis_results, open_issues
from config import DEFAULT_CLOSED_STATUSES
from errors import AnalysisResultsError

TESTS_DIR = os.path.dirname(__file__)


def test_load_yaml():
    results = load_analysis_results(os.path.join(TESTS_DIR, 'data', 'analysis.yml'))

    assert results == AnalysisResults(
        pull_request_id='17',
        summary="Quality Gate passed",
        commit='0a1b2c3d',
        quality_gate='OK',
        issues=(
            Issue("src/App.java", 42, 'OPEN', "Remove this unused import.", severity='MAJOR', key='AX-1'),
            Issue("src/App.java", None, 'CONFIRMED', "File-level issue."),
            Issue(None, None, 'RESOLVED', "Already fixed."),
        ),
    )


def test_load_json():
    results = load_analysis_results(os.path.join(TESTS_DIR, 'data', 'analysis.json'))

    assert results.pull_request_id == '18'
    assert results.issues == (Issue(None, None, 'REOPENED', "Project-level issue."),)
    assert results.commit is None


def test_open_issues():
    issues = [
        Issue("a.py", 1, 'OPEN', "a"),
        Issue("a.py", 2, 'CLOSED', "b"),
        Issue("a.py", 3, 'Resolved', "c"),
        Issue("a.py", 4, 'TO_REVIEW', "d"),
    ]
    assert [i.text for i in open_issues(issues, DEFAULT_CLOSED_STATUSES)] == ["a", "d"]
    assert [i.text for i in open_issues(issues, ())] == ["a", "b", "c", "d"]


def test_null_status_is_open(tmp_path):
    path = tmp_path / 'analysis.yml'
    path.write_text(
        "pull_request_id: 3\n"
        "summary: Summary\n"
        "issues:\n"
        "  - path: a.py\n"
        "    line: 1\n"
        "    status: null\n"
        "    text: Issue\n",
        encoding='utf-8')

    results = load_analysis_results(str(path))

    assert results.issues == (Issue("a.py", 1, 'OPEN', "Issue"),)
    assert open_issues(results.issues, DEFAULT_CLOSED_STATUSES) == list(results.issues)


def test_load_bad_shape(tmp_path):
    path = tmp_path / 'analysis.json'
    path.write_text('{"summary": "Summary"}', encoding='utf-8')
    with pytest.raises(AnalysisResultsError):
        load_analysis_results(str(path))

    path.write_text('{"pull_request_id": 1, "summary": "S", "issues": ["not an object"]}', encoding='utf-8')
    with pytest.raises(AnalysisResultsError):
        load_analysis_results(str(path))

    path.write_text('not json', encoding='utf-8')
    with pytest.raises(AnalysisResultsError):
        load_analysis_results(str(path))


def test_load_missing_file(tmp_path):
    with pytest.raises(AnalysisResultsError):
        load_analysis_results(str(tmp_path / 'missing.yml'))
