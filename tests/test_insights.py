from unittest import mock

from analysis import AnalysisResults, Issue
from insights import InsightsReporter, map_severity

from .helpers import logger, make_config

RESULTS = AnalysisResults(
    pull_request_id='17',
    summary="Quality Gate passed",
    issues=(
        Issue("src/App.java", 42, 'OPEN', "Remove this unused import.", severity='MINOR', key='AX-1'),
        Issue("src/App.java", None, 'OPEN', "File-level issue.", severity='BLOCKER'),
        Issue(None, None, 'OPEN', "Project-level issue."),
        Issue("src/App.java", 3, 'CLOSED', "Closed issue."),
    ),
    commit='abc',
    quality_gate='OK',
)


def _reporter(**overrides) -> InsightsReporter:
    overrides.setdefault('code_insights_enabled', True)
    client = mock.MagicMock()
    client.supports_code_insights.return_value = True
    return InsightsReporter(make_config(**overrides), logger, client)


def test_publish():
    reporter = _reporter()

    assert reporter.publish(RESULTS)

    names = [c[0] for c in reporter.client.method_calls]
    assert names == ['supports_code_insights', 'delete_annotations', 'create_report', 'create_annotations']
    reporter.client.create_report.assert_called_once_with('PROJ', 'my-repo', 'abc', {
        'title': "SonarQube",
        'reporter': "SonarQube",
        'details': "Quality Gate passed",
        'result': 'PASS',
    })
    reporter.client.create_annotations.assert_called_once_with('PROJ', 'my-repo', 'abc', [
        {'path': "src/App.java", 'line': 42, 'message': "Remove this unused import.", 'severity': 'LOW', 'externalId': 'AX-1'},
        {'path': "src/App.java", 'message': "File-level issue.", 'severity': 'HIGH'},
    ])


def test_publish_disabled():
    reporter = _reporter(code_insights_enabled=False)
    assert not reporter.publish(RESULTS)
    assert reporter.client.method_calls == []


def test_publish_requires_project_and_commit():
    reporter = _reporter(project_key='')
    assert not reporter.publish(RESULTS)

    reporter = _reporter()
    assert not reporter.publish(AnalysisResults('17', "Summary"))
    assert reporter.client.method_calls == []


def test_publish_unsupported_server():
    reporter = _reporter()
    reporter.client.supports_code_insights.return_value = False
    assert not reporter.publish(RESULTS)
    reporter.client.create_report.assert_not_called()


def test_failed_quality_gate():
    reporter = _reporter()
    report = reporter.make_report(AnalysisResults('17', "Summary", quality_gate='ERROR'))
    assert report['result'] == 'FAIL'
    assert 'result' not in reporter.make_report(AnalysisResults('17', "Summary"))


def test_map_severity():
    assert map_severity(None) == 'MEDIUM'
    assert map_severity('info') == 'LOW'
    assert map_severity('MAJOR') == 'MEDIUM'
    assert map_severity('CRITICAL') == 'HIGH'
    assert map_severity('UNKNOWN') == 'MEDIUM'
