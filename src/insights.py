import logging
from dataclasses import dataclass
from typing import Optional

from injector import inject

from analysis import AnalysisResults, Issue, open_issues
from bitbucket_client import BitbucketServerClient
from config import DEFAULT_CLOSED_STATUSES, Config

REPORT_TITLE = "SonarQube"
REPORTER = "SonarQube"
MAX_ANNOTATION_MESSAGE_LENGTH = 2000

# Bitbucket annotation severities are LOW, MEDIUM and HIGH.
SEVERITY_MAP = {
    'INFO': 'LOW',
    'MINOR': 'LOW',
    'MAJOR': 'MEDIUM',
    'CRITICAL': 'HIGH',
    'BLOCKER': 'HIGH',
}


def map_severity(severity: Optional[str]) -> str:
    if severity is None:
        return 'MEDIUM'
    return SEVERITY_MAP.get(severity.upper(), 'MEDIUM')


@inject
@dataclass
class InsightsReporter:
    """
    Publishes the analysis as a Code Insights report on the analysed commit.
    Only project repositories support Code Insights.
    """
    config: Config
    logger: logging.Logger
    client: BitbucketServerClient

    def make_report(self, results: AnalysisResults) -> dict:
        report = {
            'title': REPORT_TITLE,
            'reporter': REPORTER,
            'details': results.summary,
        }
        if results.quality_gate is not None:
            report['result'] = 'PASS' if results.quality_gate.upper() in ('OK', 'PASS', 'PASSED') else 'FAIL'
        return report

    @staticmethod
    def make_annotation(issue: Issue) -> dict:
        annotation = {
            'path': issue.path,
            'message': issue.text[:MAX_ANNOTATION_MESSAGE_LENGTH],
            'severity': map_severity(issue.severity),
        }
        if issue.line:
            annotation['line'] = issue.line
        if issue.key is not None:
            annotation['externalId'] = issue.key
        return annotation

    def publish(self, results: AnalysisResults) -> bool:
        """
        :returns: `True` if a report was published.
        :raises TransportError: If a request other than the server version check fails.
        """
        if not self.config.get('code_insights_enabled'):
            return False
        project_key = self.config.get('project_key')
        if not project_key:
            self.logger.info("Not publishing a Code Insights report because 'project_key' is not set.")
            return False
        if not results.commit:
            self.logger.info("Not publishing a Code Insights report because the analysed commit is unknown.")
            return False
        if not self.client.supports_code_insights():
            return False

        repository = self.config['repository_slug']
        closed_statuses = self.config.get('closed_statuses', DEFAULT_CLOSED_STATUSES)
        annotations = [self.make_annotation(issue)
                       for issue in open_issues(results.issues, closed_statuses)
                       if issue.path]
        if self.config.get('is_dry_run'):
            self.logger.info("Would publish a Code Insights report with %d annotation(s) for commit %s.", len(annotations), results.commit)
            return False

        self.logger.info("PUBLISHING CODE INSIGHTS REPORT with %d annotation(s) for commit %s.", len(annotations), results.commit)
        self.client.delete_annotations(project_key, repository, results.commit)
        self.client.create_report(project_key, repository, results.commit, self.make_report(results))
        self.client.create_annotations(project_key, repository, results.commit, annotations)
        return True
