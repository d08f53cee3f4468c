import logging
import urllib.parse
from dataclasses import dataclass, field
from typing import Any, Optional

import requests
from injector import Module, inject, provider, singleton

from config import DEFAULT_REQUEST_TIMEOUT_S, Config
from errors import ResponseShapeError, TransportError
from models import ActivityPage, CommentPayload, DiffPage

INSIGHTS_API = '/rest/insights/1.0/'
REPORT_KEY = 'com.github.mc1arke.sonarqube'
CODE_INSIGHTS_MIN_VERSION = (5, 15)


def parse_version(version: str) -> tuple[int, ...]:
    """
    Parse the leading numeric parts of a version such as `7.21.0` or `6.0.0-rc1`.
    """
    parts = []
    for part in version.split('.'):
        digits = ''
        for c in part:
            if not c.isdigit():
                break
            digits += c
        if not digits:
            break
        parts.append(int(digits))
    return tuple(parts)


@dataclass(frozen=True)
class ServerProperties:
    version: str
    display_name: Optional[str] = None

    def has_code_insights_api(self) -> bool:
        return parse_version(self.version) >= CODE_INSIGHTS_MIN_VERSION


@inject
@dataclass
class BitbucketServerClient:
    """
    Sends requests to a Bitbucket Server instance.
    Every method raises `TransportError` when the request fails or the status is not the expected one.
    """
    config: Config
    logger: logging.Logger

    session: requests.Session = field(init=False)

    def __post_init__(self) -> None:
        self.session = requests.Session()
        self.session.headers.update({
            'Authorization': f"Bearer {self.config['token']}",
            'Accept': 'application/json',
        })

    @property
    def timeout(self) -> float:
        return self.config.get('request_timeout_s') or DEFAULT_REQUEST_TIMEOUT_S

    def _send(self, method: str, url: str, expected_status: int, json: Any = None) -> requests.Response:
        try:
            response = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}", url=url) from e
        if response.status_code != expected_status:
            raise TransportError(
                f"{method} {url} returned {response.status_code} instead of {expected_status}: {response.text}",
                url=url, status_code=response.status_code)
        return response

    def _parse_json(self, response: requests.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ResponseShapeError(f"Response from {url} is not JSON: {e}", url=url, status_code=response.status_code) from e

    def get_json(self, url: str) -> Any:
        return self._parse_json(self._send('GET', url, 200), url)

    def post_json(self, url: str, body: Any) -> Any:
        response = self._send('POST', url, 201, json=body)
        self.logger.debug("Response from %s:\n%s", url, response.text)
        if not response.content:
            return None
        return self._parse_json(response, url)

    def delete(self, url: str) -> None:
        self._send('DELETE', url, 204)

    def get_diff_page(self, diff_url: str) -> DiffPage:
        return DiffPage.from_json(self.get_json(diff_url))

    def get_activity_page(self, activities_url: str) -> ActivityPage:
        return ActivityPage.from_json(self.get_json(activities_url))

    def post_comment(self, comments_url: str, comment: CommentPayload) -> Any:
        return self.post_json(comments_url, comment)

    def delete_comment(self, comment_url: str) -> None:
        self.delete(comment_url)

    # Code Insights

    def _report_url(self, project: str, repository: str, commit: str) -> str:
        project, repository, commit = (urllib.parse.quote(p, safe='') for p in (project, repository, commit))
        return f"{self.config['base_url']}{INSIGHTS_API}projects/{project}/repos/{repository}/commits/{commit}/reports/{REPORT_KEY}"

    def get_server_properties(self) -> ServerProperties:
        url = f"{self.config['base_url']}/rest/api/1.0/application-properties"
        data = self.get_json(url)
        if not isinstance(data, dict) or 'version' not in data:
            raise ResponseShapeError(f"No version in the application properties from {url}.", url=url)
        return ServerProperties(str(data['version']), data.get('displayName'))

    def supports_code_insights(self) -> bool:
        try:
            server = self.get_server_properties()
        except TransportError:
            self.logger.exception("Could not determine the Bitbucket Server version.")
            return False
        self.logger.debug("The Bitbucket Server version is %s.", server.version)
        if server.has_code_insights_api():
            return True
        self.logger.info("Bitbucket Server version %s is too old. %s is the minimum version that supports Code Insights.",
                         server.version, '.'.join(map(str, CODE_INSIGHTS_MIN_VERSION)))
        return False

    def create_report(self, project: str, repository: str, commit: str, report: dict) -> None:
        url = self._report_url(project, repository, commit)
        # Creating or replacing a report answers 200.
        self._send('PUT', url, 200, json=report)

    def create_annotations(self, project: str, repository: str, commit: str, annotations: list[dict]) -> None:
        if len(annotations) == 0:
            return
        url = self._report_url(project, repository, commit) + '/annotations'
        self._send('POST', url, 204, json={'annotations': annotations})

    def delete_annotations(self, project: str, repository: str, commit: str) -> None:
        url = self._report_url(project, repository, commit) + '/annotations'
        self._send('DELETE', url, 204)


class ClientModule(Module):
    @provider
    @singleton
    def provide_client(self, config: Config, logger: logging.Logger) -> BitbucketServerClient:
        return BitbucketServerClient(config, logger)
