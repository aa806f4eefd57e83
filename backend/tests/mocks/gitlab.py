"""Reusable GitLab mock objects and a fake GitLab REST API."""

import json
from typing import Any, Dict, List, Optional

import httpx

from vulnreport.models.gitlab_api import GitLabJob, GitLabPipeline
from vulnreport.services.gitlab import GitLabService

API_URL = "https://gitlab.test.com/api/v4"


def make_pipeline(**kwargs):
    """Create a GitLabPipeline with sensible defaults."""
    defaults = {"id": 100, "status": "success", "ref": "main", "sha": "bbbb222"}
    defaults.update(kwargs)
    return GitLabPipeline(**defaults)


def make_job(**kwargs):
    """Create a GitLabJob with sensible defaults."""
    defaults = {"id": 1, "name": "sast-semgrep", "stage": "test", "status": "success"}
    defaults.update(kwargs)
    return GitLabJob(**defaults)


class FakeGitLab:
    """
    In-memory GitLab REST API served through httpx.MockTransport.

    Routes are keyed by the path below /api/v4. A route value is either a
    JSON-serializable payload, a str (served as text) or an int status code
    (served as an error response).
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None):
        self.routes: Dict[str, Any] = dict(routes or {})
        self.requests: List[httpx.Request] = []

    def add(self, path: str, payload: Any) -> "FakeGitLab":
        self.routes[path] = payload
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith("/api/v4"):
            path = path[len("/api/v4"):]

        if path not in self.routes:
            return httpx.Response(404, json={"message": "404 Not Found"})

        payload = self.routes[path]
        if isinstance(payload, int):
            return httpx.Response(payload, json={"message": f"{payload}"})
        if isinstance(payload, str):
            return httpx.Response(200, text=payload, headers={"content-type": "text/plain"})
        return httpx.Response(200, content=json.dumps(payload), headers={"content-type": "application/json"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def service(self, **kwargs) -> GitLabService:
        defaults = {"url": "https://gitlab.test.com", "access_token": "glpat-test-token"}
        defaults.update(kwargs)
        return GitLabService(transport=self.transport, **defaults)

    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]


def latest_pipeline_routes(
    project_id: int,
    jobs: List[Dict[str, Any]],
    pipeline_id: int = 100,
) -> Dict[str, Any]:
    """Routes for a project whose latest pipeline has the given jobs."""
    return {
        f"/projects/{project_id}/pipelines": [{"id": pipeline_id, "status": "success"}],
        f"/projects/{project_id}/pipelines/{pipeline_id}/jobs": jobs,
    }
