import logging
from typing import Any, Dict, List, Optional

import httpx

from vulnreport.core.config import Settings, settings as default_settings
from vulnreport.core.constants import GITLAB_API_PREFIX
from vulnreport.core.exceptions import NotFoundError
from vulnreport.core.http_utils import InstrumentedAsyncClient
from vulnreport.models.gitlab_api import (
    ArtifactPayload,
    GitLabGroup,
    GitLabJob,
    GitLabPipeline,
)

logger = logging.getLogger(__name__)


class GitLabService:
    """
    Read-only client for the pipeline, job and artifact endpoints of GitLab.

    Every method issues fresh requests: nothing is cached and nothing is
    retried. Transport failures (connection errors, 401, 404, ...) are
    raised as the httpx exceptions themselves.
    """

    SERVICE_NAME = "GitLab API"

    def __init__(
        self,
        url: str,
        access_token: str,
        group_id: Optional[int] = None,
        per_page: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = url.rstrip("/")
        self.api_url = f"{self.base_url}{GITLAB_API_PREFIX}"
        self.access_token = access_token
        # Unset values fall back to the application settings
        self.group_id = group_id if group_id is not None else default_settings.GITLAB_GROUP_ID
        self.per_page = per_page if per_page is not None else default_settings.GITLAB_PIPELINES_PER_PAGE
        self.timeout = timeout if timeout is not None else default_settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings = default_settings, **kwargs) -> "GitLabService":
        return cls(
            url=settings.GITLAB_URL,
            access_token=settings.GITLAB_ACCESS_TOKEN,
            group_id=settings.GITLAB_GROUP_ID,
            per_page=settings.GITLAB_PIPELINES_PER_PAGE,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            **kwargs,
        )

    def _get_auth_headers(self) -> Dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}

    def _client(self) -> InstrumentedAsyncClient:
        kwargs: Dict[str, Any] = {"base_url": self.api_url, "headers": self._get_auth_headers()}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return InstrumentedAsyncClient(self.SERVICE_NAME, timeout=self.timeout, **kwargs)

    async def _api_get(self, path: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        async with self._client() as client:
            return await client.get(path, params=params)

    async def get_group_data(self, group_id: Optional[int] = None) -> GitLabGroup:
        """Fetches group details, defaulting to the configured group."""
        group_id = group_id if group_id is not None else self.group_id
        response = await self._api_get(f"/groups/{group_id}")
        return GitLabGroup.model_validate(response.json())

    async def get_pipelines(
        self, project_id: int, page: int = 1, per_page: Optional[int] = None
    ) -> List[GitLabPipeline]:
        """
        Fetches one page of pipelines of a project.
        GitLab returns pipelines newest first.
        """
        params = {"page": page, "per_page": per_page or self.per_page}
        response = await self._api_get(f"/projects/{project_id}/pipelines", params=params)
        return [GitLabPipeline.model_validate(p) for p in response.json()]

    async def get_pipeline_details(self, project_id: int, pipeline_id: int) -> GitLabPipeline:
        response = await self._api_get(f"/projects/{project_id}/pipelines/{pipeline_id}")
        return GitLabPipeline.model_validate(response.json())

    async def get_pipeline_jobs(self, project_id: int, pipeline_id: int) -> List[GitLabJob]:
        response = await self._api_get(f"/projects/{project_id}/pipelines/{pipeline_id}/jobs")
        return [GitLabJob.model_validate(j) for j in response.json()]

    async def get_job(self, project_id: int, job_id: int) -> GitLabJob:
        response = await self._api_get(f"/projects/{project_id}/jobs/{job_id}")
        return GitLabJob.model_validate(response.json())

    async def get_jobs_latest(self, project_id: int) -> List[GitLabJob]:
        """
        Fetches the jobs of the most recent pipeline of a project.
        Raises NotFoundError if the project has no pipelines or the pipeline has no jobs.
        """
        pipelines = await self.get_pipelines(project_id, page=1, per_page=1)
        if not pipelines:
            raise NotFoundError(f"No pipelines found for project {project_id}")

        latest = pipelines[0]
        jobs = await self.get_pipeline_jobs(project_id, latest.id)
        if not jobs:
            raise NotFoundError(f"No jobs found for pipeline {latest.id}")

        logger.debug(f"Latest pipeline {latest.id} of project {project_id} has {len(jobs)} jobs")
        return jobs

    async def get_job_by_name(self, project_id: int, job_name: str) -> GitLabJob:
        """Finds a job of the latest pipeline by its name."""
        jobs = await self.get_jobs_latest(project_id)
        return find_job(jobs, job_name)

    async def fetch_artifact(self, project_id: int, job_id: int, artifact_path: str) -> ArtifactPayload:
        """
        Downloads a single artifact file of a job.

        JSON artifacts are decoded; anything else is returned as text.
        """
        response = await self._api_get(f"/projects/{project_id}/jobs/{job_id}/artifacts/{artifact_path}")
        try:
            data = response.json()
        except ValueError:
            data = response.text
        return ArtifactPayload(data=data, artifact_path=artifact_path)


def find_job(jobs: List[GitLabJob], job_name: str) -> GitLabJob:
    """Returns the first job with the given name. Raises NotFoundError if absent."""
    job = next((j for j in jobs if j.name == job_name), None)
    if job is None:
        raise NotFoundError(f"Job with name {job_name} not found")
    return job
