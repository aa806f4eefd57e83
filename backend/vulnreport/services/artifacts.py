"""
Artifact resolution

Maps a project's configured CI jobs onto the artifacts they produced in
a concrete pipeline and downloads them.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from vulnreport.models.gitlab_api import GitLabJob, JobArtifact
from vulnreport.services.gitlab import GitLabService, find_job
from vulnreport.services.lookup_tables import JobTable

logger = logging.getLogger(__name__)


class ArtifactResolver:
    def __init__(self, gitlab: GitLabService, job_table: JobTable):
        self.gitlab = gitlab
        self.job_table = job_table

    def job_names_with_reports(self, project_id: int) -> List[str]:
        """Names of the project's jobs that publish a report, in declaration order."""
        project = self.job_table.get_project(project_id)
        return [job.name for job in project.jobs if job.report]

    def artifacts_for_job(self, project_id: int, job_name: str) -> List[str]:
        return list(self.job_table.get_job(project_id, job_name).artifacts)

    async def _fetch_job_artifacts(self, project_id: int, job: GitLabJob) -> List[JobArtifact]:
        """Downloads all configured artifacts of one job concurrently."""
        paths = self.artifacts_for_job(project_id, job.name)
        payloads = await asyncio.gather(
            *(self.gitlab.fetch_artifact(project_id, job.id, path) for path in paths)
        )
        logger.debug(f"Fetched {len(payloads)} artifacts of job {job.name} ({job.id})")
        return [
            JobArtifact(
                project_id=project_id,
                job_name=job.name,
                stage=job.stage,
                artifact_name=payload.artifact_path,
                data=payload.data,
            )
            for payload in payloads
        ]

    async def artifacts_by_job_name(
        self, project_id: int, job_name: str, pipeline_id: Optional[int] = None
    ) -> List[JobArtifact]:
        """
        Fetches the artifacts of a job by name.

        The job is looked up in the given pipeline, or in the latest pipeline
        of the project when no pipeline is given.
        """
        if pipeline_id is None:
            job = await self.gitlab.get_job_by_name(project_id, job_name)
        else:
            jobs = await self.gitlab.get_pipeline_jobs(project_id, pipeline_id)
            job = find_job(jobs, job_name)
        return await self._fetch_job_artifacts(project_id, job)

    async def artifacts_by_pipeline_id(
        self, project_id: int, pipeline_id: int, job_name: str
    ) -> List[JobArtifact]:
        return await self.artifacts_by_job_name(project_id, job_name, pipeline_id=pipeline_id)

    async def artifacts_by_job_names(
        self, project_id: int, job_names: List[str]
    ) -> Dict[str, List[JobArtifact]]:
        """
        Fetches the artifacts of several jobs of the latest pipeline.

        The pipeline's job list is resolved once. Jobs are processed one after
        another in the given order; the artifacts of a single job are fetched
        concurrently. The returned mapping preserves the order of job_names.
        """
        jobs = await self.gitlab.get_jobs_latest(project_id)

        artifacts: Dict[str, List[JobArtifact]] = {}
        for job_name in job_names:
            job = find_job(jobs, job_name)
            artifacts[job_name] = await self._fetch_job_artifacts(project_id, job)
        return artifacts


def flatten_artifacts(artifacts: Dict[str, List[JobArtifact]]) -> List[JobArtifact]:
    """Flattens artifacts keyed by job name into one list in job order."""
    return [artifact for job_artifacts in artifacts.values() for artifact in job_artifacts]
