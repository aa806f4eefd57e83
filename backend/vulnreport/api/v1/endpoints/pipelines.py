from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from vulnreport.api import deps
from vulnreport.models.gitlab_api import GitLabGroup, GitLabJob, GitLabPipeline
from vulnreport.services.artifacts import ArtifactResolver
from vulnreport.services.gitlab import GitLabService

router = APIRouter()


@router.get("/groups/{group_id}", response_model=GitLabGroup)
async def get_group(
    group_id: int,
    gitlab: GitLabService = Depends(deps.get_gitlab_service),
):
    return await gitlab.get_group_data(group_id)


@router.get("/projects/{project_id}/pipelines", response_model=List[GitLabPipeline])
async def get_pipelines(
    project_id: int,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
    gitlab: GitLabService = Depends(deps.get_gitlab_service),
):
    """
    List pipelines of a project, newest first.
    """
    return await gitlab.get_pipelines(project_id, page=page, per_page=per_page)


@router.get("/projects/{project_id}/pipelines/{pipeline_id}/jobs", response_model=List[GitLabJob])
async def get_pipeline_jobs(
    project_id: int,
    pipeline_id: int,
    gitlab: GitLabService = Depends(deps.get_gitlab_service),
):
    return await gitlab.get_pipeline_jobs(project_id, pipeline_id)


@router.get("/projects/{project_id}/jobs", response_model=List[str])
async def get_report_jobs(
    project_id: int,
    resolver: ArtifactResolver = Depends(deps.get_artifact_resolver),
):
    """
    Names of the project's jobs that publish a security report.
    """
    return resolver.job_names_with_reports(project_id)
