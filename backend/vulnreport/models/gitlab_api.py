"""
Pydantic models for GitLab API responses and resolved job artifacts.

These models represent data returned by the GitLab REST API.
All use extra="ignore" to silently discard fields we don't use.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class GitLabGroup(BaseModel):
    """Group from GET /groups/:id."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    full_path: Optional[str] = None
    web_url: Optional[str] = None


class GitLabPipeline(BaseModel):
    """Pipeline from GET /projects/:id/pipelines or /pipelines/:pipeline_id."""

    model_config = ConfigDict(extra="ignore")

    id: int
    status: Optional[str] = None
    ref: Optional[str] = None
    sha: Optional[str] = None
    web_url: Optional[str] = None
    created_at: Optional[str] = None


class GitLabJob(BaseModel):
    """Job from GET /projects/:id/pipelines/:pipeline_id/jobs or /jobs/:job_id."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    stage: Optional[str] = None
    status: Optional[str] = None
    web_url: Optional[str] = None


class ArtifactPayload(BaseModel):
    """Raw artifact content together with the path it was fetched from."""

    data: Any
    artifact_path: str


class JobArtifact(BaseModel):
    """Artifact tagged with the project, job and stage it belongs to."""

    project_id: int
    job_name: str
    stage: Optional[str] = None
    artifact_name: str
    data: Any
