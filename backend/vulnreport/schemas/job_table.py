from typing import List

from pydantic import BaseModel, Field


class JobEntry(BaseModel):
    name: str
    artifacts: List[str] = Field(default_factory=list)
    report: bool = False


class ProjectEntry(BaseModel):
    project_id: int
    jobs: List[JobEntry] = Field(default_factory=list)


class JobTableFile(BaseModel):
    """Root object of the artifact paths file."""

    projects: List[ProjectEntry] = Field(default_factory=list)
