"""
Domain exceptions.

Transport failures are not wrapped: httpx exceptions raised while talking
to GitLab reach the caller unchanged.
"""


class VulnReportError(Exception):
    """Base exception for report resolution failures."""


class NotFoundError(VulnReportError):
    """A pipeline, job or configured job entry does not exist."""


class ConfigurationError(VulnReportError):
    """The static job table or CWE catalog is missing or incomplete."""


class JobNotConfiguredError(ConfigurationError, NotFoundError):
    """A job name is not declared for the project in the static job table."""

    def __init__(self, project_id: int, job_name: str):
        super().__init__(f"Job with name {job_name} not found in job table of project {project_id}")
        self.project_id = project_id
        self.job_name = job_name
