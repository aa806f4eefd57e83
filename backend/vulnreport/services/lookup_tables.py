"""
Static lookup tables.

The job table (which jobs of a project produce which artifacts) and the
CWE reference list are supplied as JSON files and are read-only at runtime.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import ValidationError

from vulnreport.core.exceptions import ConfigurationError, JobNotConfiguredError
from vulnreport.schemas.cwe import CweEntry, CweListFile
from vulnreport.schemas.job_table import JobEntry, JobTableFile, ProjectEntry

logger = logging.getLogger(__name__)


def _read_json_file(path: Path, model, label: str):
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read {label} file {path}: {e}") from e
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid {label} file {path}: {e}") from e


class JobTable:
    """Per-project list of CI jobs and the artifact paths they produce."""

    def __init__(self, projects: List[ProjectEntry]):
        self.projects = projects

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "JobTable":
        table = _read_json_file(Path(path), JobTableFile, "job table")
        logger.info(f"Loaded job table with {len(table.projects)} projects from {path}")
        return cls(table.projects)

    @classmethod
    def from_dict(cls, data: Dict) -> "JobTable":
        return cls(JobTableFile.model_validate(data).projects)

    def get_project(self, project_id: int) -> ProjectEntry:
        project = next((p for p in self.projects if p.project_id == project_id), None)
        if project is None:
            raise ConfigurationError(f"Project with ID {project_id} not found in job table")
        return project

    def get_job(self, project_id: int, job_name: str) -> JobEntry:
        project = self.get_project(project_id)
        job = next((j for j in project.jobs if j.name == job_name), None)
        if job is None:
            raise JobNotConfiguredError(project_id, job_name)
        return job


class CweCatalog:
    """CWE reference records indexed by short name (e.g. "CWE-79")."""

    def __init__(self, entries: List[CweEntry]):
        self._entries: Dict[str, CweEntry] = {}
        for entry in entries:
            # First record wins on duplicate names
            self._entries.setdefault(entry.cwe_name, entry)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CweCatalog":
        catalog = _read_json_file(Path(path), CweListFile, "CWE list")
        logger.info(f"Loaded {len(catalog.root)} CWE entries from {path}")
        return cls(catalog.root)

    @classmethod
    def from_list(cls, data: List[Dict]) -> "CweCatalog":
        return cls(CweListFile.model_validate(data).root)

    def lookup(self, cwe_name: str) -> Optional[CweEntry]:
        return self._entries.get(cwe_name)

    def __len__(self) -> int:
        return len(self._entries)
