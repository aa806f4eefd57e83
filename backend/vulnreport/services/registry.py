"""
Parser Registry

Maps CI job names onto the normalizer that understands the job's report
format. New scanners are added by registering a parser under their job name.
"""

import logging
from functools import partial
from typing import Callable, Dict, List, Optional

from vulnreport.models.finding import Finding, ScannerJob
from vulnreport.models.gitlab_api import JobArtifact
from vulnreport.services.lookup_tables import CweCatalog
from vulnreport.services.normalizers.dast import normalize_zap
from vulnreport.services.normalizers.sast import normalize_gitleaks, normalize_semgrep
from vulnreport.services.normalizers.sca import normalize_dependency_check, normalize_trivy

logger = logging.getLogger(__name__)

Parser = Callable[[JobArtifact], List[Finding]]

# Normalizers keyed by the job name that produces their report
DEFAULT_PARSERS = {
    ScannerJob.SAST_SEMGREP.value: normalize_semgrep,
    ScannerJob.SAST_GITLEAKS.value: normalize_gitleaks,
    ScannerJob.SCA_DEPENDENCY_CHECK.value: normalize_dependency_check,
    ScannerJob.SCA_CONTAINER_TRIVY.value: normalize_trivy,
    ScannerJob.DAST_ZAP.value: normalize_zap,
}


class ParserRegistry:
    def __init__(self, cwe_catalog: Optional[CweCatalog] = None):
        self.cwe_catalog = cwe_catalog
        self._parsers: Dict[str, Parser] = {}

    @classmethod
    def with_defaults(cls, cwe_catalog: Optional[CweCatalog] = None) -> "ParserRegistry":
        registry = cls(cwe_catalog)
        for job_name, normalizer in DEFAULT_PARSERS.items():
            registry.register(job_name, normalizer)
        return registry

    def register(self, job_name: str, normalizer: Callable[..., List[Finding]]) -> None:
        """Register a normalizer; it receives the artifact and the CWE catalog."""
        if job_name in self._parsers:
            logger.warning(f"Replacing parser registered for job {job_name}")
        self._parsers[job_name] = partial(normalizer, cwe_catalog=self.cwe_catalog)

    def get_parser(self, job_name: str) -> Optional[Parser]:
        """
        Get the parser for a job name.

        Returns:
            The parser if registered, None otherwise
        """
        return self._parsers.get(job_name)

    def job_names(self) -> List[str]:
        return list(self._parsers.keys())

    def __contains__(self, job_name: str) -> bool:
        return job_name in self._parsers
