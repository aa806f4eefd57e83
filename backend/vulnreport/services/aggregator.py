import logging
import time
from typing import Dict, List, Optional

from vulnreport.core.constants import SEVERITY_ORDER, UNKNOWN_SEVERITY, get_severity_value
from vulnreport.core.metrics import (
    report_aggregation_duration_seconds,
    report_duplicates_removed_total,
    report_findings_total,
)
from vulnreport.models.finding import Finding
from vulnreport.services.artifacts import ArtifactResolver
from vulnreport.services.registry import ParserRegistry

logger = logging.getLogger(__name__)


def filter_gathered_data(findings: List[Finding]) -> List[Finding]:
    """
    Remove findings whose CVE was already reported by an earlier finding.

    Order is preserved and the first occurrence wins. Findings without a
    CVE are never treated as duplicates.
    """
    seen = set()
    result = []
    for finding in findings:
        cve = finding.vulnerability.cve
        if cve:
            if cve in seen:
                continue
            seen.add(cve)
        result.append(finding)

    removed = len(findings) - len(result)
    if removed:
        report_duplicates_removed_total.inc(removed)
        logger.debug(f"Removed {removed} duplicate findings by CVE")
    return result


def summarize_severities(findings: List[Finding]) -> Dict[str, int]:
    """Count findings per severity; findings without a severity count as UNKNOWN."""
    summary = {severity: 0 for severity in SEVERITY_ORDER}
    summary[UNKNOWN_SEVERITY] = 0
    for finding in findings:
        summary[finding.vulnerability.severity or UNKNOWN_SEVERITY] += 1
    return summary


def sort_by_severity(findings: List[Finding], reverse: bool = True) -> List[Finding]:
    """Sort findings by severity, most severe first by default (stable)."""
    return sorted(
        findings,
        key=lambda f: get_severity_value(f.vulnerability.severity),
        reverse=reverse,
    )


class ReportAggregator:
    """Fetches the scanner reports of a project and merges them into one finding list."""

    def __init__(self, resolver: ArtifactResolver, registry: ParserRegistry):
        self.resolver = resolver
        self.registry = registry

    def _record(self, job_name: str, findings: List[Finding]) -> None:
        for finding in findings:
            report_findings_total.labels(
                job=job_name, severity=finding.vulnerability.severity or UNKNOWN_SEVERITY
            ).inc()

    async def gather_data(self, project_id: int) -> List[Finding]:
        """
        Collect the findings of every reporting job of the latest pipeline.

        Artifacts are keyed by job name, so each report is handed to the
        parser of the job that produced it regardless of fetch order. The
        first configured artifact of a job is its report.
        """
        start_time = time.time()
        job_names = self.resolver.job_names_with_reports(project_id)

        parsable = []
        for job_name in job_names:
            if job_name in self.registry:
                parsable.append(job_name)
            else:
                logger.warning(f"No parser registered for job {job_name}, skipping its report")

        artifacts = await self.resolver.artifacts_by_job_names(project_id, parsable)

        findings: List[Finding] = []
        for job_name, job_artifacts in artifacts.items():
            if not job_artifacts:
                logger.warning(f"Job {job_name} of project {project_id} has no configured artifacts")
                continue
            parsed = self.registry.get_parser(job_name)(job_artifacts[0])
            self._record(job_name, parsed)
            findings.extend(parsed)

        result = filter_gathered_data(findings)
        report_aggregation_duration_seconds.observe(time.time() - start_time)
        logger.info(
            f"Gathered {len(result)} findings ({len(findings)} before deduplication) "
            f"from {len(artifacts)} jobs of project {project_id}"
        )
        return result

    async def get_filtered_data(self, project_id: int, job_name: str) -> Optional[List[Finding]]:
        """
        Collect the findings of a single job.

        Returns None when no parser is registered for the job name.
        """
        parser = self.registry.get_parser(job_name)
        if parser is None:
            return None

        artifacts = await self.resolver.artifacts_by_job_name(project_id, job_name)
        if not artifacts:
            logger.warning(f"Job {job_name} of project {project_id} has no configured artifacts")
            return []
        findings = parser(artifacts[0])
        self._record(job_name, findings)
        return findings
