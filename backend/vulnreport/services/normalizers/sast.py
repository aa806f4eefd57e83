from datetime import datetime, timezone
from typing import List, Optional

from vulnreport.core import parse_timestamp
from vulnreport.core.constants import SECRET_CWE_DESCRIPTION, SECRET_CWE_SHORT, SECRET_OWASP
from vulnreport.models.finding import (
    CweInfo,
    FileLocation,
    Finding,
    ScannerJob,
    Severity,
    Vulnerability,
)
from vulnreport.models.gitlab_api import JobArtifact
from vulnreport.services.lookup_tables import CweCatalog
from vulnreport.services.normalizers.utils import transform_cwe, transform_severity

NO_DATE = datetime.min.replace(tzinfo=timezone.utc)


def normalize_semgrep(artifact: JobArtifact, cwe_catalog: Optional[CweCatalog] = None) -> List[Finding]:
    """Normalize Semgrep SAST results."""
    # Semgrep JSON schema:
    # {
    #   "results": [
    #     {
    #       "check_id": "python.django.security.injection...",
    #       "path": "app/views.py",
    #       "start": {"line": 40, "col": 5},
    #       "end": {"line": 42, "col": 60},
    #       "extra": {
    #         "message": "...",
    #         "severity": "WARNING",
    #         "metadata": {
    #           "cwe": ["CWE-89: Improper Neutralization ..."],
    #           "owasp": ["A01:2017 - Injection"],
    #           "confidence": "HIGH",
    #           "source": "https://semgrep.dev/r/..."
    #         }
    #       }
    #     }
    #   ]
    # }
    findings = []
    for item in artifact.data["results"]:
        extra = item["extra"]
        metadata = extra.get("metadata") or {}

        findings.append(
            Finding(
                job=ScannerJob.SAST_SEMGREP,
                description=extra.get("message"),
                file=FileLocation(
                    path=item["path"],
                    line=item["end"]["line"],
                    column=item["end"]["col"],
                ),
                vulnerability=Vulnerability(
                    cwe=transform_cwe(metadata.get("cwe"), cwe_catalog),
                    owasp=metadata.get("owasp"),
                    severity=transform_severity(extra.get("severity")),
                    confidence=metadata.get("confidence"),
                    reference=metadata.get("source"),
                ),
            )
        )
    return findings


def _commit_date(record) -> datetime:
    # Directory scans (--no-git) leave Date empty; such records never win
    try:
        return parse_timestamp(record.get("Date") or "")
    except ValueError:
        return NO_DATE


def normalize_gitleaks(artifact: JobArtifact, cwe_catalog: Optional[CweCatalog] = None) -> List[Finding]:
    """
    Normalize Gitleaks secret scan results.

    Gitleaks reports leaks for every scanned commit. Only the commit of the
    most recent record is kept; leaks of older commits are stale.
    """
    # Gitleaks JSON: [{"Description", "File", "StartLine", "StartColumn", "Commit", "Date", ...}]
    records = artifact.data
    if not records:
        return []

    latest = max(records, key=_commit_date)
    current = [record for record in records if record["Commit"] == latest["Commit"]]

    # Secrets carry no weakness metadata; every leak is an information exposure
    cwe = CweInfo(short=SECRET_CWE_SHORT, description=SECRET_CWE_DESCRIPTION)

    return [
        Finding(
            job=ScannerJob.SAST_GITLEAKS,
            description=record.get("Description"),
            file=FileLocation(
                path=record.get("File"),
                line=record.get("StartLine"),
                column=record.get("StartColumn"),
            ),
            vulnerability=Vulnerability(
                cwe=cwe,
                owasp=list(SECRET_OWASP),
                severity=Severity.HIGH,
            ),
        )
        for record in current
    ]
