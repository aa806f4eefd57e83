from typing import List, Optional

from vulnreport.models.finding import FileLocation, Finding, ScannerJob, Vulnerability
from vulnreport.models.gitlab_api import JobArtifact
from vulnreport.services.lookup_tables import CweCatalog
from vulnreport.services.normalizers.utils import first_score, transform_cwe, transform_severity


def normalize_dependency_check(
    artifact: JobArtifact, cwe_catalog: Optional[CweCatalog] = None
) -> List[Finding]:
    """Normalize OWASP Dependency-Check results (one finding per vulnerability)."""
    # Dependency-Check JSON:
    # {
    #   "dependencies": [
    #     {
    #       "fileName": "log4j-core-2.14.1.jar",
    #       "filePath": "/src/lib/log4j-core-2.14.1.jar",
    #       "vulnerabilities": [
    #         {
    #           "name": "CVE-2021-44228",
    #           "severity": "CRITICAL",
    #           "cvssv2": {"score": 9.3}, "cvssv3": {"baseScore": 10.0, "score": 10.0},
    #           "cwes": ["CWE-502", "CWE-400"],
    #           "description": "...",
    #           "references": [{"url": "https://..."}]
    #         }
    #       ]
    #     }
    #   ]
    # }
    findings = []
    for dependency in artifact.data["dependencies"]:
        # Dependencies without known vulnerabilities are not findings
        for vuln in dependency.get("vulnerabilities") or []:
            findings.append(
                Finding(
                    job=ScannerJob.SCA_DEPENDENCY_CHECK,
                    description=vuln.get("description"),
                    file=FileLocation(path=dependency.get("filePath")),
                    vulnerability=Vulnerability(
                        cve=vuln["name"],
                        cvss=first_score(vuln.get("cvssv3"), vuln.get("cvssv2")),
                        cwe=transform_cwe(vuln.get("cwes"), cwe_catalog),
                        severity=transform_severity(vuln.get("severity")),
                        reference=vuln["references"][0]["url"],
                    ),
                    dependency=dependency.get("fileName"),
                )
            )
    return findings


def normalize_trivy(artifact: JobArtifact, cwe_catalog: Optional[CweCatalog] = None) -> List[Finding]:
    """Normalize Trivy container scan results (one finding per vulnerability)."""
    # Trivy JSON:
    # {
    #   "Results": [
    #     {
    #       "Target": "registry.example.com/app:latest (debian 12.1)",
    #       "Vulnerabilities": [
    #         {
    #           "VulnerabilityID": "CVE-2023-4911",
    #           "PkgID": "libc6@2.36-9",
    #           "PkgPath": "usr/lib/...",
    #           "Severity": "HIGH",
    #           "CweIDs": ["CWE-787"],
    #           "CVSS": {"nvd": {"V2Score": 7.2, "V3Score": 7.8}},
    #           "Description": "...",
    #           "PrimaryURL": "https://avd.aquasec.com/nvd/cve-2023-4911"
    #         }
    #       ]
    #     }
    #   ]
    # }
    findings = []
    for result in artifact.data.get("Results") or []:
        # Targets without vulnerabilities are not findings
        for vuln in result.get("Vulnerabilities") or []:
            nvd = (vuln.get("CVSS") or {}).get("nvd") or {}
            findings.append(
                Finding(
                    job=ScannerJob.SCA_CONTAINER_TRIVY,
                    description=vuln.get("Description"),
                    file=FileLocation(
                        target=result.get("Target"),
                        path=vuln.get("PkgPath") or None,
                    ),
                    vulnerability=Vulnerability(
                        cve=vuln["VulnerabilityID"],
                        cvss=first_score(nvd, key="V3Score") or first_score(nvd, key="V2Score"),
                        cwe=transform_cwe(vuln.get("CweIDs"), cwe_catalog),
                        severity=transform_severity(vuln.get("Severity")),
                        reference=vuln.get("PrimaryURL"),
                    ),
                    dependency=vuln.get("PkgID"),
                )
            )
    return findings
