from typing import List, Optional

from vulnreport.models.finding import Alert, Finding, ScannerJob, Vulnerability
from vulnreport.models.gitlab_api import JobArtifact
from vulnreport.services.lookup_tables import CweCatalog
from vulnreport.services.normalizers.utils import remove_html_tags, transform_cwe, transform_severity


def normalize_zap(artifact: JobArtifact, cwe_catalog: Optional[CweCatalog] = None) -> List[Finding]:
    """Normalize OWASP ZAP DAST results of the first scanned site."""
    # ZAP JSON report:
    # {
    #   "site": [
    #     {
    #       "@name": "https://app.example.com",
    #       "alerts": [
    #         {
    #           "name": "Content Security Policy (CSP) Header Not Set",
    #           "riskdesc": "Medium (High)",
    #           "desc": "<p>Content Security Policy ...</p>",
    #           "instances": [{"uri": "...", "method": "GET"}],
    #           "count": "3",
    #           "reference": "<p>https://developer.mozilla.org/...</p>",
    #           "cweid": "693"
    #         }
    #       ]
    #     }
    #   ]
    # }
    findings = []
    for alert in artifact.data["site"][0]["alerts"]:
        # riskdesc is "<Risk> (<Confidence>)"
        risk = alert["riskdesc"].split(" ")[0]
        findings.append(
            Finding(
                job=ScannerJob.DAST_ZAP,
                description=remove_html_tags(alert.get("desc")),
                vulnerability=Vulnerability(
                    cwe=transform_cwe(alert.get("cweid"), cwe_catalog),
                    severity=transform_severity(risk),
                    reference=remove_html_tags(alert.get("reference")),
                ),
                alert=Alert(
                    instances=alert.get("instances") or [],
                    count=int(alert["count"]),
                    name=alert.get("name"),
                ),
            )
        )
    return findings
