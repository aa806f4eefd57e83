"""
Shared test fixtures and configuration.

Environment variables are set BEFORE any package imports so the settings
singleton never points at a real GitLab instance.
"""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ["GITLAB_URL"] = "https://gitlab.test.com"
os.environ["GITLAB_ACCESS_TOKEN"] = "glpat-test-token"
os.environ["GITLAB_GROUP_ID"] = "1120"
os.environ["GITLAB_PIPELINES_PER_PAGE"] = "20"

import pytest  # noqa: E402

from tests.mocks import reports  # noqa: E402
from vulnreport.services.lookup_tables import CweCatalog, JobTable  # noqa: E402

PROJECT_ID = 42


@pytest.fixture
def project_id():
    return PROJECT_ID


@pytest.fixture
def job_table():
    """Job table with all five scanners plus a non-reporting build job."""
    return JobTable.from_dict(
        {
            "projects": [
                {
                    "project_id": PROJECT_ID,
                    "jobs": [
                        {"name": "build", "artifacts": [], "report": False},
                        {"name": "sast-semgrep", "artifacts": ["semgrep.json"], "report": True},
                        {"name": "sast-gitleaks", "artifacts": ["gitleaks.json"], "report": True},
                        {
                            "name": "sca-package-dependency-check",
                            "artifacts": ["dependency-check-report.json"],
                            "report": True,
                        },
                        {"name": "sca-container-trivy", "artifacts": ["trivy.json"], "report": True},
                        {"name": "dast-zap", "artifacts": ["zap.json"], "report": True},
                    ],
                }
            ]
        }
    )


@pytest.fixture
def cwe_catalog():
    """Small CWE reference list."""
    return CweCatalog.from_list(
        [
            {
                "cwe_name": "CWE-89",
                "desc": "Improper Neutralization of Special Elements used in an SQL Command ('SQL Injection')",
                "Likelihood_Of_Exploit": "High",
                "observed_examples": ["CVE-2021-42258"],
                "consequences": ["Confidentiality: Read Application Data"],
            },
            {
                "cwe_name": "CWE-502",
                "desc": "Deserialization of Untrusted Data",
                "Likelihood_Of_Exploit": "Medium",
                "observed_examples": ["CVE-2021-44228"],
                "consequences": None,
            },
        ]
    )


@pytest.fixture
def semgrep_report():
    return reports.semgrep_report()


@pytest.fixture
def gitleaks_report():
    return reports.gitleaks_report()


@pytest.fixture
def dependency_check_report():
    return reports.dependency_check_report()


@pytest.fixture
def trivy_report():
    return reports.trivy_report()


@pytest.fixture
def zap_report():
    return reports.zap_report()
