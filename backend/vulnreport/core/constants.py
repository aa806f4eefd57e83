"""
Shared Constants

Centralized constants used across the application to ensure consistency.
"""

from typing import Dict, Optional

# Scanner vocabularies mapped onto the four report severities.
# Keys are upper case; lookups must upper-case the raw value first.
SEVERITY_ALIASES: Dict[str, str] = {
    "LOW": "LOW",
    "WARNING": "LOW",
    "INFORMATIONAL": "LOW",
    "UNKNOWN": "LOW",
    "MODERATE": "MEDIUM",
    "MEDIUM": "MEDIUM",
    "HIGH": "HIGH",
    "CRITICAL": "CRITICAL",
}

# Severity order for sorting (higher value = more severe)
SEVERITY_ORDER: Dict[str, int] = {
    "CRITICAL": 4,
    "HIGH": 3,
    "MEDIUM": 2,
    "LOW": 1,
}

# Bucket used when a finding carries no mapped severity
UNKNOWN_SEVERITY = "UNKNOWN"


def get_severity_value(severity: Optional[str]) -> int:
    """Get numeric value for severity. Higher = more severe."""
    if not severity:
        return 0
    return SEVERITY_ORDER.get(severity.upper(), 0)


# Secret scanning reports no weakness metadata of its own
SECRET_CWE_SHORT = "CWE-200"
SECRET_CWE_DESCRIPTION = "Exposure of Sensitive Information to an Unauthorized Actor"
SECRET_OWASP = ["A03:2017 - Sensitive Data Exposure"]

GITLAB_API_PREFIX = "/api/v4"
