"""
Shared utility functions for normalizers.

These helpers map scanner vocabularies onto the report schema in the same
way for every scanner.
"""

import logging
import math
import re
from typing import Any, Dict, Optional, Sequence

from vulnreport.core.constants import SEVERITY_ALIASES
from vulnreport.models.finding import CweInfo, Severity
from vulnreport.services.lookup_tables import CweCatalog

logger = logging.getLogger(__name__)

HTML_TAG_PATTERN = re.compile(r"<[^>]*>")


def transform_severity(value: Optional[str]) -> Optional[Severity]:
    """
    Map a scanner severity onto the report severities (case-insensitive).

    Unrecognized values are logged and yield None instead of raising.
    """
    normalized = SEVERITY_ALIASES.get(str(value).upper()) if value is not None else None
    if normalized is None:
        logger.warning(f"Unknown severity: {value}")
        return None
    return Severity(normalized)


def _as_cwe_number(value: Any) -> Optional[int]:
    """Returns the integer value of numeric CWE input, None for non-numeric input."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        try:
            number = float(text)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        # Leading integer part, so "79.0" and "79" agree
        match = re.match(r"[+-]?\d+", text)
        return int(match.group()) if match else 0
    return None


def transform_cwe(value: Any, catalog: Optional[CweCatalog] = None) -> CweInfo:
    """
    Turn a raw CWE reference into a CweInfo.

    Accepted input:
    - None / empty -> all fields None
    - a sequence -> only the first element is used
    - a number or numeric string: <= 0 -> all fields None, else "CWE-<n>"
    - "CWE-79: Description" -> split into short form and description
    - "CWE-79" -> enriched from the catalog when present there
    """
    if not value:
        return CweInfo()
    if isinstance(value, Sequence) and not isinstance(value, str):
        value = value[0]
        if not value:
            return CweInfo()

    number = _as_cwe_number(value)
    if number is not None:
        if number <= 0:
            return CweInfo()
        value = f"CWE-{number}"

    value = str(value)
    if ": " in value:
        parts = value.split(": ")
        return CweInfo(short=parts[0], description=parts[1])

    entry = catalog.lookup(value) if catalog is not None else None
    if entry is None:
        return CweInfo(short=value)
    return CweInfo(
        short=entry.cwe_name,
        description=entry.desc,
        likelihood_of_exploit=entry.likelihood_of_exploit,
        observed_examples=entry.observed_examples,
        consequences=entry.consequences,
    )


def remove_html_tags(value: Optional[Any]):
    """
    Strip all <...> tags from a string.

    Returns False (not an empty string) for None or empty input.
    """
    if value is None or value == "":
        return False
    return HTML_TAG_PATTERN.sub("", str(value))


def first_score(*candidates: Optional[Dict[str, Any]], key: str = "score") -> Optional[float]:
    """
    Return the first truthy score of the given CVSS objects, in order.

    Missing objects and zero scores fall through to the next candidate.
    """
    for candidate in candidates:
        if candidate and candidate.get(key):
            return float(candidate[key])
    return None
