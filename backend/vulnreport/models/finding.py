from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class ScannerJob(str, Enum):
    SAST_SEMGREP = "sast-semgrep"
    SAST_GITLEAKS = "sast-gitleaks"
    SCA_DEPENDENCY_CHECK = "sca-package-dependency-check"
    SCA_CONTAINER_TRIVY = "sca-container-trivy"
    DAST_ZAP = "dast-zap"


class CweInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    short: Optional[str] = Field(None, description="Canonical short form, e.g. CWE-79")
    description: Optional[str] = None
    likelihood_of_exploit: Optional[str] = None
    observed_examples: Optional[Any] = None
    consequences: Optional[Any] = None


class FileLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    # Container scans only: the scanned image or layer
    target: Optional[str] = None


class Vulnerability(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    cve: Optional[str] = None
    cvss: Optional[float] = None
    cwe: CweInfo = Field(default_factory=CweInfo)
    owasp: Optional[Union[List[str], str]] = None
    severity: Optional[Severity] = Field(None, description="None when the scanner severity is not recognized")
    confidence: Optional[str] = None
    reference: Optional[Union[str, bool]] = None


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True)

    instances: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = 0
    name: Optional[str] = None


class Finding(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    job: ScannerJob = Field(..., description="Scanner job that produced this finding")
    description: Optional[Union[str, bool]] = Field(None, description="Free-text description")
    file: FileLocation = Field(default_factory=FileLocation)
    vulnerability: Vulnerability = Field(default_factory=Vulnerability)
    dependency: Optional[str] = Field(None, description="Implicated package or library")
    alert: Optional[Alert] = Field(None, description="Dynamic scan alert details")
