from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from vulnreport.api import deps
from vulnreport.models.finding import Finding
from vulnreport.services.aggregator import ReportAggregator, sort_by_severity, summarize_severities

router = APIRouter()

RESP_404 = {404: {"description": "Project, pipeline or job not found"}}
RESP_502 = {502: {"description": "GitLab request failed"}}


@router.get("/{project_id}/findings", response_model=List[Finding], responses={**RESP_404, **RESP_502})
async def get_findings(
    project_id: int,
    sort: Optional[Literal["severity"]] = Query(None, description="Order findings most severe first"),
    aggregator: ReportAggregator = Depends(deps.get_report_aggregator),
):
    """
    Get the deduplicated findings of all reporting jobs of the latest pipeline.
    """
    findings = await aggregator.gather_data(project_id)
    if sort == "severity":
        findings = sort_by_severity(findings)
    return findings


@router.get("/{project_id}/findings/summary", response_model=Dict[str, Any], responses={**RESP_404, **RESP_502})
async def get_findings_summary(
    project_id: int,
    aggregator: ReportAggregator = Depends(deps.get_report_aggregator),
):
    """
    Count the deduplicated findings of the latest pipeline per severity and per job.
    """
    findings = await aggregator.gather_data(project_id)
    by_job: Dict[str, int] = {}
    for finding in findings:
        by_job[finding.job] = by_job.get(finding.job, 0) + 1
    return {
        "total": len(findings),
        "severities": summarize_severities(findings),
        "jobs": by_job,
    }


@router.get("/{project_id}/findings/{job_name}", response_model=List[Finding], responses={**RESP_404, **RESP_502})
async def get_job_findings(
    project_id: int,
    job_name: str,
    aggregator: ReportAggregator = Depends(deps.get_report_aggregator),
):
    """
    Get the findings of a single scanner job of the latest pipeline.
    """
    findings = await aggregator.get_filtered_data(project_id, job_name)
    if findings is None:
        raise HTTPException(status_code=404, detail=f"No report parser for job {job_name}")
    return findings
