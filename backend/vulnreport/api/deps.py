from functools import lru_cache

from fastapi import Depends

from vulnreport.core.config import settings
from vulnreport.services.aggregator import ReportAggregator
from vulnreport.services.artifacts import ArtifactResolver
from vulnreport.services.gitlab import GitLabService
from vulnreport.services.lookup_tables import CweCatalog, JobTable
from vulnreport.services.registry import ParserRegistry


@lru_cache
def get_job_table() -> JobTable:
    return JobTable.from_file(settings.ARTIFACT_PATHS_FILE)


@lru_cache
def get_cwe_catalog() -> CweCatalog:
    return CweCatalog.from_file(settings.CWE_LIST_FILE)


def get_gitlab_service() -> GitLabService:
    return GitLabService.from_settings(settings)


def get_parser_registry(cwe_catalog: CweCatalog = Depends(get_cwe_catalog)) -> ParserRegistry:
    return ParserRegistry.with_defaults(cwe_catalog)


def get_artifact_resolver(
    gitlab: GitLabService = Depends(get_gitlab_service),
    job_table: JobTable = Depends(get_job_table),
) -> ArtifactResolver:
    return ArtifactResolver(gitlab, job_table)


def get_report_aggregator(
    resolver: ArtifactResolver = Depends(get_artifact_resolver),
    registry: ParserRegistry = Depends(get_parser_registry),
) -> ReportAggregator:
    return ReportAggregator(resolver, registry)
