import logging

from fastapi import FastAPI

from vulnreport.api import health
from vulnreport.api.errors import register_exception_handlers
from vulnreport.api.v1.endpoints import findings, pipelines
from vulnreport.core.config import settings
from vulnreport.core.metrics import PrometheusMiddleware, metrics_response

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    Vulnerability Report API collecting security scanner artifacts from GitLab CI pipelines.

    ## Features
    * **Scanners**: Semgrep (SAST), Gitleaks (secrets), OWASP Dependency-Check and Trivy (SCA), OWASP ZAP (DAST).
    * **Unified Findings**: One schema with normalized severities and CWE enrichment.
    * **Deduplication**: Findings reported by several scanners are merged by CVE.
    """,
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
)

app.add_middleware(PrometheusMiddleware)
register_exception_handlers(app)

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(findings.router, prefix=f"{settings.API_V1_STR}/projects", tags=["findings"])
app.include_router(pipelines.router, prefix=f"{settings.API_V1_STR}", tags=["pipelines"])


@app.get("/metrics", include_in_schema=False)
async def metrics():
    return metrics_response()


@app.get("/")
async def root():
    return {"message": "Welcome to the Vulnerability Report API"}
