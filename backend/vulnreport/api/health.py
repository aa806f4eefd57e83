from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from vulnreport.api import deps
from vulnreport.core.exceptions import ConfigurationError

router = APIRouter()


@router.get("/live", summary="Liveness Probe")
async def liveness():
    """
    Liveness probe to check if the application process is running.
    """
    return {"status": "alive"}


@router.get("/ready", summary="Readiness Probe")
async def readiness():
    """
    Readiness probe.
    Checks that the job table and the CWE reference list can be loaded.
    """
    components = {"job_table": "unknown", "cwe_catalog": "unknown"}
    is_ready = True

    try:
        job_table = deps.get_job_table()
        components["job_table"] = f"loaded ({len(job_table.projects)} projects)"
    except ConfigurationError as e:
        components["job_table"] = f"error: {e}"
        is_ready = False

    try:
        catalog = deps.get_cwe_catalog()
        components["cwe_catalog"] = f"loaded ({len(catalog)} entries)"
    except ConfigurationError as e:
        components["cwe_catalog"] = f"error: {e}"
        is_ready = False

    if is_ready:
        return {"status": "ready", "components": components}

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "components": components},
    )
