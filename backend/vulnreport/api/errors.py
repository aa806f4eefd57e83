"""
Exception handlers translating domain and upstream errors into HTTP responses.
"""

import logging

import httpx
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from vulnreport.core.exceptions import ConfigurationError, JobNotConfiguredError, NotFoundError

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    if isinstance(exc, JobNotConfiguredError):
        return await not_found_handler(request, exc)
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


async def upstream_error_handler(request: Request, exc: httpx.HTTPError) -> JSONResponse:
    content = {"detail": f"GitLab request failed: {exc}"}
    if isinstance(exc, httpx.HTTPStatusError):
        content["upstream_status"] = exc.response.status_code
    logger.warning(f"Upstream error on {request.url.path}: {exc}")
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(httpx.HTTPError, upstream_error_handler)
