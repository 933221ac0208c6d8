"""Global error handlers ensuring request_id is included in JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from advocates_api.api.request_id import get_request_id
from advocates_api.domain.advocates.errors import AdvocateSearchError, SearchUnavailableError, SearchValidationError

logger = logging.getLogger(__name__)


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
        rid = get_request_id(request)
        payload = {"detail": exc.detail, "request_id": rid}
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(AdvocateSearchError)
    async def search_exc_handler(request: Request, exc: AdvocateSearchError):  # type: ignore[override]
        rid = get_request_id(request)
        payload: dict[str, object] = {"detail": exc.detail, "request_id": rid}
        if isinstance(exc, SearchValidationError):
            payload["errors"] = exc.error_payload()
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(Exception)
    async def unhandled_exc_handler(request: Request, exc: Exception):  # type: ignore[override]
        rid = get_request_id(request)
        logger.exception("unhandled error path=%s request_id=%s", request.url.path, rid, exc_info=exc)
        generic = SearchUnavailableError()
        return JSONResponse(status_code=generic.status_code, content={"detail": generic.detail, "request_id": rid})
