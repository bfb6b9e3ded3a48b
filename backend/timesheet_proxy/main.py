from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import settings
from .relay import NotConfiguredError, RelayError, UpstreamResponse, decode_body, forward_get, forward_post, probe
from .schemas import HealthResponse, ProxyActionRequest, ProxyErrorResponse

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


def _error(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = ProxyErrorResponse(error=error, details=details)
    return JSONResponse(body.model_dump(exclude_none=True), status_code=status_code)


def _relay(upstream: UpstreamResponse) -> Response:
    return Response(content=upstream.body, status_code=upstream.status_code, media_type=upstream.content_type)


@app.options("/api/proxy", status_code=status.HTTP_204_NO_CONTENT)
def proxy_options() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/api/proxy")
def proxy_get(request: Request) -> Response:
    try:
        upstream = forward_get(settings, request.url.query)
    except NotConfiguredError as exc:
        logger.error("Proxy called without upstream: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    except RelayError as exc:
        logger.error("Proxy GET failed: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "proxy error", str(exc))
    return _relay(upstream)


@app.post("/api/proxy")
async def proxy_post(request: Request) -> Response:
    payload = decode_body(await request.body())
    if payload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Request body must be a JSON object")
    try:
        action = ProxyActionRequest.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.errors(include_url=False, include_context=False)) from exc
    logger.debug("Relaying action %s", action.action)
    try:
        upstream = await run_in_threadpool(forward_post, settings, payload)
    except NotConfiguredError as exc:
        logger.error("Proxy called without upstream: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    except RelayError as exc:
        logger.error("Proxy POST failed: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "proxy error", str(exc))
    return _relay(upstream)


@app.get("/api/health", response_model=HealthResponse, response_model_exclude_none=True)
def health() -> HealthResponse:
    return HealthResponse(**probe(settings))
