"""HTTP surface: optimize a file list and preview a reorganization."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gdrivereorg.compare import compare
from gdrivereorg.config import Settings, get_settings
from gdrivereorg.errors import (
    GDriveReorgError,
    InvalidInputError,
    PlanConfigurationError,
    describe_error,
)
from gdrivereorg.models import FileRecord
from gdrivereorg.optimizer import StructureOptimizer
from gdrivereorg.plan import EmptyParentPolicy, diff
from gdrivereorg.tree import normalize_dicts
from gdrivereorg.util.time import now_utc, to_rfc3339

logger = logging.getLogger(__name__)

SERVICE_NAME: str = "Drive Structure Optimization API"


def create_app(
    settings: Optional[Settings] = None,
    optimizer: Optional[StructureOptimizer] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Serve with `uvicorn --factory gdrivereorg.server:create_app`.
    """
    settings = settings or get_settings()
    optimizer = optimizer or StructureOptimizer(settings)

    app = FastAPI(title=SERVICE_NAME, version=settings.service_version)
    app.state.settings = settings
    app.state.optimizer = optimizer

    @app.post("/api/optimize")
    async def optimize(request: Request) -> JSONResponse:
        try:
            records = _records_from_body(await _json_body(request), "files")
        except InvalidInputError as exc:
            return _invalid_request(str(exc))

        logger.info("Optimize request for %d files", len(records))
        try:
            result = await optimizer.optimize(records)
        except GDriveReorgError as exc:
            logger.error("Optimization failed: %s", exc)
            return JSONResponse(
                status_code=500,
                content={
                    "error": describe_error(exc).message,
                    "code": "AI_PROCESSING_ERROR",
                    "details": str(exc),
                },
            )
        return JSONResponse(content=result.to_dict())

    @app.get("/api/optimize")
    async def status() -> dict[str, Any]:
        return {
            "status": "active",
            "service": SERVICE_NAME,
            "version": settings.service_version,
            "timestamp": to_rfc3339(now_utc()),
            "endpoint": "/api/optimize",
            "hasApiKey": settings.has_api_key,
            "fallbackMode": "Workflow API" if optimizer.has_workflow else "Local Simulation",
        }

    @app.post("/api/compare")
    async def preview(request: Request) -> JSONResponse:
        try:
            body = await _json_body(request)
            original = _records_from_body(body, "original")
            proposed = _records_from_body(body, "proposed")
        except InvalidInputError as exc:
            return _invalid_request(str(exc))

        try:
            plan = diff(
                original,
                proposed,
                empty_parent_policy=EmptyParentPolicy(settings.empty_parent_policy),
            )
        except PlanConfigurationError as exc:
            return JSONResponse(
                status_code=400,
                content={"error": str(exc), "code": "INVALID_PLAN", "details": exc.details},
            )

        report = compare(original, proposed)
        return JSONResponse(content={"comparison": report.to_dict(), "plan": plan.to_dict()})

    return app


async def _json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        raise InvalidInputError("Request body is not valid JSON", cause=exc) from exc


def _records_from_body(body: Any, key: str) -> list[FileRecord]:
    items = body.get(key) if isinstance(body, dict) else None
    if not isinstance(items, list):
        raise InvalidInputError(f"Invalid request: a '{key}' array is required")
    return normalize_dicts(items)


def _invalid_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message, "code": "INVALID_REQUEST"})
