"""HTTP API for page rendering and scripted browser runs.

Endpoints:
    GET  /health      liveness probe
    POST /content     rendered HTML and title
    POST /screenshot  PNG/JPEG bytes
    POST /pdf         PDF bytes
    POST /run         scripted step sequence with a composite JSON result
"""

import json
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ValidationError

from render_api import __version__
from render_api.config import Config
from render_api.errors import (
    InvalidRequestError,
    InvalidStepsError,
    PayloadTooLargeError,
    RenderError,
)
from render_api.models.requests import ContentRequest, PdfRequest, RunRequest, ScreenshotRequest
from render_api.service import RenderService
from render_api.validation import require_target

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")

# Fixed message for 500 responses, per endpoint
FAILURE_MESSAGES = {
    "/content": "content failed",
    "/screenshot": "screenshot failed",
    "/pdf": "pdf failed",
    "/run": "run failed",
}


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _read_body(request: Request, max_bytes: int) -> dict[str, Any]:
    """Read the request body as a JSON object. An empty body is ``{}``."""
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLargeError(f"Request body exceeds {max_bytes} bytes")

    raw = await request.body()
    if len(raw) > max_bytes:
        raise PayloadTooLargeError(f"Request body exceeds {max_bytes} bytes")
    if not raw.strip():
        return {}

    try:
        body = json.loads(raw)
    except ValueError as e:
        raise InvalidRequestError("Request body is not valid JSON", cause=e) from e

    if body is None:
        return {}
    if not isinstance(body, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return body


def _parse(model: type[M], body: dict[str, Any]) -> M:
    """Validate the target first, then the rest of the body."""
    require_target(body.get("url"))
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise InvalidRequestError("Invalid request body", cause=e) from e


async def _execute(operation: Awaitable[T]) -> T:
    """Await a service call, turning unexpected faults into RenderError."""
    try:
        return await operation
    except RenderError:
        raise
    except Exception as e:
        logger.exception("Unexpected error while rendering")
        raise RenderError("Internal error", cause=e) from e


def create_app(config: Config | None = None, service: RenderService | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Service configuration (loaded from config.yml/env when None)
        service: Render service to use (built from ``config`` when None)
    """
    config = config or Config.load()
    service = service or RenderService(config)
    max_body = config.server.max_body_bytes

    app = FastAPI(title="render-api", version=__version__)
    app.state.config = config
    app.state.service = service

    @app.exception_handler(RenderError)
    async def render_error_handler(request: Request, exc: RenderError) -> JSONResponse:
        error = None
        if exc.status_code >= 500:
            error = FAILURE_MESSAGES.get(request.url.path, "request failed")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(error))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
        error = RenderError("Internal error", cause=exc)
        return JSONResponse(
            status_code=500,
            content=error.to_dict(FAILURE_MESSAGES.get(request.url.path, "request failed")),
        )

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"ok": True, "service": config.server.service_name}

    @app.post("/content")
    async def content(request: Request) -> JSONResponse:
        req = _parse(ContentRequest, await _read_body(request, max_body))
        result = await _execute(service.fetch_content(req))
        return JSONResponse(result.model_dump(mode="json"))

    @app.post("/screenshot")
    async def screenshot(request: Request) -> Response:
        req = _parse(ScreenshotRequest, await _read_body(request, max_body))
        image = await _execute(service.capture_screenshot(req))
        return Response(content=image.data, media_type=image.mime)

    @app.post("/pdf")
    async def pdf(request: Request) -> Response:
        req = _parse(PdfRequest, await _read_body(request, max_body))
        data = await _execute(service.render_pdf(req))
        return Response(content=data, media_type="application/pdf")

    @app.post("/run")
    async def run(request: Request) -> JSONResponse:
        body = await _read_body(request, max_body)
        require_target(body.get("url"))
        if "steps" in body and not isinstance(body["steps"], list):
            raise InvalidStepsError("steps must be a list")
        req = _parse(RunRequest, body)
        result = await _execute(service.run(req))
        return JSONResponse(result.to_response())

    return app


def main() -> None:
    """Main entry point."""
    import uvicorn

    config = Config.load()
    configure_logging(config.server.log_level)
    app = create_app(config)
    logger.info(
        "%s listening on %s:%d", config.server.service_name, config.server.host, config.server.port
    )
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_level=config.server.log_level.lower())


if __name__ == "__main__":
    main()
