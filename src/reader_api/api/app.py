"""FastAPI application exposing ``POST /api/reader``.

Example:
    uvicorn reader_api.api.app:create_app --factory
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from reader_api.api.models import ErrorResponse, ReaderRequest, ReaderResponse
from reader_api.config import ReaderConfig, get_config
from reader_api.core.context import accept_request_id, request_context
from reader_api.core.errors import error_to_status
from reader_api.core.reader import ReaderPipeline

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def create_app(
    config: Optional[ReaderConfig] = None,
    pipeline: Optional[ReaderPipeline] = None,
) -> FastAPI:
    """Build the application around one pipeline instance."""
    if config is None:
        config = get_config()
        config.setup_logging()
    app = FastAPI(title="reader-api", version=config.server_version)
    app.state.config = config
    app.state.pipeline = pipeline or ReaderPipeline(config)

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next):
        rid = accept_request_id(request.headers.get(REQUEST_ID_HEADER))
        with request_context(rid):
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response

    @app.post(
        "/api/reader",
        response_model=ReaderResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def read(request: Request):
        # Body is parsed by hand so every malformed input gets the same 400
        try:
            body = await request.json()
        except ValueError:
            body = None

        try:
            payload = ReaderRequest.from_body(body)
            result = await app.state.pipeline.process(url=payload.url, text=payload.text)
        except Exception as e:
            status, content = error_to_status(e)
            logger.info("Reader request failed with %d: %s", status, content["error"])
            return JSONResponse(status_code=status, content=content)

        logger.info(
            "Reader request done in %.0fms (summary_ok=%s, truncated=%s)",
            result.elapsed_ms,
            result.summary_ok,
            result.truncated,
        )
        return result.to_dict()

    return app
