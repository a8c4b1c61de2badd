"""
HTTP server surface.

Serves a standard handler from a conventional, always-listening server
(FastAPI on uvicorn). Every request is converted to the same Request type
the Lambda adapter builds and run against a ResponseRecorder, so a handler
behaves identically on both surfaces.
"""

import io
import logging
import time
from typing import List, Optional
from urllib.parse import parse_qsl, quote

import uvicorn
from fastapi import FastAPI
from fastapi import Request as HttpRequest
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from .config import ProxySettings, config
from .core.adapter import Handler
from .core.headers import Headers
from .core.logging_config import setup_logging
from .core.recorder import ResponseRecorder
from .core.request_context import clear_request_id, generate_request_id
from .exceptions import register_exception_handlers
from .models.request import Request

logger = logging.getLogger("apigwproxy.main")

_METHODS: List[str] = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def request_from_http(http_request: HttpRequest, body: bytes) -> Request:
    """
    Convert an incoming HTTP request into a standard Request.

    The raw (still escaped) path and query are kept as the request target.
    """
    raw_path = http_request.scope.get("raw_path")
    if raw_path:
        escaped_path = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        escaped_path = quote(http_request.url.path, safe="/%:@!$&'()*+,;=~")

    raw_query = http_request.url.query
    url = f"{escaped_path}?{raw_query}" if raw_query else escaped_path

    query = {}
    for key, value in parse_qsl(raw_query, keep_blank_values=True):
        query.setdefault(key, []).append(value)

    return Request(
        method=http_request.method,
        url=url,
        path=http_request.url.path,
        raw_query=raw_query,
        query=query,
        headers=Headers(http_request.headers.items()),
        body=io.BytesIO(body),
        content_length=len(body),
    )


def response_from_recorder(recorder: ResponseRecorder) -> Response:
    """Build an HTTP response from the recorder's committed state and raw body."""
    recorder.commit()
    headers = recorder.committed_headers

    response = Response(content=recorder.body, status_code=recorder.status_code)
    if "Content-Length" in headers:
        del response.headers["content-length"]
    for name, value in headers.multi_items():
        response.headers.append(name, value)
    return response


def create_app(handler: Handler, settings: Optional[ProxySettings] = None) -> FastAPI:
    """
    Create a FastAPI app that routes every path and method to the handler.
    """
    settings = settings or config
    app = FastAPI(title="apigwproxy", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    register_exception_handlers(app)

    @app.middleware("http")
    async def request_context_middleware(http_request: HttpRequest, call_next):
        """
        Middleware for request id binding and structured access logging.
        """
        start_time = time.perf_counter()
        req_id = generate_request_id()
        try:
            response = await call_next(http_request)
        finally:
            clear_request_id()

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{http_request.method} {http_request.url.path} {response.status_code}",
            extra={
                "aws_request_id": req_id,
                "method": http_request.method,
                "url_path": http_request.url.path,
                "status_code": response.status_code,
                "latency_ms": round(duration_ms, 2),
            },
        )
        return response

    @app.api_route("/{full_path:path}", methods=_METHODS, include_in_schema=False)
    async def dispatch(http_request: HttpRequest) -> Response:
        body = await http_request.body()
        request = request_from_http(http_request, body)
        recorder = ResponseRecorder()
        await run_in_threadpool(handler, request, recorder)
        return response_from_recorder(recorder)

    return app


def serve(handler: Handler, settings: Optional[ProxySettings] = None) -> None:
    """Run the handler behind uvicorn on BIND_ADDR until interrupted."""
    settings = settings or config
    setup_logging(settings.LOG_CONFIG_PATH)
    app = create_app(handler, settings)

    logger.info(f"Serving on {settings.BIND_ADDR}")
    uvicorn.run(app, host=settings.bind_host, port=settings.bind_port, log_config=None)
