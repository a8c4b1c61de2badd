"""
Where: apigwproxy/exceptions.py
What: Exception handler registration for the HTTP server.
Why: Keep error handling setup isolated from route and lifecycle concerns.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger("apigwproxy.exceptions")


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler for exceptions raised by the application handler.
    """
    logger.error(
        f"Handler raised: {exc}",
        exc_info=True,
        extra={
            "url_path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error", "detail": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Exception, global_exception_handler)
