"""
Surface selection.

A program that should behave as a Lambda function inside AWS and as an
HTTP server everywhere else:

    # app.py
    from apigwproxy import run

    def hello(request, writer):
        writer.write(b"hello world\\n")

    handler = run(hello)  # Lambda handler setting: "app.handler"

Inside Lambda, run() returns the adapter for the runtime to invoke.
Elsewhere it blocks serving HTTP.
"""

import logging
from typing import Optional

from .config import ProxySettings
from .core.adapter import Handler, ProxyAdapter
from .core.environment import is_lambda
from .core.logging_config import setup_logging

logger = logging.getLogger("apigwproxy.runner")


def lambda_handler(handler: Handler, **hooks) -> ProxyAdapter:
    """
    Wrap a handler for the Lambda runtime.

    Keyword arguments are passed to ProxyAdapter (request_received,
    sending_response, should_encode_body).
    """
    return ProxyAdapter(handler, **hooks)


def run(handler: Handler, settings: Optional[ProxySettings] = None, **hooks) -> Optional[ProxyAdapter]:
    """
    Start the handler on whichever surface the process runs on.

    Returns the ProxyAdapter inside Lambda; otherwise serves HTTP and
    returns None once the server stops.
    """
    if is_lambda(variable=settings.LAMBDA_DETECT_ENV_VAR if settings else None):
        setup_logging(settings.LOG_CONFIG_PATH if settings else None)
        logger.info("Running as a Lambda function")
        return lambda_handler(handler, **hooks)

    from .main import serve

    serve(handler, settings)
    return None
