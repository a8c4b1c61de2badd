"""
apigwproxy

Run a standard request handler as an AWS Lambda function behind API Gateway
(REST API proxy integration) or as a conventional HTTP server, unmodified.
"""

from .core.adapter import ProxyAdapter
from .core.encoding import (
    has_content_encoding,
    resolve_encode_predicate,
    should_encode_body_ascii,
    should_encode_body_utf8,
)
from .core.environment import is_lambda
from .core.exceptions import MalformedBodyError, MalformedPathError, MalformedRequestError, ProxyError
from .core.headers import Headers, canonical_header_key
from .core.recorder import RecorderState, ResponseRecorder
from .core.request_builder import RequestBuilder, build_request
from .models import APIGatewayProxyRequest, APIGatewayProxyResponse, Request, get_proxy_request
from .runner import lambda_handler, run

__all__ = [
    "APIGatewayProxyRequest",
    "APIGatewayProxyResponse",
    "Headers",
    "MalformedBodyError",
    "MalformedPathError",
    "MalformedRequestError",
    "ProxyAdapter",
    "ProxyError",
    "RecorderState",
    "Request",
    "RequestBuilder",
    "ResponseRecorder",
    "build_request",
    "canonical_header_key",
    "get_proxy_request",
    "has_content_encoding",
    "is_lambda",
    "lambda_handler",
    "resolve_encode_predicate",
    "run",
    "should_encode_body_ascii",
    "should_encode_body_utf8",
]
