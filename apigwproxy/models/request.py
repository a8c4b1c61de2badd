"""
Standard request model.

The platform-independent request a handler is written against. It is the
same type whether the handler runs under Lambda or behind the HTTP server.
"""

import io
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List, Optional

from ..core.headers import Headers
from .aws_v1 import APIGatewayProxyRequest


@dataclass
class Request:
    """
    One request, created per invocation and discarded when the handler returns.

    Attributes:
        method: HTTP method (e.g. "GET")
        url: scheme-less request target, escaped path plus query
            (e.g. "/this/is/the/path?q=q1")
        path: decoded path
        raw_query: encoded query string without the leading "?"
        query: decoded query parameters, values in order
        headers: request headers
        body: readable binary stream; an empty body reads as b"" at once
        content_length: body length in bytes
        event: the API Gateway event this request was built from,
            None when served by the HTTP server
        lambda_context: the Lambda runtime context object, if any
    """

    method: str
    url: str
    path: str
    raw_query: str = ""
    query: Dict[str, List[str]] = field(default_factory=dict)
    headers: Headers = field(default_factory=Headers)
    body: BinaryIO = field(default_factory=io.BytesIO)
    content_length: int = 0
    event: Optional[APIGatewayProxyRequest] = None
    lambda_context: Optional[Any] = None

    def query_param(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value of a query parameter."""
        values = self.query.get(name)
        if not values:
            return default
        return values[0]


def get_proxy_request(request: Request) -> Optional[APIGatewayProxyRequest]:
    """
    Return the API Gateway event behind a request, or None if the request
    did not come from an API Gateway proxy Lambda invocation.
    """
    return request.event
