"""
Data model definitions package.

Aggregates the proxy event models and the standard request.
"""

from .aws_v1 import (
    ApiGatewayIdentity,
    ApiGatewayRequestContext,
    APIGatewayProxyRequest,
    APIGatewayProxyResponse,
)
from .request import Request, get_proxy_request

__all__ = [
    "ApiGatewayIdentity",
    "ApiGatewayRequestContext",
    "APIGatewayProxyRequest",
    "APIGatewayProxyResponse",
    "Request",
    "get_proxy_request",
]
