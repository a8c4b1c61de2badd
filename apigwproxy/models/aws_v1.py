# apigwproxy/models/aws_v1.py

"""
Pydantic models for AWS API Gateway v1 (REST API) proxy integration values.

Reference: https://docs.aws.amazon.com/apigateway/latest/developerguide/set-up-lambda-proxy-integrations.html

APIGatewayProxyRequest is the event a Lambda function receives;
APIGatewayProxyResponse is the value it returns. Field names follow the
wire format so events validate directly and responses dump directly.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ApiGatewayIdentity(BaseModel):
    """API Gateway Identity object."""

    sourceIp: Optional[str] = None
    userAgent: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class ApiGatewayRequestContext(BaseModel):
    """
    API Gateway Request Context object.

    Opaque to the adapter: unknown keys are kept and passed through unchanged.
    """

    accountId: Optional[str] = None
    resourceId: Optional[str] = None
    stage: Optional[str] = None
    requestId: Optional[str] = None
    identity: Optional[ApiGatewayIdentity] = None
    resourcePath: Optional[str] = None
    httpMethod: Optional[str] = None
    apiId: Optional[str] = None
    path: Optional[str] = None
    protocol: Optional[str] = None
    authorizer: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="allow")


class APIGatewayProxyRequest(BaseModel):
    """
    AWS API Gateway Proxy Integration (v1) Event Structure

    Every map is optional: API Gateway sends null for absent headers and
    query parameters, which the adapter treats as "not present".
    """

    resource: Optional[str] = None
    path: str = ""
    httpMethod: str = ""
    headers: Optional[Dict[str, str]] = None
    multiValueHeaders: Optional[Dict[str, List[str]]] = None
    queryStringParameters: Optional[Dict[str, str]] = None
    multiValueQueryStringParameters: Optional[Dict[str, List[str]]] = None
    pathParameters: Optional[Dict[str, str]] = None
    stageVariables: Optional[Dict[str, str]] = None
    requestContext: ApiGatewayRequestContext = Field(default_factory=ApiGatewayRequestContext)
    body: Optional[str] = None
    isBase64Encoded: bool = False

    model_config = ConfigDict(extra="allow")

    @field_validator("path", "httpMethod", "requestContext", "isBase64Encoded", mode="before")
    @classmethod
    def _null_as_default(cls, value, info):
        """JSON null reads as the field default, like an absent key."""
        if value is None:
            if info.field_name == "requestContext":
                return ApiGatewayRequestContext()
            return cls.model_fields[info.field_name].default
        return value


class APIGatewayProxyResponse(BaseModel):
    """
    AWS API Gateway Proxy Integration (v1) Response Structure

    multiValueHeaders is only populated for header names carrying more
    than one value. Use model_dump(exclude_none=True) to convert to a dict.
    """

    statusCode: int = 200
    headers: Dict[str, str] = Field(default_factory=dict)
    multiValueHeaders: Optional[Dict[str, List[str]]] = None
    body: str = ""
    isBase64Encoded: bool = False
