"""
Lambda proxy adapter.

Runs a standard handler inside an AWS Lambda function fed by API Gateway
v1 proxy events:

    event -> request_received -> Request -> handler(request, recorder)
          -> finalize -> sending_response -> response dict

Usage:
    def app(request, writer):
        writer.headers.set("Content-Type", "text/plain")
        writer.write(b"hello world\\n")

    handler = ProxyAdapter(app)  # Lambda handler: "module.handler"
"""

import logging
from typing import Any, Callable, Dict, Optional, Union

from ..config import config
from ..models.aws_v1 import APIGatewayProxyRequest, APIGatewayProxyResponse
from ..models.request import Request
from .encoding import ShouldEncodeBody, resolve_encode_predicate
from .recorder import ResponseRecorder
from .request_builder import RequestBuilder
from .request_context import clear_request_id, generate_request_id, set_request_id

logger = logging.getLogger("apigwproxy.adapter")

Handler = Callable[[Request, ResponseRecorder], Any]
RequestReceivedHook = Callable[[APIGatewayProxyRequest], None]
SendingResponseHook = Callable[[APIGatewayProxyRequest, APIGatewayProxyResponse], None]


def _request_received_noop(event: APIGatewayProxyRequest) -> None:
    pass


def _sending_response_noop(event: APIGatewayProxyRequest, response: APIGatewayProxyResponse) -> None:
    pass


class ProxyAdapter:
    """
    Adapts a standard handler to API Gateway proxy invocations.

    Hooks are fixed at construction and only read afterwards, so one adapter
    can serve concurrent invocations.

    Args:
        handler: callable taking (request, writer)
        request_received: called with the event before the request is built;
            may mutate the event
        sending_response: called with the event and the finalized response;
            may mutate the response before it is returned
        should_encode_body: predicate deciding base64 transport of the body;
            defaults to the configured BODY_ENCODING_POLICY
        request_builder: builder used to convert events
    """

    def __init__(
        self,
        handler: Handler,
        request_received: Optional[RequestReceivedHook] = None,
        sending_response: Optional[SendingResponseHook] = None,
        should_encode_body: Optional[ShouldEncodeBody] = None,
        request_builder: Optional[RequestBuilder] = None,
    ):
        self.handler = handler
        self.request_received = request_received or _request_received_noop
        self.sending_response = sending_response or _sending_response_noop
        self.should_encode_body = should_encode_body or resolve_encode_predicate(
            config.BODY_ENCODING_POLICY
        )
        self.request_builder = request_builder or RequestBuilder()

    def handle(
        self,
        event: Union[APIGatewayProxyRequest, Dict[str, Any]],
        lambda_context: Optional[Any] = None,
    ) -> APIGatewayProxyResponse:
        """
        Process one invocation.

        Raises:
            pydantic.ValidationError: event does not have the proxy event shape
            MalformedPathError / MalformedBodyError: the request could not be
                built; the handler is not called
        """
        if not isinstance(event, APIGatewayProxyRequest):
            event = APIGatewayProxyRequest.model_validate(event)

        request_id = event.requestContext.requestId or getattr(lambda_context, "aws_request_id", None)
        if request_id:
            set_request_id(request_id)
        else:
            generate_request_id()

        try:
            self.request_received(event)
            request = self.request_builder.build(event, lambda_context)
            logger.debug(
                f"Handling {request.method} {request.url}",
                extra={"method": request.method, "url": request.url},
            )

            recorder = ResponseRecorder()
            self.handler(request, recorder)
            response = recorder.finalize(self.should_encode_body)

            self.sending_response(event, response)
            logger.debug(
                f"Responding {response.statusCode}",
                extra={
                    "status_code": response.statusCode,
                    "is_base64_encoded": response.isBase64Encoded,
                },
            )
            return response
        finally:
            clear_request_id()

    def __call__(self, event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
        """Lambda entry point."""
        return self.handle(event, context).model_dump(exclude_none=True)
