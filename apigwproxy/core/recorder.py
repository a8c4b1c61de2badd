"""
Response recorder.

An in-memory response writer. Handlers set headers, write a status once
and write body bytes; the recorder captures all of it and, once the
handler has returned, turns it into an API Gateway proxy response.

State machine:
    OPEN       headers mutable, nothing committed
    COMMITTED  status fixed, headers snapshotted (first write_header or write)
    FINALIZED  body transport decided, response built (once per invocation)
"""

import base64
import enum
import logging
from typing import Dict, List, Optional, Union

from ..models.aws_v1 import APIGatewayProxyResponse
from .encoding import ShouldEncodeBody, should_encode_body_ascii
from .headers import Headers

logger = logging.getLogger("apigwproxy.recorder")

BytesLike = Union[bytes, bytearray, memoryview]


class RecorderState(str, enum.Enum):
    OPEN = "open"
    COMMITTED = "committed"
    FINALIZED = "finalized"


class ResponseRecorder:
    """Captures a handler's response in memory."""

    def __init__(self):
        self._headers = Headers()
        self._committed_headers: Optional[Headers] = None
        self._status_code: Optional[int] = None
        self._body = bytearray()
        self._state = RecorderState.OPEN

    @property
    def headers(self) -> Headers:
        """
        Pending response headers.

        Changes made after the response is committed are not sent.
        """
        return self._headers

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def status_code(self) -> Optional[int]:
        return self._status_code

    @property
    def committed_headers(self) -> Optional[Headers]:
        """Headers as they were when the response was committed."""
        return self._committed_headers

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def write_header(self, status_code: int) -> None:
        """Commit the status and snapshot headers. Only the first call counts."""
        if self._state is not RecorderState.OPEN:
            logger.debug(
                "Ignoring superfluous write_header call",
                extra={"status_code": status_code, "committed_status": self._status_code},
            )
            return

        self._status_code = int(status_code)
        self._committed_headers = self._headers.copy()
        self._state = RecorderState.COMMITTED

    def write(self, data: BytesLike) -> int:
        """Append body bytes, committing with 200 first if nothing was committed."""
        if self._state is RecorderState.FINALIZED:
            raise RuntimeError("response already finalized")
        if self._state is RecorderState.OPEN:
            self.write_header(200)

        self._body.extend(data)
        return len(data)

    def commit(self) -> None:
        """Commit with 200 if the handler never wrote a status or body."""
        if self._state is RecorderState.OPEN:
            self.write_header(200)

    def finalize(self, should_encode_body: ShouldEncodeBody = should_encode_body_ascii) -> APIGatewayProxyResponse:
        """
        Build the API Gateway proxy response.

        Args:
            should_encode_body: decides whether the body is sent as base64

        Returns:
            APIGatewayProxyResponse with the body encoded per the predicate
        """
        if self._state is RecorderState.FINALIZED:
            raise RuntimeError("response already finalized")
        self.commit()

        headers, multi_headers = self._split_headers(self._committed_headers)
        response = APIGatewayProxyResponse(
            statusCode=self._status_code,
            headers=headers,
            multiValueHeaders=multi_headers or None,
        )

        body = bytes(self._body)
        if should_encode_body(response, body):
            response.body = base64.b64encode(body).decode("ascii")
            response.isBase64Encoded = True
        else:
            # A custom predicate may pick text for non-UTF-8 bytes; those are replaced.
            response.body = body.decode("utf-8", errors="replace")
            response.isBase64Encoded = False

        self._state = RecorderState.FINALIZED
        return response

    @staticmethod
    def _split_headers(headers: Headers):
        """
        Single-valued names go only to the single map. Multi-valued names put
        their first value in the single map and every value in the multi map.
        """
        single: Dict[str, str] = {}
        multi: Dict[str, List[str]] = {}
        for name, values in headers.to_multi_dict().items():
            if not values:
                continue
            single[name] = values[0]
            if len(values) > 1:
                multi[name] = values
        return single, multi
