"""
Request builder.

Converts an API Gateway v1 proxy event into the standard Request a handler
is written against: path and query merged into a request target, body
materialized as a stream, headers populated from single and multi-value maps.
"""

import base64
import binascii
import io
import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import SplitResult, parse_qsl, quote, unquote, urlencode, urlsplit, urlunsplit

from ..models.aws_v1 import APIGatewayProxyRequest
from ..models.request import Request
from .exceptions import MalformedBodyError, MalformedPathError
from .headers import Headers

logger = logging.getLogger("apigwproxy.request_builder")

_CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")
_LONE_SURROGATE_PATTERN = re.compile("[\ud800-\udfff]")

# Characters left as-is when escaping a path (sub-delims, ":", "@", "/", and
# "%" for escapes that are already present).
_PATH_SAFE = "/%:@!$&'()*+,;=~"


class RequestBuilder:
    """Builds a Request from an API Gateway v1 proxy event."""

    def build(self, event: APIGatewayProxyRequest, lambda_context: Optional[Any] = None) -> Request:
        """
        Build a Request from an event.

        Raises:
            MalformedPathError: event.path is not a valid URL reference
            MalformedBodyError: isBase64Encoded is set but body is not base64
        """
        parts = self._parse_path(event.path or "/")
        query = self._merge_query(parts.query, event)
        raw_query = urlencode([(key, value) for key in sorted(query) for value in query[key]])
        escaped_path = quote(parts.path, safe=_PATH_SAFE)
        url = urlunsplit((parts.scheme, parts.netloc, escaped_path, raw_query, parts.fragment))

        body = self._decode_body(event)
        headers = Headers.from_maps(event.headers, event.multiValueHeaders)

        return Request(
            method=(event.httpMethod or "GET").upper(),
            url=url,
            path=unquote(parts.path),
            raw_query=raw_query,
            query=query,
            headers=headers,
            body=io.BytesIO(body),
            content_length=len(body),
            event=event,
            lambda_context=lambda_context,
        )

    def _parse_path(self, path: str) -> SplitResult:
        cause: Optional[Exception] = None
        escape = _BAD_ESCAPE_PATTERN.search(path)
        if _CONTROL_CHAR_PATTERN.search(path):
            cause = ValueError("invalid control character in URL")
        elif escape:
            cause = ValueError(f"invalid URL escape {path[escape.start():escape.start() + 3]!r}")
        else:
            try:
                return urlsplit(path)
            except ValueError as e:
                cause = e

        logger.warning(
            "Rejecting event with malformed path",
            extra={"path": path, "error": str(cause)},
        )
        raise MalformedPathError(path, cause) from cause

    def _merge_query(self, embedded: str, event: APIGatewayProxyRequest) -> Dict[str, List[str]]:
        """
        Merge the query embedded in the path with the event's query maps.

        Single-value parameters replace embedded values for the same key;
        multi-value parameters replace both.
        """
        query: Dict[str, List[str]] = {}
        for key, value in parse_qsl(embedded, keep_blank_values=True):
            query.setdefault(key, []).append(value)

        for key, value in (event.queryStringParameters or {}).items():
            query[key] = [value]

        for key, values in (event.multiValueQueryStringParameters or {}).items():
            if values:
                query[key] = list(values)

        return query

    def _decode_body(self, event: APIGatewayProxyRequest) -> bytes:
        if not event.body:
            return b""

        if not event.isBase64Encoded:
            # Unpaired surrogates from JSON escapes like \ud800 become U+FFFD.
            return _LONE_SURROGATE_PATTERN.sub("\ufffd", event.body).encode("utf-8")

        # Line breaks in wrapped base64 are skipped; anything else outside the alphabet is an error.
        encoded = event.body.replace("\r", "").replace("\n", "")
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.warning(
                "Rejecting event with invalid base64 body",
                extra={"path": event.path, "body_length": len(event.body)},
            )
            raise MalformedBodyError(e) from e


def build_request(event: APIGatewayProxyRequest, lambda_context: Optional[Any] = None) -> Request:
    """Build a Request from an event with the default builder."""
    return RequestBuilder().build(event, lambda_context)
