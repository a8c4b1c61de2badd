"""
Response body transport policies.

API Gateway carries the response body as a string. A predicate decides,
once per response, whether the raw body bytes are sent as base64.
Predicates receive the response built so far (status and headers) and
the raw body bytes.
"""

from typing import Callable, Dict, Mapping

from ..models.aws_v1 import APIGatewayProxyResponse

ShouldEncodeBody = Callable[[APIGatewayProxyResponse, bytes], bool]

# Bytes that may be sent as literal text: \t, \n, \r and 0x20-0x7f.
_TEXT_SAFE_BYTES = frozenset(b"\t\n\r" + bytes(range(0x20, 0x80)))


def has_content_encoding(headers: Mapping[str, str]) -> bool:
    """True when a Content-Encoding other than empty or "identity" is set."""
    for name, value in headers.items():
        if name.lower() == "content-encoding":
            encoding = value.strip().lower()
            if encoding and encoding != "identity":
                return True
    return False


def should_encode_body_ascii(response: APIGatewayProxyResponse, body: bytes) -> bool:
    """
    Default policy.

    Encoded content (gzip, br, ...) is always binary. Otherwise any byte
    outside tab, newline, carriage return and 0x20-0x7f forces base64,
    including the bytes of valid multi-byte UTF-8 text.
    """
    if has_content_encoding(response.headers):
        return True
    return any(b not in _TEXT_SAFE_BYTES for b in body)


def should_encode_body_utf8(response: APIGatewayProxyResponse, body: bytes) -> bool:
    """
    Send any valid UTF-8 body as text, regardless of content type.

    A body starting with a UTF-8 byte order mark is still valid UTF-8 and
    is sent as text, BOM included.
    """
    if has_content_encoding(response.headers):
        return True
    try:
        body.decode("utf-8")
    except UnicodeDecodeError:
        return True
    return False


ENCODING_POLICIES: Dict[str, ShouldEncodeBody] = {
    "ascii": should_encode_body_ascii,
    "utf8": should_encode_body_utf8,
}


def resolve_encode_predicate(policy: str) -> ShouldEncodeBody:
    """Return the predicate registered for a policy name."""
    try:
        return ENCODING_POLICIES[policy]
    except KeyError:
        raise ValueError(
            f"Unknown body encoding policy: {policy!r} (expected one of {sorted(ENCODING_POLICIES)})"
        ) from None
