from typing import Any, Dict

import pytest

from apigwproxy.core import request_context


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Tests run outside Lambda unless they opt in."""
    monkeypatch.delenv("AWS_LAMBDA_RUNTIME_API", raising=False)
    request_context.clear_request_id()
    yield
    request_context.clear_request_id()


@pytest.fixture
def make_event():
    """Factory for API Gateway v1 proxy events."""

    def _make_event(**overrides: Any) -> Dict[str, Any]:
        event: Dict[str, Any] = {
            "resource": "/{proxy+}",
            "path": "/test",
            "httpMethod": "GET",
            "headers": None,
            "multiValueHeaders": None,
            "queryStringParameters": None,
            "multiValueQueryStringParameters": None,
            "requestContext": {
                "accountId": "123456789012",
                "requestId": "req-abc123",
                "stage": "prod",
                "identity": {"sourceIp": "127.0.0.1"},
            },
            "body": None,
            "isBase64Encoded": False,
        }
        event.update(overrides)
        return event

    return _make_event
