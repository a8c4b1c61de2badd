from unittest.mock import patch

from apigwproxy.core.adapter import ProxyAdapter
from apigwproxy.runner import lambda_handler, run


def hello(request, writer):
    writer.write(b"hello")


def test_run_inside_lambda_returns_adapter(monkeypatch):
    monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "127.0.0.1:9001")

    with patch("apigwproxy.main.serve") as serve, patch("apigwproxy.runner.setup_logging"):
        handler = run(hello)

    serve.assert_not_called()
    assert isinstance(handler, ProxyAdapter)
    assert handler({"path": "/", "httpMethod": "GET"})["body"] == "hello"


def test_run_outside_lambda_serves_http():
    with patch("apigwproxy.main.serve") as serve:
        result = run(hello)

    assert result is None
    serve.assert_called_once_with(hello, None)


def test_lambda_handler_passes_hooks():
    def received(event):
        pass

    adapter = lambda_handler(hello, request_received=received)

    assert adapter.handler is hello
    assert adapter.request_received is received
