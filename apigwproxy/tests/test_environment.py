from apigwproxy.core.environment import is_lambda


def test_is_lambda_follows_runtime_api_variable(monkeypatch):
    monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "127.0.0.1:9001")
    assert is_lambda() is True

    monkeypatch.delenv("AWS_LAMBDA_RUNTIME_API")
    assert is_lambda() is False


def test_empty_variable_counts_as_absent(monkeypatch):
    monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "")
    assert is_lambda() is False


def test_explicit_environment_and_variable():
    assert is_lambda({"_LAMBDA_SERVER_PORT": "3000"}, variable="_LAMBDA_SERVER_PORT") is True
    assert is_lambda({}, variable="_LAMBDA_SERVER_PORT") is False
    assert is_lambda({"AWS_LAMBDA_RUNTIME_API": "x"}) is True
