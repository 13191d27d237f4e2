"""Tests for the JSON-RPC transport."""

from unittest.mock import patch

import pytest
import requests

from fbafileutil.errors import RemoteError, TransportError
from fbafileutil.rpc_client import RpcClient


@pytest.fixture
def mock_post():
    with patch("fbafileutil.rpc_client.requests.post") as post:
        yield post


def test_request_envelope_and_headers(clean_env, mock_post, response_factory):
    clean_env.setenv("KBRPC_TAG", "tag-1")
    clean_env.setenv("KBRPC_METADATA", '{"run_id": "r1"}')
    clean_env.setenv("KBRPC_ERROR_DEST", "errors@example.org")
    mock_post.return_value = response_factory({"version": "1.1", "result": ["ok"]})

    client = RpcClient("http://svc.example.org/rpc", token="secret", timeout=12)
    result = client.call_method("Svc.method", [{"a": 1}], {"service_ver": "dev"})

    assert result == ["ok"]
    url = mock_post.call_args[0][0]
    kwargs = mock_post.call_args[1]
    assert url == "http://svc.example.org/rpc"
    assert kwargs["timeout"] == 12
    body = kwargs["json"]
    assert body["method"] == "Svc.method"
    assert body["params"] == [{"a": 1}]
    assert body["version"] == "1.1"
    assert body["context"] == {"service_ver": "dev"}
    assert body["id"].isdigit()
    headers = kwargs["headers"]
    assert headers["Kbrpc-Tag"] == "tag-1"
    assert headers["Kbrpc-Metadata"] == '{"run_id": "r1"}'
    assert headers["Kbrpc-Errordest"] == "errors@example.org"
    assert headers["Authorization"] == "secret"


def test_default_tag_and_optional_headers(clean_env, mock_post, response_factory):
    mock_post.return_value = response_factory({"result": []})
    client = RpcClient("http://svc")
    client.call_method("Svc.ver", [])

    headers = mock_post.call_args[1]["headers"]
    assert headers["Kbrpc-Tag"].startswith("C:")
    assert "Kbrpc-Metadata" not in headers
    assert "Kbrpc-Errordest" not in headers
    assert "Authorization" not in headers
    assert "context" not in mock_post.call_args[1]["json"]


def test_http_timeout_from_environment(clean_env):
    clean_env.setenv("CDMI_TIMEOUT", "90")
    assert RpcClient("http://svc").timeout == 90.0
    clean_env.delenv("CDMI_TIMEOUT")
    assert RpcClient("http://svc").timeout == 1800.0


def test_json_rpc_error_raises_remote_error(clean_env, mock_post, response_factory):
    mock_post.return_value = response_factory(
        {
            "version": "1.1",
            "error": {
                "name": "JSONRPCError",
                "code": -32500,
                "message": "Object obj1 cannot be accessed",
                "error": "Traceback ...",
            },
        },
        status=500,
    )
    client = RpcClient("http://svc")
    with pytest.raises(RemoteError) as excinfo:
        client.call_method("Workspace.get_object_info_new", [{}])

    assert excinfo.value.code == -32500
    assert excinfo.value.message == "Object obj1 cannot be accessed"
    assert excinfo.value.data == "Traceback ..."
    assert excinfo.value.method_name == "Workspace.get_object_info_new"


def test_non_json_error_raises_transport_error(clean_env, mock_post, response_factory):
    mock_post.return_value = response_factory(
        ValueError("no json"), status=502, content_type="text/html", reason="Bad Gateway"
    )
    client = RpcClient("http://svc")
    with pytest.raises(TransportError) as excinfo:
        client.call_method("Svc.method", [])
    assert excinfo.value.status_line == "502 Bad Gateway"
    assert "Bad Gateway" in str(excinfo.value)


def test_connection_failure_raises_transport_error(clean_env, mock_post):
    mock_post.side_effect = requests.exceptions.ConnectionError("refused")
    client = RpcClient("http://svc")
    with pytest.raises(TransportError, match="Error invoking method Svc.method"):
        client.call_method("Svc.method", [])


def test_unparseable_success_body(clean_env, mock_post, response_factory):
    mock_post.return_value = response_factory(ValueError("bad json"))
    with pytest.raises(TransportError, match="Invalid JSON"):
        RpcClient("http://svc").call_method("Svc.method", [])


def test_null_result_becomes_empty_list(clean_env, mock_post, response_factory):
    mock_post.return_value = response_factory({"result": None})
    assert RpcClient("http://svc").call_method("Svc.method", []) == []
