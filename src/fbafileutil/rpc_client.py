"""JSON-RPC 1.1 transport used to talk to KBase services."""

import os
import random
import socket
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests

from .base_utils import BaseUtils
from .errors import RemoteError, TransportError

DEFAULT_HTTP_TIMEOUT = 30 * 60


def default_rpc_tag() -> str:
    """Build a correlation tag identifying the invoking script and host."""
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    hostname = socket.gethostname() or "unknown-host"
    return f"C:{sys.argv[0]}:{hostname}:{os.getpid()}:{ts}"


class RpcClient(BaseUtils):
    """Minimal JSON-RPC client with KBase call-tracking headers.

    KBRPC_TAG, KBRPC_METADATA and KBRPC_ERROR_DEST are propagated from the
    environment to invoked services. Without KBRPC_TAG a new tag is created.
    """

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.url = url
        self.token = token
        if timeout is None:
            timeout = float(os.environ.get("CDMI_TIMEOUT", DEFAULT_HTTP_TIMEOUT))
        self.timeout = timeout
        self.headers = {"Kbrpc-Tag": os.environ.get("KBRPC_TAG") or default_rpc_tag()}
        if os.environ.get("KBRPC_METADATA"):
            self.headers["Kbrpc-Metadata"] = os.environ["KBRPC_METADATA"]
        if os.environ.get("KBRPC_ERROR_DEST"):
            self.headers["Kbrpc-Errordest"] = os.environ["KBRPC_ERROR_DEST"]

    def build_request(
        self,
        method: str,
        params: List[Any],
        context: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        body = {
            "method": method,
            "params": params,
            "version": "1.1",
            "id": str(random.random())[2:],
        }
        if context:
            body["context"] = context
        return body

    def call_method(
        self,
        method: str,
        params: List[Any],
        context: Optional[Dict[str, Any]] = None,
    ) -> List[Any]:
        """Call a remote method and return its result list.

        Raises:
            TransportError: if no usable HTTP response came back
            RemoteError: if the server returned a JSON-RPC error object
        """
        body = self.build_request(method, params, context)
        headers = dict(self.headers)
        headers["Accept"] = "application/json"
        if self.token:
            headers["Authorization"] = self.token

        self.log_debug(f"POST {self.url} {method}")
        try:
            response = requests.post(
                self.url, json=body, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"Error invoking method {method}: {e}", method_name=method
            ) from e

        status_line = f"{response.status_code} {response.reason}"
        content_type = response.headers.get("content-type", "")
        if not response.ok and "application/json" not in content_type:
            raise TransportError(
                f"Error invoking method {method}",
                method_name=method,
                status_line=status_line,
            )
        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON response from method {method}",
                method_name=method,
                status_line=status_line,
            ) from e

        if payload.get("error"):
            error = payload["error"]
            raise RemoteError(
                error.get("message", "Unknown server error"),
                code=error.get("code"),
                data=error.get("error") or error.get("data"),
                method_name=method,
            )
        if "result" not in payload:
            raise TransportError(
                f"Response to {method} carried neither result nor error",
                method_name=method,
                status_line=status_line,
            )
        result = payload["result"]
        return result if result is not None else []

    def call_single(
        self,
        method: str,
        params: List[Any],
        context: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Call a remote method that returns exactly one value.

        Raises:
            TransportError: if the result list is empty
        """
        result = self.call_method(method, params, context)
        if not result:
            raise TransportError(f"{method} returned no result", method_name=method)
        return result[0]
