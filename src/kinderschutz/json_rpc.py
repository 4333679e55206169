"""
Line-delimited JSON-RPC 2.0 over stdio for driving the chat core from a front end.
"""

import json
import logging
import sys
from typing import IO, Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

# JSON-RPC 2.0 constants
JSONRPC_VERSION = "2.0"
ERROR_PARSE = -32700
ERROR_INVALID_REQUEST = -32600
ERROR_METHOD_NOT_FOUND = -32601
ERROR_INVALID_PARAMS = -32602
ERROR_INTERNAL = -32603

Handler = Callable[[Dict[str, Any]], Any]


class JsonRpcError(Exception):
    """Error raised by a handler and reported back to the caller."""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self) -> dict:
        d = {"code": self.code, "message": self.message}
        if self.data is not None:
            d["data"] = self.data
        return d


class InvalidParamsError(JsonRpcError):
    """Raised by handlers when request params fail validation."""

    def __init__(self, message: str, data: Any = None):
        super().__init__(ERROR_INVALID_PARAMS, message, data)


class JsonRpcRequest:
    """JSON-RPC 2.0 Request"""

    def __init__(self, data: Any):
        if not isinstance(data, dict):
            raise JsonRpcError(ERROR_INVALID_REQUEST, "Request must be an object")

        self.jsonrpc = data.get("jsonrpc", JSONRPC_VERSION)
        self.method = data.get("method")
        self.params = data.get("params") or {}
        self.id = data.get("id")

        if self.jsonrpc != JSONRPC_VERSION:
            raise JsonRpcError(ERROR_INVALID_REQUEST, f"Invalid JSON-RPC version: {self.jsonrpc}")
        if not self.method:
            raise JsonRpcError(ERROR_INVALID_REQUEST, "Missing method")
        if not isinstance(self.params, dict):
            raise JsonRpcError(ERROR_INVALID_PARAMS, "Params must be an object")


def create_error_response(request_id: Any, error: JsonRpcError) -> dict:
    """Create an error response."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error.to_dict()}


def create_result_response(request_id: Any, result: Any) -> dict:
    """Create a result response."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


class JsonRpcServer:
    """
    A synchronous JSON-RPC 2.0 server reading one request per line.

    Requests are handled one at a time, which also serialises turns for the
    chat core.
    """

    def __init__(
        self,
        server_name: str,
        stdin: Optional[IO[str]] = None,
        stdout: Optional[IO[str]] = None,
    ):
        self.server_name = server_name
        self.stdin = stdin
        self.stdout = stdout
        self._handlers: Dict[str, Handler] = {}
        self._running = False

    def register_handler(self, method: str, handler: Handler):
        """Register a handler for a JSON-RPC method."""
        logger.info(f"Registering handler for method: {method}")
        self._handlers[method] = handler

    def _read_message(self) -> Optional[str]:
        """Read a single line, or None at EOF."""
        line = (self.stdin or sys.stdin).readline()
        if not line:
            return None
        return line.strip()

    def _write_message(self, message: dict):
        """Write a JSON message as a single line."""
        stream = self.stdout or sys.stdout
        stream.write(json.dumps(message, ensure_ascii=False) + "\n")
        stream.flush()

    def process_request(self, request_str: str) -> Optional[dict]:
        """Process a single JSON-RPC request.

        Returns:
            The response dict, or None for notifications (requests without id).
        """
        try:
            request_data = json.loads(request_str)
        except json.JSONDecodeError as e:
            return create_error_response(None, JsonRpcError(ERROR_PARSE, f"Parse error: {e}"))

        request_id = request_data.get("id") if isinstance(request_data, dict) else None
        try:
            request = JsonRpcRequest(request_data)
        except JsonRpcError as e:
            return create_error_response(request_id, e)

        handler = self._handlers.get(request.method)
        if not handler:
            return create_error_response(
                request_id,
                JsonRpcError(ERROR_METHOD_NOT_FOUND, f"Method not found: {request.method}"),
            )

        try:
            result = handler(request.params)
        except JsonRpcError as e:
            logger.warning(f"Rejected {request.method}: {e.message}")
            return create_error_response(request_id, e)
        except Exception as e:
            logger.error(f"Handler error for {request.method}: {e}", exc_info=True)
            return create_error_response(
                request_id, JsonRpcError(ERROR_INTERNAL, "Internal error")
            )

        if request_id is None:
            return None
        return create_result_response(request_id, result)

    def run(self):
        """Serve requests until EOF or stop()."""
        logger.info(f"Starting JSON-RPC server '{self.server_name}'...")
        self._running = True

        while self._running:
            try:
                line = self._read_message()
                if line is None:
                    logger.info("EOF reached, shutting down")
                    break

                if not line:
                    continue

                response = self.process_request(line)
                if response:
                    self._write_message(response)

            except KeyboardInterrupt:
                logger.info("Keyboard interrupt, shutting down")
                break

        self._running = False
        logger.info("Server stopped")

    def stop(self):
        """Stop the server."""
        self._running = False
