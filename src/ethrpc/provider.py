import logging
from typing import Any, List, Optional

import msgspec

from ethrpc.errors import MalformedResponse, ProtocolError
from ethrpc.transport import HTTPXTransport, Transport

logger = logging.getLogger(__name__)


class RPCRequest(msgspec.Struct):
    """
    Standard JSON-RPC request schema.
    Params stay null (not an empty list) for methods without arguments.
    """
    method: str
    params: Optional[List[Any]] = None
    id: int = 1
    jsonrpc: str = "2.0"


class RPCErrorObject(msgspec.Struct):
    """
    The 'error' member of a failed response.
    """
    code: int
    message: str
    data: Any = None


class RPCResponse(msgspec.Struct):
    """
    Generic JSON-RPC response envelope.
    Using Any for result to handle various JSON structures before specific decoding.
    """
    result: Any = None
    error: Optional[RPCErrorObject] = None
    id: Any = None
    jsonrpc: str = "2.0"


def parse_response(body: bytes) -> Any:
    """
    Classifies a raw response body and returns the result value.

    Raises MalformedResponse when the body is not an envelope and
    ProtocolError when the node reported an error.
    """
    try:
        data = msgspec.json.decode(body)
    except (msgspec.DecodeError, UnicodeDecodeError) as exc:
        raise MalformedResponse(f"Response is not valid JSON: {exc}", body) from exc

    if not isinstance(data, dict):
        raise MalformedResponse("Response is not a JSON object", body)

    has_error = data.get("error") is not None
    if not has_error and "result" not in data:
        raise MalformedResponse("Response has neither 'result' nor 'error'", body)

    try:
        envelope = msgspec.convert(data, type=RPCResponse)
    except msgspec.ValidationError as exc:
        raise MalformedResponse(f"Invalid response envelope: {exc}", body) from exc

    if envelope.error is not None:
        err = envelope.error
        raise ProtocolError(err.code, err.message, err.data)

    return envelope.result


class NodeProvider:
    """
    Sends single JSON-RPC calls to a node and unwraps the envelope.
    Holds no per-call state, so one instance can serve concurrent callers
    as long as the transport can.
    """

    def __init__(self, rpc_url: str, transport: Optional[Transport] = None, debug: bool = False):
        self.rpc_url = rpc_url
        self.transport = transport or HTTPXTransport()
        self.debug = debug

    def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Executes the RPC call and returns the raw 'result' value, which is None
        when the node answered with JSON null.
        """
        request = RPCRequest(method=method, params=params or None)
        payload = msgspec.json.encode(request)
        if self.debug:
            logger.debug("RPC request to %s: %s", self.rpc_url, payload.decode())

        body = self.transport.post(self.rpc_url, payload)
        if self.debug:
            logger.debug("RPC response from %s: %s", self.rpc_url, body.decode(errors="replace"))

        return parse_response(body)

    def close(self) -> None:
        self.transport.close()
