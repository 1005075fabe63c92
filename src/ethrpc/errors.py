from typing import Any, Optional


class EthRPCError(RuntimeError):
    """
    Base class for every failure raised by the client.
    """


class TransportError(EthRPCError):
    """
    The request never produced a response body (connection, timeout, HTTP status).
    """


class MalformedResponse(EthRPCError):
    """
    The response body is not a JSON-RPC envelope.
    """

    def __init__(self, message: str, body: bytes = b""):
        super().__init__(message)
        self.body = body


class ProtocolError(EthRPCError):
    """
    The node answered with an explicit JSON-RPC error object.
    """

    def __init__(self, code: int, message: str, data: Optional[Any] = None):
        super().__init__(code, message)
        self.code = code
        self.message = message
        self.data = data

    def __str__(self) -> str:
        return f"Error {self.code} ({self.message})"


class DecodeError(EthRPCError):
    """
    A valid envelope carried a result that does not fit the expected entity.
    """


class MalformedQuantity(DecodeError, ValueError):
    """
    Text that is not a hex quantity.
    """
