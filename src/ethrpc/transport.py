from typing import Optional, Protocol

import httpx

from ethrpc.errors import TransportError

DEFAULT_TIMEOUT = 30.0


class Transport(Protocol):
    """
    Anything that can POST a request body to a URL and hand back the response body.
    """

    def post(self, url: str, body: bytes) -> bytes: ...

    def close(self) -> None: ...


class HTTPXTransport:
    """
    Default transport backed by a persistent httpx.Client.
    Non-2xx statuses are treated as transport failures.

    A client passed in by the caller stays owned by the caller: close()
    only closes a client this transport created itself.
    """

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = DEFAULT_TIMEOUT):
        self.owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)

    def post(self, url: str, body: bytes) -> bytes:
        try:
            response = self.client.post(
                url,
                content=body,
                headers={"Content-Type": "application/json"}
            )
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"RPC request to {url} failed: {exc}") from exc

        return response.content

    def close(self) -> None:
        if self.owns_client:
            self.client.close()
