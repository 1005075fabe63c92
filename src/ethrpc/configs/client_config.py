import os
import re

import msgspec

DEFAULT_RPC_URL = "http://localhost:8545"
DEFAULT_TIMEOUT = 30.0

_PLACEHOLDER = re.compile(r"\$\{([A-Z0-9_]+)\}")


class ClientConfig(msgspec.Struct):
    rpc_url: str = DEFAULT_RPC_URL
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False

    def __post_init__(self):
        # e.g. https://eth-mainnet.g.alchemy.com/v2/${ALCHEMY_API_KEY}
        self.rpc_url = _PLACEHOLDER.sub(
            lambda m: os.getenv(m.group(1), "missing_key"), self.rpc_url
        )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Builds a config from ETH_RPC_URL, ETH_RPC_TIMEOUT and ETH_RPC_DEBUG.
        """
        return cls(
            rpc_url=os.getenv("ETH_RPC_URL", DEFAULT_RPC_URL),
            timeout=float(os.getenv("ETH_RPC_TIMEOUT", str(DEFAULT_TIMEOUT))),
            debug=os.getenv("ETH_RPC_DEBUG", "").lower() in ("1", "true", "yes"),
        )
