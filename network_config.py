import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import base58
from dotenv import load_dotenv

from auction_clock import AuctionSchedule

PROD_HOST = "https://nodes-keeper.wavesnodes.com"
TEST_HOST = "https://nodes-testnet.wavesnodes.com"
STAGE_HOST = "https://nodes-stagenet.wavesnodes.com"

CONTRACT_ADDRESS = "3MxssetYXJfiGwzo9pqChsSwYj3tCYq5FFH"
REGISTRAR_ADDRESS = "3NA73oUXjqp7SpudXWV1yMFuKm9awPbqsVz"

INVOKE_TX_VERSION = 2


class Network(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"
    STAGENET = "stagenet"


HOSTS = {
    Network.MAINNET: PROD_HOST,
    Network.TESTNET: TEST_HOST,
    Network.STAGENET: STAGE_HOST,
}


def is_waves_address(addr: str) -> bool:
    # Waves addresses are 26 raw bytes, 35 chars in base58
    if not isinstance(addr, str) or not addr:
        return False
    try:
        return len(base58.b58decode(addr)) == 26
    except ValueError:
        return False


@dataclass(frozen=True)
class NetworkConfig:
    network: Network
    host: str
    contract_address: str = CONTRACT_ADDRESS
    registrar_address: str = REGISTRAR_ADDRESS
    resolver_address: Optional[str] = None
    schedule: AuctionSchedule = AuctionSchedule()
    tx_version: int = INVOKE_TX_VERSION

    def __post_init__(self):
        if not isinstance(self.network, Network):
            raise ValueError(f"unknown network: {self.network!r}")
        if not self.host.startswith(("http://", "https://")):
            raise ValueError(f"host must be an http(s) URL, got {self.host!r}")
        for field in ("contract_address", "registrar_address", "resolver_address"):
            value = getattr(self, field)
            if value is None and field == "resolver_address":
                continue
            if not is_waves_address(value):
                raise ValueError(f"{field} is not a Waves address: {value!r}")

    @property
    def resolver(self) -> str:
        """Address `resolve()` is evaluated against; the main contract unless overridden."""
        return self.resolver_address or self.contract_address


def get_network_config(network="testnet", **overrides) -> NetworkConfig:
    try:
        net = Network(network)
    except ValueError:
        raise ValueError(f"unknown network: {network!r}") from None

    # Empty overrides (e.g. unset env vars) fall back to the defaults
    overrides = {key: value for key, value in overrides.items() if value not in (None, "")}
    overrides.setdefault("host", HOSTS[net])
    return NetworkConfig(network=net, **overrides)


def from_env() -> NetworkConfig:
    """Network selection from the environment / a local .env file."""
    load_dotenv()
    return get_network_config(
        os.getenv("WNS_NETWORK", "testnet"),
        host=os.getenv("WNS_NODE_URL"),
        contract_address=os.getenv("WNS_CONTRACT_ADDRESS"),
        registrar_address=os.getenv("WNS_REGISTRAR_ADDRESS"),
        resolver_address=os.getenv("WNS_RESOLVER_ADDRESS"),
    )
