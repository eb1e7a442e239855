import json
import logging
from dataclasses import dataclass, replace
from typing import List, Optional

from auction_clock import AuctionState, Phase, locate
from commitment import bid_commitment, validate_amount, validate_name
from errors import SchemaMismatchError, ValidationError
from evaluator import NodeEvaluator
from network_config import NetworkConfig, get_network_config
from se_decoder import extract_se_value, require_int
from status_resolver import DomainRecord, build_domain_record, normalize_absent

log = logging.getLogger(__name__)

INVOKE_TX_TYPE = 16
INVOKE_FUNCTION_BID = "bid"
INIT_TIMESTAMP_KEY = "initTimestamp"


@dataclass(frozen=True)
class BidTx:
    transaction: dict
    commitment_hash: str


def format_arg(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_arg(v) for v in value) + "]"
    raise TypeError(f"cannot pass {type(value).__name__} to a script call")


def format_call(func: str, *args) -> str:
    """format_call("resolve", "alice", "addr") -> 'resolve("alice", "addr")'"""
    return f"{func}({', '.join(format_arg(a) for a in args)})"


def _auction_id(auction_id) -> int:
    if isinstance(auction_id, bool) or not isinstance(auction_id, int):
        raise ValidationError(f"auction id must be an integer, got {auction_id!r}")
    if auction_id < 0:
        raise ValidationError(f"auction {auction_id} has not started")
    return auction_id


def _lookup_name(name) -> str:
    # Lookups pass any name through; the contract answers Unit for names it never registered
    if not isinstance(name, str) or not name:
        raise ValidationError(f"name must be a non-empty string, got {name!r}")
    return name


class WavesNameService:
    """
    Name service client. Every lookup is one script evaluation on the node;
    results are decoded from the SE tree and shaped into plain values.
    """

    def __init__(self, config: Optional[NetworkConfig] = None, evaluator=None):
        self.config = config or get_network_config()
        self.evaluator = evaluator or NodeEvaluator(self.config.host)

    def _call(self, address: str, func: str, *args):
        expr = format_call(func, *args)
        return extract_se_value(self.evaluator.evaluate(address, expr))

    # ---------------- Lookups ----------------
    def resolve(self, name: str) -> Optional[str]:
        """Address `name` points to, or None when the name is not registered."""
        _lookup_name(name)
        value = normalize_absent(self._call(self.config.resolver, "resolve", name, "addr"))
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise SchemaMismatchError(f"resolve returned {value!r}")
        return value

    def reverse_lookup(self, address: str) -> Optional[str]:
        value = normalize_absent(self._call(self.config.contract_address, "reverseLookup", address))
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise SchemaMismatchError(f"reverseLookup returned {value!r}")
        return value

    def who_is(self, name: str) -> DomainRecord:
        _lookup_name(name)
        return build_domain_record(self._call(self.config.contract_address, "whoIs", name))

    def names_owned_by(self, address: str) -> List[str]:
        """Names held by `address`, i.e. its NFTs issued by the registrar."""
        names = []
        for nft in self.evaluator.nfts(address):
            if not isinstance(nft, dict):
                raise SchemaMismatchError(f"NFT listing item is {nft!r}")
            if nft.get("issuer") != self.config.registrar_address:
                continue
            name = nft.get("description")
            if not isinstance(name, str) or not name:
                raise SchemaMismatchError(f"registrar NFT {nft.get('assetId')!r} has no name")
            names.append(name)
        return names

    # ---------------- Auction ----------------
    def get_auction(self) -> AuctionState:
        decoded = self._call(self.config.contract_address, "getAuction")
        if not isinstance(decoded, list) or len(decoded) != 5:
            raise SchemaMismatchError(f"getAuction expects a 5-tuple, got {decoded!r}")

        auction_id, phase, bid_start, reveal_start, auction_end = decoded
        try:
            phase = Phase(str(phase).upper())
        except ValueError:
            raise SchemaMismatchError(f"unknown auction phase: {phase!r}") from None

        return AuctionState(
            auction_id=require_int(auction_id, "auction id"),
            phase=phase,
            bid_start=require_int(bid_start, "bid start"),
            reveal_start=require_int(reveal_start, "reveal start"),
            auction_end=require_int(auction_end, "auction end"),
        )

    def init_timestamp(self) -> int:
        """Start of the first auction, as stored in the contract's data."""
        entry = self.evaluator.data_entry(self.config.contract_address, INIT_TIMESTAMP_KEY)
        if not isinstance(entry, dict):
            raise SchemaMismatchError(f"{INIT_TIMESTAMP_KEY} entry is {entry!r}")
        return require_int(entry.get("value"), INIT_TIMESTAMP_KEY)

    def locate_auction(self, now: Optional[int] = None, chain_init: bool = False) -> AuctionState:
        """
        Auction cycle computed locally; `now` defaults to the last block's timestamp.
        With chain_init, the first auction's start is read from the contract
        instead of the configured schedule.
        """
        schedule = self.config.schedule
        if chain_init:
            schedule = replace(schedule, init_timestamp=self.init_timestamp())
        if now is None:
            now = self.evaluator.last_block_timestamp()
        return locate(now, schedule)

    def make_bid_tx(self, name: str, amount, auction_id: int) -> BidTx:
        auction_id = _auction_id(auction_id)
        value = validate_amount(amount)
        commitment_hash = bid_commitment(name, value)

        transaction = {
            "type": INVOKE_TX_TYPE,
            "version": self.config.tx_version,
            "dApp": self.config.contract_address,
            "call": {
                "function": INVOKE_FUNCTION_BID,
                "args": [
                    {"type": "integer", "value": auction_id},
                    {"type": "string", "value": commitment_hash},
                ],
            },
            "payment": [{"amount": value, "assetId": None}],
        }
        log.debug("bid tx for auction %s: %s", auction_id, commitment_hash)
        return BidTx(transaction=transaction, commitment_hash=commitment_hash)

    def reveal(self, auction_id: int, name: str, bid_amount):
        validate_name(name)
        value = validate_amount(bid_amount)
        return self._call(self.config.contract_address, "reveal", _auction_id(auction_id), name, value)

    def refund(self, auction_id: int, hashes: List[str]):
        return self._call(self.config.contract_address, "finalize", _auction_id(auction_id), list(hashes))

    # ---------------- Registrar ----------------
    def claim(self, name: str, owner: str, created_at: int):
        validate_name(name)
        return self._call(self.config.registrar_address, "addName", name, owner, created_at)

    def reclaim(self, name: str):
        validate_name(name)
        return self._call(self.config.registrar_address, "reclaim", name)
