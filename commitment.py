import hashlib
import re

import base58
from web3 import Web3

from errors import ValidationError

NAME_PATTERN = re.compile(r"[a-z0-9_]+")
AMOUNT_PATTERN = re.compile(r"0|[1-9][0-9]*")

INT64_MAX = 2 ** 63 - 1
# Largest float that still holds every integer below it exactly
FLOAT_EXACT_MAX = 2 ** 53


def validate_name(name: str) -> str:
    if not isinstance(name, str) or not NAME_PATTERN.fullmatch(name):
        raise ValidationError(f"name is not valid: {name!r}")
    return name


def validate_amount(amount) -> int:
    """
    Bid amounts are natural numbers that fit a signed 64-bit long.
    Accepts int, canonical digit strings ("1000") and integral floats.
    """
    if isinstance(amount, bool):
        raise ValidationError(f"amount is not valid: {amount!r}")

    if isinstance(amount, int):
        value = amount
    elif isinstance(amount, str):
        if not AMOUNT_PATTERN.fullmatch(amount):
            raise ValidationError(f"amount is not valid: {amount!r}")
        value = int(amount)
    elif isinstance(amount, float):
        if not amount.is_integer() or abs(amount) >= FLOAT_EXACT_MAX:
            raise ValidationError(f"amount is not valid: {amount!r}")
        value = int(amount)
    else:
        raise ValidationError(f"amount is not valid: {amount!r}")

    if value < 0 or value > INT64_MAX:
        raise ValidationError(f"amount is not valid: {amount!r}")
    return value


def amount_to_bytes(amount: int) -> bytes:
    # Waves longs: 8 bytes, big-endian, two's complement
    return amount.to_bytes(8, byteorder="big", signed=True)


def bid_commitment(name: str, amount) -> str:
    """
    Sealed-bid hash: base58(blake2b256(keccak256(amount_bytes + name_bytes))).
    The contract recomputes this on reveal, so byte order must stay amount-then-name.
    """
    name = validate_name(name)
    value = validate_amount(amount)

    preimage = amount_to_bytes(value) + name.encode("utf-8")
    inner = bytes(Web3.keccak(preimage))
    digest = hashlib.blake2b(inner, digest_size=32).digest()
    return base58.b58encode(digest).decode("ascii")
