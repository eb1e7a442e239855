import re

from errors import DecodeError, SchemaMismatchError

TUPLE_KEY = re.compile(r"_([1-9][0-9]*)")

# Scalars the node hands back unchanged. Int may be text when the node is
# asked for large-significand-format=string.
SCALAR_TYPES = ("String", "Int", "Boolean", "ByteVector")


def tuple_index(key: str) -> int:
    match = TUPLE_KEY.fullmatch(key) if isinstance(key, str) else None
    if not match:
        raise DecodeError(f"invalid tuple key: {key!r}")
    return int(match.group(1))


def extract_se_value(item: dict):
    """
    Turns one evaluator result (`{"type": ..., "value": ...}`) into plain values.
    Unit -> None, scalars -> payload, Array -> list, Tuple -> list ordered by key number.
    """
    if not isinstance(item, dict) or "type" not in item:
        raise DecodeError(f"not an SE item: {item!r}")

    kind = item["type"]
    value = item.get("value")

    if kind == "Unit":
        return None
    if kind in SCALAR_TYPES:
        return value
    if kind == "Array":
        if not isinstance(value, list):
            raise DecodeError(f"Array payload must be a list, got {type(value).__name__}")
        return [extract_se_value(element) for element in value]
    if kind == "Tuple":
        if not isinstance(value, dict):
            raise DecodeError(f"Tuple payload must be an object, got {type(value).__name__}")
        # Key order from the wire is not reliable: `{_2: x, _1: y}` is [y, x].
        ordered = sorted(value.items(), key=lambda pair: tuple_index(pair[0]))
        return [extract_se_value(element) for _, element in ordered]

    raise DecodeError(f"unknown SE type: {kind!r}")


def is_absent(value) -> bool:
    return value is None or value == {} or value == []


def parse_int(value):
    """Int fields arrive as text or numbers; None stays None."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise SchemaMismatchError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 10)
        except ValueError:
            raise SchemaMismatchError(f"expected an integer, got {value!r}") from None
    raise SchemaMismatchError(f"expected an integer, got {type(value).__name__}")


def require_int(value, field: str) -> int:
    """parse_int for fields that must be present."""
    if is_absent(value):
        raise SchemaMismatchError(f"{field} is missing")
    return parse_int(value)
