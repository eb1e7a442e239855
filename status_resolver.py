from dataclasses import dataclass
from enum import Enum
from typing import Optional

from errors import SchemaMismatchError
from se_decoder import is_absent, parse_int

# whoIs field order; older node schemas stop after the resolver
WHOIS_FIELDS = ("owner", "resolver", "created_at", "expires_at", "token_id")
WHOIS_MIN_FIELDS = 2


class DomainStatus(str, Enum):
    REGISTERED = "REGISTERED"
    NOT_REGISTERED = "NOT_REGISTERED"


@dataclass(frozen=True)
class DomainRecord:
    owner: Optional[str]
    resolver: Optional[str]
    created_at: Optional[int]
    expires_at: Optional[int]
    token_id: Optional[str]
    status: DomainStatus


def normalize_absent(value):
    """Unit, {} and [] all mean "nothing here". Strings, even "", are kept."""
    if isinstance(value, str):
        return value
    return None if is_absent(value) else value


def resolve_status(owner) -> DomainStatus:
    owner = normalize_absent(owner)
    if isinstance(owner, str) and owner:
        return DomainStatus.REGISTERED
    return DomainStatus.NOT_REGISTERED


def _address(value, field):
    value = normalize_absent(value)
    if value is not None and not isinstance(value, str):
        raise SchemaMismatchError(f"whoIs {field} must be a string, got {type(value).__name__}")
    return value


def build_domain_record(decoded) -> DomainRecord:
    """Shape a decoded whoIs tuple into a DomainRecord."""
    if normalize_absent(decoded) is None:
        return DomainRecord(None, None, None, None, None, DomainStatus.NOT_REGISTERED)

    if not isinstance(decoded, list) or not WHOIS_MIN_FIELDS <= len(decoded) <= len(WHOIS_FIELDS):
        raise SchemaMismatchError(
            f"whoIs expects a tuple of {WHOIS_MIN_FIELDS}-{len(WHOIS_FIELDS)} fields, got {decoded!r}"
        )

    fields = dict(zip(WHOIS_FIELDS, decoded))
    token_id = normalize_absent(fields.get("token_id"))

    return DomainRecord(
        owner=_address(fields["owner"], "owner"),
        resolver=_address(fields["resolver"], "resolver"),
        created_at=parse_int(normalize_absent(fields.get("created_at"))),
        expires_at=parse_int(normalize_absent(fields.get("expires_at"))),
        token_id=None if token_id is None else str(token_id),
        status=resolve_status(fields["owner"]),
    )
