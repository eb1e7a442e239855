import pytest

from errors import SchemaMismatchError
from status_resolver import DomainStatus, build_domain_record, normalize_absent, resolve_status


def test_resolve_status():
    assert resolve_status(None) == DomainStatus.NOT_REGISTERED
    assert resolve_status({}) == DomainStatus.NOT_REGISTERED
    assert resolve_status("") == DomainStatus.NOT_REGISTERED
    assert resolve_status("3MxssetYXJfiGwzo9pqChsSwYj3tCYq5FFH") == DomainStatus.REGISTERED


def test_empty_object_is_not_empty_string():
    assert normalize_absent({}) is None
    assert normalize_absent([]) is None
    assert normalize_absent("") == ""


def test_two_field_record():
    record = build_domain_record(["ownerAddr", None])
    assert record.status == DomainStatus.REGISTERED
    assert record.owner == "ownerAddr"
    assert record.resolver is None
    assert record.created_at is None and record.expires_at is None and record.token_id is None


def test_full_record():
    record = build_domain_record(["owner", "resolver", "1664125224707", "1695661224707", "tok"])
    assert record.created_at == 1664125224707
    assert record.expires_at == 1695661224707
    assert record.token_id == "tok"


def test_unregistered_record():
    record = build_domain_record(None)
    assert record.status == DomainStatus.NOT_REGISTERED
    assert record.owner is None

    assert build_domain_record([None, None]).status == DomainStatus.NOT_REGISTERED


@pytest.mark.parametrize("decoded", [["only"], ["a", "b", "1", "2", "t", "extra"], "owner", [5, None]])
def test_schema_mismatch(decoded):
    with pytest.raises(SchemaMismatchError):
        build_domain_record(decoded)
