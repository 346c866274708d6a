import pytest
from pydantic import TypeAdapter, ValidationError

from pemlens.records import CertificateRecord, CsrRecord, ErrorRecord, ParsedRecord, PrivateKeyRecord

_adapter = TypeAdapter(ParsedRecord)


def _cert(**overrides) -> CertificateRecord:
    fields = dict(subject="CN=a", issuer="CN=b", version=3, serial_number="0a")
    fields.update(overrides)
    return CertificateRecord(**fields)


def test_records_are_immutable():
    rec = _cert()
    with pytest.raises(ValidationError):
        rec.subject = "CN=changed"  # type: ignore[misc]


def test_camel_case_serialization_drops_absent_fields():
    assert _cert(public_key_algorithm="ECDSA", public_key_length="Unknown").to_dict() == {
        "kind": "certificate",
        "subject": "CN=a",
        "issuer": "CN=b",
        "version": 3,
        "serialNumber": "0a",
        "publicKeyAlgorithm": "ECDSA",
        "publicKeyLength": "Unknown",
    }


def test_unknown_key_algorithm_is_rejected():
    with pytest.raises(ValidationError):
        _cert(public_key_algorithm="DSA")


def test_discriminated_union_round_trip():
    for rec in (
        ErrorRecord(message="Invalid PEM data"),
        PrivateKeyRecord(),
        CsrRecord(subject='"CN=x"', signature_algorithm="RSA", hash_algorithm="SHA256"),
        _cert(subject_alt_names=["DNS: a"]),
    ):
        assert _adapter.validate_python(rec.to_dict()) == rec


def test_ok_flag():
    assert ErrorRecord(message="x").ok is False
    assert PrivateKeyRecord().ok is True
