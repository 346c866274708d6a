import pytest

from pemlens.keys import (
    EcKey,
    KeyDescriptor,
    OtherKey,
    RsaKey,
    describe_key,
    key_shape_from_public_key,
)
from _util import ec_key, rsa_key


def test_rsa_reports_modulus_length():
    assert describe_key(RsaKey(bit_length=2048)) == KeyDescriptor("RSA", 2048)


def test_rsa_without_bit_length_omits_length():
    assert describe_key(RsaKey()) == KeyDescriptor("RSA", None)


@pytest.mark.parametrize("curve, bits", [("secp256r1", 256), ("secp384r1", 384), ("secp521r1", 521)])
def test_known_curves(curve, bits):
    assert describe_key(EcKey(curve_name=curve)) == KeyDescriptor("ECDSA", bits)


def test_unknown_curve_reports_unknown_length():
    assert describe_key(EcKey(curve_name="secp192r1")) == KeyDescriptor("ECDSA", "Unknown")
    assert describe_key(EcKey()) == KeyDescriptor("ECDSA", "Unknown")


def test_alternate_curve_name_is_used_when_primary_missing():
    assert describe_key(EcKey(alt_curve_name="secp384r1")) == KeyDescriptor("ECDSA", 384)
    # primary name wins
    assert describe_key(EcKey("secp256r1", "secp521r1")).length == 256


def test_other_key_has_no_length():
    assert describe_key(OtherKey("Ed25519PublicKey")) == KeyDescriptor("Unknown", None)


def test_no_key_populates_nothing():
    assert describe_key(None) == KeyDescriptor()


def test_unrecognized_shape_is_a_type_error():
    with pytest.raises(TypeError):
        describe_key({"n": 1})  # type: ignore[arg-type]


def test_shape_from_cryptography_keys():
    assert key_shape_from_public_key(rsa_key().public_key()) == RsaKey(bit_length=2048)
    assert key_shape_from_public_key(ec_key("secp384r1").public_key()) == EcKey(curve_name="secp384r1")
    assert key_shape_from_public_key(None) is None
