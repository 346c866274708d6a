# pemlens/keys.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union

from cryptography.hazmat.primitives.asymmetric import ec, rsa

EC_KEY_LENGTHS: Dict[str, int] = {
    "secp256r1": 256,
    "secp384r1": 384,
    "secp521r1": 521,
}

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class RsaKey:
    bit_length: Optional[int] = None


@dataclass(frozen=True)
class EcKey:
    curve_name: Optional[str] = None
    alt_curve_name: Optional[str] = None


@dataclass(frozen=True)
class OtherKey:
    type_name: str = UNKNOWN


KeyShape = Union[RsaKey, EcKey, OtherKey]


@dataclass(frozen=True)
class KeyDescriptor:
    algorithm: Optional[str] = None
    length: Union[int, str, None] = None


def describe_key(key: Optional[KeyShape]) -> KeyDescriptor:
    if key is None:
        return KeyDescriptor()
    if isinstance(key, RsaKey):
        return KeyDescriptor("RSA", key.bit_length)
    if isinstance(key, EcKey):
        curve = key.curve_name or key.alt_curve_name
        return KeyDescriptor("ECDSA", EC_KEY_LENGTHS.get(curve or "", UNKNOWN))
    if isinstance(key, OtherKey):
        return KeyDescriptor(UNKNOWN)
    raise TypeError(f"unsupported key shape: {type(key).__name__}")


def key_shape_from_public_key(pk) -> Optional[KeyShape]:
    if pk is None:
        return None
    if isinstance(pk, rsa.RSAPublicKey):
        return RsaKey(bit_length=pk.key_size)
    if isinstance(pk, ec.EllipticCurvePublicKey):
        return EcKey(curve_name=getattr(pk.curve, "name", None))
    return OtherKey(type_name=pk.__class__.__name__)
