# pemlens/sigalg.py
from typing import NamedTuple

SEPARATOR = "with"


class SignatureParts(NamedTuple):
    hash: str
    signature: str


def split_signature_algorithm(name: str) -> SignatureParts:
    """
    "SHA256withRSA" → SignatureParts(hash="SHA256", signature="RSA").
    Only the first "with" separates; a missing or empty side falls back to the full name.
    """
    head, sep, tail = name.partition(SEPARATOR)
    if not sep:
        return SignatureParts(name, name)
    return SignatureParts(head or name, tail or name)


def certificate_signature_fields(name: str) -> dict:
    # certificates keep the combined name as signatureAlgorithm
    return {
        "signature_algorithm": name,
        "hash_algorithm": split_signature_algorithm(name).hash,
    }


def csr_signature_fields(name: str) -> dict:
    # CSRs report only the scheme after "with" as signatureAlgorithm
    parts = split_signature_algorithm(name)
    return {
        "signature_algorithm": parts.signature,
        "hash_algorithm": parts.hash,
    }
