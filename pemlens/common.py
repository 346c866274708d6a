import hashlib


class ParseError(Exception):
    """Raised by the certificate/CSR parsers on malformed PEM or DER content."""


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()
