# pemlens/x509model.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Tuple, cast

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.serialization import Encoding
from cryptography.x509.oid import ExtendedKeyUsageOID as EKUOID
from cryptography.x509.oid import ExtensionOID, SignatureAlgorithmOID as SigOID
from pyasn1.codec.der import decoder as der_decoder
from pyasn1.error import PyAsn1Error
from pyasn1.type import univ
from pyasn1_modules import rfc5280

from .common import ParseError
from .dates import to_asn1_time
from .extensions import ExtensionValue, StringList, WrappedEntries
from .keys import EcKey, KeyShape, OtherKey, RsaKey, key_shape_from_public_key

log = logging.getLogger(__name__)


# ---------------------------
# Decoded object model
# ---------------------------

@dataclass(frozen=True)
class CertificateModel:
    subject: str
    issuer: str
    version: int
    serial_number_hex: str
    not_before: str
    not_after: str
    public_key: Optional[KeyShape] = None
    key_usage: Optional[str] = None
    extended_key_usage: Optional[ExtensionValue] = None
    signature_algorithm: Optional[str] = None
    subject_alt_names: Optional[ExtensionValue] = None


@dataclass(frozen=True)
class CsrExtension:
    name: str
    values: Optional[List[Dict[str, Any]]] = None


@dataclass(frozen=True)
class CsrModel:
    subject: str
    signature_algorithm: str
    extension_requests: List[CsrExtension] = field(default_factory=list)


class CertificateParser(Protocol):
    def __call__(self, pem: str) -> CertificateModel: ...


class CsrParser(Protocol):
    def __call__(self, pem: str) -> CsrModel: ...


# ---------------------------
# cryptography-backed parsers
# ---------------------------

_CERT_BLOCK = re.compile(
    r"-----BEGIN CERTIFICATE-----.*?-----END CERTIFICATE-----", re.DOTALL
)
_CSR_BLOCK = re.compile(
    r"-----BEGIN (NEW )?CERTIFICATE REQUEST-----.*?-----END (NEW )?CERTIFICATE REQUEST-----",
    re.DOTALL,
)

# "<HASH>with<SCHEME>" naming, the form every PEM viewer shows
_SIG_NAMES: Dict[x509.ObjectIdentifier, str] = {
    SigOID.RSA_WITH_MD5: "MD5withRSA",
    SigOID.RSA_WITH_SHA1: "SHA1withRSA",
    SigOID.RSA_WITH_SHA224: "SHA224withRSA",
    SigOID.RSA_WITH_SHA256: "SHA256withRSA",
    SigOID.RSA_WITH_SHA384: "SHA384withRSA",
    SigOID.RSA_WITH_SHA512: "SHA512withRSA",
    SigOID.ECDSA_WITH_SHA1: "SHA1withECDSA",
    SigOID.ECDSA_WITH_SHA224: "SHA224withECDSA",
    SigOID.ECDSA_WITH_SHA256: "SHA256withECDSA",
    SigOID.ECDSA_WITH_SHA384: "SHA384withECDSA",
    SigOID.ECDSA_WITH_SHA512: "SHA512withECDSA",
    SigOID.DSA_WITH_SHA1: "SHA1withDSA",
    SigOID.DSA_WITH_SHA224: "SHA224withDSA",
    SigOID.DSA_WITH_SHA256: "SHA256withDSA",
    SigOID.ED25519: "Ed25519",
    SigOID.ED448: "Ed448",
}

_EXT_NAMES: Dict[x509.ObjectIdentifier, str] = {
    ExtensionOID.SUBJECT_ALTERNATIVE_NAME: "subjectAltName",
    ExtensionOID.KEY_USAGE: "keyUsage",
    ExtensionOID.EXTENDED_KEY_USAGE: "extKeyUsage",
    ExtensionOID.BASIC_CONSTRAINTS: "basicConstraints",
}

_EKU_NAMES: Dict[x509.ObjectIdentifier, str] = {
    EKUOID.SERVER_AUTH: "serverAuth",
    EKUOID.CLIENT_AUTH: "clientAuth",
    EKUOID.CODE_SIGNING: "codeSigning",
    EKUOID.EMAIL_PROTECTION: "emailProtection",
    EKUOID.TIME_STAMPING: "timeStamping",
    EKUOID.OCSP_SIGNING: "OCSPSigning",
}


def _signature_name(obj: Any) -> str:
    oid = obj.signature_algorithm_oid
    if oid in _SIG_NAMES:
        return _SIG_NAMES[oid]
    if oid == SigOID.RSASSA_PSS:
        try:
            hash_algo = obj.signature_hash_algorithm
        except UnsupportedAlgorithm:
            hash_algo = None
        if hash_algo is not None:
            return f"{hash_algo.name.upper()}withRSAandMGF1"
    return oid.dotted_string


def _serial_hex(serial: int) -> str:
    h = format(serial, "x")
    return h if len(h) % 2 == 0 else "0" + h


def _key_usage(ku: x509.KeyUsage) -> List[str]:
    names: List[str] = []
    if ku.digital_signature: names.append("digitalSignature")
    if ku.content_commitment: names.append("nonRepudiation")
    if ku.key_encipherment: names.append("keyEncipherment")
    if ku.data_encipherment: names.append("dataEncipherment")
    if ku.key_agreement:
        names.append("keyAgreement")
        if ku.encipher_only: names.append("encipherOnly")
        if ku.decipher_only: names.append("decipherOnly")
    if ku.key_cert_sign: names.append("keyCertSign")
    if ku.crl_sign: names.append("cRLSign")
    return names


def _general_name(g: x509.GeneralName) -> Dict[str, Any]:
    if isinstance(g, x509.DNSName):
        return {"dns": g.value}
    if isinstance(g, x509.RFC822Name):
        return {"rfc822": g.value}
    if isinstance(g, x509.UniformResourceIdentifier):
        return {"uri": g.value}
    if isinstance(g, x509.IPAddress):
        return {"ip": str(g.value)}
    if isinstance(g, x509.DirectoryName):
        return {"dn": g.value.rfc4514_string()}
    if isinstance(g, x509.RegisteredID):
        return {"oid": g.value.dotted_string}
    if isinstance(g, x509.OtherName):
        return {"other": {"oid": g.type_id.dotted_string, "hex": g.value.hex()}}
    return {"unknown": repr(g)}


def _extension(exts: x509.Extensions, oid: x509.ObjectIdentifier) -> Optional[Any]:
    try:
        return exts.get_extension_for_oid(oid).value
    except x509.ExtensionNotFound:
        return None


_EC_PUBLIC_KEY = "1.2.840.10045.2.1"
_RSA_ENCRYPTION = "1.2.840.113549.1.1.1"

_CURVE_OIDS: Dict[str, str] = {
    "1.2.840.10045.3.1.7": "secp256r1",
    "1.3.132.0.34": "secp384r1",
    "1.3.132.0.35": "secp521r1",
}


def _decode_der(cert: x509.Certificate) -> Optional[Any]:
    try:
        decoded, _ = der_decoder.decode(cert.public_bytes(Encoding.DER), asn1Spec=rfc5280.Certificate())
    except PyAsn1Error as e:
        log.debug("pyasn1 could not decode certificate: %s", e)
        return None
    return decoded


def _spki_key_shape(decoded: Optional[Any]) -> KeyShape:
    # cryptography refused the key; fall back to the SPKI algorithm identifier
    if decoded is None:
        return OtherKey(type_name="unsupported")
    algo = decoded["tbsCertificate"]["subjectPublicKeyInfo"]["algorithm"]
    oid = str(algo["algorithm"])
    if oid == _RSA_ENCRYPTION:
        return RsaKey()
    if oid == _EC_PUBLIC_KEY:
        curve: Optional[str] = None
        params = algo["parameters"]
        if params.isValue:
            try:
                named, _ = der_decoder.decode(params.asOctets(), asn1Spec=univ.ObjectIdentifier())
                curve = str(named)
            except PyAsn1Error:
                # explicit (specified) curve parameters
                curve = None
        return EcKey(curve_name=_CURVE_OIDS.get(curve or ""), alt_curve_name=curve)
    return OtherKey(type_name=oid)


def _public_key(cert: x509.Certificate, decoded: Optional[Any]) -> Optional[KeyShape]:
    try:
        return key_shape_from_public_key(cert.public_key())
    except (ValueError, UnsupportedAlgorithm):
        return _spki_key_shape(decoded)


def _block(pattern: re.Pattern, pem: str, what: str) -> bytes:
    m = pattern.search(pem)
    if not m:
        raise ParseError(f"No {what} block found")
    return m.group(0).encode("ascii", "ignore")


def _raw_validity(cert: x509.Certificate, decoded: Optional[Any]) -> Tuple[str, str]:
    # keep the encoded UTCTime/GeneralizedTime text rather than cryptography's datetimes
    if decoded is not None:
        validity = decoded["tbsCertificate"]["validity"]
        return (
            str(validity["notBefore"].getComponent()),
            str(validity["notAfter"].getComponent()),
        )
    return to_asn1_time(cert.not_valid_before_utc), to_asn1_time(cert.not_valid_after_utc)


def parse_certificate(pem: str) -> CertificateModel:
    try:
        cert = x509.load_pem_x509_certificate(_block(_CERT_BLOCK, pem, "certificate"))
        decoded = _decode_der(cert)
        not_before, not_after = _raw_validity(cert, decoded)
        exts = cert.extensions
    except ValueError as e:
        raise ParseError(str(e) or "Malformed certificate") from e

    ku = _extension(exts, ExtensionOID.KEY_USAGE)
    ku_names = _key_usage(cast(x509.KeyUsage, ku)) if ku is not None else []
    eku = _extension(exts, ExtensionOID.EXTENDED_KEY_USAGE)
    san = _extension(exts, ExtensionOID.SUBJECT_ALTERNATIVE_NAME)

    return CertificateModel(
        subject=cert.subject.rfc4514_string(),
        issuer=cert.issuer.rfc4514_string(),
        version=cert.version.value + 1,
        serial_number_hex=_serial_hex(cert.serial_number),
        not_before=not_before,
        not_after=not_after,
        public_key=_public_key(cert, decoded),
        key_usage=",".join(ku_names) or None,
        extended_key_usage=(
            StringList([_EKU_NAMES.get(oid, oid.dotted_string) for oid in eku])
            if eku is not None else None
        ),
        signature_algorithm=_signature_name(cert),
        subject_alt_names=(
            WrappedEntries([_general_name(g) for g in san]) if san is not None else None
        ),
    )


def parse_csr(pem: str) -> CsrModel:
    try:
        csr = x509.load_pem_x509_csr(_block(_CSR_BLOCK, pem, "certificate request"))
        exts = csr.extensions
    except ValueError as e:
        raise ParseError(str(e) or "Malformed certificate request") from e

    requests: List[CsrExtension] = []
    for ext in exts:
        name = _EXT_NAMES.get(ext.oid, ext.oid.dotted_string)
        values: Optional[List[Dict[str, Any]]] = None
        if isinstance(ext.value, x509.SubjectAlternativeName):
            values = [_general_name(g) for g in ext.value]
        requests.append(CsrExtension(name=name, values=values))

    return CsrModel(
        subject=csr.subject.rfc4514_string(),
        signature_algorithm=_signature_name(csr),
        extension_requests=requests,
    )
