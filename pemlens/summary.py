# pemlens/summary.py
from __future__ import annotations

import enum
import json
import logging
from typing import Any, Dict

from .dates import normalize_date
from .extensions import as_list, format_csr_san, format_extension, parse_extended_key_usage
from .keys import describe_key
from .records import CertificateRecord, CsrRecord, ErrorRecord, ParsedRecord, PrivateKeyRecord
from .sigalg import certificate_signature_fields, csr_signature_fields
from .x509model import (
    CertificateModel,
    CertificateParser,
    CsrModel,
    CsrParser,
    parse_certificate as default_parse_certificate,
    parse_csr as default_parse_csr,
)

log = logging.getLogger(__name__)

BEGIN_CERT = "-----BEGIN CERTIFICATE-----"
BEGIN_CSR = "-----BEGIN CERTIFICATE REQUEST-----"
BEGIN_CSR_LEGACY = "-----BEGIN NEW CERTIFICATE REQUEST-----"
PRIVATE_KEY = "PRIVATE KEY"

INVALID_PEM = "Invalid PEM data"


class PemKind(str, enum.Enum):
    CERTIFICATE = "certificate"
    PRIVATE_KEY = "private_key"
    CSR = "csr"
    INVALID = "invalid"


def classify(text: str) -> PemKind:
    # order matters: a certificate bundle may also carry a private key
    if BEGIN_CERT in text:
        return PemKind.CERTIFICATE
    if PRIVATE_KEY in text:
        return PemKind.PRIVATE_KEY
    if BEGIN_CSR in text or BEGIN_CSR_LEGACY in text:
        return PemKind.CSR
    return PemKind.INVALID


def certificate_record(model: CertificateModel) -> CertificateRecord:
    fields: Dict[str, Any] = {
        "subject": model.subject,
        "issuer": model.issuer,
        "version": model.version,
        "serial_number": model.serial_number_hex,
        "not_before": normalize_date(model.not_before),
        "not_after": normalize_date(model.not_after),
    }

    key = describe_key(model.public_key)
    fields["public_key_algorithm"] = key.algorithm
    fields["public_key_length"] = key.length

    if model.key_usage:
        fields["key_usage"] = model.key_usage
    if model.extended_key_usage is not None:
        fields["extended_key_usage"] = as_list(parse_extended_key_usage(model.extended_key_usage))
    if model.signature_algorithm:
        fields.update(certificate_signature_fields(model.signature_algorithm))
    if model.subject_alt_names is not None:
        fields["subject_alt_names"] = as_list(format_extension(model.subject_alt_names))

    return CertificateRecord(**fields)


def csr_record(model: CsrModel) -> CsrRecord:
    fields: Dict[str, Any] = {"subject": json.dumps(model.subject)}
    fields.update(csr_signature_fields(model.signature_algorithm))

    san = next((e for e in model.extension_requests if e.name == "subjectAltName"), None)
    if san is not None and san.values:
        fields["subject_alt_names"] = format_csr_san(san.values)

    return CsrRecord(**fields)


def summarize_pem(
    text: str,
    *,
    parse_certificate: CertificateParser = default_parse_certificate,
    parse_csr: CsrParser = default_parse_csr,
) -> ParsedRecord:
    kind = classify(text)
    log.debug("classified PEM input as %s", kind.value)

    if kind is PemKind.PRIVATE_KEY:
        return PrivateKeyRecord()
    if kind is PemKind.INVALID:
        return ErrorRecord(message=INVALID_PEM)

    try:
        if kind is PemKind.CERTIFICATE:
            return certificate_record(parse_certificate(text))
        return csr_record(parse_csr(text))
    except Exception as e:
        log.warning("failed to parse %s: %s", kind.value, str(e))
        return ErrorRecord(message=str(e) or e.__class__.__name__)


def summarize_bytes(data: bytes, **parsers: Any) -> ParsedRecord:
    return summarize_pem(data.decode("utf-8", errors="replace"), **parsers)
