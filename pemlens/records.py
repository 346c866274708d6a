# pemlens/records.py
from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

KeyAlgorithm = Literal["RSA", "ECDSA", "Unknown"]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> dict:
        # absent fields are dropped, never emitted as null
        return self.model_dump(by_alias=True, exclude_none=True)


class ErrorRecord(_Record):
    kind: Literal["error"] = "error"
    message: str

    @property
    def ok(self) -> bool:
        return False


class CertificateRecord(_Record):
    kind: Literal["certificate"] = "certificate"
    subject: str
    issuer: str
    version: int
    serial_number: str
    not_before: Optional[str] = None
    not_after: Optional[str] = None
    public_key_algorithm: Optional[KeyAlgorithm] = None
    public_key_length: Optional[Union[int, Literal["Unknown"]]] = None
    signature_algorithm: Optional[str] = None
    hash_algorithm: Optional[str] = None
    key_usage: Optional[str] = None
    extended_key_usage: Optional[List[str]] = None
    subject_alt_names: Optional[List[str]] = None


class PrivateKeyRecord(_Record):
    kind: Literal["private_key"] = "private_key"
    type: Literal["Private Key"] = "Private Key"


class CsrRecord(_Record):
    kind: Literal["csr"] = "csr"
    subject: str = Field(..., examples=['"CN=example.com,O=Example"'])
    signature_algorithm: str
    hash_algorithm: str
    subject_alt_names: Optional[List[str]] = None


ParsedRecord = Annotated[
    Union[ErrorRecord, CertificateRecord, PrivateKeyRecord, CsrRecord],
    Field(discriminator="kind"),
]
