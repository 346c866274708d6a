import logging
from pathlib import Path
from typing import Annotated, Literal

from fastmcp import FastMCP
from pydantic import Field

from .common import sha256_hex
from .logging_conf import setup_logging
from .path_utils import read_pem_text
from .records import ParsedRecord
from .render import get_renderer
from .resource_store import ResultStore
from .settings import Settings
from .summary import summarize_pem

RESULT_URI_PREFIX = "pemlens://results/"

settings = Settings.from_env()
setup_logging(settings)
log = logging.getLogger(__name__)

store = ResultStore(ttl_seconds=settings.RESULT_TTL_SEC)

mcp = FastMCP(
    name="PemLens",
    instructions=(
        "Purpose: read PEM text (certificate, certificate signing request, private key) and return a "
        "normalized record of its contents. No network access, no file writes.\n\n"
        "Use me when: you need subject/issuer, validity window (YYYY-MM-DD HH:MM:SS, UTC), public key "
        "algorithm and size, signature/hash algorithm, key usages, or subject alternative names.\n"
        "Do NOT use me for: signature verification, chain or revocation checks, or exporting keys.\n\n"
        "How to call:\n"
        "- PEM text → `parse_pem_text(pem_text=...)`.\n"
        "- Local file → `parse_pem_file(path=...)`.\n"
        "- Human-readable output → `render_pem_text(pem_text=..., style='text'|'json')`.\n\n"
        "Outputs: a JSON object whose `kind` is one of `certificate`, `csr`, `private_key`, `error`, plus "
        "`result_uri` pointing at the stored record (`pemlens://results/{id}`).\n\n"
        "Safety: private key contents are never parsed, returned or logged."
    ),
)


def _record_payload(record: ParsedRecord, data: bytes) -> dict:
    payload = record.to_dict()
    rid = store.put(payload)
    return {
        **payload,
        "digest_sha256": sha256_hex(data),
        "result_uri": f"{RESULT_URI_PREFIX}{rid}",
    }


@mcp.tool(description="Health check; returns 'pong'.")
def ping() -> str:
    return "pong"


@mcp.tool(
    description=(
        "Parse PEM text (certificate, CSR or private key) and return the normalized record. "
        "Read-only and idempotent."
    ),
    tags={"pemlens", "x509", "analysis"},
    annotations={
        "title": "Parse PEM text",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def parse_pem_text(
    pem_text: Annotated[
        str,
        Field(description="PEM text including its -----BEGIN ...----- / -----END ...----- markers."),
    ],
) -> dict:
    """
    Examples:

    - Certificate:
      { "pem_text": "-----BEGIN CERTIFICATE-----\\nMIIB...\\n-----END CERTIFICATE-----" }
    """
    record = summarize_pem(pem_text)
    return _record_payload(record, pem_text.encode("utf-8"))


@mcp.tool(
    description="Read a local PEM file and return the normalized record. Read-only and idempotent.",
    tags={"pemlens", "x509", "analysis", "filesystem"},
    annotations={
        "title": "Parse PEM file",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def parse_pem_file(
    path: Annotated[Path, Field(description="Local path (or file:// URI) to the PEM file.")],
) -> dict:
    p, text = read_pem_text(str(path))
    log.info("parsing PEM file %s", p)
    record = summarize_pem(text)
    return {"path": str(p), **_record_payload(record, text.encode("utf-8"))}


@mcp.tool(
    description="Parse PEM text and return it rendered as plain text or pretty JSON.",
    tags={"pemlens", "render"},
    annotations={"title": "Render PEM text", "readOnlyHint": True, "idempotentHint": True},
)
def render_pem_text(
    pem_text: Annotated[str, Field(description="PEM text to parse.")],
    style: Annotated[
        Literal["text", "json"], Field(description="Output style.")
    ] = "text",
) -> str:
    return get_renderer(style).render(summarize_pem(pem_text))


@mcp.resource(
    RESULT_URI_PREFIX + "{rid}",
    name="parse_result",
    description="A previously returned parse record, kept for a limited time.",
    mime_type="application/json",
)
def get_result(rid: str) -> dict:
    return store.get(rid)


@mcp.prompt(
    name="explain_pem_record",
    description="Turn a PemLens record JSON into a short explanation for a non-expert.",
    tags={"pemlens", "prompt", "explain"},
)
def explain_pem_record(
    record_json: Annotated[str, Field(description="A JSON record as returned by PemLens tools.")],
) -> str:
    return (
        "Given this PemLens record, explain it to a non-expert:\n"
        f"{record_json}\n"
        "If `kind` is `error`, say the input could not be read and quote the message. Otherwise explain: "
        "what kind of object it is; subject/issuer; validity window; key algorithm and size; "
        "signature/hash algorithm; usages and alternative names; and any risks "
        "(RSA under 2048 bits, SHA1 or MD5 hashes, validity already over). Keep it under 150 words."
    )


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
