# pemlens/extensions.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Union


@dataclass(frozen=True)
class WrappedEntries:
    """Extension value wrapping an ordered array of structured entries (e.g. {"dns": "a.example"})."""
    entries: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class StringList:
    items: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ScalarString:
    value: str


ExtensionValue = Union[WrappedEntries, StringList, ScalarString]

SAN_TAG_LABELS = (
    ("dns", "DNS"),
    ("rfc822", "Email"),
    ("uri", "URI"),
    ("ip", "IP"),
)


def _serialize(entry: Any) -> str:
    return json.dumps(entry, ensure_ascii=False)


def format_extension(value: ExtensionValue) -> Union[str, List[str]]:
    if isinstance(value, WrappedEntries):
        return [_serialize(e) for e in value.entries]
    if isinstance(value, StringList):
        return list(value.items)
    if isinstance(value, ScalarString):
        return value.value
    raise TypeError(f"unsupported extension value: {type(value).__name__}")


def as_list(formatted: Union[str, List[str]]) -> List[str]:
    if isinstance(formatted, list):
        return formatted
    return [formatted]


def parse_extended_key_usage(value: ExtensionValue) -> Union[str, List[str]]:
    if not isinstance(value, ScalarString):
        return format_extension(value)
    try:
        parsed = json.loads(value.value)
    except ValueError:
        return value.value
    if not isinstance(parsed, list):
        return value.value
    return [p if isinstance(p, str) else _serialize(p) for p in parsed]


def _san_label(entry: Dict[str, Any]) -> str:
    for tag, label in SAN_TAG_LABELS:
        if entry.get(tag):
            return f"{label}: {entry[tag]}"
    return _serialize(entry)


def format_csr_san(entries: Sequence[Dict[str, Any]]) -> List[str]:
    return [_san_label(e) for e in entries]
