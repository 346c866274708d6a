# pemlens/render.py
import json
from typing import Dict, Protocol

from .records import ErrorRecord, ParsedRecord

TITLE = "PEM Parsing Result"


class Renderer(Protocol):
    def render(self, record: ParsedRecord) -> str: ...


class TextRenderer:
    def render(self, record: ParsedRecord) -> str:
        lines = [TITLE]
        if isinstance(record, ErrorRecord):
            lines.append(f"Error: {record.message}")
            return "\n".join(lines)
        for key, value in record.to_dict().items():
            if key == "kind":
                continue
            if isinstance(value, list):
                value = ", ".join(str(v) for v in value)
            lines.append(f"- {key}: {value}")
        return "\n".join(lines)


class JsonRenderer:
    def __init__(self, indent: int = 2) -> None:
        self._indent = indent

    def render(self, record: ParsedRecord) -> str:
        return json.dumps(record.to_dict(), indent=self._indent, ensure_ascii=False)


_RENDERERS: Dict[str, Renderer] = {
    "text": TextRenderer(),
    "json": JsonRenderer(),
}


def get_renderer(style: str) -> Renderer:
    try:
        return _RENDERERS[style]
    except KeyError:
        raise ValueError(f"Unknown render style: {style!r} (expected one of {sorted(_RENDERERS)})") from None
