import os
import pathlib
from urllib.parse import urlparse, unquote

def _norm(p: pathlib.Path) -> pathlib.Path:
    return p.expanduser().resolve(strict=False)

def parse_file_uri(uri_or_path: str) -> pathlib.Path:
    if uri_or_path.startswith("file://"):
        path = unquote(urlparse(uri_or_path).path or "")
        if os.name == "nt" and len(path) > 2 and path[0] == "/" and path[2] == ":":
            path = path[1:]
        return pathlib.Path(path)
    return pathlib.Path(uri_or_path)

def resolve_path(path_like: str | os.PathLike[str]) -> pathlib.Path:
    return _norm(parse_file_uri(str(path_like)))

def read_pem_text(path_like: str | os.PathLike[str]) -> tuple[pathlib.Path, str]:
    p = resolve_path(path_like)
    return p, p.read_bytes().decode("utf-8", errors="replace")
