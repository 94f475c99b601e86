"""UTF-8 text and JSON helpers shared by the task store."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

PathLike = Path | str

JSON_INDENT = 4


def read_text(path: PathLike) -> str:
    """Read path as text with UTF-8 encoding."""
    p = path if isinstance(path, Path) else Path(path)
    return p.read_text(encoding="utf-8")


def write_text(path: PathLike, text: str) -> None:
    """Write text to path with UTF-8 encoding, creating parent directories."""
    p = path if isinstance(path, Path) else Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


def dump_json(data: Any) -> str:
    """Serialize *data* the way the backing file stores it (4-space indent, readable unicode)."""
    return json.dumps(data, indent=JSON_INDENT, ensure_ascii=False)


def parse_json(text: str) -> Any:
    return json.loads(text)
