"""
File I/O utilities: safe write and structured (YAML/JSON) load/dump.

All functions operate on explicit paths — no implicit directory lookups.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from debtwise.core.exceptions import FileIOError
from debtwise.core.types import PathLike

_YAML_SUFFIXES = {".yaml", ".yml"}


def safe_write(filepath: PathLike, content: str, mode: str = "w", encoding: str = "utf-8") -> None:
    """Write content to a file, creating parent directories as needed.

    Content goes to a sibling temp file first and is then moved into place,
    so a crash mid-write never leaves a truncated file behind.
    """
    filepath = str(filepath)
    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
    tmp_path = f"{filepath}.tmp"
    with open(tmp_path, mode, encoding=encoding) as f:
        f.write(content)
    os.replace(tmp_path, filepath)


def load_structured(path: PathLike) -> Any:
    """Load a YAML or JSON document, picking the parser from the suffix.

    Returns None for an empty document.

    Raises:
        FileIOError: If the file cannot be read or parsed.
    """
    path = Path(path).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileIOError(f"Could not read {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            return json.loads(text) if text.strip() else None
        return yaml.safe_load(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise FileIOError(f"Could not parse {path}: {e}") from e


def dump_structured(path: PathLike, data: Any) -> None:
    """Write data as YAML or JSON depending on the file suffix."""
    path = Path(path).expanduser()
    if path.suffix.lower() in _YAML_SUFFIXES:
        content = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    else:
        content = json.dumps(data, indent=2, default=str) + "\n"

    try:
        safe_write(path, content)
    except OSError as e:
        raise FileIOError(f"Could not write {path}: {e}") from e
    logger.debug(f"Wrote {path}")
