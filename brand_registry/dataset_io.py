from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from brand_registry.models import BrandRecord
from brand_registry.normalization import collation_key


logger = logging.getLogger(__name__)


def load_dataset(path: str | Path, key: str = "icons") -> dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Dataset root must be a mapping: {p}")

    entries = data.get(key)
    if not isinstance(entries, list):
        raise ValueError(f"Dataset is missing list {key!r}: {p}")
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict) or not isinstance(entry.get("title"), str):
            raise ValueError(f"Dataset entry {key}[{i}] must be a mapping with a string title: {p}")

    logger.info("Loaded %d entries from %s", len(entries), p)
    return data


def merge_record(data: dict[str, Any], record: BrandRecord, key: str = "icons") -> dict[str, Any]:
    """New document with `record` inserted and the entries re-sorted by title."""
    entries = [*data[key], record.to_dict()]
    entries.sort(key=lambda e: collation_key(e["title"]))
    return {**data, key: entries}


def dumps_dataset(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=4, ensure_ascii=False) + "\n"


def write_dataset(path: str | Path, data: dict[str, Any]) -> Path:
    """Rewrite the whole dataset; the target is replaced only once the new file is complete."""
    p = Path(path)
    payload = dumps_dataset(data)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        if p.exists():
            shutil.copymode(p, tmp_name)
        else:
            umask = os.umask(0)
            os.umask(umask)
            os.chmod(tmp_name, 0o666 & ~umask)
        os.replace(tmp_name, p)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info("Wrote %s", p)
    return p
