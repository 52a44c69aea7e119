from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml


CONFIG_FILENAME = "brand_registry.yaml"

ENV_DATA_PATH = "BRAND_REGISTRY_DATA"
ENV_SCHEMA_PATH = "BRAND_REGISTRY_SCHEMA"
ENV_LOG_LEVEL = "BRAND_REGISTRY_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    data_path: Path
    schema_path: Path
    dataset_key: str = "icons"
    log_level: str = "WARNING"


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _abs_from_repo(repo_root: Path, p: str | Path) -> Path:
    path = Path(p)
    return path if path.is_absolute() else (repo_root / path)


def _load_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML root must be a mapping: {path}")
    return data


def load_settings(
    repo_root: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Resolve settings: defaults, then `brand_registry.yaml`, then environment variables."""
    repo_root = repo_root or _repo_root()
    env = os.environ if environ is None else environ
    file_cfg = _load_config_file(repo_root / CONFIG_FILENAME)

    data_path = env.get(ENV_DATA_PATH) or file_cfg.get("data_path") or "data/brands.json"
    schema_path = env.get(ENV_SCHEMA_PATH) or file_cfg.get("schema_path") or "data/brands.schema.json"
    dataset_key = str(file_cfg.get("dataset_key") or "icons")
    log_level = str(env.get(ENV_LOG_LEVEL) or file_cfg.get("log_level") or "WARNING").upper()

    return Settings(
        data_path=_abs_from_repo(repo_root, data_path),
        schema_path=_abs_from_repo(repo_root, schema_path),
        dataset_key=dataset_key,
        log_level=log_level,
    )
