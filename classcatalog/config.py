"""
Configuration of a scrape run.

The run is described by a JSON file (default: ./catalog.json):

    {
      "dataDir": "data",
      "terms": [{"name": "FL2025", "active": true}, {"name": "SP2025", "active": false}],
      "schools": {"Engineering": ["CSE", "ESE"], "Arts & Sciences": []}
    }

- dataDir: output folder, relative paths are resolved against the config file
- terms: scanned in this order; active terms are re-fetched on every run
- schools: scanned in this order; an empty list scrapes the whole school in
  one request, otherwise one request per department

Unlike the parser, a missing or broken config is an error (ConfigError), not a default.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from classcatalog.model import TermConfig


DEFAULT_CONFIG_NAME = "catalog.json"
DEFAULT_DATA_DIR = Path("data")


class ConfigError(ValueError):
    """
    Raised for a config file that exists but cannot be used.
    """


@dataclass(frozen=True)
class CatalogConfig:
    data_dir: Path = DEFAULT_DATA_DIR
    terms: tuple[TermConfig, ...] = ()
    schools: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def term_names(self) -> list[str]:
        return [t.name for t in self.terms]


def _parse_terms(raw: Any) -> tuple[TermConfig, ...]:
    if not isinstance(raw, list):
        raise ConfigError("'terms' must be a list")

    out: list[TermConfig] = []
    for item in raw:
        # plain strings are allowed as a shorthand for inactive terms
        if isinstance(item, str):
            name, active = item, False
        elif isinstance(item, dict):
            name, active = item.get("name"), item.get("active", False)
        else:
            raise ConfigError(f"Invalid term entry: {item!r}")

        if not isinstance(name, str) or not name.strip():
            raise ConfigError(f"Term without a name: {item!r}")
        if not isinstance(active, bool):
            raise ConfigError(f"'active' must be true/false for term {name!r}")
        out.append(TermConfig(name=name.strip(), active=active))
    return tuple(out)


def _parse_schools(raw: Any) -> dict[str, tuple[str, ...]]:
    if not isinstance(raw, dict):
        raise ConfigError("'schools' must be an object of school -> department list")

    out: dict[str, tuple[str, ...]] = {}
    for school, depts in raw.items():
        if depts is None:
            depts = []
        if not isinstance(depts, list) or not all(isinstance(d, str) for d in depts):
            raise ConfigError(f"Departments of {school!r} must be a list of strings")
        out[school] = tuple(d.strip() for d in depts if d.strip())
    return out


def config_from_dict(data: Any, base_dir: Path | None = None) -> CatalogConfig:
    """
    Build a CatalogConfig from already decoded JSON.
    """
    if not isinstance(data, dict):
        raise ConfigError("Config must be a JSON object")

    data_dir = Path(data.get("dataDir") or DEFAULT_DATA_DIR)
    if base_dir is not None and not data_dir.is_absolute():
        data_dir = base_dir / data_dir

    return CatalogConfig(
        data_dir=data_dir,
        terms=_parse_terms(data.get("terms", [])),
        schools=_parse_schools(data.get("schools", {})),
    )


def load_config(path: str | Path | None = None) -> CatalogConfig:
    """
    Load the run configuration.

    A missing file is an error too: running with an empty term list would
    overwrite index.json with no terms.
    """
    config_path = Path(path) if path is not None else Path.cwd() / DEFAULT_CONFIG_NAME

    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config {config_path}: {exc}") from exc

    return config_from_dict(data, base_dir=config_path.resolve().parent)
