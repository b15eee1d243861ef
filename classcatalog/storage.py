"""
Persistent storage of scraped catalogs.

This module manages the files inside the data directory:

    <term>.json   {"courses": [...], "lastUpdated": <epoch millis>}
    index.json    {"terms": [...]}

Design rationale:
- one file per term, so the front end only loads the term it shows
- index.json lists the terms already captured, so closed terms are not
  scraped again on the next run
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Iterable, Optional

from classcatalog.model import Course


INDEX_NAME = "index.json"


class IndexFileError(ValueError):
    """
    Raised when index.json exists but cannot be read as {"terms": [...]}.
    """


def _index_path(data_dir: str | Path) -> Path:
    return Path(data_dir) / INDEX_NAME


def term_path(data_dir: str | Path, term: str) -> Path:
    return Path(data_dir) / f"{term}.json"


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(payload, ensure_ascii=False, separators=(",", ":")),
        encoding="utf-8",
    )


def load_index(data_dir: str | Path) -> Optional[set[str]]:
    """
    Load the set of captured terms from index.json.

    Returns None if the file does not exist yet (first run).
    A broken index raises IndexFileError instead of silently re-scraping every term.
    """
    index_path = _index_path(data_dir)

    if not index_path.exists():
        return None

    try:
        data = json.loads(index_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise IndexFileError(f"Cannot read {index_path}: {exc}") from exc

    terms = data.get("terms") if isinstance(data, dict) else None
    if not isinstance(terms, list):
        raise IndexFileError(f"{index_path} has no 'terms' list")

    return {t for t in terms if isinstance(t, str)}


def save_index(data_dir: str | Path, terms: Iterable[str]) -> None:
    """
    Replace index.json with the given terms (order is kept).
    """
    _write_json(_index_path(data_dir), {"terms": list(terms)})


def save_term_catalog(
    data_dir: str | Path,
    term: str,
    courses: Iterable[Course],
    last_updated: Optional[int] = None,
) -> Path:
    """
    Write <term>.json and return its path.

    last_updated defaults to the current time in epoch milliseconds.
    """
    if last_updated is None:
        last_updated = int(time.time() * 1000)

    path = term_path(data_dir, term)
    _write_json(
        path,
        {
            "courses": [c.to_dict() for c in courses],
            "lastUpdated": last_updated,
        },
    )
    return path


def load_term_catalog(data_dir: str | Path, term: str) -> dict[str, Any]:
    return json.loads(term_path(data_dir, term).read_text(encoding="utf-8"))
