"""
Capture planning.

Decides which configured terms have to be (re-)fetched in this run:
- first run (no index yet): every configured term
- later runs: terms not in the index yet, plus every active term

Active terms are re-fetched on every run because enrollment keeps changing.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, List, Optional

from classcatalog.model import TermConfig


def plan_terms(
    configured_terms: Iterable[TermConfig],
    prior_index: Optional[AbstractSet[str]],
) -> List[str]:
    """
    Return the names of the terms to fetch, in configuration order.
    """
    if prior_index is None:
        return [t.name for t in configured_terms]

    return [t.name for t in configured_terms if t.active or t.name not in prior_index]


def terms_to_record(configured_terms: Iterable[TermConfig]) -> List[str]:
    """
    Return the term names to store in the index after a successful run.

    This is the full configured list, not just the terms fetched in this run,
    so terms dropped from the configuration also drop out of the index.
    """
    return [t.name for t in configured_terms]
