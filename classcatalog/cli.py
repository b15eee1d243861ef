"""
CLI (Command Line Interface) and run driver.

    classcatalog                      scrape every term that needs it
    classcatalog --term FL2025        scrape only FL2025 (even if captured)
    classcatalog --dry-run            show which terms would be scraped
    classcatalog -c other.json        use another config file

A run:
1. loads index.json and plans the terms (classcatalog/plan.py)
2. for each term, downloads every school / department page in config order
3. writes <term>.json per term
4. rewrites index.json once every planned term is written

A failed download aborts the run before index.json is touched.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional, Sequence

import requests
from rich.console import Console

from classcatalog.config import CatalogConfig, ConfigError, load_config
from classcatalog.model import Course
from classcatalog.parse import parse_catalog
from classcatalog.plan import plan_terms, terms_to_record
from classcatalog.scrape import CatalogFetchError, download_catalog
from classcatalog.storage import IndexFileError, load_index, save_index, save_term_catalog


console = Console()
err_console = Console(stderr=True)

FetchFn = Callable[[str, str, Optional[str]], str]
LogFn = Callable[[str], None]


def _println(msg: str = "") -> None:
    # school names and error bodies are printed as-is, no rich markup
    console.print(msg, markup=False, highlight=False)


@dataclass
class RunResult:
    """
    Outcome of one run.

    written: terms whose <term>.json was written in this run
    recorded: terms stored in index.json at the end of the run
    """

    planned: list[str] = field(default_factory=list)
    written: list[str] = field(default_factory=list)
    recorded: list[str] = field(default_factory=list)


def scrape_term(
    term: str,
    schools: Mapping[str, Sequence[str]],
    fetch: Optional[FetchFn] = None,
    log: LogFn = _println,
    keep_letter_only_sections: bool = False,
) -> list[Course]:
    """
    Download and parse every school (or department) page of one term.

    Courses keep the order school -> department -> position on the page.
    """
    if fetch is None:
        fetch = download_catalog
    courses: list[Course] = []

    for school, departments in schools.items():
        log(f"\t{school}")

        if not departments:
            html = fetch(term, school, None)
            courses.extend(parse_catalog(html, school, keep_letter_only_sections))
            continue

        for dept in departments:
            log(f"\t\t{dept}")
            html = fetch(term, school, dept)
            courses.extend(parse_catalog(html, school, keep_letter_only_sections))

    return courses


def _select_terms(config: CatalogConfig, only_terms: Iterable[str]) -> list[str]:
    known = set(config.term_names())
    wanted = {t.strip() for t in only_terms if t.strip()}

    unknown = sorted(wanted - known)
    if unknown:
        raise ConfigError(f"Unknown term(s): {', '.join(unknown)}")

    return [name for name in config.term_names() if name in wanted]


def run(
    config: CatalogConfig,
    only_terms: Optional[Iterable[str]] = None,
    dry_run: bool = False,
    fetch: Optional[FetchFn] = None,
    log: LogFn = _println,
    keep_letter_only_sections: bool = False,
) -> RunResult:
    """
    Scrape all planned terms and update index.json.

    With only_terms, exactly those configured terms are scraped, and the index
    keeps its previous terms plus the ones written now.
    """
    data_dir = Path(config.data_dir)
    prior = load_index(data_dir)

    result = RunResult()
    if only_terms is not None:
        result.planned = _select_terms(config, only_terms)
    else:
        result.planned = plan_terms(config.terms, prior)

    if dry_run:
        if not result.planned:
            log("Nothing to scrape.")
        for term in result.planned:
            log(f"Would scrape {term}")
        return result

    data_dir.mkdir(parents=True, exist_ok=True)

    for term in result.planned:
        log(f"Scraping catalog for {term}")
        courses = scrape_term(
            term,
            config.schools,
            fetch=fetch,
            log=log,
            keep_letter_only_sections=keep_letter_only_sections,
        )
        save_term_catalog(data_dir, term, courses)
        result.written.append(term)

    if only_terms is not None:
        captured = (prior or set()) | set(result.written)
        result.recorded = [name for name in config.term_names() if name in captured]
    else:
        result.recorded = terms_to_record(config.terms)

    save_index(data_dir, result.recorded)
    return result


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser.
    """
    p = argparse.ArgumentParser(
        prog="classcatalog",
        description="Scrape the registrar class schedule into per-term JSON files",
    )
    p.add_argument("--config", "-c", type=Path, default=None, help="Config file (default: ./catalog.json)")
    p.add_argument("--data-dir", type=Path, default=None, help="Output folder (overrides dataDir)")
    p.add_argument(
        "--term",
        "-t",
        action="append",
        default=None,
        help="Scrape only this configured term, even if already captured (repeatable)",
    )
    p.add_argument("--dry-run", action="store_true", help="Only print the terms that would be scraped")
    p.add_argument(
        "--keep-letter-only-sections",
        action="store_true",
        help="Store sections of courses without numbered sections under 'lecture' instead of dropping them",
    )
    return p


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Exits via SystemExit with a return code.
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        if args.data_dir is not None:
            config = CatalogConfig(data_dir=args.data_dir, terms=config.terms, schools=config.schools)

        result = run(
            config,
            only_terms=args.term,
            dry_run=args.dry_run,
            keep_letter_only_sections=args.keep_letter_only_sections,
        )
    except (CatalogFetchError, ConfigError, IndexFileError, requests.RequestException) as exc:
        err_console.print(f"Error: {exc}", markup=False, highlight=False)
        raise SystemExit(1)

    if not args.dry_run:
        _println(f"Done. Wrote {len(result.written)} term(s) to {Path(config.data_dir).resolve()}")
    raise SystemExit(0)
