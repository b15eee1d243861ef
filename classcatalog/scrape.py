"""
Downloading class schedule search pages from the registrar.

One request = one (term, school, optional department) search. The page is
returned as raw HTML; parsing lives in classcatalog/parse.py.
"""

from __future__ import annotations

from typing import Optional

import requests


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

SEARCH_URL = "https://registrar.washu.edu/classes-registration/class-schedule-search/"

HEADERS = {
    "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
    "Accept": "*/*",
    "X-Requested-With": "XMLHttpRequest",
}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class CatalogFetchError(Exception):
    """
    Raised when the registrar answers a search with a non-success status.

    Keeps status and body so the failing request can be diagnosed.
    """

    def __init__(
        self,
        term: str,
        school: str,
        department: Optional[str],
        status_code: int,
        reason: str,
        body: str,
    ) -> None:
        self.term = term
        self.school = school
        self.department = department
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(
            f"Failed to download catalog for school: {school} department: {department} "
            f"term: {term}. Status: {status_code}, {reason}.\n{body}"
        )


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def build_form(term: str, school: str, department: Optional[str] = None) -> dict[str, str]:
    form = {"term": term, "school": school}
    if department:
        form["department"] = department
    return form


def download_catalog(
    term: str,
    school: str,
    department: Optional[str] = None,
    session: Optional[requests.Session] = None,
    timeout: float = 30,
) -> str:
    """
    POST one search to the registrar and return the HTML body.

    Raises CatalogFetchError on a non-success status. Connection errors
    (requests.RequestException) are not caught here.
    """
    http = session if session is not None else requests
    resp = http.post(
        SEARCH_URL,
        data=build_form(term, school, department),
        headers=HEADERS,
        timeout=timeout,
    )

    if not resp.ok:
        raise CatalogFetchError(
            term=term,
            school=school,
            department=department,
            status_code=resp.status_code,
            reason=resp.reason,
            body=resp.text,
        )

    return resp.text
