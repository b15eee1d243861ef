"""
Parsing (class schedule search HTML -> Course records).

- Takes one search results page (one term / school / optional department)
- Extracts every course block in document order
- Extracts every section block nested inside a course block
- Splits sections into lecture / lab groups

Important rules (DO NOT CHANGE):
- 1 course block = 1 Course, no filtering, no reordering
- Missing or odd fields become "" / None, parsing never raises
- units only looks at the FIRST character ("Variable" -> None)
"""

from __future__ import annotations

import re
import uuid
from typing import List, Optional, Sequence, Tuple, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from classcatalog.model import Course, Section, SectionGroups


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------

COURSE_SELECTOR = ".scpi__classes--row"
SECTION_SELECTOR = ".scpi-class__data"

COURSE_ID_ATTR = "data-course-id"
SECTION_ID_ATTR = "data-section-id"

# The registrar labels courses outside of any school (ROTC, Beyond Boundaries, ...)
# with the name of the university. Those are stored as "Other".
INSTITUTION_SCHOOL = "Washington University in St. Louis"
OTHER_SCHOOL = "Other"

_WS_RE = re.compile(r"\s+")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_CLOCK_RE = re.compile(r"^(\d+):(\d+)(?:\s+(\S+))?")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _text(el: Tag, selector: str) -> str:
    """
    Concatenated text of all descendants matching selector, or "" if none match.
    """
    return "".join(node.get_text() for node in el.select(selector))


def _field(el: Tag, name: str) -> str:
    # section fields share a class prefix and only differ by suffix
    return _text(el, f'[class*="{name}"]')


def _collapse(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def _leading_int(text: str) -> Optional[int]:
    """
    Integer at the start of text ("01" -> 1, "12 (lab)" -> 12), or None.
    """
    m = _LEADING_INT_RE.match(text)
    if not m:
        return None
    return int(m.group(1))


def school_label(school: str) -> str:
    if school == INSTITUTION_SCHOOL:
        return OTHER_SCHOOL
    return school


# ---------------------------------------------------------------------------
# Field parsing (total functions)
# ---------------------------------------------------------------------------


def parse_units(text: str) -> Optional[int]:
    """
    "3" -> 3, "Variable" / "Variable 1-3" -> None.

    Only the first character is read; the registrar never shows multi-digit units.
    """
    raw = text.strip()
    if raw.startswith("Variable"):
        return None
    # int() only takes decimal digits, "²" is a digit but not decimal
    if raw and raw[0].isdecimal():
        return int(raw[0])
    return None


def parse_clock(text: str) -> Optional[int]:
    """
    Convert '9:00 AM' to minutes since midnight (540).

    12:xx AM -> 0:xx, 12:xx PM -> 12:xx. Returns None if the format is unknown.
    """
    m = _CLOCK_RE.match(text.strip())
    if not m:
        return None
    hour = int(m.group(1)) % 12
    if m.group(3) == "PM":
        hour += 12
    return hour * 60 + int(m.group(2))


def parse_time_range(text: str) -> Optional[Tuple[int, ...]]:
    """
    '10:00 AM - 10:50 AM' -> (600, 650); blank -> None.
    """
    raw = _collapse(text)
    if not raw:
        return None

    minutes: List[int] = []
    for part in raw.split("-"):
        value = parse_clock(part)
        if value is None:
            return None
        minutes.append(value)
    return tuple(minutes)


def parse_seats(text: str) -> Optional[Tuple[Optional[int], ...]]:
    """
    '25 / 30' -> (25, 30); 'Waitlist (2)' -> None.

    Every '/' separates a number, so three-part values are kept as-is.
    """
    raw = _collapse(text)
    if raw.startswith("Waitlist"):
        return None
    return tuple(_leading_int(part) for part in raw.split("/"))


def parse_days(text: str) -> Optional[Tuple[str, ...]]:
    raw = text.strip()
    if not raw:
        return None
    return tuple(raw.split())


def parse_instructors(text: str) -> Tuple[str, ...]:
    """
    'Smith, A; Doe, B' -> ('Smith, A', 'Doe, B').

    A blank field gives ('',) so every section has at least one entry,
    which is what existing consumers of the JSON expect.
    """
    raw = _collapse(text)
    if not raw:
        return ("",)
    return tuple(name.strip() for name in raw.split(";"))


def is_numbered(section: Section) -> bool:
    return _leading_int(section.number) is not None


def classify_sections(
    sections: Sequence[Section],
    keep_letter_only_sections: bool = False,
) -> SectionGroups:
    """
    Split sections into lecture (numbered) and lab (lettered) groups.

    A course with both kinds gets lecture + lab. Otherwise only lecture is set,
    holding the numbered sections. A course with ONLY lettered sections therefore
    ends up with an empty lecture list, unless keep_letter_only_sections is set.
    """
    numbered = tuple(s for s in sections if is_numbered(s))
    lettered = tuple(s for s in sections if not is_numbered(s))

    if numbered and lettered:
        return SectionGroups(lecture=numbered, lab=lettered)
    if not numbered and keep_letter_only_sections:
        return SectionGroups(lecture=lettered)
    return SectionGroups(lecture=numbered)


# ---------------------------------------------------------------------------
# Block parsing
# ---------------------------------------------------------------------------


def parse_section(section_el: Tag) -> Section:
    """
    Parses one section block.
    """
    return Section(
        id=section_el.get(SECTION_ID_ATTR) or "",
        number=_field(section_el, "value-section-number").strip(),
        term=_field(section_el, "value-term").strip(),
        instructor=parse_instructors(_field(section_el, "value-instructor")),
        delivery=_field(section_el, "value-delivery-mode").strip(),
        days=parse_days(_field(section_el, "value-days")),
        time=parse_time_range(_field(section_el, "value-time")),
        seats=parse_seats(_field(section_el, "value-seating")),
    )


def parse_course(
    course_el: Tag,
    school: str,
    keep_letter_only_sections: bool = False,
) -> Course:
    """
    Parses one course block including all of its sections.
    """
    sections = [parse_section(el) for el in course_el.select(SECTION_SELECTOR)]

    return Course(
        id=course_el.get(COURSE_ID_ATTR) or str(uuid.uuid4()),
        school=school_label(school),
        department=_text(course_el, ".scpi-class__department").strip(),
        title=_text(course_el, ".scpi-class__heading.wide").strip(),
        catalog_number=_text(course_el, ".scpi-class__heading.middle").strip(),
        units=parse_units(_text(course_el, ".scpi-class__heading.narrow")),
        description=_text(course_el, ".scpi-class__details--content").strip(),
        level=_text(course_el, ".scpi-class__details--title").strip(),
        sections=classify_sections(sections, keep_letter_only_sections),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_catalog(
    html: Union[str, bytes, BeautifulSoup],
    school: str,
    keep_letter_only_sections: bool = False,
) -> List[Course]:
    """
    Parses one catalog search page into Course records, in document order.
    """
    soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "html.parser")

    return [
        parse_course(course_el, school, keep_letter_only_sections)
        for course_el in soup.select(COURSE_SELECTOR)
    ]