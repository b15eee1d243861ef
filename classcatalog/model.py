"""
Central data model definitions used across the project.

This module defines the canonical structure of Course and Section objects so that:
- the parser, the driver and the JSON files share the same field names
- records are built once per page and never changed afterwards

Python attributes use snake_case, the JSON files use the camelCase keys
the front end reads (catalogNumber, lastUpdated).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class Section:
    """
    Represents one meeting section of a course.

    time is (start, end) in minutes since midnight, or None.
    seats is usually (enrolled, capacity), or None for waitlist-only sections.
    """

    id: str
    number: str
    term: str
    instructor: Tuple[str, ...]
    delivery: str
    days: Optional[Tuple[str, ...]]
    time: Optional[Tuple[int, ...]]
    seats: Optional[Tuple[Optional[int], ...]]

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "number": self.number,
            "term": self.term,
            "instructor": list(self.instructor),
            "delivery": self.delivery,
        }
        # blank days are left out of the JSON entirely
        if self.days is not None:
            out["days"] = list(self.days)
        out["time"] = list(self.time) if self.time is not None else None
        out["seats"] = list(self.seats) if self.seats is not None else None
        return out


@dataclass(frozen=True)
class SectionGroups:
    """
    Sections of a course split into lecture and (optional) lab groups.

    "Lab" covers discussions, seminars, tutorials etc.
    """

    lecture: Tuple[Section, ...] = ()
    lab: Optional[Tuple[Section, ...]] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"lecture": [s.to_dict() for s in self.lecture]}
        if self.lab is not None:
            out["lab"] = [s.to_dict() for s in self.lab]
        return out


@dataclass(frozen=True)
class Course:
    """
    Represents one course block of a catalog page as stored in <term>.json.
    """

    id: str
    school: str
    department: str
    title: str
    catalog_number: str
    units: Optional[int]
    description: str
    level: str
    sections: SectionGroups = field(default_factory=SectionGroups)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "school": self.school,
            "department": self.department,
            "title": self.title,
            "catalogNumber": self.catalog_number,
            "units": self.units,
            "sections": self.sections.to_dict(),
            "description": self.description,
            "level": self.level,
        }


@dataclass(frozen=True)
class TermConfig:
    """
    One configured term.

    active terms are re-fetched on every run, inactive ones only once.
    """

    name: str
    active: bool = False
