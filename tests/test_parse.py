"""
Unit tests for catalog page parsing.

The HTML below mirrors the registrar's class schedule search markup:
- .scpi__classes--row = one course
- .scpi-class__data = one section, fields carry a shared "value-" class prefix
"""

import json
import unittest

from classcatalog.parse import (
    classify_sections,
    parse_catalog,
    parse_clock,
    parse_days,
    parse_instructors,
    parse_seats,
    parse_time_range,
    parse_units,
)
from classcatalog.model import Section


def _section_html(number, time="", seats="10/20", days="M W", instructor="Smith, Ann", section_id=None):
    attr = f' data-section-id="{section_id}"' if section_id else ""
    return f"""
    <div class="scpi-class__data"{attr}>
      <span class="scpi-class__value-section-number">{number}</span>
      <span class="scpi-class__value-term">Fall 2025</span>
      <span class="scpi-class__value-instructor">{instructor}</span>
      <span class="scpi-class__value-delivery-mode">In Person</span>
      <span class="scpi-class__value-days">{days}</span>
      <span class="scpi-class__value-time">{time}</span>
      <span class="scpi-class__value-seating">{seats}</span>
    </div>
    """


def _course_html(sections="", units="3", course_id=None, title="Intro to Computing"):
    attr = f' data-course-id="{course_id}"' if course_id else ""
    return f"""
    <div class="scpi__classes--row"{attr}>
      <div class="scpi-class__department">Computer Science &amp; Engineering</div>
      <div class="scpi-class__heading wide"> {title} </div>
      <div class="scpi-class__heading middle">CSE 131</div>
      <div class="scpi-class__heading narrow">{units}</div>
      <div class="scpi-class__details--title">Undergraduate</div>
      <div class="scpi-class__details--content">  An introduction.  </div>
      {sections}
    </div>
    """


def _page(*courses):
    return "<html><body><div class='scpi__classes'>" + "".join(courses) + "</div></body></html>"


def _section(number: str) -> Section:
    return Section(
        id="",
        number=number,
        term="",
        instructor=("",),
        delivery="",
        days=None,
        time=None,
        seats=None,
    )


class TestFieldParsing(unittest.TestCase):
    def test_units_single_digit(self) -> None:
        for digit in "0123456789":
            self.assertEqual(parse_units(digit), int(digit))

    def test_units_variable_is_none(self) -> None:
        self.assertIsNone(parse_units("Variable"))
        self.assertIsNone(parse_units("  Variable 1-3 "))

    def test_units_only_first_character(self) -> None:
        # Documents the single-digit rule: "12" is read as 1
        self.assertEqual(parse_units("12"), 1)
        self.assertEqual(parse_units("3.0"), 3)

    def test_units_missing_is_none(self) -> None:
        self.assertIsNone(parse_units(""))
        self.assertIsNone(parse_units("TBA"))

    def test_units_non_decimal_digit_is_none(self) -> None:
        # "²" counts as a digit for str.isdigit but int() rejects it
        self.assertIsNone(parse_units("²"))
        self.assertIsNone(parse_units("½"))

    def test_time_range(self) -> None:
        self.assertEqual(parse_time_range("9:00 AM - 9:50 AM"), (540, 590))
        self.assertEqual(parse_time_range("12:00 PM - 12:50 PM"), (720, 770))
        self.assertEqual(parse_time_range("12:00 AM - 12:50 AM"), (0, 50))
        self.assertEqual(parse_time_range("1:00 PM -\n   2:20 PM"), (780, 860))

    def test_time_blank_is_none(self) -> None:
        self.assertIsNone(parse_time_range(""))
        self.assertIsNone(parse_time_range("   \n "))

    def test_time_unknown_format_is_none(self) -> None:
        self.assertIsNone(parse_time_range("TBA"))

    def test_clock(self) -> None:
        self.assertEqual(parse_clock("11:59 PM"), 1439)
        self.assertEqual(parse_clock("7:05 AM"), 425)
        self.assertIsNone(parse_clock("noon"))

    def test_seats(self) -> None:
        self.assertEqual(parse_seats("25 / 30"), (25, 30))
        self.assertEqual(parse_seats("10/20"), (10, 20))
        self.assertEqual(parse_seats("1 / 2 / 3"), (1, 2, 3))

    def test_seats_unparseable_part_is_none(self) -> None:
        self.assertEqual(parse_seats(""), (None,))
        self.assertEqual(parse_seats("10 / "), (10, None))
        self.assertEqual(parse_seats("TBA / 30"), (None, 30))

    def test_seats_waitlist_is_none(self) -> None:
        self.assertIsNone(parse_seats("Waitlist (2)"))
        self.assertIsNone(parse_seats("  Waitlist"))

    def test_days(self) -> None:
        self.assertEqual(parse_days("M W F"), ("M", "W", "F"))
        self.assertIsNone(parse_days("   "))

    def test_instructors(self) -> None:
        self.assertEqual(parse_instructors("Smith, Ann;  Doe,\n John "), ("Smith, Ann", "Doe, John"))
        self.assertEqual(parse_instructors("Staff"), ("Staff",))

    def test_empty_instructor_keeps_one_entry(self) -> None:
        self.assertEqual(parse_instructors(""), ("",))


class TestClassifySections(unittest.TestCase):
    def test_numbered_and_lettered(self) -> None:
        sections = [_section("01"), _section("A"), _section("02"), _section("B")]
        groups = classify_sections(sections)
        self.assertEqual([s.number for s in groups.lecture], ["01", "02"])
        assert groups.lab is not None
        self.assertEqual([s.number for s in groups.lab], ["A", "B"])

    def test_numbered_only_has_no_lab(self) -> None:
        groups = classify_sections([_section("01"), _section("02")])
        self.assertEqual([s.number for s in groups.lecture], ["01", "02"])
        self.assertIsNone(groups.lab)
        self.assertNotIn("lab", groups.to_dict())

    def test_lettered_only_drops_sections_by_default(self) -> None:
        groups = classify_sections([_section("A"), _section("B")])
        self.assertEqual(groups.lecture, ())
        self.assertIsNone(groups.lab)

    def test_lettered_only_can_be_kept(self) -> None:
        groups = classify_sections([_section("A"), _section("B")], keep_letter_only_sections=True)
        self.assertEqual([s.number for s in groups.lecture], ["A", "B"])
        self.assertIsNone(groups.lab)


class TestParseCatalog(unittest.TestCase):
    def test_end_to_end_course(self) -> None:
        html = _page(
            _course_html(
                sections=_section_html("01", time="10:00 AM - 10:50 AM", seats="10/20", section_id="S1")
                + _section_html("02", time="", seats="Waitlist (2)"),
            )
        )
        courses = parse_catalog(html, "Engineering")

        self.assertEqual(len(courses), 1)
        course = courses[0]
        self.assertTrue(course.id)
        self.assertEqual(course.school, "Engineering")
        self.assertEqual(course.department, "Computer Science & Engineering")
        self.assertEqual(course.title, "Intro to Computing")
        self.assertEqual(course.catalog_number, "CSE 131")
        self.assertEqual(course.units, 3)
        self.assertEqual(course.level, "Undergraduate")
        self.assertEqual(course.description, "An introduction.")
        self.assertIsNone(course.sections.lab)

        a, b = course.sections.lecture
        self.assertEqual(a.id, "S1")
        self.assertEqual(a.number, "01")
        self.assertEqual(a.term, "Fall 2025")
        self.assertEqual(a.instructor, ("Smith, Ann",))
        self.assertEqual(a.delivery, "In Person")
        self.assertEqual(a.days, ("M", "W"))
        self.assertEqual(a.time, (600, 650))
        self.assertEqual(a.seats, (10, 20))
        self.assertEqual(b.id, "")
        self.assertIsNone(b.time)
        self.assertIsNone(b.seats)

    def test_course_id_from_attribute(self) -> None:
        courses = parse_catalog(_page(_course_html(course_id="12345")), "Engineering")
        self.assertEqual(courses[0].id, "12345")

    def test_missing_ids_are_unique(self) -> None:
        courses = parse_catalog(_page(_course_html(), _course_html()), "Engineering")
        self.assertEqual(len(courses), 2)
        self.assertTrue(courses[0].id)
        self.assertNotEqual(courses[0].id, courses[1].id)

    def test_institution_school_becomes_other(self) -> None:
        html = _page(_course_html(), _course_html())
        courses = parse_catalog(html, "Washington University in St. Louis")
        self.assertEqual([c.school for c in courses], ["Other", "Other"])

        courses = parse_catalog(html, "Arts & Sciences")
        self.assertEqual([c.school for c in courses], ["Arts & Sciences", "Arts & Sciences"])

    def test_document_order_is_kept(self) -> None:
        html = _page(_course_html(title="First"), _course_html(title="Second"), _course_html(title="Third"))
        titles = [c.title for c in parse_catalog(html, "Engineering")]
        self.assertEqual(titles, ["First", "Second", "Third"])

    def test_variable_units(self) -> None:
        courses = parse_catalog(_page(_course_html(units="Variable 1-6")), "Engineering")
        self.assertIsNone(courses[0].units)

    def test_superscript_units_do_not_raise(self) -> None:
        courses = parse_catalog(_page(_course_html(units="²")), "Engineering")
        self.assertEqual(len(courses), 1)
        self.assertIsNone(courses[0].units)

    def test_blank_seats_become_null_in_json(self) -> None:
        course = parse_catalog(_page(_course_html(sections=_section_html("01", seats=""))), "Engineering")[0]
        section = course.to_dict()["sections"]["lecture"][0]
        self.assertEqual(section["seats"], [None])
        self.assertIn('"seats": [null]', json.dumps(section))

    def test_lecture_and_lab(self) -> None:
        sections = _section_html("01") + _section_html("A") + _section_html("02") + _section_html("B")
        course = parse_catalog(_page(_course_html(sections=sections)), "Engineering")[0]
        self.assertEqual([s.number for s in course.sections.lecture], ["01", "02"])
        assert course.sections.lab is not None
        self.assertEqual([s.number for s in course.sections.lab], ["A", "B"])

    def test_blank_days_left_out_of_json(self) -> None:
        course = parse_catalog(_page(_course_html(sections=_section_html("01", days=" "))), "Engineering")[0]
        data = course.to_dict()
        section = data["sections"]["lecture"][0]
        self.assertNotIn("days", section)
        self.assertIsNone(section["time"])
        self.assertEqual(section["seats"], [10, 20])
        self.assertEqual(data["catalogNumber"], "CSE 131")

    def test_missing_fields_do_not_raise(self) -> None:
        html = "<div class='scpi__classes--row'><div class='scpi-class__data'></div></div>"
        courses = parse_catalog(html, "Engineering")

        self.assertEqual(len(courses), 1)
        course = courses[0]
        self.assertEqual(course.title, "")
        self.assertIsNone(course.units)
        # the one section has no number, so it is not a numbered lecture
        self.assertEqual(course.sections.lecture, ())

    def test_empty_page(self) -> None:
        self.assertEqual(parse_catalog("<html><body>No classes found.</body></html>", "Engineering"), [])


if __name__ == "__main__":
    unittest.main()
