"""Testes do serializador iCalendar."""

from __future__ import annotations

from api.codecs.ics import FOLD_WIDTH, parse, serialize, serialize_property
from app.domain.calendar_object import CalendarObject
from tests.fakes.calendar_samples import THREE_EVENT_CALENDAR, ics, make_event


def test_properties_are_sorted_by_name() -> None:
    event = make_event(SUMMARY="b", DESCRIPTION="a")

    assert serialize(event) == ics("BEGIN:VEVENT", "DESCRIPTION:a", "SUMMARY:b", "END:VEVENT")


def test_parameterized_names_sort_after_plain_prefix() -> None:
    event = make_event({"DTSTART;TZID=X": "2", "DTEND": "3", "DTSTART": "1"})

    assert serialize(event) == ics(
        "BEGIN:VEVENT",
        "DTEND:3",
        "DTSTART:1",
        "DTSTART;TZID=X:2",
        "END:VEVENT",
    )


def test_text_properties_come_before_child_blocks() -> None:
    calendar = CalendarObject(
        type="VCALENDAR",
        properties={
            "VEVENT": [make_event(UID="1")],
            "X-WR-CALNAME": "Time",
            "PRODID": "p",
        },
    )

    assert serialize(calendar) == ics(
        "BEGIN:VCALENDAR",
        "PRODID:p",
        "X-WR-CALNAME:Time",
        "BEGIN:VEVENT",
        "UID:1",
        "END:VEVENT",
        "END:VCALENDAR",
    )


def test_output_does_not_depend_on_construction_order() -> None:
    first = make_event(SUMMARY="s", DESCRIPTION="d", LOCATION="l")
    second = make_event(LOCATION="l", DESCRIPTION="d", SUMMARY="s")

    assert serialize(first) == serialize(second)


def test_values_are_escaped() -> None:
    assert serialize_property("SUMMARY", "a, b; c\nd") == "SUMMARY:a\\, b\\; c\\nd"


def test_long_values_are_folded() -> None:
    line = serialize_property("DESCRIPTION", "x" * 200)

    physical = line.split("\r\n")
    assert len(physical[0]) == FOLD_WIDTH
    assert all(part.startswith(" ") for part in physical[1:])
    assert all(len(part) <= FOLD_WIDTH + 1 for part in physical[1:])


def test_round_trip_preserves_tree() -> None:
    calendar = parse(THREE_EVENT_CALENDAR)

    assert parse(serialize(calendar)) == calendar


def test_round_trip_of_long_escaped_description() -> None:
    description = "Group 2: 7 miles, easy; stay together\n" * 5
    event = make_event(SUMMARY="Long run", DESCRIPTION=description)

    reparsed = parse(serialize(event), root_tag="VEVENT")

    assert reparsed.text("DESCRIPTION") == description
