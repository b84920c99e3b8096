"""Testes da chave canônica de eventos."""

from __future__ import annotations

import base64

from app.services.event_canonicalizer import canonical_key, is_canonical_property, minimal_event
from tests.fakes.calendar_samples import make_event


def _event(**overrides: str):
    properties = {
        "DTSTART;TZID=America/Los_Angeles": "20250405T063000",
        "DTEND;TZID=America/Los_Angeles": "20250405T063000",
        "SUMMARY": "Team Practice",
        "DESCRIPTION": "Easy miles",
        "LOCATION": "Fullerton Loop",
        "UID": "event-1@upstream",
        "DTSTAMP": "20250401T120000Z",
    }
    properties.update(overrides)
    return make_event(properties)


def test_canonical_properties() -> None:
    assert is_canonical_property("DTSTART")
    assert is_canonical_property("DTEND;TZID=America/Los_Angeles")
    assert is_canonical_property("LOCATION")
    assert not is_canonical_property("UID")
    assert not is_canonical_property("X-GOOGLE-CONFERENCE")


def test_minimal_event_keeps_only_identity_properties() -> None:
    minimal = minimal_event(_event(SEQUENCE="3"))

    assert minimal.type == "VEVENT"
    assert set(minimal.properties) == {
        "DTSTART;TZID=America/Los_Angeles",
        "DTEND;TZID=America/Los_Angeles",
        "SUMMARY",
        "DESCRIPTION",
        "LOCATION",
    }


def test_key_ignores_volatile_properties() -> None:
    base = canonical_key(_event())

    assert canonical_key(_event(UID="outro", DTSTAMP="20250402T000000Z")) == base
    assert canonical_key(_event(SEQUENCE="7", **{"X-WR-ALARM": "1"})) == base


def test_key_changes_with_displayed_fields() -> None:
    base = canonical_key(_event())

    assert canonical_key(_event(SUMMARY="Hills")) != base
    assert canonical_key(_event(LOCATION="Zoom")) != base
    assert canonical_key(_event(**{"DTEND;TZID=America/Los_Angeles": "20250405T103000"})) != base


def test_key_is_base64_sha256() -> None:
    key = canonical_key(_event())

    assert len(base64.b64decode(key)) == 32


def test_key_does_not_depend_on_property_order() -> None:
    first = make_event(SUMMARY="s", DESCRIPTION="d")
    second = make_event(DESCRIPTION="d", SUMMARY="s")

    assert canonical_key(first) == canonical_key(second)
