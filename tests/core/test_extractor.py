from __future__ import annotations

import pytest

from p2000_viewer.core.models import Priority
from p2000_viewer.core.parsing import extract_fields, find_incident_code, find_priority


def test_full_payload() -> None:
    fields = extract_fields("P1 BDH-07 Amsterdam woningbrand")
    assert fields.priority == Priority.P1
    assert fields.incident_code == "BDH-07"
    assert fields.location == "Amsterdam"
    assert "woningbrand" in fields.detail
    assert "BDH-07" not in fields.detail
    assert "P1" not in fields.detail


def test_free_text_payload_degrades_gracefully() -> None:
    fields = extract_fields("informatie volgt")
    assert fields.priority == Priority.UNKNOWN
    assert fields.incident_code is None
    assert fields.location is None
    assert fields.detail == "informatie volgt"


def test_empty_payload() -> None:
    fields = extract_fields("")
    assert fields.priority == Priority.UNKNOWN
    assert fields.location is None
    assert fields.detail == ""


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ("P1 brand", Priority.P1),
        ("P 2 BDH-07 Ongeval", Priority.P2),
        ("P3 dienstverlening", Priority.P3),
        ("A0 reanimatie", Priority.A0),
        ("A1 Dam Amsterdam", Priority.A1),
        ("A2 Damrak", Priority.A2),
        ("B Centrum rit 1", Priority.B),
        ("melding A2, daarna P1", Priority.A2),
    ],
)
def test_priority_tokens(payload: str, expected: Priority) -> None:
    priority, _ = find_priority(payload)
    assert priority == expected


@pytest.mark.parametrize(
    "payload",
    ["P12 Dam", "A10 richting Utrecht", "BB-12 melding", "Bus", "XP1 test", "P1A test", "ZP1-B"],
)
def test_priority_requires_whole_token(payload: str) -> None:
    priority, span = find_priority(payload)
    assert priority == Priority.UNKNOWN
    assert span is None


def test_incident_code_shape() -> None:
    assert find_incident_code("P1 BDH-07 Dam")[0] == "BDH-07"
    assert find_incident_code("AB-1 test")[0] == "AB-1"
    assert find_incident_code("ABCD-123 test")[0] == "ABCD-123"
    assert find_incident_code("ABCDE-12 test")[0] is None
    assert find_incident_code("BDH-1234 test")[0] is None
    assert find_incident_code("bdh-07 test")[0] is None


def test_first_incident_code_wins() -> None:
    fields = extract_fields("P1 BRT-03 Dam BDH-07 brand")
    assert fields.incident_code == "BRT-03"


def test_location_stops_at_comma() -> None:
    fields = extract_fields("P1 BRT-03, Stationsplein, Rotterdam, woningbrand")
    assert fields.location == "Stationsplein"
    assert fields.detail == "Rotterdam, woningbrand"


def test_location_after_priority_without_code() -> None:
    fields = extract_fields("A1 Keizersgracht 12 Amsterdam rit 12345")
    assert fields.incident_code is None
    assert fields.location == "Keizersgracht 12 Amsterdam"
    assert fields.detail == "rit 12345"


def test_location_absent_when_description_follows_code() -> None:
    fields = extract_fields("P2 BDH-07 (los object) Gangetje")
    assert fields.incident_code == "BDH-07"
    assert fields.location is None
    assert fields.detail == "(los object) Gangetje"


def test_location_absent_without_priority_or_code() -> None:
    fields = extract_fields("Dam Amsterdam proefalarm")
    assert fields.priority == Priority.UNKNOWN
    assert fields.location is None
    assert fields.detail == "Dam Amsterdam proefalarm"


def test_priority_after_code_is_not_part_of_location() -> None:
    fields = extract_fields("BDH-07 A1 Den Haag ongeval")
    assert fields.priority == Priority.A1
    assert fields.incident_code == "BDH-07"
    assert fields.location == "Den Haag"
    assert fields.detail == "ongeval"


def test_dutch_place_prefixes() -> None:
    fields = extract_fields("P1 BDH-07 's-Hertogenbosch woningbrand")
    assert fields.location == "'s-Hertogenbosch"


def test_sample_record_payload() -> None:
    # "Ongeval (los object)" describes the incident, not a place
    fields = extract_fields("P 2 BDH-07 Ongeval (los object) Gangetje Leiden 169252")
    assert fields.priority == Priority.P2
    assert fields.incident_code == "BDH-07"
    assert fields.location is None
    assert fields.detail == "Ongeval (los object) Gangetje Leiden 169252"


def test_parenthesised_remark_after_location_ends_it() -> None:
    fields = extract_fields("A1 Dam Amsterdam (centrum) rit 12")
    assert fields.location == "Dam Amsterdam"
    assert fields.detail == "(centrum) rit 12"


@pytest.mark.parametrize(
    ("payload", "detail"),
    [
        ("A2 1234 brand", "1234 brand"),
        ("B -5 graden", "5 graden"),
        ("P1 BDH-07 12 34a", "12 34a"),
        ("P3 BRT-03 7, Dorpsstraat", "7, Dorpsstraat"),
    ],
)
def test_numbers_alone_are_not_a_location(payload: str, detail: str) -> None:
    fields = extract_fields(payload)
    assert fields.location is None
    assert fields.detail == detail


def test_house_number_kept_with_street() -> None:
    fields = extract_fields("A2 12 Keizersgracht Amsterdam brand")
    assert fields.location == "12 Keizersgracht Amsterdam"
    assert fields.detail == "brand"
