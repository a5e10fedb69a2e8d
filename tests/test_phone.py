import pytest

from call_reconciler.phone import (
    extract_area_code,
    format_phone_display,
    is_valid_phone_number,
    normalize_phone,
    to_e164,
)


@pytest.mark.parametrize(
    "raw",
    ["+1 (206) 778-0089", "12067780089", "206-778-0089", "206.778.0089", "+12067780089"],
)
def test_formats_collapse_to_last_ten_digits(raw: str) -> None:
    assert normalize_phone(raw) == "2067780089"


@pytest.mark.parametrize("raw", [None, "", "   ", "ext."])
def test_missing_or_digitless_input_normalises_to_empty(raw) -> None:
    assert normalize_phone(raw) == ""


@pytest.mark.parametrize("raw", ["555-1234", "+44 20 7946 0958 123", "911", "abc", "+1 (206) 778-0089"])
def test_normalisation_is_idempotent(raw: str) -> None:
    once = normalize_phone(raw)
    assert normalize_phone(once) == once


def test_short_numbers_pass_through_unpadded() -> None:
    assert normalize_phone("555-1234") == "5551234"


def test_display_helpers() -> None:
    assert format_phone_display("2067780089") == "(206) 778-0089"
    assert format_phone_display("+12067780089") == "+1 (206) 778-0089"
    assert format_phone_display("555-1234") == "555-1234"
    assert format_phone_display(None) == ""

    assert to_e164("(206) 778-0089") == "+12067780089"
    assert to_e164("1 206 778 0089") == "+12067780089"
    assert to_e164("") == ""

    assert extract_area_code("206-778-0089") == "206"
    assert extract_area_code("+1 206 778 0089") == "206"
    assert extract_area_code("555-1234") is None

    assert is_valid_phone_number("+1 (206) 778-0089")
    assert not is_valid_phone_number("555-1234")
