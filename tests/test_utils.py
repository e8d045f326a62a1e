import pytest

from mrz_recovery.settings import DEFAULT_CORRECTIONS
from mrz_recovery.utils import (
    clean_mrz_line,
    mrz_density,
    parse_date,
    strip_to_mrz_alphabet,
    to_mrz_date,
)

from conftest import MRZ_LINE1


def test_clean_canonical_line_is_unchanged():
    assert clean_mrz_line(MRZ_LINE1) == MRZ_LINE1


def test_clean_pads_and_truncates_to_44():
    assert clean_mrz_line("P<UTO") == "P<UTO" + "<" * 39
    assert len(clean_mrz_line("A" * 60)) == 44
    assert clean_mrz_line("") == "<" * 44
    assert clean_mrz_line(None) == "<" * 44


def test_clean_removes_spaces_and_uppercases():
    assert clean_mrz_line("p<uto eriks s on", corrections={}).startswith("P<UTOERIKSSON<")


def test_letter_before_digit_becomes_digit():
    assert clean_mrz_line("O12", corrections={})[:3] == "012"
    assert clean_mrz_line("I9", corrections={})[:2] == "19"
    assert clean_mrz_line("S7", corrections={})[:2] == "57"


def test_digit_before_letter_becomes_letter():
    assert clean_mrz_line("0A1B5C", corrections={})[:6] == "OAIBSC"


def test_other_letters_and_digits_are_kept():
    assert clean_mrz_line("A2B3", corrections={})[:4] == "A2B3"
    assert clean_mrz_line("2C", corrections={})[:2] == "2C"


def test_invalid_characters_become_filler():
    assert clean_mrz_line("AB-CD/E.", corrections={})[:8] == "AB<CD<E<"


def test_last_character_has_no_lookahead():
    assert clean_mrz_line("XO", corrections={})[:2] == "XO"
    assert clean_mrz_line("X1", corrections={})[:2] == "X1"


def test_correction_table_applied_after_character_pass():
    line = "L898902C36UTO7408122F1204159ZE184226B<<<<<10"
    assert clean_mrz_line(line, corrections={})[10:13] == "UT0"
    assert clean_mrz_line(line, DEFAULT_CORRECTIONS)[10:13] == "UTO"


def test_custom_correction_table():
    assert clean_mrz_line("P<XYZ", corrections={"XYZ": "UTO"}).startswith("P<UTO<")


@pytest.mark.parametrize("raw, expected", [
    ("740812", "12/08/1974"),
    ("120415", "15/04/2012"),
    ("300101", "01/01/2030"),
    ("310101", "01/01/1931"),
    ("000229", "29/02/2000"),
])
def test_parse_date_century_pivot(raw, expected):
    assert parse_date(raw) == expected


def test_parse_date_passes_through_malformed():
    assert parse_date("7408") == "7408"
    assert parse_date("") == ""
    assert parse_date(None) == ""


def test_parse_date_keeps_day_and_month_as_given():
    assert parse_date("74AB12") == "12/AB/1974"
    assert parse_date("XX0812") == "12/08/2000"


def test_parse_date_custom_pivot():
    assert parse_date("300101", pivot=20) == "01/01/1930"


def test_to_mrz_date():
    assert to_mrz_date("12/08/1974") == "740812"
    assert to_mrz_date("15/04/2012") == "120415"
    assert to_mrz_date("000000") == "000000"
    assert to_mrz_date("") == ""


def test_string_helpers():
    assert strip_to_mrz_alphabet("p< uto/x") == "P<UTOX"
    assert mrz_density("AB<<") == 1.0
    assert mrz_density("ab") == 0.0
    assert mrz_density("") == 0.0
