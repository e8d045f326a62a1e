from mrz_recovery.lines import (
    contains_passport_pattern,
    find_partial_lines,
    is_dense_mrz_line,
    is_potential_line1,
    is_potential_line2,
    select_mrz_lines,
    split_raw_lines,
)

from conftest import MRZ_LINE1, MRZ_LINE2


def test_split_raw_lines_trims_and_drops_blanks():
    assert split_raw_lines("  a \n\n\t\nb\r\n  ") == ["a", "b"]
    assert split_raw_lines("") == []
    assert split_raw_lines(None) == []


def test_line1_detection():
    assert is_potential_line1("P<UTOERIKS S ON<<ANNA<MARIA<<<")
    assert is_potential_line1("p<uto")
    assert is_potential_line1("PASSPORT NUMBER AND OTHER WORDS")
    assert not is_potential_line1("PASSPORT OFFICE")
    assert not is_potential_line1("UTOPIA")


def test_line2_detection():
    assert is_potential_line2(MRZ_LINE2)
    assert not is_potential_line2("L898902C3")
    assert not is_potential_line2("Holder's signature Signature du titulaire")


def test_passport_pattern_shapes():
    assert contains_passport_pattern("AB1234567", "")
    assert contains_passport_pattern("X 1234567 Z", "")
    assert contains_passport_pattern("NO NUMBER", "HERE L1234563")
    assert not contains_passport_pattern("ANNA MARIA", "ERIKSSON")


def test_dense_line_uses_recognized_case():
    assert is_dense_mrz_line(MRZ_LINE1)
    assert not is_dense_mrz_line("P<UTO<<SHORT")
    assert not is_dense_mrz_line("this is a long line of ordinary lowercase prose text")


def test_strategy1_picks_mrz_pair_after_noise():
    lines = ["UTOPIA", "Passport No", MRZ_LINE1, MRZ_LINE2, "trailing"]
    candidate = select_mrz_lines(lines)

    assert candidate.strategy == 1
    assert candidate.index == 2
    assert (candidate.line1, candidate.line2) == (MRZ_LINE1, MRZ_LINE2)


def test_strategy2_catches_number_without_p_prefix():
    lines = ["IDUTOERIKSSON", "L898902C3 UTO 740812"]
    candidate = select_mrz_lines(lines)

    assert candidate.strategy == 2
    assert candidate.index == 0


def test_strategy3_long_dense_lines():
    line1 = "I<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<"
    line2 = "XX<<<<<<<<<UTO<<<<<<<<<F<<<<<<<<<<<<<<<<<<<<"
    candidate = select_mrz_lines(["header", line1, line2])

    assert candidate.strategy == 3
    assert candidate.index == 1


def test_earliest_pair_wins_within_a_strategy():
    lines = [MRZ_LINE1, MRZ_LINE2, MRZ_LINE1, MRZ_LINE2]

    assert select_mrz_lines(lines).index == 0


def test_no_pair_found():
    assert select_mrz_lines([]) is None
    assert select_mrz_lines([MRZ_LINE1]) is None
    assert select_mrz_lines(["hello", "world"]) is None


def test_find_partial_lines():
    assert find_partial_lines(["noise", MRZ_LINE1, "more"]) == (MRZ_LINE1, None)
    assert find_partial_lines(["noise", MRZ_LINE2]) == (None, MRZ_LINE2)
    assert find_partial_lines(["hello", "world"]) == (None, None)
