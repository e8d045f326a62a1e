"""
Locates the two MRZ lines inside the full OCR text of a passport page.

OCR of a whole data page returns the visual zone as well (labels, names,
dates in free text), so the MRZ has to be picked out of noise. Three
strategies are tried in turn, each over every adjacent pair of lines:

1. a line that looks like a TD3 first line (``P<...``) followed by a line
   holding a document-number-like token
2. a document-number shape anywhere in the concatenated pair
3. two long lines made mostly of MRZ characters
"""

import re
from dataclasses import dataclass
from typing import Optional

from mrz_recovery.settings import (
    DENSE_LINE_LENGTH,
    MIN_CANDIDATE_LENGTH,
    MRZ_DENSITY_THRESHOLD,
)
from mrz_recovery.utils import mrz_density, setup_logger, strip_to_mrz_alphabet

logger = setup_logger(__name__)

DOCUMENT_NUMBER_RE = re.compile(r'[A-Z]{1,2}\d{6,9}[A-Z0-9]', re.ASCII)

PASSPORT_NUMBER_SHAPES = (
    re.compile(r'[A-Z]{2,3}\d{6}[A-Z0-9]', re.ASCII),
    re.compile(r'L\d{6}[A-Z0-9]', re.ASCII),
    re.compile(r'[A-Z]\d{7}[A-Z0-9]', re.ASCII),
    re.compile(r'[A-Z]{2}\d{6}[A-Z0-9]', re.ASCII),
)


@dataclass(frozen=True)
class LineCandidate:
    line1: str
    line2: str
    index: int      # position of line1 in the raw line list
    strategy: int


def split_raw_lines(text):
    """Splits OCR output into trimmed, non-empty lines."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def is_potential_line1(line):
    cleaned = strip_to_mrz_alphabet(line)
    return cleaned.startswith('P<') or (cleaned.startswith('P') and len(cleaned) > MIN_CANDIDATE_LENGTH)


def is_potential_line2(line):
    cleaned = strip_to_mrz_alphabet(line)
    return len(cleaned) > MIN_CANDIDATE_LENGTH and bool(DOCUMENT_NUMBER_RE.search(cleaned))


def contains_passport_pattern(line1, line2):
    combined = (line1 + line2).upper().replace(' ', '')
    return any(shape.search(combined) for shape in PASSPORT_NUMBER_SHAPES)


def is_dense_mrz_line(line):
    # Measured on the line as recognized: lowercase prose does not count as MRZ text
    return len(line) > DENSE_LINE_LENGTH and mrz_density(line) > MRZ_DENSITY_THRESHOLD


def _first_pair(lines, predicate):
    for i in range(len(lines) - 1):
        if predicate(lines[i], lines[i + 1]):
            return i
    return None


STRATEGIES = (
    (1, lambda a, b: is_potential_line1(a) and is_potential_line2(b)),
    (2, contains_passport_pattern),
    (3, lambda a, b: is_dense_mrz_line(a) and is_dense_mrz_line(b)),
)


def select_mrz_lines(lines) -> Optional[LineCandidate]:
    """
    Returns the adjacent pair of raw lines that most plausibly forms the MRZ,
    or None when no strategy matches anywhere.
    """
    lines = list(lines)
    if len(lines) < 2:
        return None

    for strategy, predicate in STRATEGIES:
        index = _first_pair(lines, predicate)
        if index is not None:
            logger.debug(f"Strategy {strategy} matched lines {index} and {index + 1}")
            return LineCandidate(lines[index], lines[index + 1], index, strategy)

    return None


def find_partial_lines(lines):
    """
    Best-effort search for single MRZ-looking lines when no pair was found.
    Returns (line1, line2); either may be None.
    """
    line1 = None
    line2 = None
    for line in lines:
        if line1 is None and is_potential_line1(line):
            line1 = line
        elif line2 is None and is_potential_line2(line):
            line2 = line

    if line1 is None and line2 is None:
        dense = [line for line in lines if is_dense_mrz_line(line)]
        if dense:
            line1 = dense[0]

    return line1, line2
