import logging
import re
import string as st
import sys

from mrz_recovery.settings import (
    CENTURY_PIVOT,
    DEFAULT_CORRECTIONS,
    FILLER,
    LOG_LEVEL,
    MRZ_ALPHABET,
    MRZ_LINE_LENGTH,
)

# OCR confusions between look-alike letters and digits
LETTER_TO_DIGIT = {'O': '0', 'I': '1', 'S': '5'}
DIGIT_TO_LETTER = {'0': 'O', '1': 'I', '5': 'S'}

DISPLAY_DATE_RE = re.compile(r'^(\d{2})/(\d{2})/\d{2}(\d{2})$')


def setup_logger(name=__name__):
    """Sets up a logger with standard formatting."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    return logger

logger = setup_logger(__name__)


def strip_to_mrz_alphabet(text):
    """Uppercases text and keeps only A-Z, 0-9 and the filler."""
    if not text:
        return ""
    return ''.join(c for c in text.upper() if c in MRZ_ALPHABET)


def mrz_density(line):
    """Share of characters in the line that belong to the MRZ alphabet, as recognized."""
    if not line:
        return 0.0
    return sum(1 for c in line if c in MRZ_ALPHABET) / len(line)


def _correct_char(char, next_char):
    if char in st.ascii_uppercase:
        if next_char in st.digits:
            return LETTER_TO_DIGIT.get(char, char)
        return char
    if char in st.digits:
        if next_char in st.ascii_uppercase:
            return DIGIT_TO_LETTER.get(char, char)
        return char
    # Filler stays, anything else becomes filler
    return FILLER


def clean_mrz_line(line: str, corrections=DEFAULT_CORRECTIONS) -> str:
    """
    Fix bad spacing and letter/digit confusions for one MRZ line.

    Each character is corrected by looking at the one that follows it:
    a letter in front of a digit is probably a digit (O/I/S -> 0/1/5) and
    a digit in front of a letter is probably a letter. The correction table
    is then applied as literal substring replacements and the result is
    forced to exactly 44 characters.
    """
    if not line:
        line = ""

    line = line.upper().replace(" ", "")

    result = []
    last = len(line) - 1
    for i, char in enumerate(line):
        if i == last:
            result.append(char if char in MRZ_ALPHABET else FILLER)
        else:
            result.append(_correct_char(char, line[i + 1]))
    cleaned = "".join(result)

    for trigger, replacement in corrections.items():
        cleaned = cleaned.replace(trigger, replacement)

    if len(cleaned) < MRZ_LINE_LENGTH:
        cleaned += FILLER * (MRZ_LINE_LENGTH - len(cleaned))
    return cleaned[:MRZ_LINE_LENGTH]


def parse_date(raw, pivot=CENTURY_PIVOT):
    """
    Formats a raw MRZ YYMMDD field as DD/MM/YYYY.

    Anything that is not exactly 6 characters is returned unchanged. Day and
    month are kept as given; only the year is interpreted.
    """
    if raw is None:
        return ""
    raw = str(raw)
    if len(raw) != 6:
        logger.debug(f"Date field '{raw}' is not 6 characters, passing through")
        return raw

    try:
        year = int(raw[0:2])
    except ValueError:
        year = 0

    full_year = 2000 + year if year <= pivot else 1900 + year
    return f"{raw[4:6]}/{raw[2:4]}/{full_year}"


def to_mrz_date(value):
    """Converts a DD/MM/YYYY display date back to its raw YYMMDD form."""
    if not value:
        return ""
    match = DISPLAY_DATE_RE.match(value)
    if match:
        day, month, year = match.groups()
        return f"{year}{month}{day}"
    return value.replace("/", "")
