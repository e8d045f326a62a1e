import re

from mrz_recovery.exceptions import ExtractionError
from mrz_recovery.models import TD3Fields
from mrz_recovery.settings import FILLER, MRZ_LINE_LENGTH

# (line, start, end) per TD3 field, 0-indexed half-open
TD3_LAYOUT = {
    "document_code": (1, 0, 2),
    "issuing_country": (1, 2, 5),
    "name": (1, 5, MRZ_LINE_LENGTH),
    "passport_number": (2, 0, 9),
    "nationality": (2, 10, 13),
    "date_of_birth": (2, 13, 19),
    "sex": (2, 20, 21),
    "expiration_date": (2, 21, 27),
    "personal_number": (2, 28, 42),
}

NAME_SEPARATOR_RE = re.compile(FILLER + '{2,}')


def slice_field(line, start, end):
    """
    Returns line[start:end] with fillers and surrounding whitespace removed.
    Bounds are clamped to the line, so a short line yields a short or empty value.
    """
    line = line or ""
    start = min(max(start, 0), len(line))
    end = min(max(end, start), len(line))
    if start >= end:
        return ""
    return line[start:end].replace(FILLER, '').strip()


def split_name_field(name_field):
    """
    Splits a TD3 name field into (surname, given_names).

    First pass cuts the field on runs of two or more fillers. Second pass
    turns the single fillers left inside each part into spaces, so
    ``VAN<DER<BERG<<JAN`` gives ``("VAN DER BERG", "JAN")``.

    A field with no double filler is taken to be all surname. A field made
    only of fillers gives two empty strings.
    """
    if not name_field:
        return "", ""

    parts = [p for p in NAME_SEPARATOR_RE.split(name_field.strip()) if p.strip(FILLER + ' ')]
    words = [" ".join(p.replace(FILLER, ' ').split()) for p in parts]
    words = [w for w in words if w]

    if not words:
        return "", ""
    return words[0], " ".join(words[1:])


def extract_td3_fields(line1, line2) -> TD3Fields:
    """Slices two normalized TD3 lines into raw field strings."""
    try:
        lines = {1: line1, 2: line2}

        _, name_start, name_end = TD3_LAYOUT["name"]
        name_field = line1[name_start:name_end]
        surname, given_names = split_name_field(name_field)

        values = {
            field: slice_field(lines[line_no], start, end)
            for field, (line_no, start, end) in TD3_LAYOUT.items()
            if field != "name"
        }
        return TD3Fields(surname=surname, given_names=given_names, **values)
    except (TypeError, AttributeError, KeyError, IndexError) as e:
        raise ExtractionError(f"Could not slice TD3 fields: {e}", line1=str(line1), line2=str(line2)) from e
