from mrz_recovery.fields import slice_field
from mrz_recovery.models import MrzRecord
from mrz_recovery.settings import (
    DEFAULT_CORRECTIONS,
    FALLBACK_COUNTRY,
    FALLBACK_DATE,
    FALLBACK_NAME,
    FALLBACK_SEX,
)
from mrz_recovery.utils import clean_mrz_line


def build_fallback_record(line1=None, line2=None, corrections=DEFAULT_CORRECTIONS, country=FALLBACK_COUNTRY):
    """
    Builds a best-effort record when the MRZ could not be decoded properly.

    Whatever the lines offer is kept (document number from the second line,
    issuing country from the first), everything else gets a sentinel. The
    record is flagged as degraded and never passes validation.
    """
    first = clean_mrz_line(line1, corrections) if line1 else ""
    second = clean_mrz_line(line2, corrections) if line2 else ""

    passport_number = slice_field(second, 0, 9)
    issuing_country = slice_field(first, 2, 5) or country

    return MrzRecord(
        document_code=slice_field(first, 0, 2) or "P",
        issuing_country=issuing_country,
        surname=FALLBACK_NAME,
        given_names=FALLBACK_NAME,
        passport_number=passport_number,
        nationality=issuing_country,
        date_of_birth=FALLBACK_DATE,
        sex=FALLBACK_SEX,
        expiration_date=FALLBACK_DATE,
        personal_number="",
        # Line 2 stays second even when line 1 is missing
        raw_mrz_text=f"{first}\n{second}" if second else first,
        degraded=True,
    )
