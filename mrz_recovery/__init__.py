"""
Recovery and decoding of passport MRZ (ICAO 9303 TD3) from noisy OCR text.

Usage:
    from mrz_recovery import MRZParser
    parser = MRZParser()
    result = parser.decode(ocr_text)
"""

from mrz_recovery.extractor import MRZParser
from mrz_recovery.models import (
    ChipAccessFields,
    CheckDigitReport,
    Decoded,
    DecodeFailure,
    DecodeResult,
    Degraded,
    MrzRecord,
    NotFound,
)
from mrz_recovery.validators import calculate_check_digit, validate_record

__all__ = [
    "MRZParser",
    "MrzRecord",
    "ChipAccessFields",
    "CheckDigitReport",
    "Decoded",
    "Degraded",
    "NotFound",
    "DecodeFailure",
    "DecodeResult",
    "calculate_check_digit",
    "validate_record",
]
