import os

from mrz_recovery.exceptions import ExtractionError
from mrz_recovery.fallback_mrz import build_fallback_record
from mrz_recovery.fields import extract_td3_fields
from mrz_recovery.lines import find_partial_lines, select_mrz_lines, split_raw_lines
from mrz_recovery.models import (
    Decoded,
    DecodeFailure,
    Degraded,
    MrzRecord,
    NotFound,
)
from mrz_recovery.settings import CENTURY_PIVOT, FALLBACK_COUNTRY, load_corrections
from mrz_recovery.utils import clean_mrz_line, parse_date, setup_logger
from mrz_recovery.validators import verify_check_digits

logger = setup_logger(__name__)


class MRZParser:
    """
    Decodes OCR text of a passport page into an MrzRecord.

    Holds only read-only configuration (correction table, century pivot,
    fallback country), so one instance can be shared between callers and
    threads.
    """

    def __init__(self, corrections=None, century_pivot=CENTURY_PIVOT, fallback_country=FALLBACK_COUNTRY):
        self.corrections = corrections if corrections is not None else load_corrections()
        self.century_pivot = century_pivot
        self.fallback_country = fallback_country

    def clean_line(self, line):
        return clean_mrz_line(line, self.corrections)

    def _fallback(self, line1, line2, reason):
        record = build_fallback_record(line1, line2, self.corrections, self.fallback_country)
        logger.warning(f"Returning degraded record ({reason.value}): {record}")
        return Degraded(record, reason)

    def _build_record(self, line1, line2):
        fields = extract_td3_fields(line1, line2)
        return MrzRecord(
            document_code=fields.document_code,
            issuing_country=fields.issuing_country,
            surname=fields.surname,
            given_names=fields.given_names,
            passport_number=fields.passport_number,
            nationality=fields.nationality,
            date_of_birth=parse_date(fields.date_of_birth, self.century_pivot),
            sex=fields.sex,
            expiration_date=parse_date(fields.expiration_date, self.century_pivot),
            personal_number=fields.personal_number,
            raw_mrz_text=f"{line1}\n{line2}",
        )

    def decode(self, text):
        """
        Runs the whole pipeline on raw OCR text.
        Returns Decoded, Degraded or NotFound; never raises for bad input.
        """
        lines = split_raw_lines(text)
        if len(lines) < 2:
            logger.info(f"Only {len(lines)} non-empty line(s) in OCR text, no MRZ possible")
            return NotFound(DecodeFailure.LINE_NOT_FOUND)

        candidate = select_mrz_lines(lines)
        if candidate is None:
            line1, line2 = find_partial_lines(lines)
            if line1 is None and line2 is None:
                logger.info("No MRZ-like lines found in OCR text")
                return NotFound(DecodeFailure.LINE_NOT_FOUND)
            return self._fallback(line1, line2, DecodeFailure.LINE_NOT_FOUND)

        line1 = self.clean_line(candidate.line1)
        line2 = self.clean_line(candidate.line2)
        logger.debug(f"MRZ line 1: {line1}")
        logger.debug(f"MRZ line 2: {line2}")

        try:
            record = self._build_record(line1, line2)
        except ExtractionError as e:
            logger.error(f"Field extraction failed: {e}")
            return self._fallback(candidate.line1, candidate.line2, DecodeFailure.EXTRACTION_FAILED)

        logger.info(f"Decoded MRZ (strategy {candidate.strategy}): {record}, valid={record.is_valid}")
        return Decoded(record)

    def parse(self, text):
        """Returns the decoded (possibly degraded) record, or None when nothing was found."""
        return self.decode(text).record

    def decode_many(self, texts):
        """Decodes each text independently, e.g. one per captured frame."""
        return [self.decode(text) for text in texts]

    def decode_file(self, path):
        """Decodes a UTF-8 text dump produced by an OCR engine."""
        if not os.path.exists(path):
            logger.error(f"File not found: {path}")
            return NotFound(DecodeFailure.LINE_NOT_FOUND)

        try:
            with open(path, encoding="utf-8", errors="replace") as fh:
                text = fh.read()
        except OSError as e:
            logger.error(f"Could not read OCR dump {path}: {e}")
            return NotFound(DecodeFailure.LINE_NOT_FOUND)
        logger.info(f"Decoding OCR dump: {path}")
        return self.decode(text)

    def verify_check_digits(self, record):
        """
        Optional checksum step: compares the digits printed in the MRZ with
        recomputed ones. Decoding itself never rejects a record on checksums.
        """
        lines = record.mrz_lines
        line2 = lines[1] if len(lines) > 1 else ""
        report = verify_check_digits(line2)
        if not report.ok:
            logger.warning(f"Check digit mismatch for {record.passport_number}: {report.failed_fields}")
        return report
