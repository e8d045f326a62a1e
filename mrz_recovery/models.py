"""
Data models for decoded MRZ records and decode outcomes.

Records are immutable; decoding the same text again produces a new record.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union

from dateutil import parser as date_parser

from mrz_recovery.utils import to_mrz_date

# Record attribute -> key in the exported map
EXPORT_KEYS = {
    "document_code": "documentCode",
    "issuing_country": "issuingCountry",
    "surname": "surname",
    "given_names": "givenNames",
    "passport_number": "passportNumber",
    "nationality": "nationality",
    "date_of_birth": "dateOfBirth",
    "sex": "sex",
    "expiration_date": "expirationDate",
    "personal_number": "personalNumber",
    "raw_mrz_text": "rawMrzText",
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ChipAccessFields:
    """The three MRZ values a chip reader needs to open a session."""
    document_number: str
    date_of_birth: str   # YYMMDD
    date_of_expiry: str  # YYMMDD


@dataclass(frozen=True)
class MrzRecord:
    """One decoded TD3 passport record."""

    document_code: str = ""
    issuing_country: str = ""
    surname: str = ""
    given_names: str = ""
    passport_number: str = ""
    nationality: str = ""
    date_of_birth: str = ""    # DD/MM/YYYY
    sex: str = ""
    expiration_date: str = ""  # DD/MM/YYYY
    personal_number: str = ""
    raw_mrz_text: str = ""
    captured_at: datetime = field(default_factory=_now)

    # Set only by the fallback builder
    degraded: bool = False

    @property
    def is_valid(self) -> bool:
        from mrz_recovery.validators import is_valid_record
        return is_valid_record(self)

    @property
    def mrz_lines(self) -> list[str]:
        return self.raw_mrz_text.split("\n") if self.raw_mrz_text else []

    def chip_access_fields(self) -> ChipAccessFields:
        """Document number and the two dates in raw YYMMDD form."""
        return ChipAccessFields(
            document_number=self.passport_number,
            date_of_birth=to_mrz_date(self.date_of_birth),
            date_of_expiry=to_mrz_date(self.expiration_date),
        )

    def to_dict(self) -> dict[str, Any]:
        """Flat map used for persistence, display and export."""
        data = {key: getattr(self, attr) for attr, key in EXPORT_KEYS.items()}
        data["capturedAt"] = self.captured_at.isoformat()
        data["isValid"] = self.is_valid
        data["degraded"] = self.degraded
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MrzRecord":
        kwargs = {attr: str(data.get(key) or "") for attr, key in EXPORT_KEYS.items()}
        captured = data.get("capturedAt")
        if isinstance(captured, datetime):
            kwargs["captured_at"] = captured
        elif captured:
            kwargs["captured_at"] = date_parser.isoparse(captured)
        kwargs["degraded"] = bool(data.get("degraded", False))
        return cls(**kwargs)

    def __str__(self) -> str:
        return (
            f"MrzRecord(passport_number={self.passport_number}, "
            f"surname={self.surname}, given_names={self.given_names})"
        )


@dataclass(frozen=True)
class TD3Fields:
    """Raw field strings sliced out of a TD3 line pair, dates still YYMMDD."""
    document_code: str
    issuing_country: str
    surname: str
    given_names: str
    passport_number: str
    nationality: str
    date_of_birth: str
    sex: str
    expiration_date: str
    personal_number: str


class DecodeFailure(enum.Enum):
    LINE_NOT_FOUND = "line_not_found"
    EXTRACTION_FAILED = "extraction_failed"


@dataclass(frozen=True)
class Decoded:
    record: MrzRecord

    @property
    def is_valid(self) -> bool:
        return self.record.is_valid


@dataclass(frozen=True)
class Degraded:
    record: MrzRecord
    reason: DecodeFailure

    @property
    def is_valid(self) -> bool:
        return False


@dataclass(frozen=True)
class NotFound:
    reason: DecodeFailure = DecodeFailure.LINE_NOT_FOUND
    record: Optional[MrzRecord] = None

    @property
    def is_valid(self) -> bool:
        return False


DecodeResult = Union[Decoded, Degraded, NotFound]


@dataclass(frozen=True)
class CheckDigitResult:
    name: str
    data: str
    expected: str
    computed: int

    @property
    def ok(self) -> bool:
        return self.expected == str(self.computed)


@dataclass(frozen=True)
class CheckDigitReport:
    results: tuple[CheckDigitResult, ...] = ()

    @property
    def ok(self) -> bool:
        return bool(self.results) and all(r.ok for r in self.results)

    @property
    def failed_fields(self) -> list[str]:
        return [r.name for r in self.results if not r.ok]
