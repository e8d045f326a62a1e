from mrz_recovery.models import CheckDigitReport, CheckDigitResult

CHECK_DIGIT_WEIGHTS = (7, 3, 1)

REQUIRED_FIELDS = [
    "passport_number",
    "surname",
    "given_names",
    "date_of_birth",
    "expiration_date",
    "sex",
]

# Line 2 of a TD3 MRZ: (field, data span, check digit position)
TD3_CHECK_DIGITS = [
    ("passport_number", (0, 9), 9),
    ("date_of_birth", (13, 19), 19),
    ("expiration_date", (21, 27), 27),
    ("personal_number", (28, 42), 42),
]
TD3_COMPOSITE_SPANS = [(0, 10), (13, 20), (21, 43)]
TD3_COMPOSITE_POSITION = 43


def char_value(char):
    """ICAO character value: digits as is, A-Z as 10-35, filler and anything else 0."""
    if '0' <= char <= '9':
        return ord(char) - 48
    if 'A' <= char <= 'Z':
        return ord(char) - 55
    return 0


def calculate_check_digit(data):
    """ICAO 9303 check digit: 7-3-1 weighted sum of character values, mod 10."""
    total = 0
    for i, char in enumerate(data or ""):
        total += char_value(char) * CHECK_DIGIT_WEIGHTS[i % 3]
    return total % 10


def validate_record(record):
    """
    Checks that a record has everything needed to be used.
    Returns: (is_valid: bool, errors: list)
    """
    errors = []
    if record is None:
        return False, ["No record to validate"]

    if record.degraded:
        errors.append("Record was built by the fallback path")

    for field in REQUIRED_FIELDS:
        if not getattr(record, field, ""):
            errors.append(f"Missing required field: {field}")

    for field in ("nationality", "issuing_country"):
        value = getattr(record, field, "")
        if len(value) != 3:
            errors.append(f"Invalid {field}: expected 3 letters, got '{value}'")

    return len(errors) == 0, errors


def is_valid_record(record):
    is_valid, _ = validate_record(record)
    return is_valid


def verify_check_digits(line2):
    """
    Recomputes the check digits embedded in a normalized TD3 second line.
    Each result compares the printed digit with the computed one.
    """
    line2 = (line2 or "").ljust(44, '<')
    results = []
    for field, (start, end), position in TD3_CHECK_DIGITS:
        data = line2[start:end]
        results.append(CheckDigitResult(field, data, line2[position], calculate_check_digit(data)))

    composite = "".join(line2[start:end] for start, end in TD3_COMPOSITE_SPANS)
    results.append(CheckDigitResult(
        "composite", composite, line2[TD3_COMPOSITE_POSITION], calculate_check_digit(composite)
    ))
    return CheckDigitReport(tuple(results))


def validate_chip_access_fields(fields):
    """
    Sanity checks on the values handed to a chip reader.
    Returns: (is_valid: bool, errors: list)
    """
    errors = []
    if not fields.document_number:
        errors.append("Missing document number")

    for label, value in (("date_of_birth", fields.date_of_birth), ("date_of_expiry", fields.date_of_expiry)):
        if len(value) != 6 or not value.isdigit():
            errors.append(f"Invalid {label}: expected YYMMDD, got '{value}'")
            continue
        month = int(value[2:4])
        day = int(value[4:6])
        if month < 1 or month > 12:
            errors.append(f"Invalid {label}: month {month} out of range")
        if day < 1 or day > 31:
            errors.append(f"Invalid {label}: day {day} out of range")

    return len(errors) == 0, errors
