import os
import logging

import pandas as pd

from mrz_recovery import settings

logger = logging.getLogger(__name__)

DISPLAY_COLUMNS = {
    "passportNumber": "Passport Number",
    "surname": "Surname",
    "givenNames": "Given Names",
    "nationality": "Nationality",
    "issuingCountry": "Issuing Country",
    "dateOfBirth": "Date of Birth",
    "sex": "Sex",
    "expirationDate": "Expiration Date",
    "personalNumber": "Personal Number",
    "isValid": "Valid",
    "capturedAt": "Captured At",
}


def _as_dict(item):
    return item.to_dict() if hasattr(item, "to_dict") else dict(item)


def records_to_dataframe(records):
    """One row per record, with every exported field."""
    return pd.DataFrame([_as_dict(r) for r in records])


def format_display(records):
    """
    Formats records for on-screen review.
    Columns: Passport Number, Surname, Given Names, Nationality, ... Valid, Captured At
    """
    rows = []
    for item in records:
        data = _as_dict(item)
        rows.append({label: data.get(key, "") for key, label in DISPLAY_COLUMNS.items()})
    return pd.DataFrame(rows, columns=list(DISPLAY_COLUMNS.values()))


def format_chip_access(records):
    """
    Formats the values a chip reader needs, in raw MRZ form.
    Columns: Document Number, Date of Birth (YYMMDD), Date of Expiry (YYMMDD)
    """
    rows = []
    for record in records:
        fields = record.chip_access_fields()
        rows.append({
            "Document Number": fields.document_number,
            "Date of Birth (YYMMDD)": fields.date_of_birth,
            "Date of Expiry (YYMMDD)": fields.date_of_expiry,
        })
    return pd.DataFrame(rows)


def export_to_spreadsheet(records, output_file, format='excel', export_dir=None):
    """
    Exports records to a spreadsheet (Excel or CSV).
    Relative paths are written under export_dir (MRZ_EXPORT_DIR by default).
    Returns the path written, or None if nothing was written.
    """
    if not records:
        logger.warning("No data to export.")
        return None

    df = records_to_dataframe(records)

    if not os.path.isabs(output_file):
        output_file = os.path.join(export_dir or settings.EXPORT_DIR, output_file)

    output_dir = os.path.dirname(output_file)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    if format.lower() == 'csv' or output_file.endswith('.csv'):
        if not output_file.endswith('.csv'):
            output_file += '.csv'
        df.to_csv(output_file, index=False)
    elif format.lower() == 'excel' or output_file.endswith('.xlsx'):
        if not output_file.endswith('.xlsx'):
            output_file += '.xlsx'
        df.to_excel(output_file, index=False, engine='openpyxl')
    else:
        logger.error(f"Unsupported format: {format}")
        return None

    logger.info(f"Data exported to {output_file}")
    return output_file
