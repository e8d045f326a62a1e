import streamlit as st
import pandas as pd
from io import BytesIO

from mrz_recovery import Decoded, Degraded, MRZParser
from mrz_recovery.formats import format_chip_access, format_display

# Set page configuration
st.set_page_config(
    page_title="Passport MRZ Decoder",
    page_icon="🛂",
    layout="wide"
)

# One parser for the whole session, it holds no per-call state
@st.cache_resource
def get_parser():
    return MRZParser()


def decode_inputs(parser, pasted_text, uploaded_files):
    """Decodes pasted text and each uploaded OCR dump. Returns (records, messages)."""
    sources = []
    if pasted_text and pasted_text.strip():
        sources.append(("pasted text", pasted_text))
    for file in uploaded_files or []:
        sources.append((file.name, file.getvalue().decode("utf-8", errors="replace")))

    records = []
    messages = []
    for name, text in sources:
        result = parser.decode(text)
        if isinstance(result, Decoded):
            records.append(result.record)
            status = "valid" if result.is_valid else "incomplete"
            messages.append(("success" if result.is_valid else "warning", f"{name}: MRZ decoded ({status})"))
        elif isinstance(result, Degraded):
            records.append(result.record)
            messages.append(("warning", f"{name}: only partial MRZ data found, please rescan"))
        else:
            messages.append(("error", f"{name}: no MRZ found"))
    return records, messages


def main():
    st.title("🛂 Passport MRZ Decoder")

    st.markdown("""
    Paste the text returned by your OCR engine for a passport data page, or upload the
    OCR output as `.txt` files. The tool locates the two MRZ lines, corrects common
    OCR confusions and returns the decoded fields.
    """)

    st.sidebar.header("Settings")
    verify_digits = st.sidebar.checkbox("Verify check digits", value=False)
    view = st.sidebar.selectbox("Output Format", ["Default", "Chip Access"])

    pasted_text = st.text_area("OCR Text", height=200)
    uploaded_files = st.file_uploader("Upload OCR Text Files", type=['txt'], accept_multiple_files=True)

    if not st.button("Decode"):
        return

    parser = get_parser()
    records, messages = decode_inputs(parser, pasted_text, uploaded_files)
    for level, message in messages:
        getattr(st, level)(message)

    if not records:
        st.warning("No data could be decoded. Please check the input or rescan the document.")
        return

    if verify_digits:
        for record in records:
            if record.degraded:
                continue
            report = parser.verify_check_digits(record)
            if report.ok:
                st.success(f"{record.passport_number}: all check digits match")
            else:
                st.error(f"{record.passport_number}: check digit mismatch in {', '.join(report.failed_fields)}")

    if view == "Chip Access":
        df = format_chip_access(records)
    else:
        df = format_display(records)

    st.dataframe(df)

    col1, col2 = st.columns(2)

    with col1:
        csv = df.to_csv(index=False).encode('utf-8')
        st.download_button(
            label="Download data as CSV",
            data=csv,
            file_name="mrz_data.csv",
            mime="text/csv",
        )

    with col2:
        output = BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='MRZData')

        st.download_button(
            label="Download data as Excel",
            data=output.getvalue(),
            file_name="mrz_data.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

if __name__ == "__main__":
    main()
