import pytest

from mrz_recovery import MRZParser
from mrz_recovery.settings import DEFAULT_CORRECTIONS

MRZ_LINE1 = "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<"
MRZ_LINE2 = "L898902C36UTO7408122F1204159ZE184226B<<<<<10"

# OCR of the ICAO specimen data page, visual zone included
ICAO_SAMPLE_TEXT = """
UTOPIA
Type/ Type
P
Sumame Nom
ERIKSSON
Glven names/ Prénoms
ANNA MARIA
Nationality/ Nationalité
UTOPIAN
Country code/ Code du pays
UTO
Date of Birth Date de naissance
12 AUGIAOUT 74
Sex/ Sexe
F
Date of issue/ Date de delivrance
16 APR/AVR 07
Passport Numberl N de passep
L898902C3
Place of birth/ Lieu de naissance
ZENITH
Date of expiry/ Date d'expiration
15APRIAVR 12
Personal No/ N° personnel
ZE 184226 B
Authority/ Autorité
PASSPORT OFFICE
Holder's signature Signature du titulaire
Cnna Mlaria Exikss an
P<UTOERIKS S ON<<ANNA<MARIA<<<
L898902C36UTO7408122F1204159ZE184226B<<<<<10
"""


@pytest.fixture
def parser():
    return MRZParser(corrections=DEFAULT_CORRECTIONS)


@pytest.fixture
def sample_text():
    return ICAO_SAMPLE_TEXT


@pytest.fixture
def sample_record(parser, sample_text):
    return parser.parse(sample_text)
