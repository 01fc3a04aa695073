"""English, Sinhala and Tamil phonetic transliteration."""

from translit.ingest.loader import load_default_tables, load_tables
from translit.models import Gender, Language
from translit.translator import TranslationTables, Translator, UnsupportedPairError


__version__ = "0.1.0"

__all__ = [
    "Gender",
    "Language",
    "TranslationTables",
    "Translator",
    "UnsupportedPairError",
    "load_default_tables",
    "load_tables",
]
