# ABOUTME: Indian state/UT names plus query text helpers used before geocoding.
# ABOUTME: Normalizes free-form text and detects region hints and the leading query segment.

import re
import unicodedata

from src.models import QueryParts

REGIONAL_COUNTRY_CODE = "IN"
REGIONAL_COUNTRY_NAME = "India"

# Order matters: region detection returns the first name found in the query.
IN_STATES = (
    "andhra pradesh",
    "arunachal pradesh",
    "assam",
    "bihar",
    "chhattisgarh",
    "goa",
    "gujarat",
    "haryana",
    "himachal pradesh",
    "jharkhand",
    "karnataka",
    "kerala",
    "madhya pradesh",
    "maharashtra",
    "manipur",
    "meghalaya",
    "mizoram",
    "nagaland",
    "odisha",
    "punjab",
    "rajasthan",
    "sikkim",
    "tamil nadu",
    "telangana",
    "tripura",
    "uttar pradesh",
    "uttarakhand",
    "west bengal",
    "andaman and nicobar islands",
    "chandigarh",
    "dadra and nagar haveli and daman and diu",
    "delhi",
    "jammu and kashmir",
    "ladakh",
    "lakshadweep",
    "puducherry",
)

STATE_NAMES = tuple(s.title() for s in IN_STATES)

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Strip diacritics and collapse whitespace, e.g. "  Kōchi   Fort " -> "Kochi Fort"."""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = _COMBINING_MARKS.sub("", decomposed)
    return _WHITESPACE.sub(" ", stripped).strip()


def first_segment(query: str) -> str:
    """Return the text before the first comma, or the whole query if there is none."""
    return query.split(",")[0]


def detect_region_hint(query: str) -> str | None:
    """Find a lower-cased region hint in a location query.

    An explicit comma segment ("Manali, Himachal Pradesh") wins. Otherwise the first
    known state or union territory mentioned anywhere in the query is used.
    """
    segments = query.split(",")
    if len(segments) > 1 and segments[1].strip():
        return segments[1].strip().lower()

    lowered = query.lower()
    return next((state for state in IN_STATES if state in lowered), None)


def split_query(query: str) -> QueryParts:
    """Derive every query variant and hint needed for resolution."""
    first = first_segment(query)
    return QueryParts(
        text=query,
        first_segment=first,
        region_hint=detect_region_hint(query),
        normalized=normalize_text(query),
        normalized_first=normalize_text(first),
    )
