from __future__ import annotations

import re
from typing import Any


COUNTRY_ALIASES = {
    "UK": "UNITED KINGDOM",
    "UNITED KINGDOM": "UNITED KINGDOM",
    "GREAT BRITAIN": "UNITED KINGDOM",
    "ENGLAND": "UNITED KINGDOM",
    "US": "UNITED STATES",
    "USA": "UNITED STATES",
    "UNITED STATES": "UNITED STATES",
    "UNITED STATES OF AMERICA": "UNITED STATES",
    "UAE": "UAE",
    "UNITED ARAB EMIRATES": "UAE",
    "DUBAI": "UAE",
    "CA": "CANADA",
    "AU": "AUSTRALIA",
    "DE": "GERMANY",
    "FR": "FRANCE",
    "NZ": "NEW ZEALAND",
}

_STRAY_CHARS = re.compile(r"[\[\]\"']")
_WHITESPACE = re.compile(r"\s+")


def clean_country_name(raw: Any) -> str:
    """Strip brackets/quotes left over from list-serialised values and collapse spaces."""
    if raw is None:
        return ""
    value = _STRAY_CHARS.sub("", str(raw))
    return _WHITESPACE.sub(" ", value).strip()


def normalize_country(raw: Any) -> str:
    """Canonical country code used for every country comparison.

    Known spellings ("UK", "U.K.", "United Kingdom") collapse onto one code.
    Anything else is returned cleaned and upper-cased, so an unknown country
    still compares equal to itself. Empty input gives "".
    """
    value = clean_country_name(raw).upper()
    if not value:
        return ""
    if value in COUNTRY_ALIASES:
        return COUNTRY_ALIASES[value]
    dotless = _WHITESPACE.sub(" ", value.replace(".", "")).strip()
    return COUNTRY_ALIASES.get(dotless, value)


def same_country(left: Any, right: Any) -> bool:
    return normalize_country(left) == normalize_country(right)
