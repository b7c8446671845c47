from __future__ import annotations

import json
import logging
from typing import Any


logger = logging.getLogger(__name__)

SHORTLIST_KEY = "universityShortlist"
SUBMITTED_KEY = "universitiesWithApplications"
OFFERS_KEY = "universitiesWithOffers"
ENROLLMENT_KEY = "enrollmentUniversity"
PAYMENT_UNIVERSITY_KEYS = ("initialPaymentUniversity", "depositUniversity")
PAYMENTS_KEY = "payments"


def decode_notes(blob: Any) -> dict[str, Any]:
    """Decode a profile notes blob into a mapping.

    Never raises: absent, malformed or non-mapping payloads all decode to {}.
    """
    if blob is None:
        return {}
    if isinstance(blob, dict):
        return blob
    if isinstance(blob, (bytes, bytearray)):
        try:
            blob = blob.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.warning("Undecodable notes bytes ignored: %s", exc)
            return {}
    if not isinstance(blob, str):
        return {}

    text = blob.strip()
    if not text:
        return {}
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError) as exc:
        logger.warning("Malformed notes blob ignored (%d chars): %s", len(text), exc)
        return {}
    if not isinstance(parsed, dict):
        return {}
    return parsed


def notes_section(notes: dict[str, Any], key: str) -> dict[str, Any]:
    value = notes.get(key)
    if isinstance(value, dict):
        return value
    return {}


def university_entries(notes: dict[str, Any], key: str) -> list[Any]:
    entries = notes_section(notes, key).get("universities")
    if isinstance(entries, list):
        return entries
    return []


def shortlist_entries(notes: dict[str, Any]) -> list[Any]:
    # Older profiles stored the shortlist as a bare list at the top level.
    entries = university_entries(notes, SHORTLIST_KEY)
    if entries:
        return entries
    for legacy_key in ("universities", "selectedUniversities"):
        value = notes.get(legacy_key)
        if isinstance(value, list) and value:
            return value
    return []


def payment_info(notes: dict[str, Any], phase: str) -> dict[str, Any] | None:
    payment = notes_section(notes, PAYMENTS_KEY).get(phase)
    if isinstance(payment, dict) and payment:
        return payment
    return None
