from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import get_settings
from log_config import configure_logging
from progress import compute_progress


def scenario_inputs() -> list[dict[str, Any]]:
    return [
        {
            "name": "Fresh lead, partial documents",
            "country": "UK",
            "student": {
                "documents": [
                    {"type": "PASSPORT", "status": "APPROVED", "isLatest": True},
                    {"type": "ACADEMIC_TRANSCRIPT", "status": "PENDING"},
                    {"type": "CV_RESUME", "status": "REJECTED", "isLatest": True},
                ],
                "applications": [],
                "countryProfiles": [{"country": "United Kingdom", "currentPhase": "DOCUMENT_COLLECTION", "notes": None}],
            },
        },
        {
            "name": "Shortlisting with applications recorded under another spelling",
            "country": "Australia",
            "student": {
                "documents": [],
                "applications": [
                    {"applicationStatus": "PENDING", "university": {"id": 11, "name": "RMIT University", "country": "AU"}},
                    {"applicationStatus": "SUBMITTED", "university": {"id": 12, "name": "Monash University", "country": "Australia"}},
                ],
                "countryProfiles": [
                    {
                        "country": "australia",
                        "currentPhase": "UNIVERSITY_SHORTLISTING",
                        "notes": json.dumps({"universityShortlist": {"universities": [{"name": "Deakin University", "country": "Australia"}]}}),
                    }
                ],
            },
        },
        {
            "name": "Offer stage with legacy phase key",
            "country": "Australia",
            "student": {
                "documents": [],
                "applications": [{"applicationStatus": "ACCEPTED", "university": {"id": 12, "name": "Monash University", "country": "Australia"}}],
                "countryProfiles": [{"country": "Australia", "currentPhase": "OFFER_LETTER_AUSTRALIA", "notes": "{not json"}],
            },
        },
        {
            "name": "Enrolled via legacy string note",
            "country": "Canada",
            "student": {
                "documents": [],
                "applications": [{"applicationStatus": "ACCEPTED", "university": {"id": 31, "name": "University of Toronto", "country": "Canada"}}],
                "countryProfiles": [
                    {"country": "Canada", "currentPhase": "ENROLLMENT", "notes": json.dumps({"enrollmentUniversity": "toronto"})}
                ],
            },
        },
        {
            "name": "Drifted phase value",
            "country": "USA",
            "student": {
                "documents": [],
                "applications": [],
                "countryProfiles": [{"country": "United States", "currentPhase": "LEGACY_UNUSED_PHASE", "notes": None}],
            },
        },
    ]


def _print_result(name: str, result: dict[str, Any]) -> None:
    print(f"\n=== {name} ===")
    print(f"Country: {result['country'] or '-'} | phase: {result['current_phase']} | overall: {result['overall_percent']}%")
    for entry in result["phases"]:
        if entry["status"] == "pending":
            continue
        line = f"  [{entry['status']:>9}] {entry['label']} {entry['percent']}%"
        if entry.get("missing_documents"):
            line += f" missing={', '.join(entry['missing_documents'])}"
        if entry.get("universities"):
            line += f" universities={', '.join(uni['name'] or str(uni['id']) for uni in entry['universities'])}"
        print(line)


def main(argv: list[str]) -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    if argv:
        from db import db_session
        from records import student_progress

        with db_session() as db:
            for student_id in argv:
                result = student_progress(db, int(student_id), settings.default_country or None)
                _print_result(f"Student {student_id}", result)
        return

    for scenario in scenario_inputs():
        result = compute_progress(scenario["student"], scenario["country"])
        _print_result(scenario["name"], result)


if __name__ == "__main__":
    main(sys.argv[1:])
