from __future__ import annotations

import json
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from models import (
    Document,
    Student,
    StudentCountryProfile,
    StudentUniversityApplication,
    University,
)


DEMO_UNIVERSITIES = [
    {"name": "University of Leeds", "country": "United Kingdom", "city": "Leeds"},
    {"name": "University of Portsmouth", "country": "UK", "city": "Portsmouth"},
    {"name": "RMIT University", "country": "Australia", "city": "Melbourne"},
    {"name": "Queensland University of Technology", "country": "Australia", "city": "Brisbane"},
    {"name": "University of Toronto", "country": "Canada", "city": "Toronto"},
    {"name": "Arizona State University", "country": "USA", "city": "Tempe"},
    # Imported before the country column was filled in.
    {"name": "Massey University", "country": None, "city": "Palmerston North"},
]


def seed_demo_catalog(db: Session) -> dict[str, int]:
    existing = db.scalar(select(func.count()).select_from(University)) or 0
    if existing:
        return {"inserted": 0, "existing": existing}
    for row in DEMO_UNIVERSITIES:
        db.add(University(active=True, **row))
    db.flush()
    return {"inserted": len(DEMO_UNIVERSITIES), "existing": 0}


def _universities_by_name(db: Session) -> dict[str, University]:
    return {uni.name: uni for uni in db.scalars(select(University)).all()}


def _demo_students(catalog: dict[str, University]) -> list[dict[str, Any]]:
    leeds = catalog["University of Leeds"]
    portsmouth = catalog["University of Portsmouth"]
    rmit = catalog["RMIT University"]
    qut = catalog["Queensland University of Technology"]

    return [
        {
            "student": {"first_name": "Aisha", "last_name": "Rahman", "email": "aisha.rahman@example.com"},
            "documents": [
                {"type": "PASSPORT", "status": "APPROVED", "is_latest": True},
                {"type": "ACADEMIC_TRANSCRIPT", "status": "PENDING", "is_latest": True},
                {"type": "STATEMENT_OF_PURPOSE", "status": "REJECTED", "is_latest": True},
                {"type": "CV_RESUME", "status": "APPROVED", "is_latest": False},
            ],
            "applications": [],
            "profiles": [{"country": "United Kingdom", "current_phase": "DOCUMENT_COLLECTION", "notes": None}],
        },
        {
            "student": {"first_name": "Daniel", "last_name": "Okafor", "email": "daniel.okafor@example.com"},
            "documents": [
                {"type": doc_type, "status": "APPROVED", "is_latest": None}
                for doc_type in ("PASSPORT", "ACADEMIC_TRANSCRIPT", "RECOMMENDATION_LETTER", "STATEMENT_OF_PURPOSE", "CV_RESUME")
            ],
            "applications": [
                {"university": leeds, "application_status": "ACCEPTED", "course_name": "MSc Data Science"},
                {"university": portsmouth, "application_status": "UNDER_REVIEW", "course_name": "MSc Computing"},
                {"university": rmit, "application_status": "SUBMITTED", "course_name": "Master of IT"},
            ],
            "profiles": [
                {
                    "country": "UK",
                    "current_phase": "OFFER_RECEIVED",
                    "notes": json.dumps(
                        {
                            "universityShortlist": {
                                "universities": [
                                    {"id": leeds.id, "name": leeds.name, "country": "United Kingdom"},
                                    {"name": "University of Bristol", "country": "United Kingdom"},
                                ]
                            },
                            "universitiesWithOffers": {"universities": [{"id": leeds.id, "name": leeds.name}]},
                        }
                    ),
                },
                {"country": "Australia", "current_phase": "APPLICATION_SUBMISSION", "notes": "call back after results"},
            ],
        },
        {
            "student": {"first_name": "Mei", "last_name": "Tan", "email": "mei.tan@example.com"},
            "documents": [],
            "applications": [{"university": qut, "application_status": "ACCEPTED", "course_name": "Bachelor of IT"}],
            "profiles": [
                {
                    "country": "Australia",
                    "current_phase": "ENROLLMENT",
                    "notes": json.dumps({"enrollmentUniversity": "Queensland University of Technology"}),
                }
            ],
        },
    ]


def seed_demo_students(db: Session) -> dict[str, int]:
    catalog = _universities_by_name(db)
    counts = {"students": 0, "documents": 0, "applications": 0, "profiles": 0}
    for row in _demo_students(catalog):
        if db.scalar(select(Student).where(Student.email == row["student"]["email"])):
            continue
        student = Student(**row["student"])
        db.add(student)
        db.flush()
        counts["students"] += 1

        for doc in row["documents"]:
            db.add(Document(student_id=student.id, **doc))
            counts["documents"] += 1
        for app in row["applications"]:
            db.add(
                StudentUniversityApplication(
                    student_id=student.id,
                    university_id=app["university"].id,
                    application_status=app["application_status"],
                    course_name=app["course_name"],
                )
            )
            counts["applications"] += 1
        for profile in row["profiles"]:
            db.add(StudentCountryProfile(student_id=student.id, **profile))
            counts["profiles"] += 1
    db.flush()
    return counts


def reset_and_seed(db: Session) -> dict[str, int]:
    for model in (StudentCountryProfile, StudentUniversityApplication, Document, Student, University):
        db.execute(delete(model))
    seed_demo_catalog(db)
    return seed_demo_students(db)
