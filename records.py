from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from models import Student, StudentUniversityApplication
from pipeline import DEFAULT_PIPELINE, PipelineConfig
from progress import compute_all_progress, compute_progress


logger = logging.getLogger(__name__)


def _university_payload(university: Any) -> dict[str, Any] | None:
    if university is None:
        return None
    return {"id": university.id, "name": university.name, "country": university.country}


def load_student_snapshot(db: Session, student_id: int) -> dict[str, Any]:
    """Fetch everything the progress engine reads for one student, in API shape."""
    student = db.scalar(
        select(Student)
        .where(Student.id == student_id)
        .options(
            selectinload(Student.documents),
            selectinload(Student.applications).selectinload(StudentUniversityApplication.university),
            selectinload(Student.country_profiles),
        )
    )
    if student is None:
        raise LookupError(f"Student {student_id} not found")

    snapshot = {
        "id": student.id,
        "name": f"{student.first_name} {student.last_name}".strip(),
        "currentPhase": student.current_phase,
        "notes": student.notes,
        "documents": [
            {"id": doc.id, "type": doc.type, "status": doc.status, "isLatest": doc.is_latest}
            for doc in student.documents
        ],
        "applications": [
            {
                "id": app.id,
                "applicationStatus": app.application_status,
                "university": _university_payload(app.university),
            }
            for app in student.applications
        ],
        "countryProfiles": [
            {"id": profile.id, "country": profile.country, "currentPhase": profile.current_phase, "notes": profile.notes}
            for profile in student.country_profiles
        ],
    }
    logger.debug(
        "Loaded snapshot for student %s: %d documents, %d applications, %d profiles",
        student_id,
        len(snapshot["documents"]),
        len(snapshot["applications"]),
        len(snapshot["countryProfiles"]),
    )
    return snapshot


def student_progress(
    db: Session,
    student_id: int,
    country: str | None,
    config: PipelineConfig = DEFAULT_PIPELINE,
) -> dict[str, Any]:
    return compute_progress(load_student_snapshot(db, student_id), country, config)


def student_progress_overview(
    db: Session,
    student_id: int,
    config: PipelineConfig = DEFAULT_PIPELINE,
) -> list[dict[str, Any]]:
    return compute_all_progress(load_student_snapshot(db, student_id), config)
