from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable

from countries import normalize_country
from notes import (
    ENROLLMENT_KEY,
    OFFERS_KEY,
    PAYMENT_UNIVERSITY_KEYS,
    SUBMITTED_KEY,
    decode_notes,
    payment_info,
    shortlist_entries,
    university_entries,
)
from pipeline import (
    APPLICATION_SUBMISSION,
    COUNTING_DOCUMENT_STATUSES,
    DEFAULT_PIPELINE,
    ENROLLMENT,
    OFFER_APPLICATION_STATUSES,
    OFFER_RECEIVED,
    SUBMITTED_APPLICATION_STATUSES,
    UNIVERSITY_SHORTLISTING,
    PipelineConfig,
)


logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_CURRENT = "current"
STATUS_PENDING = "pending"

UNIVERSITY_PHASES = (UNIVERSITY_SHORTLISTING, APPLICATION_SUBMISSION, OFFER_RECEIVED, ENROLLMENT)


def _field(record: Any, *names: str, default: Any = None) -> Any:
    """Read the first non-null attribute/key out of a mapping or ORM row."""
    if record is None:
        return default
    for name in names:
        if isinstance(record, dict):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        if value is not None:
            return value
    return default


def _as_list(value: Any) -> list[Any]:
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [item for item in value if item is not None]
    return list(value)


def _upper(value: Any) -> str:
    return str(value or "").strip().upper()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class University:
    id: Any
    name: str
    country: str = ""

    @classmethod
    def from_record(cls, record: Any) -> University | None:
        if record is None:
            return None
        if isinstance(record, University):
            return record
        if isinstance(record, str):
            name = record.strip()
            return cls(None, name) if name else None
        raw_id = _field(record, "id")
        name = str(_field(record, "name", default="") or "").strip()
        country = str(_field(record, "country", default="") or "").strip()
        if raw_id == "":
            raw_id = None
        if raw_id is None and not name:
            return None
        return cls(raw_id, name, country)

    @property
    def name_key(self) -> str:
        return " ".join(self.name.casefold().split())

    def identity_key(self, by_id: bool) -> str:
        if by_id and self.id is not None:
            return f"id:{self.id}"
        if self.name:
            return f"name:{self.name_key}"
        return f"id:{self.id}"

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "country": self.country or None}


def dedupe_universities(candidates: list[University | None]) -> list[University]:
    universities = [item for item in candidates if item is not None]
    by_id = all(item.id is not None for item in universities)
    seen: set[str] = set()
    result: list[University] = []
    for university in universities:
        key = university.identity_key(by_id)
        if key in seen:
            continue
        seen.add(key)
        result.append(university)
    return result


@dataclass
class DocumentScore:
    percent: int
    missing_types: list[str]
    satisfied_types: list[str] = field(default_factory=list)


def _is_latest(document: Any) -> bool:
    value = _field(document, "is_latest", "isLatest")
    if isinstance(value, str):
        return value.strip().lower() != "false"
    return value is not False


def score_documents(documents: Any, required_types: Any) -> DocumentScore:
    required: list[str] = []
    for doc_type in required_types or []:
        if doc_type not in required:
            required.append(doc_type)
    if not required:
        return DocumentScore(100, [], [])

    present: set[str] = set()
    for document in _as_list(documents):
        if not _is_latest(document):
            continue
        if _upper(_field(document, "status")) not in COUNTING_DOCUMENT_STATUSES:
            continue
        present.add(_upper(_field(document, "type", "document_type", "documentType")))

    satisfied = [doc_type for doc_type in required if _upper(doc_type) in present]
    missing = [doc_type for doc_type in required if _upper(doc_type) not in present]
    percent = _round_half_up(100 * len(satisfied) / len(required))
    return DocumentScore(percent, missing, satisfied)


def _application_status(application: Any) -> str:
    return _upper(_field(application, "application_status", "applicationStatus", "status"))


def _application_university(application: Any) -> University | None:
    nested = _field(application, "university")
    if nested is not None:
        return University.from_record(nested)
    # Flat tracker rows carry the university inline.
    return University.from_record(
        {
            "id": _field(application, "university_id", "universityId"),
            "name": _field(application, "university_name", "universityName"),
            "country": _field(application, "country"),
        }
    )


def attributable_applications(applications: Any, selected_country: Any) -> list[Any]:
    rows = _as_list(applications)
    target = normalize_country(selected_country)
    if not target:
        return rows

    matched = []
    for application in rows:
        university = _application_university(application)
        country = normalize_country(university.country if university else "")
        if not country or country == target:
            matched.append(application)

    if not matched and rows:
        logger.info(
            "No applications attributed to %s; falling back to all %d applications",
            target,
            len(rows),
        )
        return rows
    return matched


def _universities_of(applications: list[Any], statuses: frozenset[str] | None = None) -> list[University | None]:
    result = []
    for application in applications:
        if statuses is not None and _application_status(application) not in statuses:
            continue
        result.append(_application_university(application))
    return result


def _shortlisted_from_notes(notes: dict[str, Any], selected_country: Any) -> list[University]:
    target = normalize_country(selected_country)
    result = []
    for entry in shortlist_entries(notes):
        university = University.from_record(entry)
        if university is None:
            continue
        if target and university.country and normalize_country(university.country) != target:
            continue
        result.append(university)
    return result


def _nested_university(entry: Any) -> University | None:
    if not isinstance(entry, dict):
        return None
    nested = entry.get("university")
    if isinstance(nested, (dict, str)):
        return University.from_record(nested)
    if entry.get("id") is not None or entry.get("name"):
        return University.from_record(entry)
    return None


def _match_by_name(name: str, applications: list[Any]) -> University | None:
    wanted = name.strip().lower()
    for application in applications:
        university = _application_university(application)
        if university is None or not university.name:
            continue
        candidate = university.name.strip().lower()
        if candidate == wanted or wanted in candidate or candidate in wanted:
            return university
    return None


def _enrollment_universities(
    notes: dict[str, Any],
    profile: Any,
    applications: list[Any],
    config: PipelineConfig,
) -> list[University]:
    entry = notes.get(ENROLLMENT_KEY)
    university = _nested_university(entry)
    if university is not None:
        return [university]

    for key in PAYMENT_UNIVERSITY_KEYS:
        university = _nested_university(notes.get(key))
        if university is not None:
            return [university]

    if isinstance(entry, str) and entry.strip():
        university = _match_by_name(entry, applications)
        if university is not None:
            return [university]

    if config.resolve_phase(_field(profile, "current_phase", "currentPhase")) == config.enrollment_phase:
        return dedupe_universities(_universities_of(applications, OFFER_APPLICATION_STATUSES))
    return []


def universities_for_phase(
    phase: str,
    profile: Any,
    applications: Any,
    selected_country: Any,
    config: PipelineConfig = DEFAULT_PIPELINE,
    notes: dict[str, Any] | None = None,
) -> list[University]:
    """Universities a country track has reached for one phase.

    Notes entries come first, then universities implied by the applications
    attributed to the selected country. Pass `notes` to reuse an already
    decoded blob; otherwise the profile's notes are decoded here.
    """
    if notes is None:
        notes = decode_notes(_field(profile, "notes"))
    key = config.resolve_phase(phase) or _upper(phase)
    country_apps = attributable_applications(applications, selected_country)

    if key == UNIVERSITY_SHORTLISTING:
        candidates = _shortlisted_from_notes(notes, selected_country) + _universities_of(country_apps)
    elif key == APPLICATION_SUBMISSION:
        from_notes = [University.from_record(entry) for entry in university_entries(notes, SUBMITTED_KEY)]
        candidates = from_notes + _universities_of(country_apps, SUBMITTED_APPLICATION_STATUSES)
    elif key == OFFER_RECEIVED:
        from_notes = [University.from_record(entry) for entry in university_entries(notes, OFFERS_KEY)]
        candidates = from_notes + _universities_of(country_apps, OFFER_APPLICATION_STATUSES)
    elif key == config.enrollment_phase:
        candidates = _enrollment_universities(notes, profile, country_apps, config)
    else:
        return []
    return dedupe_universities(candidates)


def is_enrolled(
    profile: Any,
    config: PipelineConfig = DEFAULT_PIPELINE,
    notes: dict[str, Any] | None = None,
) -> bool:
    if profile is None:
        return False
    if config.resolve_phase(_field(profile, "current_phase", "currentPhase")) == config.enrollment_phase:
        return True
    if notes is None:
        notes = decode_notes(_field(profile, "notes"))
    return bool(notes.get(ENROLLMENT_KEY))


def find_country_profile(student: Any, selected_country: Any) -> Any:
    profiles = _as_list(_field(student, "country_profiles", "countryProfiles"))
    if not profiles:
        return None
    target = normalize_country(selected_country)
    if not target:
        return profiles[0]
    for profile in profiles:
        if normalize_country(_field(profile, "country")) == target:
            return profile
    return None


@dataclass
class _ProgressContext:
    config: PipelineConfig
    profile: Any
    notes: dict[str, Any]
    document_score: DocumentScore
    enrolled: bool


def _score_document_phase(ctx: _ProgressContext) -> tuple[str, int]:
    return STATUS_CURRENT, ctx.document_score.percent


def _score_enrollment_phase(ctx: _ProgressContext) -> tuple[str, int]:
    # Only reached for the current phase; an earlier enrollment note does not complete the pipeline.
    if ctx.enrolled:
        return STATUS_COMPLETED, 100
    return STATUS_CURRENT, 0


def _score_current_default(ctx: _ProgressContext) -> tuple[str, int]:
    return STATUS_CURRENT, 0


def _current_phase_scorers(config: PipelineConfig) -> dict[str, Callable[[_ProgressContext], tuple[str, int]]]:
    return {
        config.document_phase: _score_document_phase,
        config.enrollment_phase: _score_enrollment_phase,
    }


def _can_proceed(phase: str, ctx: _ProgressContext, selected_country: Any) -> bool:
    if phase == ctx.config.document_phase:
        return not ctx.document_score.missing_types
    if phase == UNIVERSITY_SHORTLISTING:
        return bool(_shortlisted_from_notes(ctx.notes, selected_country))
    return False


def _resolve_notes(student: Any, profile: Any) -> dict[str, Any]:
    raw = _field(profile, "notes")
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raw = _field(student, "notes")
    return decode_notes(raw)


def compute_progress(
    student: Any,
    selected_country: Any = None,
    config: PipelineConfig = DEFAULT_PIPELINE,
) -> dict[str, Any]:
    profile = find_country_profile(student, selected_country)
    if profile is None:
        logger.info("No country profile for %r; using default phase", selected_country)

    raw_phase = _field(profile, "current_phase", "currentPhase") or _field(student, "current_phase", "currentPhase")
    raw_phase = raw_phase or config.document_phase
    current_phase = config.resolve_phase(raw_phase)
    current_index = config.index_of(current_phase) if current_phase else None
    if current_index is None:
        logger.warning("Unknown phase %r; reporting all phases pending", raw_phase)

    country = _field(profile, "country", default=selected_country or "")
    notes = _resolve_notes(student, profile)
    applications = _as_list(_field(student, "applications"))
    ctx = _ProgressContext(
        config=config,
        profile=profile,
        notes=notes,
        document_score=score_documents(_field(student, "documents"), config.required_documents),
        enrolled=is_enrolled(profile, config, notes=notes),
    )
    scorers = _current_phase_scorers(config)

    phases: list[dict[str, Any]] = []
    current_percent = 0
    for index, phase in enumerate(config.phases):
        if current_index is None or index > current_index:
            status, percent = STATUS_PENDING, 0
        elif index < current_index:
            status, percent = STATUS_COMPLETED, 100
        else:
            status, percent = scorers.get(phase, _score_current_default)(ctx)
            current_percent = percent

        entry: dict[str, Any] = {
            "phase": phase,
            "label": config.label_for(phase),
            "index": index,
            "status": status,
            "percent": percent,
        }
        if phase == config.document_phase:
            entry["missing_documents"] = list(ctx.document_score.missing_types)
        if phase in UNIVERSITY_PHASES or phase == config.enrollment_phase:
            universities = universities_for_phase(phase, profile, applications, country, config, notes=notes)
            entry["universities"] = [university.as_dict() for university in universities]
        if index == current_index:
            entry["can_proceed"] = _can_proceed(phase, ctx, country)
        payment = payment_info(notes, phase)
        if payment is not None:
            entry["payment"] = payment
        phases.append(entry)

    if current_index is None:
        overall = 0
    else:
        base = 100 * current_index / config.total_phases
        overall = _round_half_up(min(base + current_percent / config.total_phases, 100))

    logger.debug("Progress for %s: phase=%s overall=%d", country or "-", current_phase or raw_phase, overall)
    return {
        "country": country,
        "current_phase": current_phase or raw_phase,
        "current_phase_known": current_index is not None,
        "enrolled": ctx.enrolled,
        "overall_percent": overall,
        "phases": phases,
    }


def compute_all_progress(student: Any, config: PipelineConfig = DEFAULT_PIPELINE) -> list[dict[str, Any]]:
    profiles = _as_list(_field(student, "country_profiles", "countryProfiles"))
    if not profiles:
        return [compute_progress(student, None, config)]

    results = []
    seen: set[str] = set()
    for profile in profiles:
        country = _field(profile, "country", default="")
        key = normalize_country(country)
        if key in seen:
            continue
        seen.add(key)
        results.append(compute_progress(student, country, config))
    return results
