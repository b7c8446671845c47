from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


DOCUMENT_COLLECTION = "DOCUMENT_COLLECTION"
UNIVERSITY_SHORTLISTING = "UNIVERSITY_SHORTLISTING"
APPLICATION_SUBMISSION = "APPLICATION_SUBMISSION"
OFFER_RECEIVED = "OFFER_RECEIVED"
DEPOSIT_PAYMENT = "DEPOSIT_PAYMENT"
ECOE_ISSUED = "ECOE_ISSUED"
VISA_APPLICATION = "VISA_APPLICATION"
VISA_DECISION = "VISA_DECISION"
PRE_DEPARTURE = "PRE_DEPARTURE"
ENROLLMENT = "ENROLLMENT"

PHASE_LABELS = {
    DOCUMENT_COLLECTION: "Document Collection",
    UNIVERSITY_SHORTLISTING: "University Shortlisting",
    APPLICATION_SUBMISSION: "Application Submission",
    OFFER_RECEIVED: "Offer Received",
    DEPOSIT_PAYMENT: "Tuition Deposit",
    ECOE_ISSUED: "eCOE Issued",
    VISA_APPLICATION: "Visa Application",
    VISA_DECISION: "Visa Decision",
    PRE_DEPARTURE: "Pre-Departure",
    ENROLLMENT: "Enrollment",
}

# Country-specific keys written by older versions of the counselor screens.
LEGACY_PHASE_ALIASES = {
    "OFFER_LETTER_AUSTRALIA": OFFER_RECEIVED,
    "OSHC_TUITION_DEPOSIT": DEPOSIT_PAYMENT,
    "INITIAL_PAYMENT": DEPOSIT_PAYMENT,
    "ECOE": ECOE_ISSUED,
    "VISA_APPLICATION_AUSTRALIA": VISA_APPLICATION,
}

REQUIRED_DOCUMENTS = (
    "PASSPORT",
    "ACADEMIC_TRANSCRIPT",
    "RECOMMENDATION_LETTER",
    "STATEMENT_OF_PURPOSE",
    "CV_RESUME",
)

COUNTING_DOCUMENT_STATUSES = frozenset({"APPROVED", "PENDING"})
SUBMITTED_APPLICATION_STATUSES = frozenset({"SUBMITTED", "PENDING", "UNDER_REVIEW", "ACCEPTED"})
OFFER_APPLICATION_STATUSES = frozenset({"ACCEPTED"})


class PipelineConfigError(ValueError):
    pass


def _readonly(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class PipelineConfig:
    """Phase order and intake requirements shared by every progress computation."""

    phases: tuple[str, ...]
    labels: Mapping[str, str] = field(default_factory=lambda: _readonly(PHASE_LABELS))
    required_documents: tuple[str, ...] = REQUIRED_DOCUMENTS
    aliases: Mapping[str, str] = field(default_factory=lambda: _readonly(LEGACY_PHASE_ALIASES))
    document_phase: str = DOCUMENT_COLLECTION
    enrollment_phase: str = ENROLLMENT

    def __post_init__(self) -> None:
        object.__setattr__(self, "phases", tuple(self.phases))
        object.__setattr__(self, "required_documents", tuple(self.required_documents))
        object.__setattr__(self, "labels", _readonly(self.labels))
        object.__setattr__(self, "aliases", _readonly(self.aliases))

        if not self.phases:
            raise PipelineConfigError("Pipeline needs at least one phase")
        if len(set(self.phases)) != len(self.phases):
            raise PipelineConfigError(f"Duplicate phases in pipeline: {self.phases}")
        for key in (self.document_phase, self.enrollment_phase):
            if key not in self.phases:
                raise PipelineConfigError(f"Phase {key} missing from pipeline")

    @property
    def total_phases(self) -> int:
        return len(self.phases)

    def resolve_phase(self, value: Any) -> str | None:
        key = str(value or "").strip().upper()
        if not key:
            return None
        key = self.aliases.get(key, key)
        if key in self.phases:
            return key
        return None

    def index_of(self, value: Any) -> int | None:
        key = self.resolve_phase(value)
        if key is None:
            return None
        return self.phases.index(key)

    def label_for(self, phase: str) -> str:
        return self.labels.get(phase, phase.replace("_", " ").title())


DEFAULT_PIPELINE = PipelineConfig(
    phases=(
        DOCUMENT_COLLECTION,
        UNIVERSITY_SHORTLISTING,
        APPLICATION_SUBMISSION,
        OFFER_RECEIVED,
        DEPOSIT_PAYMENT,
        ECOE_ISSUED,
        VISA_APPLICATION,
        VISA_DECISION,
        PRE_DEPARTURE,
        ENROLLMENT,
    )
)
