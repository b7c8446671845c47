from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class Student(Base):
    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, unique=True)
    # Pre country-profile pointer, still read as a fallback.
    current_phase: Mapped[Optional[str]] = mapped_column(String(60), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    documents = relationship("Document", back_populates="student", order_by="Document.id")
    applications = relationship("StudentUniversityApplication", back_populates="student", order_by="StudentUniversityApplication.id")
    country_profiles = relationship("StudentCountryProfile", back_populates="student", order_by="StudentCountryProfile.id")


class University(Base):
    __tablename__ = "universities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (Index("ix_universities_country", "country"),)


class Document(Base):
    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(Integer, ForeignKey("students.id"), nullable=False)
    type: Mapped[str] = mapped_column(String(60), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="PENDING")  # PENDING | APPROVED | REJECTED | EXPIRED | UNDER_REVIEW
    file_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # NULL on rows uploaded before versioning; treated as latest.
    is_latest: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True, default=True)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    student = relationship("Student", back_populates="documents")

    __table_args__ = (
        CheckConstraint(
            "status in ('PENDING', 'APPROVED', 'REJECTED', 'EXPIRED', 'UNDER_REVIEW')",
            name="ck_documents_status",
        ),
        Index("ix_documents_student_id", "student_id"),
        Index("ix_documents_student_type", "student_id", "type"),
    )


class StudentUniversityApplication(Base):
    __tablename__ = "student_university_applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(Integer, ForeignKey("students.id"), nullable=False)
    university_id: Mapped[int] = mapped_column(Integer, ForeignKey("universities.id"), nullable=False)
    course_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    application_status: Mapped[str] = mapped_column(String(30), nullable=False, default="PENDING")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    student = relationship("Student", back_populates="applications")
    university = relationship("University")

    __table_args__ = (
        CheckConstraint(
            "application_status in ('PENDING', 'SUBMITTED', 'UNDER_REVIEW', 'ACCEPTED', 'REJECTED', "
            "'DEFERRED', 'WAITLISTED', 'CONDITIONAL_OFFER')",
            name="ck_student_university_applications_status",
        ),
        Index("ix_student_university_applications_student_id", "student_id"),
        Index("ix_student_university_applications_status", "application_status"),
    )


class StudentCountryProfile(Base):
    __tablename__ = "student_country_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(Integer, ForeignKey("students.id"), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    current_phase: Mapped[str] = mapped_column(String(60), nullable=False, default="DOCUMENT_COLLECTION")
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # serialized JSON, shape varies by era
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    student = relationship("Student", back_populates="country_profiles")

    __table_args__ = (
        Index("ix_student_country_profiles_student_id", "student_id"),
        Index("ix_student_country_profiles_student_country", "student_id", "country", unique=True),
    )
