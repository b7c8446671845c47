"""per-country profiles and document versioning

Revision ID: 0002_country_profiles
Revises: 0001_initial
Create Date: 2026-09-24 00:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0002_country_profiles"
down_revision: Union[str, Sequence[str], None] = "0001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "student_country_profiles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("country", sa.String(length=100), nullable=False),
        sa.Column("current_phase", sa.String(length=60), nullable=False, server_default="DOCUMENT_COLLECTION"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_student_country_profiles_student_id", "student_country_profiles", ["student_id"], unique=False)
    op.create_index(
        "ix_student_country_profiles_student_country",
        "student_country_profiles",
        ["student_id", "country"],
        unique=True,
    )

    # Existing uploads stay NULL and are read as latest.
    op.add_column("documents", sa.Column("is_latest", sa.Boolean(), nullable=True))


def downgrade() -> None:
    op.drop_column("documents", "is_latest")
    op.drop_index("ix_student_country_profiles_student_country", table_name="student_country_profiles")
    op.drop_index("ix_student_country_profiles_student_id", table_name="student_country_profiles")
    op.drop_table("student_country_profiles")
