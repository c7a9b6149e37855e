"""compatibility results table

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-19 12:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001_initial"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "compatibility_results",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("partner1_name", sa.Text(), nullable=False),
        sa.Column("partner2_name", sa.Text(), nullable=False),
        sa.Column("partner1_date_of_birth", sa.String(length=64), nullable=True),
        sa.Column("partner1_birth_time", sa.String(length=64), nullable=True),
        sa.Column("partner2_date_of_birth", sa.String(length=64), nullable=True),
        sa.Column("partner2_birth_time", sa.String(length=64), nullable=True),
        sa.Column("partner1_abjad_value", sa.Integer(), nullable=False),
        sa.Column("partner2_abjad_value", sa.Integer(), nullable=False),
        sa.Column("partner1_digital_root", sa.Integer(), nullable=False),
        sa.Column("partner2_digital_root", sa.Integer(), nullable=False),
        sa.Column("partner1_element", sa.String(length=16), nullable=False),
        sa.Column("partner2_element", sa.String(length=16), nullable=False),
        sa.Column("name_compatibility_score", sa.Integer(), nullable=False),
        sa.Column("life_path_compatibility_score", sa.Integer(), nullable=True),
        sa.Column("overall_compatibility_score", sa.Integer(), nullable=False),
        sa.Column("compatibility_level", sa.String(length=64), nullable=False),
        sa.Column("insights", sa.Text(), nullable=False),
        sa.Column("marriage_advice", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_compatibility_results_created_at",
        "compatibility_results",
        ["created_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_compatibility_results_created_at", table_name="compatibility_results")
    op.drop_table("compatibility_results")
