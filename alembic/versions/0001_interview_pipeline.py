"""Interview pipeline schema

Revision ID: 0001_interview_pipeline
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_interview_pipeline"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "interview_process",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("department_id", sa.Uuid(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_interview_process_department_id", "interview_process", ["department_id"])

    op.create_table(
        "interview_stage",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column(
            "process_id",
            sa.Uuid(),
            sa.ForeignKey("interview_process.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("stage_order", sa.Integer(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("min_interviewers", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("max_interviewers", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("interviewer_pool", sa.JSON(), nullable=True),
        sa.Column("interview_type", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("process_id", "stage_order", name="uq_interview_stage_process_order"),
    )
    op.create_index("ix_interview_stage_process_id", "interview_stage", ["process_id"])

    op.create_table(
        "position",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("department_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("total_slots", sa.Integer(), nullable=True),
        sa.Column("is_open", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("process_id", sa.Uuid(), sa.ForeignKey("interview_process.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_position_department_id", "position", ["department_id"])
    op.create_index("ix_position_process_id", "position", ["process_id"])

    op.create_table(
        "department_interviewer",
        sa.Column("department_id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("interviewer_id", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
    )

    op.create_table(
        "candidate",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("position_id", sa.Uuid(), sa.ForeignKey("position.id"), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("score", sa.Float(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_candidate_position_id", "candidate", ["position_id"])
    op.create_index("ix_candidate_status", "candidate", ["status"])

    op.create_table(
        "interview_schedule",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("candidate_id", sa.Uuid(), sa.ForeignKey("candidate.id"), nullable=False),
        sa.Column("stage_id", sa.Uuid(), sa.ForeignKey("interview_stage.id"), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="scheduled"),
        sa.Column("created_by", sa.String(length=64), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_interview_schedule_candidate_id", "interview_schedule", ["candidate_id"])
    op.create_index("ix_interview_schedule_stage_id", "interview_schedule", ["stage_id"])
    op.create_index("ix_interview_schedule_status", "interview_schedule", ["status"])
    op.create_index(
        "uq_interview_schedule_active_stage",
        "interview_schedule",
        ["candidate_id", "stage_id"],
        unique=True,
        postgresql_where=sa.text("status = 'scheduled'"),
        sqlite_where=sa.text("status = 'scheduled'"),
    )

    op.create_table(
        "schedule_interviewer",
        sa.Column(
            "schedule_id",
            sa.Uuid(),
            sa.ForeignKey("interview_schedule.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False,
        ),
        sa.Column("interviewer_id", sa.String(length=64), primary_key=True, nullable=False),
    )
    op.create_index("ix_schedule_interviewer_interviewer", "schedule_interviewer", ["interviewer_id"])

    op.create_table(
        "interviewer_calendar",
        sa.Column("interviewer_id", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "interview_outcome",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column(
            "schedule_id",
            sa.Uuid(),
            sa.ForeignKey("interview_schedule.id"),
            nullable=False,
            unique=True,
        ),
        sa.Column("feedback", sa.Text(), nullable=False, server_default=""),
        sa.Column("decision", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("created_by", sa.String(length=64), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "onboard_request",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("candidate_id", sa.Uuid(), sa.ForeignKey("candidate.id"), nullable=False),
        sa.Column("outcome_id", sa.Uuid(), sa.ForeignKey("interview_outcome.id"), nullable=True),
        sa.Column("proposed_salary", sa.Numeric(14, 2), nullable=False),
        sa.Column("salary_type", sa.String(length=20), nullable=False),
        sa.Column("proposed_start_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("created_by", sa.String(length=64), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_onboard_request_candidate_id", "onboard_request", ["candidate_id"])
    op.create_index("ix_onboard_request_status", "onboard_request", ["status"])
    op.create_index(
        "uq_onboard_request_pending_candidate",
        "onboard_request",
        ["candidate_id"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
        sqlite_where=sa.text("status = 'pending'"),
    )

    op.create_table(
        "onboard_request_history",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column(
            "request_id",
            sa.Uuid(),
            sa.ForeignKey("onboard_request.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("from_status", sa.String(length=20), nullable=False),
        sa.Column("to_status", sa.String(length=20), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("changed_by", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_onboard_request_history_request_id", "onboard_request_history", ["request_id"])


def downgrade() -> None:
    op.drop_index("ix_onboard_request_history_request_id", table_name="onboard_request_history")
    op.drop_table("onboard_request_history")
    op.drop_index("uq_onboard_request_pending_candidate", table_name="onboard_request")
    op.drop_index("ix_onboard_request_status", table_name="onboard_request")
    op.drop_index("ix_onboard_request_candidate_id", table_name="onboard_request")
    op.drop_table("onboard_request")
    op.drop_table("interview_outcome")
    op.drop_table("interviewer_calendar")
    op.drop_index("ix_schedule_interviewer_interviewer", table_name="schedule_interviewer")
    op.drop_table("schedule_interviewer")
    op.drop_index("uq_interview_schedule_active_stage", table_name="interview_schedule")
    op.drop_index("ix_interview_schedule_status", table_name="interview_schedule")
    op.drop_index("ix_interview_schedule_stage_id", table_name="interview_schedule")
    op.drop_index("ix_interview_schedule_candidate_id", table_name="interview_schedule")
    op.drop_table("interview_schedule")
    op.drop_index("ix_candidate_status", table_name="candidate")
    op.drop_index("ix_candidate_position_id", table_name="candidate")
    op.drop_table("candidate")
    op.drop_table("department_interviewer")
    op.drop_index("ix_position_process_id", table_name="position")
    op.drop_index("ix_position_department_id", table_name="position")
    op.drop_table("position")
    op.drop_index("ix_interview_stage_process_id", table_name="interview_stage")
    op.drop_table("interview_stage")
    op.drop_index("ix_interview_process_department_id", table_name="interview_process")
    op.drop_table("interview_process")
