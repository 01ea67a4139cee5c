"""create_job_board_tables

Creates users, companies, jobs and applications.

- users.company_id is a plain column (no FK); deleting a company nulls it
- one application per (job_id, applicant_id)
- JSON columns are JSONB on PostgreSQL

Revision ID: 3f2a9c1d7b10
Revises:
Create Date: 2026-10-19 09:12:40.118243

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

json_type = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")

user_role = sa.Enum('jobseeker', 'employer', 'admin', name='userrole')
company_size = sa.Enum('1-10', '11-50', '51-200', '201-500', '501-1000', '1000+', name='companysize')
job_type = sa.Enum('full-time', 'part-time', 'contract', 'internship', 'freelance', name='jobtype')
experience_level = sa.Enum('entry', 'mid', 'senior', 'lead', 'executive', name='experiencelevel')
job_category = sa.Enum(
    'Software Development', 'Data Science', 'Design', 'Marketing', 'Sales', 'Human Resources',
    'Finance', 'Operations', 'Customer Support', 'Product Management', 'Other',
    name='jobcategory',
)
job_status = sa.Enum('active', 'closed', 'draft', name='jobstatus')
application_status = sa.Enum(
    'pending', 'reviewing', 'shortlisted', 'interviewed', 'offered', 'rejected', 'withdrawn',
    name='applicationstatus',
)


def upgrade() -> None:
    """Create the job board schema."""

    # 1. Users
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('avatar', sa.String(), nullable=False),
        sa.Column('resume', sa.String(), nullable=False),
        sa.Column('skills', json_type, nullable=False),
        sa.Column('experience', sa.Integer(), nullable=False),
        sa.Column('education', json_type, nullable=False),
        sa.Column('location', json_type, nullable=False),
        sa.Column('bio', sa.String(length=500), nullable=True),
        sa.Column('company_id', sa.Uuid(), nullable=True),
        sa.Column('saved_jobs', json_type, nullable=False),
        sa.Column('is_email_verified', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # 2. Companies
    op.create_table(
        'companies',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False, unique=True),
        sa.Column('description', sa.String(length=2000), nullable=False),
        sa.Column('logo', sa.String(), nullable=False),
        sa.Column('website', sa.String(), nullable=True),
        sa.Column('industry', sa.String(), nullable=False),
        sa.Column('company_size', company_size, nullable=False),
        sa.Column('founded_year', sa.Integer(), nullable=True),
        sa.Column('location', json_type, nullable=False),
        sa.Column('social_links', json_type, nullable=False),
        sa.Column('benefits', json_type, nullable=False),
        sa.Column('culture', sa.String(length=1000), nullable=True),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('rating', sa.Numeric(2, 1), nullable=False),
        sa.Column('reviews_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_companies_id', 'companies', ['id'])
    op.create_index('ix_companies_industry', 'companies', ['industry'])
    op.create_index('ix_companies_owner_id', 'companies', ['owner_id'])

    # 3. Jobs
    op.create_table(
        'jobs',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('company_id', sa.Uuid(), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('posted_by_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('location', json_type, nullable=False),
        sa.Column('job_type', job_type, nullable=False),
        sa.Column('experience_level', experience_level, nullable=False),
        sa.Column('salary', json_type, nullable=False),
        sa.Column('skills', json_type, nullable=False),
        sa.Column('requirements', json_type, nullable=False),
        sa.Column('responsibilities', json_type, nullable=False),
        sa.Column('benefits', json_type, nullable=False),
        sa.Column('category', job_category, nullable=False),
        sa.Column('openings', sa.Integer(), nullable=False),
        sa.Column('application_deadline', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', job_status, nullable=False),
        sa.Column('applications_count', sa.Integer(), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_jobs_id', 'jobs', ['id'])
    op.create_index('ix_jobs_title', 'jobs', ['title'])
    op.create_index('ix_jobs_company_id', 'jobs', ['company_id'])
    op.create_index('ix_jobs_posted_by_id', 'jobs', ['posted_by_id'])
    op.create_index('ix_jobs_category', 'jobs', ['category'])
    op.create_index('ix_jobs_status_created_at', 'jobs', ['status', 'created_at'])

    # 4. Applications
    op.create_table(
        'applications',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('job_id', sa.Uuid(), sa.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('applicant_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('resume', sa.String(), nullable=False),
        sa.Column('cover_letter', sa.String(length=2000), nullable=True),
        sa.Column('status', application_status, nullable=False),
        sa.Column('answers', json_type, nullable=False),
        sa.Column('notes', json_type, nullable=False),
        sa.Column('status_history', json_type, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('job_id', 'applicant_id', name='uq_applications_job_applicant'),
    )
    op.create_index('ix_applications_id', 'applications', ['id'])
    op.create_index('ix_applications_job_status', 'applications', ['job_id', 'status'])
    op.create_index('ix_applications_applicant_created_at', 'applications', ['applicant_id', 'created_at'])


def downgrade() -> None:
    """Drop the job board schema."""
    op.drop_table('applications')
    op.drop_table('jobs')
    op.drop_table('companies')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (application_status, job_status, job_category, experience_level, job_type, company_size, user_role):
        enum_type.drop(bind, checkfirst=True)
