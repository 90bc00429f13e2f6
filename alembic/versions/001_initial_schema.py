"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create ENUM types
    op.execute("CREATE TYPE loan_status AS ENUM ('DRAFT', 'PENDING', 'APPROVED', 'REJECTED')")

    # Create loans table
    op.create_table(
        'loans',
        sa.Column('pk', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('credited', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=False),
    )

    # Create applicants table
    op.create_table(
        'applicants',
        sa.Column('pk', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('monthly_income', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('request_loan_amount', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('monthly_payment', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('tenor', sa.Integer(), nullable=False, server_default=sa.text('1')),
        sa.Column('status', postgresql.ENUM(name='loan_status', create_type=False), nullable=False, server_default='DRAFT'),
        sa.Column('credit_check', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('balance', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('loan_pk', sa.Integer(), sa.ForeignKey('loans.pk', ondelete='SET NULL'), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.UniqueConstraint('email', name='uq_applicants_email'),
        sa.UniqueConstraint('loan_pk', name='uq_applicants_loan_pk'),
        sa.CheckConstraint('tenor >= 1 AND tenor <= 12', name='ck_applicants_tenor'),
    )
    op.create_index('ix_applicants_id', 'applicants', ['id'], unique=True)
    op.create_index('ix_applicants_status', 'applicants', ['status'])
    op.create_index('ix_applicants_created_at', 'applicants', ['created_at'])


def downgrade() -> None:
    # Drop tables in reverse order (respecting foreign key constraints)
    op.drop_index('ix_applicants_created_at', table_name='applicants')
    op.drop_index('ix_applicants_status', table_name='applicants')
    op.drop_index('ix_applicants_id', table_name='applicants')
    op.drop_table('applicants')

    op.drop_table('loans')

    # Drop ENUM types
    op.execute('DROP TYPE loan_status')
