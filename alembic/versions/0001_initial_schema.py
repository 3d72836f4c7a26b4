"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:12:44.318201

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns():
    return [
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def _enum():
    # Enum members are stored as their string values
    return sa.String(32)


def _index_base(table: str) -> None:
    op.create_index(f'ix_{table}_id', table, ['id'])
    op.create_index(f'ix_{table}_created_at', table, ['created_at'])


def upgrade() -> None:
    op.create_table(
        'admins',
        *_base_columns(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(100), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', _enum(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True)),
    )
    _index_base('admins')
    op.create_index('ix_admins_email', 'admins', ['email'], unique=True)

    op.create_table(
        'students',
        *_base_columns(),
        sa.Column('admission_number', sa.String(20), nullable=False),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('gender', _enum(), nullable=False),
        sa.Column('class_name', _enum(), nullable=False),
        sa.Column('section', sa.String(10), nullable=False),
        sa.Column('roll_number', sa.String(20)),
        sa.Column('photo', sa.String(500)),
        sa.Column('email', sa.String(100)),
        sa.Column('phone', sa.String(20)),
        sa.Column('address', sa.JSON()),
        sa.Column('father_name', sa.String(100), nullable=False),
        sa.Column('father_phone', sa.String(20), nullable=False),
        sa.Column('father_occupation', sa.String(100)),
        sa.Column('mother_name', sa.String(100), nullable=False),
        sa.Column('mother_phone', sa.String(20)),
        sa.Column('mother_occupation', sa.String(100)),
        sa.Column('guardian_name', sa.String(100)),
        sa.Column('guardian_phone', sa.String(20)),
        sa.Column('guardian_relation', sa.String(50)),
        sa.Column('admission_date', sa.DateTime(timezone=True)),
        sa.Column('previous_school', sa.String(200)),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_approved', sa.Boolean(), nullable=False),
        sa.Column('academic_year', sa.String(10), nullable=False),
    )
    _index_base('students')
    op.create_index('ix_students_admission_number', 'students', ['admission_number'], unique=True)
    op.create_index('ix_students_class_section', 'students', ['class_name', 'section'])

    op.create_table(
        'admissions',
        *_base_columns(),
        sa.Column('application_number', sa.String(20), nullable=False),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('gender', _enum(), nullable=False),
        sa.Column('class_applied', _enum(), nullable=False),
        sa.Column('photo', sa.String(500)),
        sa.Column('father_name', sa.String(100), nullable=False),
        sa.Column('father_phone', sa.String(20), nullable=False),
        sa.Column('father_email', sa.String(100)),
        sa.Column('father_occupation', sa.String(100)),
        sa.Column('mother_name', sa.String(100), nullable=False),
        sa.Column('mother_phone', sa.String(20)),
        sa.Column('mother_email', sa.String(100)),
        sa.Column('mother_occupation', sa.String(100)),
        sa.Column('guardian_name', sa.String(100)),
        sa.Column('guardian_phone', sa.String(20)),
        sa.Column('guardian_relation', sa.String(50)),
        sa.Column('address', sa.JSON(), nullable=False),
        sa.Column('previous_school', sa.String(200)),
        sa.Column('previous_class', sa.String(20)),
        sa.Column('status', _enum(), nullable=False),
        sa.Column('remarks', sa.Text()),
        sa.Column('approved_by', sa.Uuid(), sa.ForeignKey('admins.id', ondelete='SET NULL')),
        sa.Column('approved_at', sa.DateTime(timezone=True)),
        sa.Column('application_fee', sa.Numeric(10, 2), nullable=False),
        sa.Column('payment_status', _enum(), nullable=False),
        sa.Column('payment_id', sa.String(100)),
        sa.Column('academic_year', sa.String(10), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
    )
    _index_base('admissions')
    op.create_index('ix_admissions_application_number', 'admissions', ['application_number'], unique=True)
    op.create_index('ix_admissions_status', 'admissions', ['status'])

    op.create_table(
        'fees',
        *_base_columns(),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('students.id', ondelete='SET NULL')),
        sa.Column('admission_number', sa.String(20), nullable=False),
        sa.Column('academic_year', sa.String(10), nullable=False),
        sa.Column('class_name', sa.String(20), nullable=False),
        sa.Column('fee_structure', sa.JSON(), nullable=False),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('paid_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('pending_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', _enum(), nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True)),
        sa.Column('last_reminder', sa.DateTime(timezone=True)),
        sa.Column('version', sa.Integer(), nullable=False),
    )
    _index_base('fees')
    op.create_index('ix_fees_student_id', 'fees', ['student_id'])
    op.create_index('ix_fees_status', 'fees', ['status'])
    op.create_index('ix_fees_admission_number_year', 'fees', ['admission_number', 'academic_year'])

    op.create_table(
        'fee_payments',
        *_base_columns(),
        sa.Column('fee_id', sa.Uuid(), sa.ForeignKey('fees.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('payment_mode', _enum(), nullable=False),
        sa.Column('transaction_id', sa.String(100)),
        sa.Column('razorpay_order_id', sa.String(100)),
        sa.Column('razorpay_payment_id', sa.String(100)),
        sa.Column('receipt_number', sa.String(20), nullable=False),
        sa.Column('remarks', sa.Text()),
        sa.UniqueConstraint('fee_id', 'position', name='uq_fee_payments_fee_position'),
    )
    _index_base('fee_payments')
    op.create_index('ix_fee_payments_fee_id', 'fee_payments', ['fee_id'])
    op.create_index('ix_fee_payments_receipt_number', 'fee_payments', ['receipt_number'])

    op.create_table(
        'notifications',
        *_base_columns(),
        sa.Column('type', _enum(), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('link', sa.String(200)),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('read_at', sa.DateTime(timezone=True)),
        sa.Column('related_id', sa.Uuid()),
        sa.Column('related_model', _enum()),
        sa.Column('priority', _enum(), nullable=False),
    )
    _index_base('notifications')
    op.create_index('ix_notifications_type', 'notifications', ['type'])
    op.create_index('ix_notifications_is_read_created', 'notifications', ['is_read', 'created_at'])

    op.create_table(
        'teachers',
        *_base_columns(),
        sa.Column('employee_id', sa.String(20), nullable=False),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('email', sa.String(100), nullable=False, unique=True),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('photo', sa.String(500)),
        sa.Column('date_of_birth', sa.Date()),
        sa.Column('gender', _enum()),
        sa.Column('qualification', sa.String(200), nullable=False),
        sa.Column('experience', sa.Integer(), nullable=False),
        sa.Column('subject', sa.String(100), nullable=False),
        sa.Column('classes', sa.JSON()),
        sa.Column('designation', _enum(), nullable=False),
        sa.Column('joining_date', sa.DateTime(timezone=True)),
        sa.Column('address', sa.JSON()),
        sa.Column('is_active', sa.Boolean(), nullable=False),
    )
    _index_base('teachers')
    op.create_index('ix_teachers_employee_id', 'teachers', ['employee_id'], unique=True)
    op.create_index('ix_teachers_subject', 'teachers', ['subject'])

    op.create_table(
        'notices',
        *_base_columns(),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', _enum(), nullable=False),
        sa.Column('priority', _enum(), nullable=False),
        sa.Column('target_audience', sa.JSON()),
        sa.Column('classes', sa.JSON()),
        sa.Column('attachment', sa.JSON()),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True)),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_pinned', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.Uuid(), sa.ForeignKey('admins.id', ondelete='SET NULL')),
    )
    _index_base('notices')
    op.create_index('ix_notices_category', 'notices', ['category'])
    op.create_index('ix_notices_active_pinned_created', 'notices', ['is_active', 'is_pinned', 'created_at'])

    op.create_table(
        'galleries',
        *_base_columns(),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('category', _enum(), nullable=False),
        sa.Column('images', sa.JSON()),
        sa.Column('video_url', sa.String(500)),
        sa.Column('thumbnail', sa.String(500)),
        sa.Column('type', _enum(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True)),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.Uuid(), sa.ForeignKey('admins.id', ondelete='SET NULL')),
    )
    _index_base('galleries')
    op.create_index('ix_galleries_category', 'galleries', ['category'])
    op.create_index('ix_galleries_date', 'galleries', ['date'])

    op.create_table(
        'contacts',
        *_base_columns(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('subject', sa.String(200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', _enum(), nullable=False),
        sa.Column('replied_at', sa.DateTime(timezone=True)),
        sa.Column('reply_message', sa.Text()),
        sa.Column('replied_by', sa.Uuid(), sa.ForeignKey('admins.id', ondelete='SET NULL')),
    )
    _index_base('contacts')
    op.create_index('ix_contacts_status', 'contacts', ['status'])

    op.create_table(
        'contents',
        *_base_columns(),
        sa.Column('key', sa.String(100), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('type', _enum(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('updated_by', sa.Uuid(), sa.ForeignKey('admins.id', ondelete='SET NULL')),
    )
    _index_base('contents')
    op.create_index('ix_contents_key', 'contents', ['key'], unique=True)


def downgrade() -> None:
    for table in (
        'contents', 'contacts', 'galleries', 'notices', 'teachers',
        'notifications', 'fee_payments', 'fees', 'admissions', 'students', 'admins',
    ):
        op.drop_table(table)
