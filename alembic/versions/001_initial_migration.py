"""Initial migration

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create medications table
    op.create_table(
        'medications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('stock_available', sa.Integer(), nullable=False),
        sa.Column('reorder_threshold', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('stock_available >= 0', name='ck_medications_stock_available_non_negative'),
        sa.CheckConstraint('reorder_threshold >= 0', name='ck_medications_reorder_threshold_non_negative'),
    )
    op.create_index('ix_medications_name', 'medications', ['name'], unique=False)

    # Create patients table
    op.create_table(
        'patients',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('gender', sa.Enum('MALE', 'FEMALE', name='gender'), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('contact', sa.String(length=100), nullable=False),
        sa.Column('treatment_date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('age > 0', name='ck_patients_age_positive'),
    )
    op.create_index('ix_patients_name', 'patients', ['name'], unique=False)
    op.create_index('ix_patients_treatment_date', 'patients', ['treatment_date'], unique=False)

    # Create usages table
    op.create_table(
        'usages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('medication_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('quantity_used', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('quantity_used > 0', name='ck_usages_quantity_used_positive'),
    )
    op.create_index('ix_usages_medication_id', 'usages', ['medication_id'], unique=False)
    op.create_index('ix_usages_date', 'usages', ['date'], unique=False)
    op.create_index('ix_usages_created_at', 'usages', ['created_at'], unique=False)


def downgrade() -> None:
    # Drop all tables in reverse order of creation
    op.drop_table('usages')
    op.drop_table('patients')
    op.drop_table('medications')

    # Drop enums
    if op.get_bind().dialect.name == 'postgresql':
        op.execute('DROP TYPE IF EXISTS gender')
