"""001_create_sector_tables

Revision ID: 001
Revises:
Create Date: 2026-10-18 10:00:00.000000

Crea le tabelle del registro settori:
- users (amministratori, FastAPI-Users)
- sectors (luoghi monitorati con soglie)
- readings (letture per turno, una per settore/giorno/turno)
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    """Crea tabelle base"""

    # =====================================================
    # 1. USERS (Authentication)
    # =====================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(320), nullable=False),
        sa.Column('hashed_password', sa.String(1024), nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('is_superuser', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('is_verified', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('display_name', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # =====================================================
    # 2. SECTORS
    # =====================================================
    op.create_table(
        'sectors',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('admin_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('location', sa.String(200), nullable=False),
        sa.Column('responsible_name', sa.String(100), nullable=False),
        sa.Column('temp_min', sa.Float(), nullable=False),
        sa.Column('temp_max', sa.Float(), nullable=False),
        sa.Column('humidity_min', sa.Float(), nullable=False),
        sa.Column('humidity_max', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, nullable=False, server_default=sa.func.now()),

        sa.CheckConstraint('humidity_min >= 0 AND humidity_max <= 100', name='chk_sector_humidity_bounds'),
    )
    op.create_index('ix_sectors_admin_id', 'sectors', ['admin_id'])

    # =====================================================
    # 3. READINGS
    # =====================================================
    op.create_table(
        'readings',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('sector_id', sa.Uuid(), sa.ForeignKey('sectors.id', ondelete='CASCADE'), nullable=False),
        sa.Column('admin_id', sa.Uuid(), nullable=False),
        sa.Column('timestamp', sa.DateTime, nullable=False),
        sa.Column('local_day', sa.Date, nullable=False),
        sa.Column('temperature', sa.Float(), nullable=False),
        sa.Column('humidity', sa.Float(), nullable=False),
        sa.Column('shift', sa.String(20), nullable=False),
        sa.Column('observation', sa.String(500), nullable=False, server_default=''),
        sa.Column('temperature_ok', sa.Boolean, nullable=False),
        sa.Column('humidity_ok', sa.Boolean, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, nullable=False, server_default=sa.func.now()),

        sa.CheckConstraint("shift IN ('Morning', 'Afternoon', 'Night')", name='chk_reading_shift_valid'),
        sa.CheckConstraint('humidity BETWEEN 0 AND 100', name='chk_reading_humidity_range'),
        # Chiude la race del controllo duplicati read-then-write
        sa.UniqueConstraint('sector_id', 'local_day', 'shift', name='uq_readings_sector_day_shift'),
    )
    op.create_index('ix_readings_sector_id', 'readings', ['sector_id'])
    op.create_index('ix_readings_admin_id', 'readings', ['admin_id'])
    op.create_index('ix_readings_timestamp', 'readings', ['timestamp'])
    op.create_index('ix_readings_sector_timestamp', 'readings', ['sector_id', 'timestamp'])

def downgrade() -> None:
    """Rimuove le tabelle in ordine inverso"""
    op.drop_table('readings')
    op.drop_table('sectors')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
