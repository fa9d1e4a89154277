"""init_admission_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Schema:
- event: Events (read-only for admission)
- booking: Bookings owned by the payment subsystem
- seat: Seat inventory, claimed by conditional UPDATE ... RETURNING
- ticket: One row per admission unit; unique (booking_id, unit_index)
- scan_record: Append-only audit log of every scan attempt
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all admission tables."""

    # ========== Event ==========
    op.create_table(
        'event',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('has_seat_allocation', sa.Boolean(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )

    # ========== Booking ==========
    op.create_table(
        'booking',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('event_id', UUID(as_uuid=True), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('preferred_section', sa.String(length=50), nullable=True),
        sa.Column('holder_name', sa.String(length=255), nullable=True),
        sa.Column('holder_email', sa.String(length=255), nullable=True),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(['event_id'], ['event.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_booking_event_id'), 'booking', ['event_id'], unique=False)

    # ========== Seat ==========
    op.create_table(
        'seat',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('event_id', UUID(as_uuid=True), nullable=False),
        sa.Column('seat_number', sa.Integer(), nullable=False),
        sa.Column('row_number', sa.String(length=10), nullable=True),
        sa.Column('section', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('booking_id', UUID(as_uuid=True), nullable=True),
        sa.Column('booked_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['event_id'], ['event.id']),
        sa.ForeignKeyConstraint(['booking_id'], ['booking.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'seat_number', name='uq_seat_event_number'),
        sa.CheckConstraint(
            "status <> 'booked' OR booking_id IS NOT NULL", name='ck_seat_booked_has_booking'
        ),
    )
    op.create_index(
        'ix_seat_event_status_number', 'seat', ['event_id', 'status', 'seat_number'], unique=False
    )
    op.create_index(op.f('ix_seat_booking_id'), 'seat', ['booking_id'], unique=False)

    # ========== Ticket ==========
    op.create_table(
        'ticket',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('booking_id', UUID(as_uuid=True), nullable=False),
        sa.Column('event_id', UUID(as_uuid=True), nullable=False),
        sa.Column('unit_index', sa.Integer(), nullable=False),
        sa.Column('ticket_number', sa.String(length=64), nullable=False),
        sa.Column('credential', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('seat_id', UUID(as_uuid=True), nullable=True),
        sa.Column('seat_number', sa.Integer(), nullable=True),
        sa.Column('section', sa.String(length=50), nullable=True),
        sa.Column('row_number', sa.String(length=10), nullable=True),
        sa.Column('scan_count', sa.Integer(), nullable=False),
        sa.Column('first_scanned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_scanned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('checked_in_by', sa.String(length=255), nullable=True),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(['booking_id'], ['booking.id']),
        sa.ForeignKeyConstraint(['event_id'], ['event.id']),
        sa.ForeignKeyConstraint(['seat_id'], ['seat.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('ticket_number', name='uq_ticket_number'),
        sa.UniqueConstraint('booking_id', 'unit_index', name='uq_ticket_booking_unit'),
    )
    op.create_index(op.f('ix_ticket_booking_id'), 'ticket', ['booking_id'], unique=False)
    op.create_index(op.f('ix_ticket_event_id'), 'ticket', ['event_id'], unique=False)

    # ========== Scan record ==========
    op.create_table(
        'scan_record',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('ticket_id', UUID(as_uuid=True), nullable=True),
        sa.Column('event_id', UUID(as_uuid=True), nullable=False),
        sa.Column('scanned_by', sa.String(length=255), nullable=False),
        sa.Column('result', sa.String(length=20), nullable=False),
        sa.Column('scanned_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('device_info', JSONB(), nullable=True),
        sa.ForeignKeyConstraint(['ticket_id'], ['ticket.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_scan_record_ticket_id'), 'scan_record', ['ticket_id'], unique=False)
    op.create_index(
        'ix_scan_record_event_scanned_at', 'scan_record', ['event_id', 'scanned_at'], unique=False
    )


def downgrade() -> None:
    """Drop all admission tables."""
    op.drop_index('ix_scan_record_event_scanned_at', table_name='scan_record')
    op.drop_index(op.f('ix_scan_record_ticket_id'), table_name='scan_record')
    op.drop_table('scan_record')

    op.drop_index(op.f('ix_ticket_event_id'), table_name='ticket')
    op.drop_index(op.f('ix_ticket_booking_id'), table_name='ticket')
    op.drop_table('ticket')

    op.drop_index(op.f('ix_seat_booking_id'), table_name='seat')
    op.drop_index('ix_seat_event_status_number', table_name='seat')
    op.drop_table('seat')

    op.drop_index(op.f('ix_booking_event_id'), table_name='booking')
    op.drop_table('booking')

    op.drop_table('event')
