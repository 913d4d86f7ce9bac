'''Initial schema: users, clubs, events, registrations'''
from alembic import op
import sqlalchemy as sa
from sqlalchemy.sql import func

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum('student', 'club_admin', 'super_admin', name='user_role')
event_status = sa.Enum('draft', 'published', name='event_status')
event_type = sa.Enum(
    'workshop', 'concert', 'competition', 'seminar', 'sports', 'cultural', 'other',
    name='event_type',
)
payment_status = sa.Enum('pending', 'completed', 'failed', name='payment_status')


def upgrade():
    op.create_table('clubs',
                    sa.Column('id', sa.String(36), nullable=False),
                    sa.Column('name', sa.String(100), nullable=False),
                    sa.Column('description', sa.Text(), nullable=True),
                    sa.Column('logo_url', sa.String(500), nullable=True),
                    sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
                    sa.PrimaryKeyConstraint('id')
                   )

    op.create_table('users',
                    sa.Column('id', sa.String(36), nullable=False),
                    sa.Column('email', sa.String(255), nullable=False),
                    sa.Column('first_name', sa.String(50), nullable=True),
                    sa.Column('last_name', sa.String(50), nullable=True),
                    sa.Column('password_hash', sa.String(255), nullable=True),
                    sa.Column('phone', sa.String(15), nullable=True),
                    sa.Column('branch', sa.String(50), nullable=True),
                    sa.Column('year', sa.String(10), nullable=True),
                    sa.Column('role', user_role, nullable=False),
                    sa.Column('club_id', sa.String(36), nullable=True),
                    sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
                    sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
                    sa.ForeignKeyConstraint(['club_id'], ['clubs.id']),
                    sa.PrimaryKeyConstraint('id'),
                    sa.UniqueConstraint('email')
                   )

    op.create_table('events',
                    sa.Column('id', sa.String(36), nullable=False),
                    sa.Column('club_id', sa.String(36), nullable=True),
                    sa.Column('organizer_id', sa.String(36), nullable=False),
                    sa.Column('title', sa.String(100), nullable=False),
                    sa.Column('description', sa.Text(), nullable=False),
                    sa.Column('banner_url', sa.String(500), nullable=True),
                    sa.Column('venue', sa.String(200), nullable=False),
                    sa.Column('event_type', event_type, nullable=False),
                    sa.Column('registration_opens', sa.TIMESTAMP(timezone=True), nullable=False),
                    sa.Column('registration_closes', sa.TIMESTAMP(timezone=True), nullable=False),
                    sa.Column('event_starts', sa.TIMESTAMP(timezone=True), nullable=False),
                    sa.Column('event_ends', sa.TIMESTAMP(timezone=True), nullable=False),
                    sa.Column('is_paid', sa.Boolean(), nullable=False),
                    sa.Column('price', sa.DECIMAL(10, 2), nullable=False),
                    sa.Column('capacity', sa.Integer(), nullable=True),
                    sa.Column('registered_count', sa.Integer(), nullable=False),
                    sa.Column('status', event_status, nullable=False),
                    sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
                    sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=func.now(), nullable=False),
                    sa.CheckConstraint('registered_count >= 0', name='ck_events_registered_count'),
                    sa.ForeignKeyConstraint(['club_id'], ['clubs.id']),
                    sa.ForeignKeyConstraint(['organizer_id'], ['users.id']),
                    sa.PrimaryKeyConstraint('id')
                   )
    op.create_index('idx_events_organizer', 'events', ['organizer_id'])
    op.create_index('idx_events_status_starts', 'events', ['status', 'event_starts'])

    op.create_table('registrations',
                    sa.Column('id', sa.String(36), nullable=False),
                    sa.Column('event_id', sa.String(36), nullable=False),
                    sa.Column('user_id', sa.String(36), nullable=False),
                    sa.Column('ticket_id', sa.String(50), nullable=False),
                    sa.Column('name', sa.String(100), nullable=False),
                    sa.Column('email', sa.String(200), nullable=False),
                    sa.Column('phone', sa.String(15), nullable=False),
                    sa.Column('branch', sa.String(50), nullable=False),
                    sa.Column('year', sa.String(10), nullable=False),
                    sa.Column('payment_status', payment_status, nullable=False),
                    sa.Column('payment_id', sa.String(100), nullable=True),
                    sa.Column('registered_at', sa.TIMESTAMP(timezone=True), nullable=False),
                    sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
                    sa.ForeignKeyConstraint(['user_id'], ['users.id']),
                    sa.PrimaryKeyConstraint('id'),
                    sa.UniqueConstraint('ticket_id'),
                    sa.UniqueConstraint('event_id', 'user_id', name='uq_registration_event_user')
                   )
    op.create_index('idx_regs_event', 'registrations', ['event_id'])
    op.create_index('idx_regs_user', 'registrations', ['user_id'])


def downgrade():
    op.drop_index('idx_regs_user', table_name='registrations')
    op.drop_index('idx_regs_event', table_name='registrations')
    op.drop_table('registrations')
    op.drop_index('idx_events_status_starts', table_name='events')
    op.drop_index('idx_events_organizer', table_name='events')
    op.drop_table('events')
    op.drop_table('users')
    op.drop_table('clubs')
    for enum_type in (payment_status, event_type, event_status, user_role):
        enum_type.drop(op.get_bind(), checkfirst=True)
