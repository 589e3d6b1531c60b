from extensions import db
from sqlalchemy import text

ACTIVE_STATUSES = ('confirmed', 'active', 'checked_in')

# Literal SQL so the same predicate works for the PostgreSQL and SQLite partial indexes
_ACTIVE_PREDICATE = text("status IN ('confirmed', 'active', 'checked_in')")

class Booking(db.Model):
    __tablename__ = 'bookings'
    __table_args__ = (
        db.Index('idx_booking_room_id', 'room_id'),
        db.Index('idx_booking_guest_id', 'guest_id'),
        db.Index('uq_booking_active_guest', 'guest_id', unique=True,
                 postgresql_where=_ACTIVE_PREDICATE, sqlite_where=_ACTIVE_PREDICATE),
        db.Index('uq_booking_active_room', 'room_id', unique=True,
                 postgresql_where=_ACTIVE_PREDICATE, sqlite_where=_ACTIVE_PREDICATE),
    )
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    room_id = db.Column(db.Integer, db.ForeignKey('rooms.id', ondelete='RESTRICT'), nullable=False)
    guest_id = db.Column(db.Integer, nullable=False)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)
    status = db.Column(db.String(32), default='confirmed', nullable=False)

    DEFAULT_STATUS = 'confirmed'
    PATCHABLE_COLUMNS = ('room_id', 'guest_id', 'start_date', 'end_date', 'status')
    FILTERABLE_COLUMNS = ('id', 'room_id', 'guest_id', 'start_date', 'end_date', 'status')
    DATE_COLUMNS = ('start_date', 'end_date')

    @property
    def is_active(self):
        return (self.status or '').lower() in ACTIVE_STATUSES

    def to_dict(self):
        return {
            'id': self.id,
            'room_id': self.room_id,
            'guest_id': self.guest_id,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'end_date': self.end_date.isoformat() if self.end_date else None,
            'status': self.status
        }
