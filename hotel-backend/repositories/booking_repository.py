from abc import ABC, abstractmethod
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from extensions import db
from models.booking import ACTIVE_STATUSES, Booking
from usecases.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class BookingRepository(ABC):
    """Storage interface used by the booking usecase."""

    @abstractmethod
    def create(self, booking):
        raise NotImplementedError

    @abstractmethod
    def has_active_for_guest(self, guest_id):
        raise NotImplementedError

    @abstractmethod
    def has_active_for_room(self, room_id):
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, booking_id):
        """Return the booking or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def patch(self, booking_id, fields):
        """Overwrite the stored record with the full merged ``fields``."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self):
        raise NotImplementedError

    @abstractmethod
    def filter_by_columns(self, filters):
        raise NotImplementedError

    @abstractmethod
    def delete(self, booking_id):
        raise NotImplementedError


def _conflict_from_integrity_error(error):
    detail = str(error.orig).lower()
    if 'foreign key' in detail:
        return ConflictError('room does not exist')
    if 'guest' in detail:
        return ConflictError('guest already has an active booking')
    if 'room' in detail:
        return ConflictError('room already has an active booking')
    return ConflictError('booking conflicts with an active booking')


class SqlAlchemyBookingRepository(BookingRepository):
    """BookingRepository backed by the Flask-SQLAlchemy session."""

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def create(self, booking):
        self.session.add(booking)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning(f"Integrity error creating booking guest_id={booking.guest_id}, "
                           f"room_id={booking.room_id}: {str(e.orig)}")
            raise _conflict_from_integrity_error(e) from e
        except SQLAlchemyError:
            self.session.rollback()
            raise
        logger.info(f"Created booking {booking.id} for guest {booking.guest_id} in room {booking.room_id}")
        return booking

    def _has_active(self, column, value):
        try:
            query = self.session.query(Booking.id).filter(
                column == value,
                db.func.lower(Booking.status).in_(ACTIVE_STATUSES)
            )
            return query.first() is not None
        except SQLAlchemyError:
            # a failed read aborts the transaction on PostgreSQL
            self.session.rollback()
            raise

    def has_active_for_guest(self, guest_id):
        return self._has_active(Booking.guest_id, guest_id)

    def has_active_for_room(self, room_id):
        return self._has_active(Booking.room_id, room_id)

    def get_by_id(self, booking_id):
        try:
            return self.session.get(Booking, booking_id)
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def patch(self, booking_id, fields):
        try:
            updated = self.session.query(Booking).filter(Booking.id == booking_id).update(
                dict(fields), synchronize_session=False)
            if updated == 0:
                self.session.rollback()
                raise NotFoundError('no rows')
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise _conflict_from_integrity_error(e) from e
        except SQLAlchemyError:
            self.session.rollback()
            raise
        logger.info(f"Patched booking {booking_id}")

    def list_all(self):
        return self.session.query(Booking).order_by(Booking.id).all()

    def filter_by_columns(self, filters):
        results = {}
        for column, value in filters.items():
            rows = self.session.query(Booking.id).filter(getattr(Booking, column) == value).order_by(Booking.id).all()
            results[column] = [row.id for row in rows]
        return results

    def delete(self, booking_id):
        try:
            deleted = self.session.query(Booking).filter(Booking.id == booking_id).delete(synchronize_session=False)
            if deleted == 0:
                self.session.rollback()
                raise NotFoundError('booking not found')
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        logger.info(f"Deleted booking {booking_id}")
