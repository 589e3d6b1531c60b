from abc import ABC, abstractmethod
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from extensions import db
from models.room import Room
from usecases.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class RoomRepository(ABC):
    """Storage interface used by the room usecase."""

    @abstractmethod
    def create(self, room):
        """Insert a room; the storage assigns ``room.id``."""
        raise NotImplementedError

    @abstractmethod
    def number_exists(self, number):
        raise NotImplementedError

    @abstractmethod
    def list_all(self):
        raise NotImplementedError

    @abstractmethod
    def filter_by_columns(self, filters):
        """Return ``{column: [ids]}``, one equality lookup per column."""
        raise NotImplementedError

    @abstractmethod
    def patch(self, room_id, fields):
        """Update only ``fields``; raise NotFoundError when no row matched."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, room_id):
        raise NotImplementedError

    @abstractmethod
    def is_occupied(self, room_id):
        raise NotImplementedError


class SqlAlchemyRoomRepository(RoomRepository):
    """RoomRepository backed by the Flask-SQLAlchemy session."""

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def create(self, room):
        self.session.add(room)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning(f"Integrity error creating room number={room.number}: {str(e.orig)}")
            raise ConflictError('room number already exists') from e
        except SQLAlchemyError:
            self.session.rollback()
            raise
        logger.info(f"Created room {room.id} with number {room.number}")
        return room

    def number_exists(self, number):
        return self.session.query(Room.id).filter(Room.number == number).first() is not None

    def list_all(self):
        return self.session.query(Room).order_by(Room.id).all()

    def filter_by_columns(self, filters):
        results = {}
        for column, value in filters.items():
            rows = self.session.query(Room.id).filter(getattr(Room, column) == value).order_by(Room.id).all()
            results[column] = [row.id for row in rows]
        return results

    def patch(self, room_id, fields):
        if not fields:
            return
        try:
            updated = self.session.query(Room).filter(Room.id == room_id).update(
                dict(fields), synchronize_session=False)
            if updated == 0:
                self.session.rollback()
                raise NotFoundError('room not found')
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ConflictError('room update violates a storage constraint') from e
        except SQLAlchemyError:
            self.session.rollback()
            raise
        logger.info(f"Patched room {room_id}: columns={sorted(fields)}")

    def delete(self, room_id):
        try:
            deleted = self.session.query(Room).filter(Room.id == room_id).delete(synchronize_session=False)
            if deleted == 0:
                self.session.rollback()
                raise NotFoundError('room not found')
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning(f"Cannot delete room {room_id}: {str(e.orig)}")
            raise ConflictError('room still has bookings') from e
        except SQLAlchemyError:
            self.session.rollback()
            raise
        logger.info(f"Deleted room {room_id}")

    def is_occupied(self, room_id):
        row = self.session.query(Room.is_occupied).filter(Room.id == room_id).first()
        if row is None:
            raise NotFoundError('room not found')
        return bool(row.is_occupied)
