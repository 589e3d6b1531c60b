import logging

from models.room import Room
from usecases.errors import ConflictError, ValidationError
from usecases.filters import shape_filter_result, validate_filters

logger = logging.getLogger(__name__)

# column -> message used when the value is not a positive integer
POSITIVE_FIELDS = {
    'number': 'number must be more than 0',
    'room_count': 'room count must be more than 0',
    'sleeping_places': 'sleeping places must be more than 0',
    'floor': 'there are no underground floors, floor must be more than 0',
}
BOOLEAN_FIELDS = ('is_occupied', 'need_cleaning')


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_id(room_id, message='invalid id'):
    if not _is_int(room_id) or room_id <= 0:
        raise ValidationError(message)


def _validate_field(column, value):
    if column in POSITIVE_FIELDS:
        if not _is_int(value) or value <= 0:
            raise ValidationError(POSITIVE_FIELDS[column])
    elif column == 'room_type':
        if value not in Room.ROOM_TYPES:
            raise ValidationError(f"room_type must be one of: {', '.join(Room.ROOM_TYPES)}")
    elif column in BOOLEAN_FIELDS:
        if not isinstance(value, bool):
            raise ValidationError(f"{column} must be a boolean")


def _validate_filter_value(column, value):
    if column == 'id':
        _validate_id(value, 'id must be more than 0')
    else:
        _validate_field(column, value)


def validate_room(room):
    """Check a complete room against every domain rule."""
    for column in POSITIVE_FIELDS:
        _validate_field(column, getattr(room, column))
    _validate_field('room_type', room.room_type)
    for column in BOOLEAN_FIELDS:
        value = getattr(room, column)
        if value is not None:
            _validate_field(column, value)
    if room.is_occupied and room.need_cleaning:
        raise ValidationError('cannot set need_cleaning while room is occupied')


class RoomUsecase:
    """Business rules for creating, patching, listing and removing rooms."""

    def __init__(self, repository, filter_result_key='value'):
        self.repository = repository
        self.filter_result_key = filter_result_key

    def add_room(self, room):
        try:
            validate_room(room)
        except ValidationError as e:
            logger.warning(f"Rejected room number={room.number}: {e}")
            raise

        # Missing flags mean "false"
        room.is_occupied = bool(room.is_occupied)
        room.need_cleaning = bool(room.need_cleaning)

        if self.repository.number_exists(room.number):
            logger.warning(f"Room number already exists: {room.number}")
            raise ConflictError('room number already exists')

        self.repository.create(room)

    def patch_room(self, room_id, patch):
        _validate_id(room_id)
        fields = {column: value for column, value in (patch or {}).items() if value is not None}
        if not fields:
            logger.debug(f"Empty patch for room {room_id}, nothing to do")
            return

        for column, value in fields.items():
            if column not in Room.PATCHABLE_COLUMNS:
                raise ValidationError(f"unknown room field: {column}")
            _validate_field(column, value)

        if fields.get('is_occupied') is True and fields.get('need_cleaning') is True:
            raise ValidationError('cannot set need_cleaning while room is occupied')

        self.repository.patch(room_id, fields)

    def remove_room(self, room_id):
        _validate_id(room_id, 'ID must be more than 0')
        if self.repository.is_occupied(room_id):
            logger.warning(f"Refused to remove occupied room {room_id}")
            raise ValidationError('room is occupied')
        self.repository.delete(room_id)

    def get_list(self):
        rooms = self.repository.list_all()
        if not rooms:
            raise ConflictError('database is clear')
        return rooms

    def get_filtered_rooms(self, filters):
        validate_filters(filters, Room.FILTERABLE_COLUMNS, _validate_filter_value)
        ids_by_column = self.repository.filter_by_columns(filters)
        return shape_filter_result(filters, ids_by_column, self.filter_result_key)
