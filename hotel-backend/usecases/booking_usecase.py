import logging
from datetime import datetime

from models.booking import Booking
from usecases.errors import ConflictError, StorageError, ValidationError
from usecases.filters import shape_filter_result, validate_filters
from utils.dates import parse_datetime

logger = logging.getLogger(__name__)

FAIL_OPEN = 'fail-open'
FAIL_CLOSED = 'fail-closed'


def _is_positive_int(value):
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_set(value):
    # 0001-01-01T00:00:00Z is the zero time some clients send for "unset"
    return isinstance(value, datetime) and value != datetime.min


def _validate_filter_value(column, value):
    if column in ('id', 'room_id', 'guest_id'):
        if not _is_positive_int(value):
            raise ValidationError(f"{column} must be more than 0")
    elif column == 'status':
        if not isinstance(value, str) or not value.strip():
            raise ValidationError('status must be a non-empty string')


def validate_booking(room_id, guest_id, start_date, end_date, status=None):
    if not _is_positive_int(room_id):
        raise ValidationError('room id must be more than 0')
    if not _is_positive_int(guest_id):
        raise ValidationError('guest id must be more than 0')
    if not _is_set(start_date) or not _is_set(end_date):
        raise ValidationError('start_date and end_date are required')
    if not start_date < end_date:
        raise ValidationError('start_date must be earlier than end_date')
    if status is not None and (not isinstance(status, str) or not status.strip()):
        raise ValidationError('status must be a non-empty string')


def _normalize_status(status):
    if status is None:
        return Booking.DEFAULT_STATUS
    return status.strip().lower()


class BookingUsecase:
    """Business rules for bookings, including the active-booking checks.

    ``precheck_policy`` decides what happens when the storage fails while
    answering a pre-check (active guest/room lookups and the reads done by
    ``read_by_id`` and ``patch_by_id``): ``fail-open`` logs the error and
    carries on as if nothing was found, ``fail-closed`` raises it.
    """

    def __init__(self, repository, precheck_policy=FAIL_OPEN, filter_result_key='value'):
        if precheck_policy not in (FAIL_OPEN, FAIL_CLOSED):
            raise ValueError(f"unknown precheck policy: {precheck_policy}")
        self.repository = repository
        self.precheck_policy = precheck_policy
        self.filter_result_key = filter_result_key

    def _precheck(self, label, operation, *args, default=None):
        try:
            return operation(*args)
        except Exception as e:
            if self.precheck_policy == FAIL_CLOSED:
                raise
            logger.warning(f"Ignoring storage error in {label}{args}: {str(e)}")
            return default

    def create_booking(self, booking):
        try:
            validate_booking(booking.room_id, booking.guest_id, booking.start_date,
                             booking.end_date, booking.status)
        except ValidationError as e:
            logger.warning(f"Rejected booking guest_id={booking.guest_id}, room_id={booking.room_id}: {e}")
            raise
        booking.status = _normalize_status(booking.status)

        if self._precheck("has_active_for_guest", self.repository.has_active_for_guest, booking.guest_id, default=False):
            logger.warning(f"Guest {booking.guest_id} already has an active booking")
            raise ValidationError('guest already has an active booking')
        if self._precheck("has_active_for_room", self.repository.has_active_for_room, booking.room_id, default=False):
            logger.warning(f"Room {booking.room_id} already has an active booking")
            raise ValidationError('room already has an active booking')

        self.repository.create(booking)

    def read_by_id(self, booking_id):
        if not _is_positive_int(booking_id):
            raise ValidationError('id must be more than 0')
        booking = self._precheck("get_by_id", self.repository.get_by_id, booking_id)
        if booking is None or (not booking.room_id and not booking.guest_id):
            raise ValidationError('no rows')
        return booking

    def patch_by_id(self, booking_id, patch):
        if booking_id is None or not _is_positive_int(booking_id):
            raise ValidationError('id must be more than 0')

        unknown = set(patch or {}) - set(Booking.PATCHABLE_COLUMNS)
        if unknown:
            raise ValidationError(f"unknown booking field: {', '.join(sorted(unknown))}")

        current = self._precheck("get_by_id", self.repository.get_by_id, booking_id)
        merged = {}
        for column in Booking.PATCHABLE_COLUMNS:
            value = (patch or {}).get(column)
            if value is None and current is not None:
                value = getattr(current, column)
            merged[column] = value

        validate_booking(merged['room_id'], merged['guest_id'], merged['start_date'],
                         merged['end_date'], merged['status'])
        merged['status'] = _normalize_status(merged['status'])

        try:
            self.repository.patch(booking_id, merged)
        except Exception as e:
            logger.error(f"Storage error patching booking {booking_id}: {str(e)}")
            raise StorageError('DB manipulating error') from e

    def get_list(self):
        bookings = self.repository.list_all()
        if not bookings:
            raise ConflictError('database is clear')
        return bookings

    def get_filtered_bookings(self, filters):
        validate_filters(filters, Booking.FILTERABLE_COLUMNS, _validate_filter_value)
        prepared = dict(filters)
        for column in Booking.DATE_COLUMNS:
            if column in prepared:
                try:
                    prepared[column] = parse_datetime(prepared[column])
                except ValueError as e:
                    raise ValidationError(str(e)) from e
        ids_by_column = self.repository.filter_by_columns(prepared)
        return shape_filter_result(filters, ids_by_column, self.filter_result_key)

    def remove_booking(self, booking_id):
        if not _is_positive_int(booking_id):
            raise ValidationError('ID must be more than 0')
        self.repository.delete(booking_id)
