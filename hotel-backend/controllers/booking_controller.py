from flask import Blueprint, jsonify
from controllers.helpers import (BadRequest, error_response, get_json_object, handle_usecase_error,
                                 parse_date_fields, reject_unknown_fields)
from models.booking import Booking
import logging

logger = logging.getLogger(__name__)

BOOKING_FIELDS = ('id', 'room_id', 'guest_id', 'start_date', 'end_date', 'status')


def create_booking_blueprint(booking_usecase):
    booking_bp = Blueprint('booking', __name__)

    # Tạo đặt phòng
    @booking_bp.route('/bookings', methods=['POST'])
    def create_booking():
        try:
            data = get_json_object()
            reject_unknown_fields(data, BOOKING_FIELDS)
            parse_date_fields(data, Booking.DATE_COLUMNS)
        except BadRequest as e:
            logger.warning(f"Invalid booking payload: {str(e)}")
            return error_response(str(e), 400)

        booking = Booking(**{key: value for key, value in data.items() if key != 'id'})
        logger.info(f"Creating booking: guest_id={booking.guest_id}, room_id={booking.room_id}")
        try:
            booking_usecase.create_booking(booking)
        except Exception as e:
            return handle_usecase_error(e, 'create booking')

        logger.info(f"Booking created: booking_id={booking.id}")
        return jsonify({'message': 'Booking created', 'booking_id': booking.id}), 201

    # Lấy danh sách tất cả đặt phòng
    @booking_bp.route('/bookings', methods=['GET'])
    def get_bookings():
        try:
            bookings = booking_usecase.get_list()
        except Exception as e:
            return handle_usecase_error(e, 'get all bookings')
        logger.info(f"Bookings retrieved: count={len(bookings)}")
        return jsonify([booking.to_dict() for booking in bookings]), 200

    # Lọc đặt phòng; body rỗng trả về toàn bộ danh sách
    @booking_bp.route('/bookings/filter', methods=['POST'])
    def get_filtered_bookings():
        try:
            filters = get_json_object(allow_empty=True)
        except BadRequest as e:
            logger.warning(f"Invalid filter payload: {str(e)}")
            return error_response(str(e), 400)

        if not filters:
            return get_bookings()

        logger.info(f"Getting filtered bookings: filter={filters}")
        try:
            result = booking_usecase.get_filtered_bookings(filters)
        except Exception as e:
            return handle_usecase_error(e, 'get filtered bookings')
        return jsonify(result), 200

    # Lấy chi tiết đặt phòng theo ID
    @booking_bp.route('/bookings/<int:booking_id>', methods=['GET'])
    def get_booking_by_id(booking_id):
        try:
            booking = booking_usecase.read_by_id(booking_id)
        except Exception as e:
            return handle_usecase_error(e, 'read booking')
        return jsonify(booking.to_dict()), 200

    # Cập nhật đặt phòng
    @booking_bp.route('/bookings/<int:booking_id>', methods=['PATCH'])
    def patch_booking(booking_id):
        try:
            patch = get_json_object()
            reject_unknown_fields(patch, Booking.PATCHABLE_COLUMNS)
            parse_date_fields(patch, Booking.DATE_COLUMNS)
        except BadRequest as e:
            logger.warning(f"Invalid booking patch for booking {booking_id}: {str(e)}")
            return error_response(str(e), 400)

        try:
            booking_usecase.patch_by_id(booking_id, patch)
        except Exception as e:
            return handle_usecase_error(e, 'patch booking')

        logger.info(f"Booking patched: booking_id={booking_id}")
        return jsonify({'message': f'Updated Booking id: {booking_id}'}), 200

    # Xóa đặt phòng
    @booking_bp.route('/bookings/<int:booking_id>', methods=['DELETE'])
    def delete_booking(booking_id):
        try:
            booking_usecase.remove_booking(booking_id)
        except Exception as e:
            return handle_usecase_error(e, 'remove booking')

        logger.info(f"Booking removed: booking_id={booking_id}")
        return jsonify({'message': f'Removed Booking id: {booking_id}'}), 200

    return booking_bp
