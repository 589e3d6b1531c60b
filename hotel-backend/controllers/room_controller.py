from flask import Blueprint, request, jsonify
from controllers.helpers import BadRequest, error_response, get_json_object, handle_usecase_error, reject_unknown_fields
from models.room import Room
import logging

logger = logging.getLogger(__name__)

ROOM_FIELDS = ('id', 'number', 'room_count', 'is_occupied', 'floor',
               'sleeping_places', 'room_type', 'need_cleaning')


def create_room_blueprint(room_usecase):
    room_bp = Blueprint('room', __name__)

    # Tạo phòng
    @room_bp.route('/rooms', methods=['POST'])
    def create_room():
        logger.info(f"Received request to /rooms with method: {request.method}, Content-Type: {request.content_type}")
        try:
            data = get_json_object()
            reject_unknown_fields(data, ROOM_FIELDS)
        except BadRequest as e:
            logger.warning(f"Invalid room payload: {str(e)}")
            return error_response(str(e), 400)

        # id is assigned by the storage
        room = Room(**{key: value for key, value in data.items() if key != 'id'})
        try:
            room_usecase.add_room(room)
        except Exception as e:
            return handle_usecase_error(e, 'create room')

        logger.info(f"Room created: room_id={room.id}, number={room.number}")
        return jsonify({'message': 'Room created', 'room_id': room.id}), 201

    # Lấy danh sách tất cả phòng
    @room_bp.route('/rooms', methods=['GET'])
    def get_rooms():
        try:
            rooms = room_usecase.get_list()
        except Exception as e:
            return handle_usecase_error(e, 'get all rooms')
        logger.info(f"Rooms retrieved: count={len(rooms)}")
        return jsonify([room.to_dict() for room in rooms]), 200

    # Lọc phòng theo cột; body rỗng trả về toàn bộ danh sách
    @room_bp.route('/rooms/filter', methods=['POST'])
    def get_filtered_rooms():
        try:
            filters = get_json_object(allow_empty=True)
        except BadRequest as e:
            logger.warning(f"Invalid filter payload: {str(e)}")
            return error_response(str(e), 400)

        if not filters:
            return get_rooms()

        logger.info(f"Getting filtered rooms: filter={filters}")
        try:
            result = room_usecase.get_filtered_rooms(filters)
        except Exception as e:
            return handle_usecase_error(e, 'get filtered rooms')
        return jsonify(result), 200

    # Cập nhật một phần thông tin phòng
    @room_bp.route('/rooms/<int:room_id>', methods=['PATCH'])
    def patch_room(room_id):
        try:
            patch = get_json_object()
            reject_unknown_fields(patch, Room.PATCHABLE_COLUMNS)
        except BadRequest as e:
            logger.warning(f"Invalid room patch for room {room_id}: {str(e)}")
            return error_response(str(e), 400)

        try:
            room_usecase.patch_room(room_id, patch)
        except Exception as e:
            return handle_usecase_error(e, 'patch room')

        logger.info(f"Room patched: room_id={room_id}, fields={sorted(patch)}")
        return jsonify({'status': 'rooms updated'}), 200

    # Xóa phòng
    @room_bp.route('/rooms/<int:room_id>', methods=['DELETE'])
    def delete_room(room_id):
        try:
            room_usecase.remove_room(room_id)
        except Exception as e:
            return handle_usecase_error(e, 'remove room')

        logger.info(f"Room removed: room_id={room_id}")
        return jsonify({'message': f'Removed Room id: {room_id}'}), 200

    return room_bp
