# controllers/helpers.py
from flask import request, jsonify
from extensions import db
from usecases.errors import is_conflict_error, is_not_found_error, is_validation_error
from utils.dates import parse_datetime
import logging

logger = logging.getLogger(__name__)


class BadRequest(Exception):
    """Request body could not be turned into usecase input."""


def error_response(message, status):
    return jsonify({'message': message}), status


def handle_usecase_error(error, op):
    """Map a usecase error to a JSON response with the matching status code."""
    if is_validation_error(error):
        logger.info(f"Validation error in {op}: {str(error)}")
        return error_response(str(error), 400)
    if is_conflict_error(error):
        logger.info(f"Conflict error in {op}: {str(error)}")
        return error_response(str(error), 409)
    if is_not_found_error(error):
        logger.info(f"Not found in {op}: {str(error)}")
        return error_response(str(error), 404)

    db.session.rollback()
    logger.error(f"Internal error in {op}: {str(error)}")
    return jsonify({'message': 'internal error', 'error': str(error)}), 500


def get_json_object(allow_empty=False):
    """Return the JSON body as a dict or raise BadRequest."""
    if allow_empty and not request.get_data(cache=True).strip():
        return {}
    data = request.get_json(silent=True)
    if data is None:
        raise BadRequest('Invalid JSON')
    if not isinstance(data, dict):
        raise BadRequest('Invalid JSON: expected an object')
    return data


def reject_unknown_fields(data, allowed):
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise BadRequest(f"Invalid JSON: unknown field(s) {', '.join(unknown)}")


def parse_date_fields(data, columns):
    """Replace ISO date strings in ``data`` with datetimes, in place."""
    for column in columns:
        if data.get(column) is None:
            continue
        try:
            data[column] = parse_datetime(data[column])
        except ValueError as e:
            raise BadRequest(f"Invalid JSON: {column}: {str(e)}") from e
    return data
