"""
Shared pytest fixtures.

Usecase tests run against MagicMock repositories; repository and HTTP tests
run against the real app factory with an in-memory SQLite database.
"""
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from app import create_app
from config import Config
from extensions import db
from models.booking import Booking
from models.room import Room
from repositories.booking_repository import BookingRepository
from repositories.room_repository import RoomRepository

START = datetime(2024, 1, 15)
END = START + timedelta(hours=48)


def make_room(**overrides):
    fields = {
        'number': 1,
        'room_count': 1,
        'is_occupied': False,
        'floor': 1,
        'sleeping_places': 1,
        'room_type': 'Standard',
        'need_cleaning': False,
    }
    fields.update(overrides)
    return Room(**fields)


def make_booking(**overrides):
    fields = {
        'room_id': 1,
        'guest_id': 10,
        'start_date': START,
        'end_date': END,
        'status': 'confirmed',
    }
    fields.update(overrides)
    return Booking(**fields)


@pytest.fixture
def room_repository() -> MagicMock:
    return MagicMock(spec=RoomRepository)


@pytest.fixture
def booking_repository() -> MagicMock:
    return MagicMock(spec=BookingRepository)


@pytest.fixture
def make_app():
    """Build an app on a fresh in-memory database; keyword args override config."""
    created = []

    def _make(**overrides):
        options = {
            'SQLALCHEMY_DATABASE_URI': 'sqlite://',
            'LOG_FILE': '',
            'AUTO_CREATE_TABLES': True,
        }
        options.update(overrides)
        app = create_app(Config(**options))
        app.config['TESTING'] = True
        created.append(app)
        return app

    yield _make

    for app in created:
        with app.app_context():
            db.session.remove()
            db.drop_all()


@pytest.fixture
def app(make_app):
    app = make_app()
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()
