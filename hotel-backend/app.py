import os
import logging
from flask import Flask, jsonify, request
from extensions import db, cors
from config import Config
from dotenv import load_dotenv
from pathlib import Path
from flask_swagger_ui import get_swaggerui_blueprint

# Load biến môi trường
dotenv_path = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path)

logger = logging.getLogger(__name__)

SWAGGER_URL = '/docs'
API_URL = '/static/swagger.json'


def configure_logging(config):
    logging_options = {
        'level': getattr(logging, config.LOG_LEVEL, logging.INFO),
        'format': '%(asctime)s %(levelname)s: %(message)s',
    }
    if config.LOG_FILE:
        logging_options['filename'] = config.LOG_FILE
        logging_options['encoding'] = 'utf-8'
    logging.basicConfig(**logging_options)


def create_app(config=None):
    config = config or Config()
    configure_logging(config)

    app = Flask(__name__)
    app.config.from_object(config)

    # Cấu hình CORS
    cors.init_app(app, resources={r"/api/*": {
        "origins": app.config['CORS_ORIGINS'],
        "methods": ["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        "allow_headers": ["Content-Type"],
        "supports_credentials": False
    }})

    # Cấu hình Swagger UI
    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={'app_name': "Hotel API"}
    )
    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    db.init_app(app)

    # Import models before create_all so both tables are registered
    from models.room import Room
    from models.booking import Booking

    if app.config['AUTO_CREATE_TABLES']:
        with app.app_context():
            db.create_all()

    # Usecases are built here and handed to the blueprints
    from repositories.room_repository import SqlAlchemyRoomRepository
    from repositories.booking_repository import SqlAlchemyBookingRepository
    from usecases.room_usecase import RoomUsecase
    from usecases.booking_usecase import BookingUsecase
    from controllers.room_controller import create_room_blueprint
    from controllers.booking_controller import create_booking_blueprint

    room_usecase = RoomUsecase(
        SqlAlchemyRoomRepository(),
        filter_result_key=app.config['FILTER_RESULT_KEY']
    )
    booking_usecase = BookingUsecase(
        SqlAlchemyBookingRepository(),
        precheck_policy=app.config['PRECHECK_POLICY'],
        filter_result_key=app.config['FILTER_RESULT_KEY']
    )

    app.register_blueprint(create_room_blueprint(room_usecase), url_prefix='/api')
    app.register_blueprint(create_booking_blueprint(booking_usecase), url_prefix='/api')

    register_handlers(app)
    register_commands(app)
    return app


def register_handlers(app):
    @app.before_request
    def log_request():
        logger.info(f"Before request: method={request.method}, url={request.url}")

    @app.errorhandler(400)
    def bad_request(error):
        logger.error("400 Error: %s", str(error))
        return jsonify({'message': 'Bad request'}), 400

    @app.errorhandler(404)
    def not_found(error):
        logger.error("404 Error: %s", str(error))
        return jsonify({'message': 'Resource not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        logger.error("405 Error: %s", str(error))
        return jsonify({'message': 'Method Not Allowed'}), 405

    @app.errorhandler(413)
    def request_too_large(error):
        logger.error("413 Error: %s", str(error))
        return jsonify({'message': 'Request entity too large'}), 413

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        logger.error("500 Error: %s", str(error))
        return jsonify({'message': 'Internal server error'}), 500


def register_commands(app):
    @app.cli.command('init-db')
    def init_db():
        """Create the rooms and bookings tables."""
        db.create_all()
        print("Database tables created")


if __name__ == '__main__':
    app = create_app()
    if os.getenv('FLASK_ENV') == 'development':
        app.run(debug=True, host='127.0.0.1', port=5000)
    else:
        app.run(host='0.0.0.0', port=8080)
