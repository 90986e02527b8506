from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def _allowed_origins(value):
    if not value or value == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = _allowed_origins(flask_app.config.get('CORS_ALLOWED_ORIGINS'))
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One coordinator per app; handlers get it by reference
    from greenfund.services.rooms import RoomCoordinator
    coordinator = RoomCoordinator.from_config(flask_app.config, logger=flask_app.logger)
    flask_app.extensions['room_coordinator'] = coordinator

    from greenfund.routes import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers
    # Importing here ensures the handlers bind to the initialized socketio instance
    from greenfund.socketio_events import register_socketio_handlers
    register_socketio_handlers(coordinator)

    return flask_app
