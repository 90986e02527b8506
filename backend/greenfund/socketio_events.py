from functools import wraps

from flask import current_app, request
from flask_socketio import emit, join_room

from greenfund import socketio
from greenfund.exceptions import GreenFundError, RoomFull, RoomNotFound
from greenfund.services.rooms import RoomCoordinator


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _drop_rejected(handler):
    """Turn domain rejections into silent no-ops for fire-and-forget events."""
    @wraps(handler)
    def wrapper(*args, **kwargs):
        try:
            return handler(*args, **kwargs)
        except GreenFundError as exc:
            current_app.logger.debug(f"[event-dropped] event={handler.__name__} sid={_get_sid()} reason={exc}")
            return None
    return wrapper


class RoomEvents:
    """Binds Socket.IO events to a RoomCoordinator.

    Broadcasts go to the Socket.IO room named after the room code, so every
    member (host included) receives them.
    """

    def __init__(self, coordinator: RoomCoordinator):
        self.coordinator = coordinator

    def handle_connect(self, auth=None):
        current_app.logger.info(f"[connect] sid={_get_sid()}")

    def handle_disconnect(self, reason=None):
        # Player and host records stay in place
        current_app.logger.info(f"[disconnect] sid={_get_sid()}")

    def handle_create_room(self, host_name=None):
        room = self.coordinator.create_room(_get_sid(), host_name)
        join_room(room.code)
        return room.code

    def handle_join_room(self, room_code=None, player_name=None, avatar=None):
        try:
            room = self.coordinator.join_room(room_code, _get_sid(), player_name, avatar)
        except (RoomNotFound, RoomFull) as exc:
            return {'error': str(exc)}
        join_room(room.code)
        emit('updatePlayers', room.players_payload(), to=room.code)
        return {'success': True}

    @_drop_rejected
    def handle_start_game(self, room_code=None):
        room = self.coordinator.start_game(room_code, _get_sid())
        emit('gameStarted', (room.sectors_payload(), [p.sid for p in room.impostors]), to=room.code)

    @_drop_rejected
    def handle_invest(self, room_code=None, investments=None):
        room = self.coordinator.invest(room_code, _get_sid(), investments)
        emit('updatePlayers', room.players_payload(), to=room.code)

    @_drop_rejected
    def handle_flash_news(self, room_code=None, message=None):
        room = self.coordinator.flash_news(room_code, _get_sid())
        emit('news', message, to=room.code)

    @_drop_rejected
    def handle_unlock_sectors(self, room_code=None):
        room = self.coordinator.unlock_sectors(room_code, _get_sid())
        emit('sectorsUnlocked', room.sectors_payload(), to=room.code)

    @_drop_rejected
    def handle_end_game(self, room_code=None):
        results = self.coordinator.end_game(room_code, _get_sid())
        emit('gameEnded', results, to=str(room_code))


def register_socketio_handlers(coordinator: RoomCoordinator, namespace: str = '/') -> RoomEvents:
    """Register Socket.IO event handlers for the given coordinator."""
    events = RoomEvents(coordinator)
    socketio.on_event('connect', events.handle_connect, namespace=namespace)
    socketio.on_event('disconnect', events.handle_disconnect, namespace=namespace)
    socketio.on_event('createRoom', events.handle_create_room, namespace=namespace)
    socketio.on_event('joinRoom', events.handle_join_room, namespace=namespace)
    socketio.on_event('startGame', events.handle_start_game, namespace=namespace)
    socketio.on_event('invest', events.handle_invest, namespace=namespace)
    socketio.on_event('flashNews', events.handle_flash_news, namespace=namespace)
    socketio.on_event('unlockSectors', events.handle_unlock_sectors, namespace=namespace)
    socketio.on_event('endGame', events.handle_end_game, namespace=namespace)
    return events
