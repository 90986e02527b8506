"""Room domain services: the coordinator and end-of-game scoring.

Nothing here touches Socket.IO. Handlers in greenfund.socketio_events call
into the coordinator and decide what to broadcast from what it returns.
"""

from .coordinator import RoomCoordinator

__all__ = ['RoomCoordinator']
