import logging
import random
import time
from typing import Any, Dict, List, Optional

from greenfund.exceptions import InvalidInvestment, PlayerNotFound, RoomFull, RoomNotFound, Unauthorized
from greenfund.models import (
    PHASE_ACTIVE,
    PHASE_ENDED,
    PHASE_UNLOCKED,
    ROLE_IMPOSTOR,
    ROLE_INVESTOR,
    Player,
    Room,
    generate_room_code,
)
from .scoring import final_results


class RoomCoordinator:
    """In-memory registry of rooms and the operations that advance them.

    Every method runs to completion without yielding, so callers on a single
    event loop never observe a half-applied change. Methods raise
    GreenFundError subclasses; choosing what reaches the client is left to
    the transport layer.
    """

    def __init__(self, max_players: int = 8, impostor_count: int = 2,
                 starting_budget: int = 100, idle_ttl_sec: int = 0,
                 logger: Optional[logging.Logger] = None):
        self.max_players = max_players
        self.impostor_count = impostor_count
        self.starting_budget = starting_budget
        self.idle_ttl_sec = idle_ttl_sec
        self.logger = logger or logging.getLogger(__name__)
        self._rooms: Dict[str, Room] = {}

    @classmethod
    def from_config(cls, config, logger=None) -> 'RoomCoordinator':
        return cls(
            max_players=int(config.get('MAX_PLAYERS', 8)),
            impostor_count=int(config.get('IMPOSTOR_COUNT', 2)),
            starting_budget=int(config.get('STARTING_BUDGET', 100)),
            idle_ttl_sec=int(config.get('ROOM_IDLE_TTL_SEC', 0)),
            logger=logger,
        )

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, code) -> bool:
        return code in self._rooms

    def get_room(self, code) -> Room:
        room = self._rooms.get(str(code))
        if room is None:
            raise RoomNotFound(code)
        return room

    def _host_room(self, code, sid: str) -> Room:
        room = self.get_room(code)
        if not room.is_host(sid):
            raise Unauthorized(code, sid)
        return room

    def _code_taken(self, code: str) -> bool:
        if code in self._rooms:
            self.logger.warning(f"[room-code-collision] code={code} regenerating")
            return True
        return False

    def evict_idle(self, now: Optional[float] = None) -> List[str]:
        """Drop rooms with no activity for longer than idle_ttl_sec."""
        if not self.idle_ttl_sec:
            return []
        now = time.time() if now is None else now
        stale = [code for code, room in self._rooms.items()
                 if now - room.last_activity > self.idle_ttl_sec]
        for code in stale:
            del self._rooms[code]
            self.logger.info(f"[room-evict] code={code} idle>{self.idle_ttl_sec}s")
        return stale

    def create_room(self, host_sid: str, host_name: str) -> Room:
        self.evict_idle()
        code = generate_room_code(self._code_taken)
        room = Room(code, host_sid, host_name)
        self._rooms[code] = room
        self.logger.info(f"[room-create] code={code} host={host_sid} name={host_name!r}")
        return room

    def join_room(self, code, sid: str, name: str, avatar=None) -> Room:
        room = self.get_room(code)
        if len(room.players) >= self.max_players:
            raise RoomFull(code, self.max_players)
        room.players.append(Player(sid, name, avatar, budget=self.starting_budget))
        room.touch()
        self.logger.info(f"[room-join] code={code} sid={sid} name={name!r} players={len(room.players)}")
        return room

    def start_game(self, code, sid: str) -> Room:
        """Shuffle players and hand out impostor roles.

        Not idempotent: a second call reshuffles and picks new impostors.
        """
        room = self._host_room(code, sid)
        random.shuffle(room.players)
        for p in room.players:
            p.role = ROLE_INVESTOR
        room.impostors = room.players[:self.impostor_count]
        for p in room.impostors:
            p.role = ROLE_IMPOSTOR
        room.started = True
        # Sectors never relock, so a restart after unlocking stays unlocked
        room.phase = PHASE_ACTIVE if any(s.locked for s in room.sectors) else PHASE_UNLOCKED
        room.touch()
        self.logger.info(f"[game-start] code={code} players={len(room.players)} impostors={len(room.impostors)}")
        return room

    def invest(self, code, sid: str, investments: Dict[str, Any]) -> Room:
        room = self.get_room(code)
        player = room.find_player(sid)
        if player is None:
            raise PlayerNotFound(code, sid)
        if investments is None:
            investments = {}
        if not isinstance(investments, dict):
            raise InvalidInvestment(None, investments)
        player.set_investments(investments)
        room.touch()
        return room

    def flash_news(self, code, sid: str) -> Room:
        room = self._host_room(code, sid)
        room.touch()
        return room

    def unlock_sectors(self, code, sid: str) -> Room:
        room = self._host_room(code, sid)
        for sector in room.sectors:
            sector.locked = False
        room.phase = PHASE_UNLOCKED
        room.touch()
        self.logger.info(f"[sectors-unlock] code={code}")
        return room

    def end_game(self, code, sid: str) -> Dict[str, Any]:
        room = self._host_room(code, sid)
        results = final_results(room)
        room.phase = PHASE_ENDED
        room.touch()
        winner_name = results['winner']['name'] if results['winner'] else None
        self.logger.info(f"[game-end] code={code} winner={winner_name!r} players={len(room.players)}")
        return results
