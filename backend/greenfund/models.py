import random
import time
from typing import Any, Callable, Dict, List, Optional

from greenfund.exceptions import InvalidInvestment

ROLE_INVESTOR = 'investor'
ROLE_IMPOSTOR = 'impostor'

PHASE_LOBBY = 'lobby'
PHASE_ACTIVE = 'active'
PHASE_UNLOCKED = 'unlocked'
PHASE_ENDED = 'ended'

# (name, return rate, green score)
DEFAULT_SECTORS = (
    ('Railways Electrification', 8, 3),
    ('Expressways (DMEDL)', 10, 4),
    ('Solar Parks (Rewa)', 7, 5),
)


class Sector:
    def __init__(self, name: str, return_rate, green_score, locked: bool = True):
        self.name = name
        self.return_rate = return_rate
        self.green_score = green_score
        self.locked = locked

    def to_dict(self):
        return {
            'name': self.name,
            'return': self.return_rate,
            'green': self.green_score,
            'locked': self.locked,
        }


def coerce_amount(sector, amount):
    """Read an allocation amount as a number.

    Numeric strings are parsed and null counts as 0. Anything else raises
    InvalidInvestment.
    """
    if amount is None:
        return 0
    if isinstance(amount, bool):
        return int(amount)
    if isinstance(amount, (int, float)):
        return amount
    if isinstance(amount, str):
        for parse in (int, float):
            try:
                return parse(amount.strip())
            except ValueError:
                continue
    raise InvalidInvestment(sector, amount)


class Player:
    def __init__(self, sid: str, name: str, avatar=None, budget: int = 100):
        self.sid = sid
        self.name = name
        self.avatar = avatar
        self.role = ROLE_INVESTOR
        self.budget = budget
        self.investments: Dict[str, float] = {}
        self.remaining = budget

    def set_investments(self, investments: Dict[str, Any]) -> None:
        """Replace the allocation wholesale; remaining is not clamped.

        Amounts are coerced first, so a rejected allocation leaves the
        player untouched.
        """
        amounts = {sector: coerce_amount(sector, amount) for sector, amount in investments.items()}
        remaining = self.budget - sum(amounts.values())
        self.investments = amounts
        self.remaining = remaining

    def to_dict(self):
        return {
            'id': self.sid,
            'name': self.name,
            'avatar': self.avatar,
            'role': self.role,
            'investments': self.investments,
            'remaining': self.remaining,
        }


def generate_room_code(is_taken: Callable[[str], bool], length: int = 4) -> str:
    """Generate a numeric room code that is not already taken."""
    while True:
        code = str(random.randint(10 ** (length - 1), 10 ** length - 1))
        if not is_taken(code):
            return code


class Room:
    def __init__(self, code: str, host_sid: str, host_name: str, sectors: Optional[List[Sector]] = None):
        self.code = code
        self.host = {'id': host_sid, 'name': host_name}
        self.players: List[Player] = []
        if sectors is None:
            sectors = [Sector(name, ret, green) for name, ret, green in DEFAULT_SECTORS]
        self.sectors = sectors
        self.started = False
        self.impostors: List[Player] = []
        self.phase = PHASE_LOBBY
        self.last_activity = time.time()

    def is_host(self, sid: str) -> bool:
        return self.host['id'] == sid

    def find_player(self, sid: str) -> Optional[Player]:
        for p in self.players:
            if p.sid == sid:
                return p
        return None

    def touch(self, now: Optional[float] = None) -> None:
        self.last_activity = time.time() if now is None else now

    def players_payload(self):
        return [p.to_dict() for p in self.players]

    def sectors_payload(self):
        return [s.to_dict() for s in self.sectors]

    def to_dict(self):
        return {
            'code': self.code,
            'host': dict(self.host),
            'phase': self.phase,
            'started': self.started,
            'players': self.players_payload(),
            'sectors': self.sectors_payload(),
            'impostors': [p.sid for p in self.impostors],
        }
