"""Error taxonomy for room operations.

Only RoomNotFound and RoomFull ever reach a client (as the joinRoom ack);
the socket layer drops the rest silently.
"""


class GreenFundError(Exception):
    """Base class for room coordination errors."""
    pass


class RoomNotFound(GreenFundError):
    def __init__(self, code):
        self.code = code
        super().__init__("Room doesn't exist")


class RoomFull(GreenFundError):
    def __init__(self, code, max_players):
        self.code = code
        self.max_players = max_players
        super().__init__(f"Max {max_players} teams")


class Unauthorized(GreenFundError):
    """Caller is not the room's host."""
    def __init__(self, code, sid):
        self.code = code
        self.sid = sid
        super().__init__(f"{sid} is not the host of room {code}")


class PlayerNotFound(GreenFundError):
    def __init__(self, code, sid):
        self.code = code
        self.sid = sid
        super().__init__(f"No player {sid} in room {code}")


class InvalidInvestment(GreenFundError):
    """An allocation amount that cannot be read as a number."""
    def __init__(self, sector, amount):
        self.sector = sector
        self.amount = amount
        super().__init__(f"Invalid amount {amount!r} for sector {sector!r}")
