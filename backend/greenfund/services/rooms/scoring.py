from typing import Any, Dict, List, Optional

from greenfund.models import Player, Room, Sector

FINANCIAL_WEIGHT = 0.5
GREEN_WEIGHT = 0.5


def score_player(player: Player, sectors: List[Sector]) -> Dict[str, Any]:
    """Score one player's allocation against the room's sectors.

    Only sectors the room knows about count; amounts are taken as-is, so
    negative allocations lower the score.
    """
    financial = 0
    green = 0
    for sector in sectors:
        amount = player.investments.get(sector.name)
        if amount:
            financial += amount * sector.return_rate
            green += amount * sector.green_score
    return {
        'name': player.name,
        'role': player.role,
        'total': FINANCIAL_WEIGHT * financial + GREEN_WEIGHT * green,
    }


def pick_winner(scores: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    # Ties keep the earlier entry
    if not scores:
        return None
    winner = scores[0]
    for entry in scores[1:]:
        if entry['total'] > winner['total']:
            winner = entry
    return winner


def final_results(room: Room) -> Dict[str, Any]:
    scores = [score_player(p, room.sectors) for p in room.players]
    return {
        'scores': scores,
        'winner': pick_winner(scores),
        'impostors': [p.name for p in room.impostors],
    }
