"""Derived game statistics. Computed on demand, never stored."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:
    from hanoi.core.game import GameState


@dataclass(frozen=True)
class GameStats:
    moves: int
    seconds_elapsed: int
    min_moves: int
    efficiency: int
    disks: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def calculate_min_moves(n: int) -> int:
    """Fewest moves needed to solve n disks: 2^n - 1."""
    return 2 ** n - 1


def efficiency_percent(min_moves: int, moves: int) -> int:
    # zero moves counts as perfect play
    if moves == 0:
        return 100
    # half up, not banker's rounding
    return int(math.floor(min_moves / moves * 100 + 0.5))


def get_game_stats(state: "GameState") -> GameStats:
    min_moves = calculate_min_moves(state.disks)
    return GameStats(
        moves=state.moves,
        seconds_elapsed=state.seconds_elapsed,
        min_moves=min_moves,
        efficiency=efficiency_percent(min_moves, state.moves),
        disks=state.disks,
    )
