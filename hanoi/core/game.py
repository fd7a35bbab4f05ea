"""Tower of Hanoi state machine: initialize, move, undo, win detection.

Gameplay mistakes (illegal move, move after the game is won, undo with no
history) are reported by returning False and leave the state untouched. Only a
malformed initialize call raises, with InvalidConfiguration.

Every mutating call builds a complete new GameState and swaps it in with a
single assignment, so observers never see a half-applied move.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from hanoi.core.stats import GameStats, calculate_min_moves, get_game_stats
from hanoi.core.towers import GOAL_PEG, MoveRecord, Peg, TowerState, can_move

logger = logging.getLogger(__name__)

# absolute ceiling; the playable range is GameConfig.min_disks..max_disks
MAX_SUPPORTED_DISKS = 20


class InvalidConfiguration(ValueError):
    """Raised when a game is set up with an unusable disk count or player."""


class GameStatus(str, Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass(frozen=True)
class GameState:
    player_id: str
    player_name: str
    disks: int
    towers: TowerState
    moves: int = 0
    seconds_elapsed: int = 0
    history: Tuple[MoveRecord, ...] = field(default_factory=tuple)
    completed: bool = False
    active: bool = True
    started_at: Optional[float] = None

    @property
    def status(self) -> GameStatus:
        if self.completed:
            return GameStatus.COMPLETED
        if self.active:
            return GameStatus.ACTIVE
        return GameStatus.NOT_STARTED

    def to_dict(self) -> Dict:
        return {
            "player_id": self.player_id,
            "player_name": self.player_name,
            "disks": self.disks,
            "towers": self.towers.to_dict(),
            "moves": self.moves,
            "seconds_elapsed": self.seconds_elapsed,
            "history": [m.to_dict() for m in self.history],
            "completed": self.completed,
            "active": self.active,
            "status": self.status.value,
        }


def validate_disk_count(disk_count, low: int = 1, high: int = MAX_SUPPORTED_DISKS) -> int:
    if isinstance(disk_count, bool) or not isinstance(disk_count, int):
        raise InvalidConfiguration(f"Disk count must be an integer, got {disk_count!r}")
    if disk_count < low or disk_count > high:
        raise InvalidConfiguration(
            f"Disk count must be between {low} and {high}, got {disk_count}"
        )
    return disk_count


class HanoiEngine:
    def __init__(self, now: Callable[[], float] = time.time):
        self._now = now
        self.state: Optional[GameState] = None

    @property
    def status(self) -> GameStatus:
        if self.state is None:
            return GameStatus.NOT_STARTED
        return self.state.status

    def initialize(self, player_id: str, player_name: str, disk_count: int) -> GameState:
        """Start a fresh game with every disk on peg A.

        Raises InvalidConfiguration for a disk count below 1 (or above
        MAX_SUPPORTED_DISKS); the current game, if any, is kept in that case.
        """
        validate_disk_count(disk_count)
        self.state = GameState(
            player_id=player_id,
            player_name=player_name,
            disks=disk_count,
            towers=TowerState.initial(disk_count),
            started_at=self._now(),
        )
        logger.info("New game for %s (%s) with %d disks", player_name, player_id, disk_count)
        return self.state

    def restart(self) -> GameState:
        """Re-run initialize with the last player and disk count."""
        if self.state is None:
            raise InvalidConfiguration("No game to restart")
        return self.initialize(self.state.player_id, self.state.player_name, self.state.disks)

    def can_move(self, from_peg: Peg, to_peg: Peg, towers: Optional[TowerState] = None) -> bool:
        """Legality of a move on the given towers (current towers by default)."""
        if towers is None:
            if self.state is None:
                return False
            towers = self.state.towers
        return can_move(from_peg, to_peg, towers)

    def move_disk(self, from_peg: Peg, to_peg: Peg) -> bool:
        """Move the top disk of from_peg onto to_peg. Returns False if rejected."""
        from_peg, to_peg = Peg.parse(from_peg), Peg.parse(to_peg)
        prev = self.state
        if prev is None or not prev.active or prev.completed:
            logger.debug("Move %s->%s rejected: game not active", from_peg.value, to_peg.value)
            return False
        if not can_move(from_peg, to_peg, prev.towers):
            logger.debug("Move %s->%s rejected: illegal", from_peg.value, to_peg.value)
            return False

        disk = prev.towers.top(from_peg)
        towers = prev.towers.moved(from_peg, to_peg)
        record = MoveRecord(from_peg=from_peg, to_peg=to_peg, disk=disk, timestamp=self._now())
        won = len(towers[GOAL_PEG]) == prev.disks

        self.state = replace(
            prev,
            towers=towers,
            moves=prev.moves + 1,
            history=prev.history + (record,),
            completed=won,
            active=not won,
        )
        logger.debug("Disk %d moved %s->%s", disk, from_peg.value, to_peg.value)
        if won:
            logger.info("%s solved %d disks in %d moves", prev.player_name, prev.disks, self.state.moves)
        return True

    def undo_move(self) -> bool:
        """Take back the last move, reopening a completed game. False if no history."""
        prev = self.state
        if prev is None or not prev.history:
            return False

        last = prev.history[-1]
        # the inverse of a legal move is always legal
        towers = prev.towers.moved(last.to_peg, last.from_peg)
        self.state = replace(
            prev,
            towers=towers,
            moves=max(0, prev.moves - 1),
            history=prev.history[:-1],
            completed=False,
            active=True,
        )
        logger.debug("Undo disk %d %s->%s", last.disk, last.to_peg.value, last.from_peg.value)
        return True

    def set_elapsed(self, seconds: int) -> None:
        """Store the elapsed seconds reported by the external clock."""
        if self.state is not None:
            self.state = replace(self.state, seconds_elapsed=max(0, int(seconds)))

    @staticmethod
    def calculate_min_moves(n: int) -> int:
        return calculate_min_moves(n)

    def get_game_stats(self, state: Optional[GameState] = None) -> GameStats:
        state = state or self.state
        if state is None:
            raise InvalidConfiguration("No game has been initialized")
        return get_game_stats(state)
