"""One player's game: engine + clock + result submission.

The session is what the front-ends (REST API, terminal) talk to. It checks
the configured disk range before starting a game, keeps the clock in step with
the engine (paused on a win, resumed when an undo reopens the game) and hands
each completed game to the record store once.
"""
import logging
import time
from typing import Callable, Dict, Optional

from hanoi.clock import GameClock
from hanoi.config import CONFIG, Config
from hanoi.core.game import GameState, HanoiEngine, InvalidConfiguration, validate_disk_count
from hanoi.core.stats import GameStats
from hanoi.core.towers import Peg
from hanoi.records import HanoiRecord, InvalidRecord, RecordStore

logger = logging.getLogger(__name__)


class GameSession:
    def __init__(self, store: Optional[RecordStore] = None, config: Optional[Config] = None,
                 now: Callable[[], float] = time.time, clock: Optional[GameClock] = None):
        self.store = store
        # a session and its store validate disk counts against the same ranges
        self.config = config or (store.config if store is not None else CONFIG)
        self.engine = HanoiEngine(now=now)
        self.clock = clock or GameClock()
        self.last_record: Optional[HanoiRecord] = None
        self._submitted = False

    @property
    def state(self) -> Optional[GameState]:
        return self.engine.state

    def _require_game(self) -> GameState:
        if self.engine.state is None:
            raise InvalidConfiguration("No game has been started")
        return self.engine.state

    def start(self, player_id: str, player_name: str, disks: Optional[int] = None) -> GameState:
        game = self.config.game
        if disks is None:
            disks = game.default_disks
        if not isinstance(player_id, str) or not player_id.strip():
            raise InvalidConfiguration("player_id is required")
        if not isinstance(player_name, str) or not player_name.strip():
            raise InvalidConfiguration("player_name is required")
        validate_disk_count(disks, game.min_disks, game.max_disks)

        state = self.engine.initialize(player_id.strip(), player_name.strip(), disks)
        self.clock.start()
        self.last_record = None
        self._submitted = False
        return state

    def restart(self) -> GameState:
        state = self.engine.restart()
        self.clock.start()
        self.last_record = None
        self._submitted = False
        return state

    def can_move(self, from_peg: Peg, to_peg: Peg) -> bool:
        return self.engine.can_move(from_peg, to_peg)

    def move(self, from_peg: Peg, to_peg: Peg) -> bool:
        moved = self.engine.move_disk(from_peg, to_peg)
        if moved and self.engine.state.completed:
            self._on_completed()
        return moved

    def undo(self) -> bool:
        state = self.engine.state
        reopening = state is not None and state.completed
        undone = self.engine.undo_move()
        if undone and reopening:
            self.clock.resume()
            self._submitted = False
            logger.info("Game reopened by undo, clock resumed at %ds", self.clock.tick())
        return undone

    def _on_completed(self):
        self.clock.pause()
        self.engine.set_elapsed(self.clock.tick())
        if self._submitted or self.store is None:
            return
        state = self.engine.state
        try:
            self.last_record = self.store.create_record(
                player_id=state.player_id,
                player_name=state.player_name,
                disks=state.disks,
                moves=state.moves,
                seconds=state.seconds_elapsed,
            )
        except InvalidRecord as e:
            # the winning move is already committed; keep the game, drop the record
            logger.error("Could not store result for %s: %s", state.player_id, e)
            return
        self._submitted = True

    def tick(self) -> int:
        """Sync the clock into the game state and return elapsed seconds."""
        seconds = self.clock.tick()
        state = self.engine.state
        if state is not None and not state.completed:
            self.engine.set_elapsed(seconds)
        return seconds

    def stats(self) -> GameStats:
        self._require_game()
        self.tick()
        return self.engine.get_game_stats()

    def snapshot(self) -> Dict:
        self._require_game()
        self.tick()
        state = self.engine.state
        data = state.to_dict()
        data["stats"] = self.engine.get_game_stats(state).to_dict()
        return data
