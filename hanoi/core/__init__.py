"""Core puzzle components: pegs and towers, the game state machine, and stats."""

from .towers import Peg, TowerState, MoveRecord, can_move
from .stats import GameStats, calculate_min_moves, get_game_stats
from .game import GameState, GameStatus, HanoiEngine, InvalidConfiguration
