"""In-memory store of finished games and the leaderboard queries over it.

Methods:
  - create_record(player_id, player_name, disks, moves, seconds) -> HanoiRecord
  - get_records(limit) -> newest first
  - search_records(query) -> id or name substring match, newest first
  - get_records_by_disks(disks, limit) -> fewest moves, then fastest
  - clear()
"""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from hanoi.config import CONFIG, Config

logger = logging.getLogger(__name__)


class InvalidRecord(ValueError):
    """Raised when a submitted record fails validation."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class HanoiRecord:
    player_id: str
    player_name: str
    disks: int
    moves: int
    seconds: int
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "player_id": self.player_id,
            "player_name": self.player_name,
            "disks": self.disks,
            "moves": self.moves,
            "seconds": self.seconds,
            "created_at": self.created_at.isoformat(),
        }


class RecordStore:
    """Thread-safe record store keyed by record id."""

    def __init__(self, config: Optional[Config] = None, now: Callable[[], datetime] = _utcnow):
        self.config = config or CONFIG
        self._now = now
        self._records: Dict[str, HanoiRecord] = {}
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._records)

    def _validate(self, player_id, player_name, disks, moves, seconds):
        game = self.config.game
        if not isinstance(player_id, str) or not player_id.strip():
            raise InvalidRecord("player_id is required")
        if not isinstance(player_name, str) or not player_name.strip():
            raise InvalidRecord("player_name is required")
        for name, value in (("disks", disks), ("moves", moves), ("seconds", seconds)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidRecord(f"{name} must be an integer")
        if not game.min_disks <= disks <= game.max_disks:
            raise InvalidRecord(
                f"Disk count must be between {game.min_disks} and {game.max_disks}"
            )
        if moves < 0:
            raise InvalidRecord("moves must not be negative")
        if seconds < 0:
            raise InvalidRecord("seconds must not be negative")

    def create_record(self, player_id: str, player_name: str, disks: int, moves: int, seconds: int) -> HanoiRecord:
        self._validate(player_id, player_name, disks, moves, seconds)
        record = HanoiRecord(
            player_id=player_id,
            player_name=player_name,
            disks=disks,
            moves=moves,
            seconds=seconds,
            created_at=self._now(),
        )
        with self._lock:
            self._records[record.id] = record
        logger.info("Stored record %s: %s, %d disks, %d moves, %ds",
                    record.id, player_name, disks, moves, seconds)
        return record

    def _newest_first(self, records: List[HanoiRecord]) -> List[HanoiRecord]:
        # reversed() first so equal timestamps still list the later insert first
        return sorted(reversed(records), key=lambda r: r.created_at, reverse=True)

    def get_records(self, limit: Optional[int] = None) -> List[HanoiRecord]:
        if limit is None:
            limit = self.config.records.default_limit
        with self._lock:
            records = list(self._records.values())
        return self._newest_first(records)[:max(0, limit)]

    def search_records(self, query: str) -> List[HanoiRecord]:
        """Match query against player ids (exact case) and names (any case)."""
        needle = query.lower()
        with self._lock:
            records = [
                r for r in self._records.values()
                if query in r.player_id or needle in r.player_name.lower()
            ]
        return self._newest_first(records)

    def get_records_by_disks(self, disks: int, limit: Optional[int] = None) -> List[HanoiRecord]:
        if limit is None:
            limit = self.config.records.default_limit
        with self._lock:
            records = [r for r in self._records.values() if r.disks == disks]
        records.sort(key=lambda r: (r.moves, r.seconds))
        return records[:max(0, limit)]

    def clear(self):
        with self._lock:
            self._records.clear()
