"""Pegs, tower state and the move-legality predicate.

Towers are immutable: every peg holds a tuple of disk sizes ordered bottom to
top, so the last element is the only movable disk. Moving a disk builds a new
TowerState; older snapshots (kept in move history, or by a caller) stay valid.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple


class Peg(str, Enum):
    A = "A"
    B = "B"
    C = "C"

    @classmethod
    def parse(cls, name: str) -> "Peg":
        """Parse 'a' / 'B' / ' c ' into a Peg. Raises ValueError otherwise."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown peg: {name!r}") from None


GOAL_PEG = Peg.C


@dataclass(frozen=True)
class TowerState:
    a: Tuple[int, ...] = ()
    b: Tuple[int, ...] = ()
    c: Tuple[int, ...] = ()

    @classmethod
    def initial(cls, disk_count: int) -> "TowerState":
        """All disks on peg A, largest at the bottom."""
        return cls(a=tuple(range(disk_count, 0, -1)))

    @classmethod
    def from_dict(cls, pegs: Dict) -> "TowerState":
        """Build from {'A': [3, 2], 'B': [1], 'C': []} (keys may be Peg or str)."""
        stacks = {Peg.parse(k): tuple(v) for k, v in pegs.items()}
        return cls(
            a=stacks.get(Peg.A, ()),
            b=stacks.get(Peg.B, ()),
            c=stacks.get(Peg.C, ()),
        )

    def __getitem__(self, peg: Peg) -> Tuple[int, ...]:
        try:
            peg = Peg.parse(peg)
        except ValueError:
            raise KeyError(peg) from None
        if peg is Peg.A:
            return self.a
        if peg is Peg.B:
            return self.b
        if peg is Peg.C:
            return self.c
        raise KeyError(peg)

    def __iter__(self) -> Iterator[Tuple[Peg, Tuple[int, ...]]]:
        yield Peg.A, self.a
        yield Peg.B, self.b
        yield Peg.C, self.c

    def top(self, peg: Peg) -> Optional[int]:
        """Top disk of a peg, or None when the peg is empty."""
        stack = self[peg]
        return stack[-1] if stack else None

    def disk_count(self) -> int:
        return len(self.a) + len(self.b) + len(self.c)

    def moved(self, from_peg: Peg, to_peg: Peg) -> "TowerState":
        """Return a new state with the top disk of from_peg placed on to_peg.

        No legality check is done here; see can_move.
        """
        from_peg, to_peg = Peg.parse(from_peg), Peg.parse(to_peg)
        source = self[from_peg]
        if not source:
            raise ValueError(f"Peg {from_peg.value} is empty")
        disk = source[-1]
        stacks = {peg: stack for peg, stack in self}
        stacks[from_peg] = source[:-1]
        stacks[to_peg] = stacks[to_peg] + (disk,)
        return TowerState(a=stacks[Peg.A], b=stacks[Peg.B], c=stacks[Peg.C])

    def is_valid(self, disk_count: int) -> bool:
        """Check conservation of disks 1..N and strict bottom-to-top ordering."""
        disks = sorted(self.a + self.b + self.c)
        if disks != list(range(1, disk_count + 1)):
            return False
        for _peg, stack in self:
            if any(lower <= upper for lower, upper in zip(stack, stack[1:])):
                return False
        return True

    def to_dict(self) -> Dict[str, list]:
        return {peg.value: list(stack) for peg, stack in self}

    def render(self) -> str:
        """ASCII rendering, top row first, peg labels at the bottom."""
        height = max(self.disk_count(), 1)
        width = len(str(height))
        rows = []
        for level in range(height - 1, -1, -1):
            cells = []
            for _peg, stack in self:
                if len(stack) > level:
                    cells.append(str(stack[level]).rjust(width))
                else:
                    cells.append("|".rjust(width))
            rows.append("  ".join(cells))
        rows.append("  ".join(peg.value.rjust(width) for peg in Peg))
        return "\n".join(rows)


@dataclass(frozen=True)
class MoveRecord:
    """One move in the game history."""

    from_peg: Peg
    to_peg: Peg
    disk: int
    timestamp: float

    def to_dict(self) -> Dict:
        return {
            "from": self.from_peg.value,
            "to": self.to_peg.value,
            "disk": self.disk,
            "timestamp": self.timestamp,
        }


def can_move(from_peg: Peg, to_peg: Peg, towers: TowerState) -> bool:
    """True if the top disk of from_peg may be placed on to_peg."""
    from_peg, to_peg = Peg.parse(from_peg), Peg.parse(to_peg)
    moving = towers.top(from_peg)
    if moving is None:
        return False
    target = towers.top(to_peg)
    if target is None:
        return True
    return moving < target
