"""Play Tower of Hanoi in the terminal."""

import re

from hanoi.config import CONFIG, configure_logging
from hanoi.core.game import InvalidConfiguration
from hanoi.core.towers import Peg
from hanoi.records import RecordStore
from hanoi.session import GameSession

MOVE_PATTERN = re.compile(r"^\s*([abcABC])\s*(?:->|[\s,])?\s*([abcABC])\s*$")

HELP = "Commands: 'A C' moves the top disk from A to C, undo, restart, stats, leaders, quit"


class HanoiCLI:
    def __init__(self, session: GameSession = None):
        self.session = session or GameSession(RecordStore())

    def setup(self):
        player_id = ""
        while not player_id:
            player_id = input("Student ID: ").strip()
        player_name = ""
        while not player_name:
            player_name = input("Name: ").strip()
        game = CONFIG.game
        while True:
            raw = input(f"Disks ({game.min_disks}-{game.max_disks}, default {game.default_disks}): ").strip()
            try:
                disks = int(raw) if raw else None
                self.session.start(player_id, player_name, disks)
                return
            except (ValueError, InvalidConfiguration) as e:
                print(f"Invalid disk count: {e}")

    def show(self):
        state = self.session.state
        print(state.towers.render())
        print(f"Moves: {state.moves}  Time: {self.session.tick()}s")
        print("----------------------------")

    def show_stats(self):
        stats = self.session.stats()
        print(f"Moves: {stats.moves} (minimum {stats.min_moves})  "
              f"Time: {stats.seconds_elapsed}s  Efficiency: {stats.efficiency}%")

    def show_leaders(self):
        store = self.session.store
        disks = self.session.state.disks
        records = store.get_records_by_disks(disks, 10) if store else []
        print(f"Leaderboard for {disks} disks:")
        if not records:
            print("  (no records yet)")
        for rank, r in enumerate(records, 1):
            print(f"  {rank:>2}. {r.player_name} ({r.player_id}) {r.moves} moves, {r.seconds}s")

    def handle(self, command: str) -> bool:
        """Run one command. Returns False when the player quits."""
        cmd = command.strip().lower()
        if cmd in ("q", "quit", "exit"):
            return False
        if cmd in ("u", "undo"):
            if self.session.undo():
                print("Move undone.")
            else:
                print("Nothing to undo.")
        elif cmd in ("r", "restart"):
            self.session.restart()
            print("Game restarted.")
        elif cmd in ("s", "stats"):
            self.show_stats()
        elif cmd in ("l", "leaders"):
            self.show_leaders()
        elif cmd in ("h", "help", "?"):
            print(HELP)
        else:
            match = MOVE_PATTERN.match(command)
            if not match:
                print(f"Unknown command: {command.strip()!r}. {HELP}")
                return True
            from_peg, to_peg = Peg.parse(match.group(1)), Peg.parse(match.group(2))
            if self.session.move(from_peg, to_peg):
                print(f"Moved disk {self.session.state.history[-1].disk} "
                      f"from {from_peg.value} to {to_peg.value}.")
                if self.session.state.completed:
                    print("Solved!")
                    self.show_stats()
                    self.show_leaders()
            elif self.session.state.completed:
                print("The puzzle is already solved. Undo or restart to keep playing.")
            else:
                print(f"Illegal move: {from_peg.value} -> {to_peg.value}")
        return True

    def run(self):
        try:
            self.setup()
            print(HELP)
            while True:
                self.show()
                if not self.handle(input("Your move: ")):
                    break
        except EOFError:
            pass
        print("Bye.")


if __name__ == "__main__":
    configure_logging()
    HanoiCLI().run()
