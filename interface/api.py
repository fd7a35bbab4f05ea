"""FastAPI REST interface: the current game and the record leaderboard."""

import threading

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Optional

from hanoi.config import CONFIG, configure_logging
from hanoi.core.game import InvalidConfiguration
from hanoi.core.towers import Peg
from hanoi.records import InvalidRecord, RecordStore
from hanoi.session import GameSession

configure_logging()

app = FastAPI(title=CONFIG.ui.app_name, version="1.0.0")

# Shared store and session (one game per process).
store = RecordStore()
session = GameSession(store)
_lock = threading.Lock()


class RecordRequest(BaseModel):
    player_id: str
    player_name: str
    disks: int
    moves: int
    seconds: int


class StartRequest(BaseModel):
    player_id: str
    player_name: str
    disks: Optional[int] = None


class MoveRequest(BaseModel):
    from_peg: str  # "A", "B" or "C"
    to_peg: str


@app.exception_handler(RequestValidationError)
def validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def _parse_peg(name: str) -> Peg:
    try:
        return Peg.parse(name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _current_session() -> GameSession:
    if session.state is None:
        raise HTTPException(status_code=404, detail="No game in progress")
    return session


# ── Records ─────────────────────────────────────────────────


@app.post("/api/records")
def create_record(req: RecordRequest):
    try:
        record = store.create_record(
            player_id=req.player_id,
            player_name=req.player_name,
            disks=req.disks,
            moves=req.moves,
            seconds=req.seconds,
        )
    except InvalidRecord as e:
        raise HTTPException(status_code=400, detail=str(e))
    return record.to_dict()


@app.get("/api/records")
def list_records(limit: Optional[int] = None):
    return [r.to_dict() for r in store.get_records(limit)]


@app.get("/api/records/search")
def search_records(q: Optional[str] = None):
    if not q:
        raise HTTPException(status_code=400, detail="Search query is required")
    return [r.to_dict() for r in store.search_records(q)]


@app.get("/api/records/disks/{disk_count}")
def records_by_disks(disk_count: int, limit: Optional[int] = None):
    game = CONFIG.game
    if disk_count < game.min_disks or disk_count > game.max_disks:
        raise HTTPException(
            status_code=400,
            detail=f"Disk count must be between {game.min_disks} and {game.max_disks}",
        )
    return [r.to_dict() for r in store.get_records_by_disks(disk_count, limit)]


# ── Game ────────────────────────────────────────────────────


@app.post("/game")
def start_game(req: StartRequest):
    with _lock:
        try:
            session.start(req.player_id, req.player_name, req.disks)
        except InvalidConfiguration as e:
            raise HTTPException(status_code=400, detail=str(e))
        return session.snapshot()


@app.get("/game")
def get_game():
    with _lock:
        return _current_session().snapshot()


@app.post("/game/move")
def move_disk(req: MoveRequest):
    from_peg = _parse_peg(req.from_peg)
    to_peg = _parse_peg(req.to_peg)
    with _lock:
        current = _current_session()
        moved = current.move(from_peg, to_peg)
        return {"moved": moved, "game": current.snapshot()}


@app.post("/game/undo")
def undo_move():
    with _lock:
        current = _current_session()
        undone = current.undo()
        return {"undone": undone, "game": current.snapshot()}


@app.post("/game/restart")
def restart_game():
    with _lock:
        current = _current_session()
        current.restart()
        return current.snapshot()


@app.get("/game/stats")
def game_stats():
    with _lock:
        return _current_session().stats().to_dict()


@app.get("/game/can-move")
def can_move(from_peg: str, to_peg: str):
    source = _parse_peg(from_peg)
    target = _parse_peg(to_peg)
    with _lock:
        return {"legal": _current_session().can_move(source, target)}
