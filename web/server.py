"""FastAPI backend for the LaneDash browser client."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Ensure project root is importable
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from pydantic import BaseModel  # noqa: E402

from lanedash.config.loader import load_settings  # noqa: E402
from lanedash.config.schema import Settings  # noqa: E402
from lanedash.core.results import load_summary  # noqa: E402
from lanedash.game import geometry  # noqa: E402
from web.game_service import GameStreamService  # noqa: E402

app = FastAPI(title="LaneDash API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_settings: Settings | None = None


def configure(settings: Settings) -> None:
    global _settings
    _settings = settings


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def _geometry() -> dict:
    return {
        "tracks": geometry.TRACKS,
        "track_height": geometry.TRACK_HEIGHT,
        "width": geometry.GAME_WIDTH,
        "height": geometry.GAME_HEIGHT,
        "car_width": geometry.CAR_WIDTH,
        "car_height": geometry.CAR_HEIGHT,
        "player_size": geometry.PLAYER_SIZE,
        "player_x": geometry.PLAYER_X,
        "track_lines": geometry.track_lines(),
    }


# ── Models ──────────────────────────────────────────────────────────────


class ConfigUpdate(BaseModel):
    seed: int | None = None
    snapshot_fps: int | None = None


# ── GET /api/config ─────────────────────────────────────────────────────


@app.get("/api/config")
def get_config():
    s = get_settings()
    return {
        "tick_ms": s.tick_ms,
        "motion_tick_ms": s.motion_tick_ms,
        "ai_tick_ms": s.ai_tick_ms,
        "speed_step": s.speed_step,
        "max_speed": s.max_speed,
        "seed": s.seed,
        "snapshot_fps": s.snapshot_fps,
        "session_seconds": s.session_seconds,
        "geometry": _geometry(),
    }


# ── POST /api/config ────────────────────────────────────────────────────


@app.post("/api/config")
def update_config(body: ConfigUpdate):
    overrides = {k: v for k, v in body.model_dump().items() if v is not None}
    try:
        updated = get_settings().with_overrides(**overrides).validate()
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc
    configure(updated)
    return get_config()


# ── GET /api/status ──────────────────────────────────────────────────────


@app.get("/api/status")
def get_status():
    """Check whether a saved simulation summary exists."""
    return {"results_json": get_settings().paths.results_json.exists()}


# ── GET /api/results ─────────────────────────────────────────────────────


@app.get("/api/results")
def get_results():
    path = get_settings().paths.results_json
    if not path.exists():
        raise HTTPException(404, "No simulation summary yet. Run: lanedash simulate")
    return load_summary(path)


# ── WebSocket: game streaming ────────────────────────────────────────────


@app.websocket("/ws/game")
async def game_websocket(ws: WebSocket):
    """Run one autopilot game and stream its snapshots to the browser."""
    await ws.accept()

    settings = get_settings()
    game = GameStreamService(settings)
    game.start()

    try:
        await ws.send_json({"type": "ready", "geometry": _geometry()})
        while game.alive:
            await ws.send_json({"type": "snapshot", **game.get_snapshot()})

            # Drain pending control messages
            stop_requested = False
            try:
                while True:
                    msg = await asyncio.wait_for(ws.receive_json(), timeout=0.005)
                    if msg.get("type") == "stop":
                        print("[ws] stop requested", flush=True)
                        stop_requested = True
                        break
            except asyncio.TimeoutError:
                pass
            if stop_requested:
                break

            await asyncio.sleep(1 / settings.snapshot_fps)
    except WebSocketDisconnect:
        print("[ws] client disconnected", flush=True)
        return
    finally:
        game.stop()

    # Session ended
    score = game.game.state.run.score if game.game is not None else 0
    try:
        await ws.send_json({"type": "session_end", "score": score})
        await ws.close()
    except (WebSocketDisconnect, RuntimeError):
        print("[ws] client gone before session_end", flush=True)


# ── Main ─────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    s = get_settings()
    uvicorn.run(app, host=s.host, port=s.port)
