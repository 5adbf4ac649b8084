# main.py
import asyncio
import contextlib
import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.staticfiles import StaticFiles

from bezier3d import InvalidArgument, SurfaceScene

logger = logging.getLogger("bezier3d.server")

app = FastAPI()

# Serve a browser rasterizer (index.html / app.js) when one is deployed next to the app
if Path("static").is_dir():
    app.mount("/static", StaticFiles(directory="static"), name="static")

# ---- frame loop settings ----
TICK_HZ = 30          # frame-state broadcast rate

scene = SurfaceScene()
_clock_start = time.monotonic()
_frame_task: Optional[asyncio.Task] = None


def _apply_patch(patch: Any) -> Dict[str, Any]:
    if not isinstance(patch, dict):
        raise InvalidArgument("settings patch must be a JSON object")
    assert scene.settings is not None
    settings = scene.apply(scene.settings.merged(patch))
    return settings.to_dict()


def _frame_message(state) -> Dict[str, Any]:
    return {
        "type": "frame",
        "elapsed": state.elapsed,
        "mesh_rotation_z": state.mesh_rotation_z,
        "light_position": list(state.light_position),
    }


# ---- REST endpoints ----
@app.get("/")
async def root():
    return scene.snapshot()


@app.get("/mesh")
async def get_mesh():
    assert scene.mesh is not None
    return scene.mesh.to_dict()


@app.get("/wireframe")
async def get_wireframe():
    if scene.wireframe is None:
        raise HTTPException(status_code=404, detail="grid overlay is disabled")
    return scene.wireframe.to_dict()


@app.get("/shading")
async def get_shading():
    return scene.shading.to_uniforms()


@app.post("/settings")
async def post_settings(patch: Dict[str, Any] = Body(...)):
    try:
        return _apply_patch(patch)
    except InvalidArgument as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


# ---- WebSocket connection management ----
class ConnectionManager:
    def __init__(self):
        self.active: List[WebSocket] = []

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self.active.append(ws)

    def disconnect(self, ws: WebSocket):
        if ws in self.active:
            self.active.remove(ws)

    async def broadcast(self, message: str):
        # drop clients that went away mid-send
        dead = []
        for ws in self.active:
            try:
                await ws.send_text(message)
            except (WebSocketDisconnect, RuntimeError):
                dead.append(ws)
        for ws in dead:
            self.disconnect(ws)


manager = ConnectionManager()


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await manager.connect(ws)
    try:
        # initial snapshot right after connecting
        await ws.send_text(json.dumps(scene.snapshot()))
        # clients send settings patches; the answer is the full settings or an error
        while True:
            text = await ws.receive_text()
            try:
                settings = _apply_patch(json.loads(text))
            except ValueError as exc:
                await ws.send_text(json.dumps({"type": "error", "message": str(exc)}))
                continue
            await ws.send_text(json.dumps({"type": "settings", "settings": settings}))
    except WebSocketDisconnect:
        manager.disconnect(ws)


# ---- frame loop (background task) ----
async def frame_loop():
    tick = 1.0 / TICK_HZ
    while True:
        state = scene.frame(time.monotonic() - _clock_start)
        if manager.active:
            await manager.broadcast(json.dumps(_frame_message(state)))
        await asyncio.sleep(tick)


@app.on_event("startup")
async def on_startup():
    # start ticking the animation in the background
    global _frame_task
    logger.info("starting frame loop at %d Hz", TICK_HZ)
    _frame_task = asyncio.create_task(frame_loop())


@app.on_event("shutdown")
async def on_shutdown():
    if _frame_task is None:
        return
    _frame_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await _frame_task
    logger.info("frame loop stopped")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
