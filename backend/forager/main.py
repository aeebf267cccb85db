"""
Ant Forager - FastAPI Server

Runtime host for the simulation: builds a world from a config, runs ticks
and publishes ant positions and paths to renderers over REST and WebSocket.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Dict, Optional, Set

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .config import SimulationConfig
from .core import SimulationEngine
from .errors import InvalidConfigurationError
from .logging_config import logger

MIN_TICK_DELAY = 0.01
MAX_TICK_DELAY = 2.0


# Simulation state
class SimState:
    def __init__(self):
        self.engine: Optional[SimulationEngine] = None
        self.is_running = False
        self.tick_delay = 0.1  # seconds between ticks
        self.connections: Set[WebSocket] = set()
        self.loop_task: Optional[asyncio.Task] = None


sim_state = SimState()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Ant Forager server starting...")
    yield
    logger.info("Ant Forager server shutting down...")
    await stop_sim_loop()


app = FastAPI(
    title="Ant Forager",
    description="Ant foraging simulation API",
    version=__version__,
    lifespan=lifespan,
)

# CORS for renderers served from elsewhere
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidConfigurationError)
async def invalid_configuration_handler(request, exc: InvalidConfigurationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


class SimStatus(BaseModel):
    is_running: bool
    tick: int
    nest_totals: Dict[str, int]
    food_remaining: int


# REST Endpoints
@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "simulation": "Ant Forager"}


@app.post("/api/sim/new")
async def new_simulation(config: SimulationConfig):
    """Create a new simulation from config."""
    await stop_sim_loop()

    sim_state.engine = SimulationEngine.from_config(config)
    sim_state.tick_delay = config.tick_delay

    return {
        "status": "created",
        "config": config.model_dump(),
        "initial_state": sim_state.engine.get_state(),
    }


@app.post("/api/sim/start")
async def start_simulation():
    """Start the tick loop."""
    if sim_state.engine is None:
        return {"error": "No simulation created. Call /api/sim/new first."}

    if sim_state.is_running:
        return {"status": "already_running"}

    await stop_sim_loop()
    sim_state.is_running = True
    sim_state.loop_task = asyncio.create_task(run_sim_loop())

    return {"status": "started"}


@app.post("/api/sim/pause")
async def pause_simulation():
    await stop_sim_loop()
    return {"status": "paused"}


@app.post("/api/sim/step")
async def step_simulation():
    """Execute a single tick (when paused)."""
    if sim_state.engine is None:
        return {"error": "No simulation created"}

    if sim_state.is_running:
        return {"error": "Simulation is running. Pause first."}

    result = sim_state.engine.run_tick()
    state = sim_state.engine.get_state()

    await broadcast_state(state, result.to_dict())

    return {
        "status": "stepped",
        "tick_result": result.to_dict(),
        "state": state,
    }


@app.get("/api/sim/status", response_model=SimStatus)
async def sim_status():
    if sim_state.engine is None:
        return SimStatus(is_running=False, tick=0, nest_totals={}, food_remaining=0)

    return SimStatus(
        is_running=sim_state.is_running,
        tick=sim_state.engine.world.tick_number,
        nest_totals=sim_state.engine.get_nest_totals(),
        food_remaining=sim_state.engine.world.get_total_food_remaining(),
    )


@app.get("/api/sim/state")
async def sim_full_state():
    """Get full simulation state, including every ant's path."""
    if sim_state.engine is None:
        return {"error": "No simulation created"}

    return sim_state.engine.get_state()


@app.post("/api/sim/speed")
async def set_speed(tick_delay: float):
    """Set simulation speed (seconds between ticks)."""
    sim_state.tick_delay = max(MIN_TICK_DELAY, min(MAX_TICK_DELAY, tick_delay))
    return {"tick_delay": sim_state.tick_delay}


# WebSocket for real-time updates
@app.websocket("/ws/sim")
async def sim_websocket(websocket: WebSocket):
    await websocket.accept()
    sim_state.connections.add(websocket)

    try:
        if sim_state.engine:
            await websocket.send_json({"type": "initial_state", "data": sim_state.engine.get_state()})

        async for data in websocket.iter_json():
            reply = handle_client_message(data)
            if reply is not None:
                await websocket.send_json(reply)
    finally:
        sim_state.connections.discard(websocket)


def handle_client_message(data: dict) -> Optional[dict]:
    """Answer a message sent by a renderer. Unknown types get no reply."""
    kind = data.get("type")
    if kind == "ping":
        return {"type": "pong"}
    if kind == "get_state":
        if sim_state.engine is None:
            return {"type": "error", "message": "No simulation created"}
        return {"type": "sim_state", "data": sim_state.engine.get_state()}
    logger.debug("Ignoring WebSocket message of type %r", kind)
    return None


async def broadcast_state(state: dict, tick_result: Optional[dict] = None):
    """Send the latest state to every connected renderer, dropping dead ones."""
    message = {"type": "sim_state", "data": state}
    if tick_result:
        message["tick_result"] = tick_result

    clients = list(sim_state.connections)
    results = await asyncio.gather(
        *(ws.send_json(message) for ws in clients), return_exceptions=True
    )
    for ws, outcome in zip(clients, results):
        if isinstance(outcome, (WebSocketDisconnect, RuntimeError)):
            logger.warning("Dropping WebSocket client: %s", outcome)
            sim_state.connections.discard(ws)
        elif isinstance(outcome, BaseException):
            raise outcome


async def stop_sim_loop():
    """Stop the tick loop and wait until it has actually exited."""
    sim_state.is_running = False
    task, sim_state.loop_task = sim_state.loop_task, None
    if task is None or task.done():
        return

    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


async def run_sim_loop():
    """Run ticks until paused, broadcasting state after each one."""
    logger.info("Simulation loop started")

    try:
        while sim_state.is_running and sim_state.engine:
            result = sim_state.engine.run_tick()
            await broadcast_state(sim_state.engine.get_state(), result.to_dict())
            await asyncio.sleep(sim_state.tick_delay)
    except Exception:
        logger.exception("Simulation loop failed at tick %s", sim_state.engine.world.tick_number)
    finally:
        sim_state.is_running = False
        logger.info("Simulation loop ended")


def run(host: str = "0.0.0.0", port: int = 8000) -> None:
    import uvicorn
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
