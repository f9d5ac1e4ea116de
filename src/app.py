"""WardStream FastAPI application.

Bed management web server that processes commands synchronously via HTTP
and pushes every ward and bed change to WebSocket clients on ``/ws``.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from inpatient/domain.toml.
from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inpatient.domain import inpatient
from inpatient.realtime import set_publisher
from inpatient.realtime.websocket import WebSocketBroadcaster
from inpatient.utils.logging import add_context, clear_context, configure_logging

configure_logging()
inpatient.init()

broadcaster = set_publisher(WebSocketBroadcaster())


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="WardStream API",
    description="Hospital bed and ward inventory with realtime updates",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the inpatient domain context for each API request."""
    if not request.url.path.startswith("/api"):
        # Health check, docs, etc.
        return await call_next(request)

    clear_context()
    add_context(method=request.method, path=request.url.path)
    with inpatient.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from inpatient.api import register_exception_handlers, router  # noqa: E402

app.include_router(router)
register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Realtime
# ---------------------------------------------------------------------------
@app.websocket("/ws")
async def realtime(websocket: WebSocket):
    await broadcaster.connect(websocket)
    try:
        # Clients only listen; inbound frames are read to detect disconnects
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        broadcaster.disconnect(websocket)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": inpatient.name,
            "realtimeClients": broadcaster.connection_count,
        }
    )
