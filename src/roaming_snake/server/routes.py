"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from roaming_snake.server.models import (
    DIRECTION_NAMES,
    CreateSessionRequest,
    DirectionRequest,
    SessionSummary,
)
from roaming_snake.server.session_manager import SessionManager

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new, not yet started session."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            grid_size=body.grid_size,
            canvas_width=body.canvas_width,
            food_move_interval=body.food_move_interval,
            tick_rate_ms=body.tick_rate_ms,
            score_multiplier=body.score_multiplier,
            seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List waiting and active sessions."""
    return _get_manager(request).list_sessions()


@router.get("/high-score")
async def high_score(request: Request) -> dict:
    """Best score reached by any finished game on this server."""
    return {"best_score": _get_manager(request).best_score}


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get the full session payload including the engine snapshot."""
    manager = _get_manager(request)
    session = manager.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return manager.payload(session)


@router.post("/{session_id}/start")
async def start_session(session_id: str, request: Request) -> dict:
    """Start a new game, or resume a paused one."""
    manager = _get_manager(request)
    try:
        session = manager.start_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return manager.payload(session)


@router.post("/{session_id}/pause")
async def pause_session(session_id: str, request: Request) -> dict:
    """Toggle pause."""
    manager = _get_manager(request)
    try:
        session = manager.pause_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return manager.payload(session)


@router.post("/{session_id}/restart")
async def restart_session(session_id: str, request: Request) -> dict:
    """Discard the current board and start over."""
    manager = _get_manager(request)
    try:
        session = manager.restart_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return manager.payload(session)


@router.post("/{session_id}/direction")
async def queue_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> dict:
    """Queue a turn for an upcoming tick."""
    try:
        queued = _get_manager(request).queue_direction(
            session_id, DIRECTION_NAMES[body.direction],
        )
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"queued": queued}
