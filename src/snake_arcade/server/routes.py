"""REST API route handlers for session lifecycle and control."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from snake_arcade.control import parse_signal
from snake_arcade.server.models import (
    BestScoreResponse,
    CreateSessionRequest,
    ErrorResponse,
    SessionSummary,
    SignalRequest,
    SignalResponse,
)
from snake_arcade.server.registry import SessionHandle, SessionRegistry

router = APIRouter(prefix="/sessions", tags=["sessions"])
scores_router = APIRouter(prefix="/scores", tags=["scores"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


def _get_registry(request: Request) -> SessionRegistry:
    return request.app.state.registry


def _summary(handle: SessionHandle) -> SessionSummary:
    session = handle.session
    return SessionSummary(
        session_id=handle.session_id,
        mode=session.mode,
        difficulty=session.difficulty,
        tick_period_ms=session.tick_period_ms,
        score=session.score,
        best_score=session.best_score,
    )


def _require(registry: SessionRegistry, session_id: str) -> SessionHandle:
    try:
        return registry.require(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create an idle game session."""
    registry = _get_registry(request)
    try:
        handle = registry.create_session(
            difficulty=body.difficulty,
            hazards_enabled=body.hazards_enabled,
            implicit_start=body.implicit_start,
            seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _summary(handle)


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    return [_summary(h) for h in _get_registry(request).list_sessions()]


@router.get("/{session_id}", responses=_NOT_FOUND)
async def get_session(session_id: str, request: Request) -> dict:
    """Session summary plus the current frame and full state."""
    handle = _require(_get_registry(request), session_id)
    result = _summary(handle).model_dump(mode="json")
    result["frame"] = handle.session.frame().to_dict()
    result["state"] = handle.session.state.to_dict()
    return result


@router.post("/{session_id}/signals", responses=_NOT_FOUND)
async def send_signal(
    session_id: str, body: SignalRequest, request: Request,
) -> SignalResponse:
    """Apply one control signal. Illegal transitions report applied=False."""
    handle = _require(_get_registry(request), session_id)
    signal = parse_signal(body.raw)
    if signal is None:
        raise HTTPException(status_code=422, detail=f"Unknown signal {body.raw!r}.")
    applied = handle.session.handle(signal)
    return SignalResponse(
        session_id=session_id,
        signal=signal.value,
        applied=applied,
        mode=handle.session.mode,
    )


@router.delete("/{session_id}", status_code=204, responses=_NOT_FOUND)
async def close_session(session_id: str, request: Request) -> None:
    try:
        _get_registry(request).close_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@scores_router.get("/best")
async def best_score(request: Request) -> BestScoreResponse:
    return BestScoreResponse(best_score=_get_registry(request).scores.best)
