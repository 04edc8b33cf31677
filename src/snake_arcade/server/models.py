"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from snake_arcade.config import Difficulty
from snake_arcade.state import RunMode


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    difficulty: Difficulty | None = None
    hazards_enabled: bool | None = None
    implicit_start: bool | None = None
    seed: int | None = Field(default=None, ge=0)


class SignalRequest(BaseModel):
    """A control input, either by signal name or by browser key name."""

    signal: str | None = Field(default=None, min_length=1, max_length=16)
    key: str | None = Field(default=None, min_length=1, max_length=16)

    @model_validator(mode="after")
    def _exactly_one(self) -> SignalRequest:
        if (self.signal is None) == (self.key is None):
            raise ValueError("Provide exactly one of 'signal' or 'key'.")
        return self

    @property
    def raw(self) -> str:
        return self.signal if self.signal is not None else self.key  # type: ignore[return-value]


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    mode: RunMode
    difficulty: Difficulty
    tick_period_ms: int
    score: int
    best_score: int


class SignalResponse(BaseModel):
    session_id: str
    signal: str
    applied: bool
    mode: RunMode


class BestScoreResponse(BaseModel):
    best_score: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
