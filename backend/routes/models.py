"""Pydantic request models for API endpoints."""

from pydantic import BaseModel

from fractured.commands import Command


class CreateSession(BaseModel):
    name: str


class ChooseBody(BaseModel):
    choice_id: str


class DispatchBody(BaseModel):
    command: Command


class UpdateSettings(BaseModel):
    story_path: str | None = None
    auto_advance: bool | None = None
    time_scale: float | None = None
    resume_sessions: bool | None = None
