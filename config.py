from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class GameConfig(BaseModel):
    interface: Literal["console", "pygame"] = "console"
    clear_screen: bool = True
    show_hints: bool = Field(default=True, description="List the legal moves before each prompt.")
    square_size: int = Field(default=80, ge=40, le=160)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level '{value}'.")
        return level
