"""Trainer settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TrainerSettings:
    """All user-configurable settings."""

    # General
    language: str = "English"

    # Timing (milliseconds)
    opponent_delay_ms: int = 800
    thinking_notice_ms: int = 500  # "thinking" text while the reply is pending
    feedback_clear_ms: int = 3000
    notice_clear_ms: int = 1000

    # Rules
    strict_double_step: bool = True

    # Training
    max_undo_depth: int = 32

    def __post_init__(self) -> None:
        for name in (
            "opponent_delay_ms",
            "thinking_notice_ms",
            "feedback_clear_ms",
            "notice_clear_ms",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.max_undo_depth < 1:
            raise ValueError("max_undo_depth must be at least 1")
