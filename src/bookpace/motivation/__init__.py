"""AI-generated motivational messages."""

from .service import (
    EMPTY_REPLY_MESSAGE,
    FALLBACK_MESSAGE,
    MotivationClient,
    MotivationError,
    build_prompt,
    generate_motivation,
    should_motivate,
)

__all__ = [
    "EMPTY_REPLY_MESSAGE",
    "FALLBACK_MESSAGE",
    "MotivationClient",
    "MotivationError",
    "build_prompt",
    "generate_motivation",
    "should_motivate",
]
