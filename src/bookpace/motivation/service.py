"""Motivational messages from the Gemini text-generation API.

The message is advisory only. Any failure falls back to a fixed message
and never touches the pacing numbers it was given.
"""

import logging
from typing import Optional

import requests

from ..library.schemas import BookRecord
from ..pacing.calculator import BookStats

log = logging.getLogger(__name__)

EMPTY_REPLY_MESSAGE = "Keep reading! You can do this."
FALLBACK_MESSAGE = "Keep going! You're making progress every day."


class MotivationError(Exception):
    """Base exception for text-generation API errors."""

    pass


def build_prompt(book: BookRecord, stats: BookStats) -> str:
    """Build the prompt text from a book and its stats."""
    return f"""
I am reading the book "{book.title or 'Unknown Title'}".
Here are my stats:
- Current Page: {book.current_page}
- Total Pages: {book.total_pages}
- Pages Remaining: {stats.pages_remaining}
- Days Remaining: {stats.days_remaining}
- Target Pace: {stats.pages_per_day} pages/day

Please provide a short, motivating, and witty response (max 3 sentences).
1. Acknowledge the pace (is it easy or intense?).
2. Give a specific reason to keep reading this genre/book (if title is known, be specific but NO SPOILERS).
3. End with an encouraging call to action.
""".strip()


def should_motivate(book: BookRecord, stats: BookStats) -> bool:
    """Only titled books with an active, non-overdue plan get a message."""
    return bool(book.title) and stats.pages_per_day > 0 and not stats.is_target_date_in_past


class MotivationClient:
    """Client for the Gemini generateContent endpoint."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-3-flash-preview",
        timeout: float = 10,
        temperature: float = 0.8,
    ):
        """Initialize client.

        Args:
            api_key: Gemini API key
            model: Model name
            timeout: Request timeout in seconds
            temperature: Sampling temperature
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        self._session = requests.Session()
        self._session.headers.update({
            "x-goog-api-key": api_key,
            "Content-Type": "application/json",
        })

    def generate(self, prompt: str) -> str:
        """Generate text for a prompt.

        Returns:
            The generated text, possibly empty

        Raises:
            MotivationError: On timeouts, HTTP errors or malformed replies
        """
        url = f"{self.BASE_URL}/models/{self.model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": self.temperature},
        }
        try:
            response = self._session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout:
            raise MotivationError("Request timed out")
        except requests.exceptions.HTTPError as e:
            raise MotivationError(f"HTTP error: {e.response.status_code}")
        except requests.exceptions.RequestException as e:
            raise MotivationError(f"Request failed: {e}")

        return self._extract_text(data)

    @staticmethod
    def _extract_text(data: dict) -> str:
        try:
            candidates = data.get("candidates") or []
            if not candidates:
                return ""
            if not isinstance(candidates, list):
                raise TypeError(f"candidates is a {type(candidates).__name__}")
            parts = candidates[0].get("content", {}).get("parts", [])
            return "".join(part.get("text", "") for part in parts).strip()
        except (AttributeError, KeyError, IndexError, TypeError) as e:
            raise MotivationError(f"Unexpected response shape: {e}")


def generate_motivation(
    book: BookRecord,
    stats: BookStats,
    client: Optional[MotivationClient] = None,
) -> str:
    """Get a motivational message for a book, never raising.

    Args:
        book: The book being read
        stats: Its current stats
        client: API client; without one the fallback message is returned

    Returns:
        Generated text, or a fixed fallback message
    """
    if client is None:
        return FALLBACK_MESSAGE

    try:
        text = client.generate(build_prompt(book, stats))
    except MotivationError as e:
        log.error("Motivation request failed: %s", e)
        return FALLBACK_MESSAGE

    return text or EMPTY_REPLY_MESSAGE
