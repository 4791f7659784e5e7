"""
Trash talk from a local text generation service.

The service is a black box: a summary of the game goes in, a line of text comes out.
Whatever goes wrong on the way (connection refused, timeout, garbage answer) ends up as one of the canned lines instead.
"""

import logging
import random
from typing import Optional

import httpx

from src.commentary.models import GenerateRequest, GenerateResponse
from src.core.config import Settings
from src.core.exceptions import CommentaryError
from src.core.models import GameSummary

logger = logging.getLogger(__name__)

GENERATE_ENDPOINT = "/api/generate"
MAX_COMMENTARY_LENGTH = 200

FALLBACK_LINES: list[str] = [
    "Is that really your best move?",
    "I've seen better strategy from a pigeon.",
    "Keep going, this is fun to watch.",
    "Bold move. Let's see how it works out for you.",
    "You call that checkers?",
]


def build_prompt(summary: GameSummary) -> str:
    """Describe the game in a couple of sentences and ask for a single short jab."""
    pieces = ", ".join(
        f"{side.upper()} has {count} piece(s)"
        for side, count in sorted(summary.pieces_left.items())
    )
    lines = [
        "You are a cocky checkers player who loves to trash talk.",
        f"It is round {summary.round_number}. {pieces}.",
    ]
    if summary.last_move:
        lines.append(f"The last move was {summary.last_move}.")
    if summary.winner:
        lines.append(f"The game is over: {summary.winner.upper()} won.")
    else:
        lines.append(f"Player {summary.side_to_move.upper()} is about to move.")
    if summary.ai_side:
        lines.append(
            f"You are playing {summary.ai_side.upper()} against a human opponent."
        )
    lines.append("Reply with one short, playful sentence of trash talk and nothing else.")
    return " ".join(lines)


class CommentaryClient:
    """Talks to the text generation service over HTTP."""

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.Client] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings
        self.http = http_client or httpx.Client(
            base_url=settings.commentary_url, timeout=settings.commentary_timeout
        )
        self.rng = rng or random.Random()

    def request_commentary(self, summary: GameSummary) -> str:
        """Single round trip to the service. Raises CommentaryError on any failure."""
        payload = GenerateRequest(
            model=self.settings.commentary_model, prompt=build_prompt(summary)
        )
        try:
            response = self.http.post(GENERATE_ENDPOINT, json=payload.model_dump())
            response.raise_for_status()
            body = GenerateResponse.model_validate(response.json())
        except httpx.HTTPError as error:
            raise CommentaryError(f"Commentary request failed: {error}") from error
        except ValueError as error:
            # covers both undecodable JSON and a payload that does not validate
            raise CommentaryError(f"Unusable commentary response: {error}") from error

        if not body.response:
            raise CommentaryError("Commentary service answered with an empty text.")
        return body.response[:MAX_COMMENTARY_LENGTH]

    def fetch_commentary(self, summary: GameSummary) -> str:
        """Never fails: falls back to a canned line."""
        try:
            return self.request_commentary(summary)
        except CommentaryError as error:
            logger.warning("%s Using a canned line instead.", error)
            return self.fallback()

    def fallback(self) -> str:
        return self.rng.choice(FALLBACK_LINES)

    def close(self) -> None:
        self.http.close()
