"""
Type definitions used across layers
"""

from enum import StrEnum

# --- The domain layer works with src/checkers/pieces.py Side (which includes an option for empty squares).
# --- Outside of it, sides travel as these string enums.


class SideName(StrEnum):
    X = "x"
    O = "o"  # noqa: E741


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    X_WINS = "x wins"
    O_WINS = "o wins"
