"""
Exceptions shared across layers.

* Contract violations (out-of-range coordinates) are bugs in the caller and propagate.
* Rule violations are raised inside the domain layer, but the Game's public actions catch them and turn them into a status message.
* Collaborator failures (commentary) are absorbed at the collaborator boundary.
"""


class GameError(Exception):
    """Base class for everything this application raises on purpose."""


# --- CONTRACT VIOLATIONS ---
class OutOfRangeError(GameError, IndexError):
    """Coordinates outside the board."""


# --- RULE VIOLATIONS ---
class RuleViolationError(GameError):
    """A move or selection that the rules do not allow. Always recoverable."""


class NotYourPieceError(RuleViolationError):
    pass


class NoLegalMovesError(RuleViolationError):
    pass


class InvalidDestinationError(RuleViolationError):
    pass


class NotYourTurnError(RuleViolationError):
    pass


class GameOverError(RuleViolationError):
    pass


class CaptureChainError(RuleViolationError):
    """The piece that just captured must keep capturing."""


# --- COLLABORATORS / INFRASTRUCTURE ---
class CommentaryError(GameError):
    """The text generation service failed or answered with something unusable."""


class RepositoryError(GameError):
    pass


class ConfigError(GameError):
    pass


class GameStateError(GameError):
    """A game cannot be set up the way it was requested."""
