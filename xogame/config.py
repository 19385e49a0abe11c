from dataclasses import dataclass

from .game_logic import GameMode, Mark

# -----------------------------------------------------------------------------
# GAME CONSTANTS
# -----------------------------------------------------------------------------

COMPUTER_DELAY_MS = 300     # pause before the computer answers

# -----------------------------------------------------------------------------
# RESULT MESSAGES
# -----------------------------------------------------------------------------

MSG_WIN = "Congrats! You won!"
MSG_LOSS = "Sorry, you've lost :("
MSG_DRAW = "Draw ¯\\_(ツ)_/¯"
MSG_NEED_CHANGE = "Please choose another player"


@dataclass(frozen=True)
class GameSettings:
    """
    startup choices for a play session
    """
    mode: GameMode = GameMode.SINGLE
    human_mark: Mark = Mark.X
    computer_delay_ms: int = COMPUTER_DELAY_MS

    def __post_init__(self):
        if self.computer_delay_ms < 0:
            raise ValueError(f"computer delay must be >= 0, got {self.computer_delay_ms}")
