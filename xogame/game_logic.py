import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

DIMENSION = 3  # fixed 3x3 grid


class XOGameError(Exception):
    """base class for engine contract errors"""


class InvalidCoordinateError(XOGameError, ValueError):
    """coordinate outside the board"""


class InvalidSettingError(XOGameError, ValueError):
    """unknown mark or game mode"""


class Mark(Enum):
    X = "X"
    O = "O"

    def opposite(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X


class GameMode(Enum):
    SINGLE = "Single"      # human vs random computer
    MULTIPLE = "Multiple"  # two humans sharing the board


class Coord(NamedTuple):
    row: int
    col: int


@dataclass(frozen=True)
class Cell:
    coord: Coord
    mark: Optional[Mark] = None


class OutcomeKind(Enum):
    NONE = "none"
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"
    NEEDS_PLAYER_CHANGE = "need_change"


FINAL_KINDS = (OutcomeKind.WIN, OutcomeKind.LOSS, OutcomeKind.DRAW)


@dataclass(frozen=True)
class Outcome:
    """
    result of the last move; WIN/LOSS carry the mark and its line
    """
    kind: OutcomeKind = OutcomeKind.NONE
    mark: Optional[Mark] = None
    line: Tuple[Coord, ...] = ()

    @property
    def is_final(self) -> bool:
        return self.kind in FINAL_KINDS


NO_OUTCOME = Outcome()


def new_board() -> List[List[Cell]]:
    """
    fresh empty grid, nothing shared between calls
    """
    return [[Cell(Coord(r, c)) for c in range(DIMENSION)]
            for r in range(DIMENSION)]


def all_coords() -> List[Coord]:
    return [Coord(r, c) for r in range(DIMENSION) for c in range(DIMENSION)]


def to_mark(value) -> Mark:
    try:
        return Mark(value)
    except ValueError:
        raise InvalidSettingError(f"unknown mark: {value!r}") from None


def to_mode(value) -> GameMode:
    try:
        return GameMode(value)
    except ValueError:
        raise InvalidSettingError(f"unknown game mode: {value!r}") from None


class GameEngine:
    """
    tic-tac-toe rules and state

    Holds the board, the still-free cells, the outcome and whose reply is
    pending. Timing of the computer reply belongs to the caller: it waits
    for ``awaiting_computer_reply`` and then calls ``apply_computer_move``.
    ``generation`` changes on every reset so a caller can tell a reply it
    scheduled for an older game from a current one.
    """

    def __init__(self, mode=GameMode.SINGLE, human_mark=Mark.X, rng=None):
        self._mode = to_mode(mode)
        self._human_mark = to_mark(human_mark)
        self._rng = rng or random.Random()
        self.generation = 0
        self._new_game()

    def _new_game(self):
        # back to fresh state, never partially
        self._board = new_board()
        self._available = all_coords()
        self._outcome = NO_OUTCOME
        self._last_mover = None
        self._awaiting_reply = False

    # -------------------------------------------------------------------------
    # observables
    # -------------------------------------------------------------------------

    @property
    def board(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(tuple(row) for row in self._board)

    @property
    def available(self) -> Tuple[Coord, ...]:
        return tuple(self._available)

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def winning_line(self) -> Tuple[Coord, ...]:
        return self._outcome.line

    @property
    def awaiting_computer_reply(self) -> bool:
        return self._awaiting_reply

    @property
    def last_mover(self) -> Optional[Mark]:
        return self._last_mover

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def human_mark(self) -> Mark:
        return self._human_mark

    @property
    def computer_mark(self) -> Mark:
        return self._human_mark.opposite()

    @property
    def is_over(self) -> bool:
        return self._outcome.is_final

    def mark_at(self, coord) -> Optional[Mark]:
        r, c = self._check_coord(coord)
        return self._board[r][c].mark

    # -------------------------------------------------------------------------
    # operations
    # -------------------------------------------------------------------------

    def configure(self, mode, human_mark):
        """
        set mode and human mark; switching mode starts a new game
        """
        mode = to_mode(mode)
        self._human_mark = to_mark(human_mark)
        if mode is not self._mode:
            self._mode = mode
            self.reset()

    def change_player(self, mark):
        """
        the active player selector moved to ``mark``
        """
        self._human_mark = to_mark(mark)
        if (self._mode is GameMode.MULTIPLE
                and self._outcome.kind is OutcomeKind.NEEDS_PLAYER_CHANGE
                and self._human_mark is not self._last_mover):
            self._outcome = NO_OUTCOME

    def apply_move(self, coord, mark=None) -> bool:
        """
        place ``mark`` (default: the human mark) at ``coord``
        returns False when the move is ignored
        """
        coord = self._check_coord(coord)
        mark = self._human_mark if mark is None else to_mark(mark)
        if self._outcome.is_final:
            logger.debug("move %s by %s ignored: game over", coord, mark.value)
            return False
        if self._awaiting_reply:
            logger.debug("move %s by %s ignored: computer reply pending", coord, mark.value)
            return False
        if self._board[coord.row][coord.col].mark is not None:
            logger.debug("move %s by %s ignored: cell taken", coord, mark.value)
            return False
        self._place(coord, mark)
        if self._mode is GameMode.SINGLE and self._outcome.kind is OutcomeKind.NONE:
            self._awaiting_reply = True
        return True

    def apply_computer_move(self) -> Optional[Coord]:
        """
        play the computer's mark on a random free cell
        """
        if (self._mode is not GameMode.SINGLE or not self._awaiting_reply
                or self._outcome.is_final or not self._available):
            logger.warning("computer move requested out of turn, ignored")
            return None
        coord = Coord(*self._rng.choice(self._available))
        self._awaiting_reply = False
        self._place(coord, self.computer_mark)
        return coord

    def reset(self):
        self.generation += 1
        self._new_game()
        logger.debug("game reset (generation %d, %s mode)", self.generation, self._mode.value)

    # -------------------------------------------------------------------------
    # internals
    # -------------------------------------------------------------------------

    def _check_coord(self, coord) -> Coord:
        try:
            row, col = coord
        except (TypeError, ValueError):
            raise InvalidCoordinateError(f"not a (row, col) pair: {coord!r}") from None
        # bool is an int subclass but never a board index
        if not (type(row) is int and type(col) is int
                and 0 <= row < DIMENSION and 0 <= col < DIMENSION):
            raise InvalidCoordinateError(f"coordinate off the board: {coord!r}")
        return Coord(row, col)

    def _place(self, coord, mark):
        self._board[coord.row][coord.col] = Cell(coord, mark)
        self._available.remove(coord)
        line = self._find_winning_line(coord, mark)
        if line:
            kind = OutcomeKind.WIN if mark is self._human_mark else OutcomeKind.LOSS
            self._outcome = Outcome(kind, mark, line)
        elif not self._available:
            self._outcome = Outcome(OutcomeKind.DRAW)
        elif self._mode is GameMode.MULTIPLE and mark is self._last_mover:
            self._outcome = Outcome(OutcomeKind.NEEDS_PLAYER_CHANGE)
        else:
            self._outcome = NO_OUTCOME
        self._last_mover = mark
        logger.debug("%s -> %s, outcome %s\n%s", mark.value, tuple(coord),
                     self._outcome.kind.value, self)

    def _lines_through(self, x, y):
        # row, column, main diagonal, anti-diagonal
        n = DIMENSION
        yield self._board[x]
        yield [row[y] for row in self._board]
        yield [self._board[i][i] for i in range(n)]
        yield [self._board[i][n - 1 - i] for i in range(n)]

    def _find_winning_line(self, coord, mark) -> Tuple[Coord, ...]:
        for cells in self._lines_through(coord.row, coord.col):
            filled = tuple(cell.coord for cell in cells if cell.mark is mark)
            if len(filled) == DIMENSION:
                return filled
        return ()

    def __str__(self):
        return "\n".join(
            " ".join(cell.mark.value if cell.mark else "." for cell in row)
            for row in self._board
        )
