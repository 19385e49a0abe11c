import logging

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from .config import GameSettings
from .game_logic import Coord, GameEngine, to_mode

logger = logging.getLogger(__name__)


class GameSession(QObject):
    """
    qt owner of one engine plus the delayed computer reply
    """
    board_changed = Signal()
    outcome_changed = Signal(object)    # Outcome
    computer_thinking = Signal(bool)

    def __init__(self, settings=None, rng=None, parent=None):
        """
        init engine and the single-shot reply timer
        """
        super().__init__(parent)
        self.settings = settings or GameSettings()
        self.engine = GameEngine(self.settings.mode, self.settings.human_mark, rng=rng)
        # at most one pending reply; restarting replaces it
        self._reply_timer = QTimer(self)
        self._reply_timer.setSingleShot(True)
        self._reply_timer.setInterval(self.settings.computer_delay_ms)
        self._reply_timer.timeout.connect(self._on_reply_timeout)
        self._reply_generation = None

    def is_reply_pending(self) -> bool:
        return self._reply_timer.isActive()

    @Slot(int, int)
    def play(self, row, col) -> bool:
        """
        human clicked a cell; returns True if the move counted
        """
        if self.is_reply_pending():
            logger.debug("click on (%d, %d) ignored while computer is thinking", row, col)
            return False
        before = self.engine.outcome
        if not self.engine.apply_move(Coord(row, col)):
            return False
        self.board_changed.emit()
        if self.engine.outcome != before:
            self.outcome_changed.emit(self.engine.outcome)
        if self.engine.awaiting_computer_reply:
            self._schedule_reply()
        return True

    def _schedule_reply(self):
        self._reply_generation = self.engine.generation
        self._reply_timer.start()
        logger.debug("computer reply scheduled in %d ms", self._reply_timer.interval())
        self.computer_thinking.emit(True)

    @Slot()
    def _on_reply_timeout(self):
        # stale reply from a game that was reset meanwhile
        if self._reply_generation != self.engine.generation:
            logger.debug("dropping stale computer reply")
            return
        self._reply_generation = None
        coord = self.engine.apply_computer_move()
        self.computer_thinking.emit(False)
        if coord is None:
            return
        self.board_changed.emit()
        self.outcome_changed.emit(self.engine.outcome)

    def _cancel_reply(self):
        if self._reply_timer.isActive():
            logger.debug("pending computer reply cancelled")
            self._reply_timer.stop()
            self.computer_thinking.emit(False)
        self._reply_generation = None

    @Slot()
    def reset(self):
        """
        new game, same mode and player
        """
        self._cancel_reply()
        self.engine.reset()
        self.board_changed.emit()
        self.outcome_changed.emit(self.engine.outcome)

    @Slot(str)
    def set_mode(self, mode):
        # the mode selector always starts a fresh game
        mode = to_mode(mode)
        self._cancel_reply()
        previous = self.engine.mode
        self.engine.configure(mode, self.engine.human_mark)
        if self.engine.mode is previous:
            self.engine.reset()
        self.board_changed.emit()
        self.outcome_changed.emit(self.engine.outcome)

    @Slot(str)
    def set_player(self, mark):
        before = self.engine.outcome
        self.engine.change_player(mark)
        if self.engine.outcome != before:
            self.outcome_changed.emit(self.engine.outcome)
