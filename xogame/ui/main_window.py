import logging

from ..config import MSG_DRAW, MSG_LOSS, MSG_NEED_CHANGE, MSG_WIN
from ..game_logic import GameMode, Mark, OutcomeKind
from ..session import GameSession
from ..ui.board_widget import BoardWidget

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QComboBox, QSizePolicy
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, Slot

logger = logging.getLogger(__name__)

# outcome -> (message, style flags)
RESULT_MESSAGES = {
    OutcomeKind.WIN: (MSG_WIN, {"is_success": True}),
    OutcomeKind.LOSS: (MSG_LOSS, {"is_error": True}),
    OutcomeKind.DRAW: (MSG_DRAW, {}),
    OutcomeKind.NEEDS_PLAYER_CHANGE: (MSG_NEED_CHANGE, {"is_turn": True}),
}


class TicTacToeWindow(QMainWindow):
    """
    main window UI and game flow
    """
    def __init__(self, settings=None, rng=None):
        """
        init session, ui widgets, signals
        """
        super().__init__()
        self.session = GameSession(settings, rng=rng, parent=self)
        self.board_widget = BoardWidget(self.session.engine, parent=self)
        self._computer_thinking = False

        self._setup_ui()
        self.session.board_changed.connect(self.board_widget.update)
        self.session.outcome_changed.connect(self._on_outcome_changed)
        self.session.computer_thinking.connect(self._on_computer_thinking)
        self._on_outcome_changed(self.session.engine.outcome)

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Tic-Tac-Toe")
        self.setStyleSheet("""
            QMainWindow { background-color: #222; }
            QLabel { color: #eee; }
            QPushButton, QComboBox { padding: 4px 10px; }
        """)
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)

        self._create_menu_bar()            # top menu
        self._create_header()              # mode/player select + reset
        self.main_layout.addWidget(self.header_widget)
        self.main_layout.addWidget(self.board_widget, 1)
        self.board_widget.cell_clicked.connect(self._on_cell_clicked)

        self.message_label = QLabel("")
        f = QFont(); f.setPointSize(12); self.message_label.setFont(f)
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.message_label.setWordWrap(True)
        self.main_layout.addWidget(self.message_label)

    def _create_menu_bar(self):
        '''game menu actions'''
        game_menu = self.menuBar().addMenu("Game")
        new_action = QAction("New Game", self)
        new_action.triggered.connect(self.reset_game)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        game_menu.addAction(new_action)
        game_menu.addSeparator(); game_menu.addAction(quit_action)

    def _create_header(self):
        '''mode + player selectors and reset button'''
        self.header_widget = QWidget()
        hl = QHBoxLayout(self.header_widget)
        engine = self.session.engine
        self.mode_select = QComboBox()
        self.mode_select.addItems([m.value for m in GameMode])
        self.mode_select.setCurrentText(engine.mode.value)
        self.mode_select.currentTextChanged.connect(self._on_mode_selected)
        self.player_select = QComboBox()
        self.player_select.addItems([m.value for m in Mark])
        self.player_select.setCurrentText(engine.human_mark.value)
        self.player_select.currentTextChanged.connect(self._on_player_selected)
        self.reset_button = QPushButton("Reset"); self.reset_button.clicked.connect(self.reset_game)
        for w in (self.mode_select, self.player_select, None, self.reset_button):
            if w: hl.addWidget(w)
            else: hl.addStretch(1)

    @Slot(str)
    def _update_message(self, text, is_error=False,
                        is_success=False, is_turn=False):
        # set message text + style
        style = "color: #eee;"
        if is_error:   style = "color: #ff8a8a; font-weight: bold;"
        elif is_success: style = "color: lime; font-weight: bold;"
        elif is_turn:    style = "color: #8acaff; font-weight: bold;"
        self.message_label.setStyleSheet(style)
        self.message_label.setText(text)

    def _refresh_input(self):
        # board locked while a result is shown or the computer is thinking
        locked = (self.session.engine.outcome.kind is not OutcomeKind.NONE
                  or self._computer_thinking)
        self.board_widget.set_accept_clicks(not locked)

    @Slot(object)
    def _on_outcome_changed(self, outcome):
        text, flags = RESULT_MESSAGES.get(outcome.kind, ("", {}))
        if text:
            logger.info("result: %s", outcome.kind.value)
        self._update_message(text, **flags)
        self._refresh_input()
        self.board_widget.update()

    @Slot(bool)
    def _on_computer_thinking(self, thinking):
        self._computer_thinking = thinking
        self._refresh_input()

    @Slot(int, int)
    def _on_cell_clicked(self, r, c):
        self.session.play(r, c)

    @Slot(str)
    def _on_mode_selected(self, text):
        logger.info("mode changed to %s", text)
        self.session.set_mode(text)

    @Slot(str)
    def _on_player_selected(self, text):
        logger.info("player changed to %s", text)
        self.session.set_player(text)

    @Slot()
    def reset_game(self):
        # fresh board, same mode and player
        self.session.reset()
