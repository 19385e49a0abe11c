import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from PySide6.QtGui import QPalette, QColor

from xogame.config import COMPUTER_DELAY_MS, GameSettings
from xogame.game_logic import GameMode, Mark
from xogame.ui.main_window import TicTacToeWindow

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# -----------------------------------------------------------------------------
# PALETTE
# -----------------------------------------------------------------------------

DARK_PALETTE = {
    QPalette.Window: QColor(53, 53, 53),
    QPalette.WindowText: Qt.white,
    QPalette.Base: QColor(35, 35, 35),
    QPalette.Text: Qt.white,
    QPalette.Button: QColor(66, 66, 66),
    QPalette.ButtonText: Qt.white,
    QPalette.Highlight: QColor(42, 130, 218),
    QPalette.HighlightedText: Qt.white,
}
DISABLED_COLOR = QColor(127, 127, 127)


def apply_default_palette(app: QApplication):
    """
    Apply the dark theme palette.
    """
    palette = QPalette()
    for role, color in DARK_PALETTE.items():
        palette.setColor(role, color)
    for role in (QPalette.Text, QPalette.ButtonText, QPalette.WindowText):
        palette.setColor(QPalette.Disabled, role, DISABLED_COLOR)
    app.setPalette(palette)

# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------


def parse_args(argv):
    """
    split our options from the ones Qt understands
    """
    parser = argparse.ArgumentParser(description="Tic-Tac-Toe")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in GameMode],
        default=GameMode.SINGLE.value,
        help="Single plays against the computer, Multiple is two players"
    )
    parser.add_argument(
        "--player",
        choices=[m.value for m in Mark],
        default=Mark.X.value,
        help="Your mark"
    )
    parser.add_argument(
        "--delay",
        type=int,
        default=COMPUTER_DELAY_MS,
        help="Milliseconds before the computer answers"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging"
    )
    return parser.parse_known_args(argv)


def main(argv=None):
    """Main entry point."""
    args, qt_args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format=LOG_FORMAT)
    settings = GameSettings(GameMode(args.mode), Mark(args.player), args.delay)

    app = QApplication([sys.argv[0]] + qt_args)
    app.setStyle('Fusion')
    apply_default_palette(app)

    window = TicTacToeWindow(settings)
    window.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
