from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import QSize, Signal, QPointF, QRectF
from PySide6.QtGui import QPainter, QColor, QPen

from ..game_logic import DIMENSION, Mark, OutcomeKind

X_COLOR = QColor("#8acaff")
O_COLOR = QColor("#ff8a8a")
WIN_FILL = QColor(50, 205, 50, 90)
LOSS_FILL = QColor(255, 80, 80, 90)
DRAW_FILL = QColor(160, 160, 160, 60)


class BoardWidget(QWidget):
    """
    custom widget to draw and click on tic-tac-toe board
    """
    cell_clicked = Signal(int, int)  # emits row, col on click

    def __init__(self, engine, parent=None):
        super().__init__(parent)
        self.engine = engine            # read-only view of game state
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        self._accept_clicks = True      # toggle click handling

    def set_accept_clicks(self, accept):
        # enable/disable user input
        self._accept_clicks = accept

    def accepts_clicks(self):
        return self._accept_clicks

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _geometry(self):
        # square board centered in the widget
        w, h = self.width(), self.height()
        side = min(w, h)
        return (w - side) / 2, (h - side) / 2, side

    def cell_at(self, x, y):
        """
        map widget coords to (row, col), None outside the grid
        """
        ox, oy, side = self._geometry()
        if side <= 0 or not (ox <= x < ox + side and oy <= y < oy + side):
            return None
        cell = side / DIMENSION
        row = int((y - oy) // cell); col = int((x - ox) // cell)
        # clamp to valid range
        return max(0, min(row, DIMENSION - 1)), max(0, min(col, DIMENSION - 1))

    def _cell_fill(self, coord):
        outcome = self.engine.outcome
        if coord in outcome.line:
            return WIN_FILL if outcome.kind is OutcomeKind.WIN else LOSS_FILL
        if outcome.kind is OutcomeKind.DRAW:
            return DRAW_FILL
        return None

    def paintEvent(self, event):
        """
        draw grid, X/O marks, and highlight the result
        """
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            ox, oy, side = self._geometry()
            # background
            painter.fillRect(self.rect(), QColor("#333"))
            cell_size = side / DIMENSION
            # winning line / draw tint under the marks
            for row in self.engine.board:
                for cell in row:
                    fill = self._cell_fill(cell.coord)
                    if fill is None: continue
                    r, c = cell.coord
                    painter.fillRect(QRectF(ox + c*cell_size, oy + r*cell_size,
                                            cell_size, cell_size), fill)
            # grid lines
            painter.setPen(QPen(QColor("#555"), 2))
            for i in range(1, DIMENSION):
                x = ox + i*cell_size
                painter.drawLine(int(x), int(oy), int(x), int(oy+side))
                y = oy + i*cell_size
                painter.drawLine(int(ox), int(y), int(ox+side), int(y))
            # draw marks
            for row in self.engine.board:
                for cell in row:
                    if cell.mark is None: continue
                    r, c = cell.coord
                    cx = ox + c*cell_size + cell_size/2
                    cy = oy + r*cell_size + cell_size/2
                    rad = cell_size/2 * 0.7
                    if cell.mark is Mark.X:
                        painter.setPen(QPen(X_COLOR, 4))
                        # two crossing lines
                        painter.drawLine(QPointF(cx-rad, cy-rad), QPointF(cx+rad, cy+rad))
                        painter.drawLine(QPointF(cx+rad, cy-rad), QPointF(cx-rad, cy+rad))
                    else:
                        painter.setPen(QPen(O_COLOR, 4))
                        painter.drawEllipse(QPointF(cx, cy), rad, rad)
        finally:
            painter.end()

    def mouseReleaseEvent(self, event):
        """
        handle clicks: map coords to board cell and emit
        """
        if not self._accept_clicks:
            return
        pos = event.position()
        hit = self.cell_at(pos.x(), pos.y())
        if hit is None:
            return
        self.cell_clicked.emit(*hit)  # notify main window
