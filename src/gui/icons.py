"""
Octeto Icon Library
Generate palette icons programmatically using QPainter.
"""
from PyQt6.QtGui import QIcon, QPixmap, QPainter, QColor, QPen, QFont, QBrush
from PyQt6.QtCore import Qt, QRectF

from gui.geom import offset_segment, parallel_offsets
from gui.style import element_color, label_color


# Standard icon size
ICON_SIZE = 32


def draw_atom_icon(element: str) -> QIcon:
    """
    Draw a filled atom disc with its element symbol.
    """
    pixmap = QPixmap(ICON_SIZE, ICON_SIZE)
    pixmap.fill(Qt.GlobalColor.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)

    margin = 2
    rect = QRectF(margin, margin, ICON_SIZE - 2 * margin, ICON_SIZE - 2 * margin)
    painter.setPen(QPen(QColor("#333333"), 1))
    painter.setBrush(QBrush(QColor(element_color(element))))
    painter.drawEllipse(rect)

    font_size = 13 if len(element) == 1 else 10
    painter.setFont(QFont("Arial", font_size, QFont.Weight.Bold))
    painter.setPen(QColor(label_color(element)))
    painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, element)

    painter.end()
    return QIcon(pixmap)


def draw_bond_icon(order: int = 1) -> QIcon:
    """
    Draw a diagonal bond icon with one, two or three parallel lines.
    """
    pixmap = QPixmap(ICON_SIZE, ICON_SIZE)
    pixmap.fill(Qt.GlobalColor.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)

    margin = 6
    start = (margin, ICON_SIZE - margin)
    end = (ICON_SIZE - margin, margin)
    painter.setPen(QPen(QColor("#333333"), 3 if order == 1 else 2))
    for offset in parallel_offsets(order, 6.0):
        (x1, y1), (x2, y2) = offset_segment(start, end, offset)
        painter.drawLine(int(x1), int(y1), int(x2), int(y2))

    painter.end()
    return QIcon(pixmap)
