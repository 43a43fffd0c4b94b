"""
Elementos de escena de Octeto.

Define subclases de QGraphicsItem para átomos, enlaces y la línea de
previsualización de enlace. Los items solo reflejan el modelo y el estado
de interacción; nunca modifican el grafo.
"""
from __future__ import annotations

import math
from typing import Optional

from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsLineItem,
    QGraphicsPathItem,
    QGraphicsSimpleTextItem,
)
from PyQt6.QtGui import QBrush, QColor, QFont, QPainterPath, QPen
from PyQt6.QtCore import Qt

from chemcalc.stability import AtomStability
from core.model import Atom, Bond
from gui.geom import offset_segment, parallel_offsets, trim_segment
from gui.style import DrawingStyle, OCTETO_DARK, element_color, label_color


def _superscript_charge(charge: int) -> str:
    if charge == 0:
        return ""
    sign = "+" if charge > 0 else "−"
    magnitude = abs(charge)
    return sign if magnitude == 1 else f"{magnitude}{sign}"


class AtomItem(QGraphicsEllipseItem):
    """Elemento gráfico que representa un átomo."""

    def __init__(self, atom: Atom, style: DrawingStyle = OCTETO_DARK, parent=None) -> None:
        """Inicializa el disco del átomo, su etiqueta y sus indicadores.

        Args:
            atom: Átomo del modelo asociado.
            style: Estilo de dibujo aplicado.
            parent: Item padre (la hoja del lienzo).
        """
        super().__init__(parent)
        self.atom_id = atom.id
        self.element = ""
        self._style = style
        self._is_selected = False
        self._is_hover = False
        self.setZValue(2)
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)

        # Resplandor de átomos inestables (parpadea con la fase de animación).
        self.glow = QGraphicsEllipseItem(self)
        self.glow.setFlag(QGraphicsItem.GraphicsItemFlag.ItemStacksBehindParent)
        self.glow.setPen(QPen(Qt.PenStyle.NoPen))
        self.glow.setVisible(False)

        self.label = QGraphicsSimpleTextItem("", self)
        self.label.setFont(QFont("Arial", 11, QFont.Weight.Bold))

        badge_font = QFont("Arial", 8, QFont.Weight.Bold)
        self.charge_label = QGraphicsSimpleTextItem("", self)
        self.charge_label.setFont(badge_font)
        self.need_label = QGraphicsSimpleTextItem("", self)
        self.need_label.setFont(badge_font)
        self.need_label.setBrush(QBrush(QColor(style.electron_need_color)))

        self.set_element(atom.element)
        self.set_position(atom.x, atom.y)
        self._apply_outline()

    def set_position(self, x: float, y: float) -> None:
        self.setPos(x, y)

    def set_element(self, element: str) -> None:
        if element == self.element:
            return
        self.element = element
        self.setBrush(QBrush(QColor(element_color(element))))
        self.label.setText(element)
        self.label.setBrush(QBrush(QColor(label_color(element))))
        rect = self.label.boundingRect()
        self.label.setPos(-rect.width() / 2.0, -rect.height() / 2.0)

    def set_stability(self, stability: Optional[AtomStability]) -> None:
        """Muestra la carga formal y los electrones que faltan."""
        charge = stability.formal_charge if stability is not None else 0
        needs = stability.needs_electrons if stability is not None else 0
        radius = self._style.atom_radius_px

        self.charge_label.setText(_superscript_charge(charge))
        color = self._style.charge_positive_color if charge > 0 else self._style.charge_negative_color
        self.charge_label.setBrush(QBrush(QColor(color)))
        self.charge_label.setPos(radius * 0.6, -radius * 1.2)

        self.need_label.setText(f"{needs}e⁻" if needs > 0 else "")
        rect = self.need_label.boundingRect()
        self.need_label.setPos(-rect.width() / 2.0, radius + 2)

    def set_selected(self, selected: bool) -> None:
        if selected != self._is_selected:
            self._is_selected = selected
            self._apply_outline()

    def set_hover(self, hover: bool) -> None:
        if hover != self._is_hover:
            self._is_hover = hover
            self._apply_outline()

    def set_blink(self, phase: Optional[float]) -> None:
        """Actualiza el resplandor; `None` lo oculta."""
        if phase is None:
            self.glow.setVisible(False)
            return
        pulse = (math.sin(phase) + 1.0) / 2.0
        size = self._style.glow_min_px + (self._style.glow_max_px - self._style.glow_min_px) * pulse
        glow_color = QColor(self._style.electron_need_color)
        glow_color.setAlphaF(0.25 + 0.35 * pulse)
        self.glow.setRect(-size, -size, size * 2, size * 2)
        self.glow.setBrush(QBrush(glow_color))
        self.glow.setVisible(True)

    def _apply_outline(self) -> None:
        emphasized = self._is_selected or self._is_hover
        radius = self._style.atom_radius_selected_px if emphasized else self._style.atom_radius_px
        self.setRect(-radius, -radius, radius * 2, radius * 2)
        if self._is_selected:
            pen = QPen(QColor(self._style.selected_color), 3)
        elif self._is_hover:
            pen = QPen(QColor(self._style.hover_color), 2)
        else:
            pen = QPen(QColor("#000000"), 1)
        self.setPen(pen)


class BondItem(QGraphicsPathItem):
    """Elemento gráfico que representa un enlace químico."""

    def __init__(
        self,
        bond: Bond,
        atom1: Atom,
        atom2: Atom,
        style: DrawingStyle = OCTETO_DARK,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.bond_id = bond.id
        self.a1_id = bond.a1_id
        self.a2_id = bond.a2_id
        self.order = bond.order
        self._style = style
        self._is_selected = False
        self._violation = False
        self.setZValue(1)
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setBrush(QBrush(Qt.BrushStyle.NoBrush))
        self._apply_pen()
        self.update_positions(atom1, atom2, bond.order)

    def update_positions(self, atom1: Atom, atom2: Atom, order: Optional[int] = None) -> None:
        """Reconstruye las líneas paralelas del enlace entre ambos átomos."""
        if order is not None:
            self.order = order
        start, end = trim_segment(
            atom1.position,
            atom2.position,
            self._style.atom_radius_px,
            self._style.atom_radius_px,
        )
        path = QPainterPath()
        for offset in parallel_offsets(self.order, self._style.parallel_offset_px):
            (x1, y1), (x2, y2) = offset_segment(start, end, offset)
            path.moveTo(x1, y1)
            path.lineTo(x2, y2)
        self.setPath(path)

    def set_selected(self, selected: bool) -> None:
        if selected != self._is_selected:
            self._is_selected = selected
            self._apply_pen()

    def set_violation(self, violation: bool) -> None:
        if violation != self._violation:
            self._violation = violation
            self._apply_pen()

    def _apply_pen(self) -> None:
        if self._is_selected:
            pen = QPen(QColor(self._style.bond_selected_color), self._style.bond_stroke_selected_px)
        elif self._violation:
            pen = QPen(QColor(self._style.bond_violation_color), self._style.bond_stroke_px)
            pen.setStyle(Qt.PenStyle.DashLine)
        else:
            pen = QPen(QColor(self._style.bond_color), self._style.bond_stroke_px)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        self.setPen(pen)


class ConnectionLineItem(QGraphicsLineItem):
    """Línea discontinua que previsualiza el enlace en construcción."""

    def __init__(self, style: DrawingStyle = OCTETO_DARK, parent=None) -> None:
        super().__init__(parent)
        pen = QPen(QColor(style.connection_color), 2)
        pen.setStyle(Qt.PenStyle.DashLine)
        self.setPen(pen)
        self.setZValue(3)
        self.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self.setVisible(False)

    def show_line(self, line) -> None:
        if line is None:
            self.setVisible(False)
            return
        self.setLine(*line)
        self.setVisible(True)
