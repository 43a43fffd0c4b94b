"""
Octeto Canvas
Fixed-size drawing sheet using QGraphicsView/QGraphicsScene.

Mouse and key events are translated into InteractionController calls; a
frame timer repaints the transient state (hover, selection, preview line,
blinking unstable atoms, shake) without ever touching the graph.
"""
from __future__ import annotations

import random
import time
from typing import Callable, Dict, Optional

from PyQt6.QtWidgets import (
    QApplication,
    QGraphicsPathItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsView,
)
from PyQt6.QtGui import QBrush, QColor, QKeySequence, QPainter, QPainterPath, QPen
from PyQt6.QtCore import QEvent, QObject, Qt, QTimer

from chemcalc.stability import ValidationResult
from gui.document import MoleculeDocument
from gui.interaction import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    InteractionConfig,
    InteractionController,
    PointerButton,
)
from gui.items import AtomItem, BondItem, ConnectionLineItem
from gui.style import DrawingStyle, OCTETO_DARK

FRAME_INTERVAL_MS = 16
SCENE_MARGIN = 40


class MoleculeCanvas(QGraphicsView):
    """
    Drawing surface for the molecule builder.
    Owns the interaction controller and the scene items mirroring the graph.
    """

    def __init__(
        self,
        document: MoleculeDocument,
        parent=None,
        style: DrawingStyle = OCTETO_DARK,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(parent)
        self.document = document
        self._style = style
        self._clock = clock
        self._shake_until = 0.0

        self.scene = QGraphicsScene()
        self.setScene(self.scene)

        self.controller = InteractionController(
            document.graph,
            document.state,
            InteractionConfig(width=DEFAULT_CANVAS_WIDTH, height=DEFAULT_CANVAS_HEIGHT),
            on_drag_finished=document.finish_drag,
            on_bond_rejected=document.report_bond_rejection,
            transaction=document.transaction,
        )

        self.atom_items: Dict[int, AtomItem] = {}
        self.bond_items: Dict[int, BondItem] = {}

        self._setup_view()
        self._create_paper()

        document.changed.connect(self._on_document_changed)
        document.became_unstable.connect(self.start_shake)
        document.bond_rejected.connect(self.start_shake)

        self.setMouseTracking(True)
        self.viewport().setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        # Releases anywhere in the application end a pending gesture.
        app = QApplication.instance()
        if app is not None:
            app.installEventFilter(self)

        self.frame_timer = QTimer(self)
        self.frame_timer.setInterval(FRAME_INTERVAL_MS)
        self.frame_timer.timeout.connect(self._on_frame)
        self.frame_timer.start()

        self.sync_items()

    def _setup_view(self) -> None:
        self.setBackgroundBrush(QBrush(QColor(self._style.background_color)))
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)

    def _create_paper(self) -> None:
        config = self.controller.config
        self.paper = QGraphicsRectItem(0, 0, config.width, config.height)
        self.paper.setBrush(QBrush(QColor(self._style.paper_color)))
        self.paper.setPen(QPen(QColor(self._style.grid_color), 1))
        self.paper.setZValue(-10)
        self.scene.addItem(self.paper)

        self.grid = QGraphicsPathItem(self.paper)
        self.grid.setPen(QPen(QColor(self._style.grid_color), 1))
        self.grid.setZValue(-1)

        self.connection_item = ConnectionLineItem(self._style, self.paper)
        self._layout_paper()

    def _layout_paper(self) -> None:
        config = self.controller.config
        self.paper.setRect(0, 0, config.width, config.height)
        path = QPainterPath()
        step = config.grid_size
        x = step
        while x < config.width:
            path.moveTo(x, 0)
            path.lineTo(x, config.height)
            x += step
        y = step
        while y < config.height:
            path.moveTo(0, y)
            path.lineTo(config.width, y)
            y += step
        self.grid.setPath(path)
        self.grid.setVisible(self.document.state.show_grid)
        self.scene.setSceneRect(
            -SCENE_MARGIN,
            -SCENE_MARGIN,
            config.width + 2 * SCENE_MARGIN,
            config.height + 2 * SCENE_MARGIN,
        )
        self.centerOn(config.width / 2, config.height / 2)

    def set_canvas_size(self, width: float, height: float) -> None:
        self.controller.config = self.controller.config.with_size(width, height)
        self._layout_paper()

    def set_show_grid(self, visible: bool) -> None:
        self.document.state.show_grid = visible
        self.grid.setVisible(visible)

    def set_snap_to_grid(self, enabled: bool) -> None:
        self.document.state.snap_to_grid = enabled

    # === INPUT ===

    def mousePressEvent(self, event) -> None:
        scene_pos = self.mapToScene(event.position().toPoint())
        if not self._is_on_paper(scene_pos.x(), scene_pos.y()):
            super().mousePressEvent(event)
            return
        if event.button() == Qt.MouseButton.LeftButton:
            button = PointerButton.PRIMARY
        elif event.button() == Qt.MouseButton.RightButton:
            button = PointerButton.SECONDARY
        else:
            super().mousePressEvent(event)
            return
        additive = bool(event.modifiers() & Qt.KeyboardModifier.ShiftModifier)
        self.controller.press(scene_pos.x(), scene_pos.y(), button, additive=additive)
        self.render_frame()

    def mouseMoveEvent(self, event) -> None:
        scene_pos = self.mapToScene(event.position().toPoint())
        self.controller.move(scene_pos.x(), scene_pos.y())
        self.render_frame()

    def mouseReleaseEvent(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        scene_pos = self.mapToScene(event.position().toPoint())
        self.controller.release(scene_pos.x(), scene_pos.y())
        self.render_frame()

    def mouseDoubleClickEvent(self, event) -> None:
        # Only bonds react; the first click of the pair already did the rest.
        event.accept()
        if event.button() != Qt.MouseButton.LeftButton:
            return
        scene_pos = self.mapToScene(event.position().toPoint())
        if self.controller.double_click(scene_pos.x(), scene_pos.y()):
            self.render_frame()

    def leaveEvent(self, event) -> None:
        self.controller.leave()
        self.render_frame()
        super().leaveEvent(event)

    def keyPressEvent(self, event) -> None:
        if event.key() in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            self.delete_selection()
            return
        if event.key() == Qt.Key.Key_Escape:
            self.controller.clear_selection()
            self.render_frame()
            return
        if event.matches(QKeySequence.StandardKey.SelectAll):
            self.select_all()
            return
        super().keyPressEvent(event)

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.Type.MouseButtonRelease:
            # Deferred so the canvas' own release handler runs first.
            QTimer.singleShot(0, self._on_global_release)
        return super().eventFilter(obj, event)

    def _on_global_release(self) -> None:
        self.controller.global_release()
        self.render_frame()

    def delete_selection(self) -> bool:
        deleted = self.controller.delete_selection()
        self.render_frame()
        return deleted

    def select_all(self) -> None:
        self.controller.select_all()
        self.render_frame()

    # === SCENE SYNC ===

    def _on_document_changed(self, validation: ValidationResult) -> None:
        self.controller.sync_with_model()
        self.sync_items(validation)
        self.render_frame()

    def sync_items(self, validation: Optional[ValidationResult] = None) -> None:
        """Adds, updates and removes scene items so they mirror the graph."""
        graph = self.document.graph
        validation = validation or self.document.validation

        for atom_id in [aid for aid in self.atom_items if aid not in graph.atoms]:
            self.scene.removeItem(self.atom_items.pop(atom_id))
        for bond_id in [bid for bid in self.bond_items if bid not in graph.bonds]:
            self.scene.removeItem(self.bond_items.pop(bond_id))

        for atom_id, atom in graph.atoms.items():
            item = self.atom_items.get(atom_id)
            if item is None:
                item = AtomItem(atom, self._style, self.paper)
                self.atom_items[atom_id] = item
            else:
                item.set_element(atom.element)
                item.set_position(atom.x, atom.y)
            item.set_stability(validation.stability_for(atom_id))

        violations = set(validation.bond_violations)
        for bond_id, bond in graph.bonds.items():
            atom1 = graph.atoms[bond.a1_id]
            atom2 = graph.atoms[bond.a2_id]
            item = self.bond_items.get(bond_id)
            if item is None:
                item = BondItem(bond, atom1, atom2, self._style, self.paper)
                self.bond_items[bond_id] = item
            else:
                item.update_positions(atom1, atom2, bond.order)
            item.set_violation(bond_id in violations)

    # === RENDER LOOP ===

    def _on_frame(self) -> None:
        self.controller.advance_blink()
        self.render_frame()

    def render_frame(self) -> None:
        """Refresh transient visuals from the controller and the validation."""
        controller = self.controller
        unstable = set(self.document.validation.unstable_atom_ids)
        selected_atoms = set(controller.selected_atoms)
        selected_bonds = set(controller.selected_bonds)

        for atom_id, item in self.atom_items.items():
            item.set_selected(atom_id in selected_atoms)
            item.set_hover(atom_id == controller.hover_atom_id)
            item.set_blink(controller.blink_phase if atom_id in unstable else None)
        for bond_id, item in self.bond_items.items():
            item.set_selected(bond_id in selected_bonds)
        self.connection_item.show_line(controller.connection_line)
        self._apply_shake()

    def start_shake(self, *_args) -> None:
        self._shake_until = self._clock() + self._style.shake_duration_ms / 1000.0

    @property
    def is_shaking(self) -> bool:
        return self._clock() < self._shake_until

    def _apply_shake(self) -> None:
        if self.is_shaking:
            half = self._style.shake_distance_px / 2.0
            self.paper.setPos(random.uniform(-half, half), random.uniform(-half, half))
        elif not self.paper.pos().isNull():
            self.paper.setPos(0, 0)

    def _is_on_paper(self, x: float, y: float) -> bool:
        config = self.controller.config
        return 0 <= x <= config.width and 0 <= y <= config.height
