"""
Octeto Document
Owns the molecule graph, its undo history and the current validation.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QUndoStack

from chemcalc.recognition import recognize_molecule
from chemcalc.stability import ValidationResult, validate
from core import bond_rules
from core.model import BondOutcome, ChemState, GraphChange, MolGraph
from core.presets import PRESETS, load_preset
from gui.commands import SnapshotCommand

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50

CHANGE_LABELS = {
    GraphChange.ATOM_ADDED: "Añadir átomo",
    GraphChange.ATOMS_DELETED: "Eliminar átomos",
    GraphChange.BONDS_DELETED: "Eliminar enlaces",
    GraphChange.BOND_CHANGED: "Cambiar enlace",
    GraphChange.CLEARED: "Vaciar lienzo",
}

REJECTION_MESSAGES = {
    BondOutcome.MISSING_ATOM: "Ese átomo ya no existe",
    BondOutcome.SELF_BOND: "Un átomo no puede enlazarse consigo mismo",
    BondOutcome.INVALID_ORDER: "Orden de enlace no válido",
    BondOutcome.CAPACITY_EXCEEDED: "{element} no admite más enlaces",
}


class MoleculeDocument(QObject):
    """
    Host-side owner of the editable molecule.

    Every effective graph mutation revalidates the molecule and, except for
    intermediate drag moves, records one undo checkpoint.
    """

    changed = pyqtSignal(object)
    became_unstable = pyqtSignal()
    message = pyqtSignal(str)
    bond_rejected = pyqtSignal(str)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.graph = MolGraph()
        self.state = ChemState()
        self.undo_stack = QUndoStack(self)
        self.undo_stack.setUndoLimit(HISTORY_LIMIT)
        self.validation: ValidationResult = validate(self.graph)
        self.recognized: Optional[str] = None
        self._baseline = self.graph.snapshot()
        self._batch_depth = 0
        self.graph.add_listener(self._on_graph_changed)

    # === HISTORY ===

    @contextmanager
    def transaction(self, label: str = "Editar molécula") -> Iterator[None]:
        """Group several mutations into a single undo step."""
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0:
                self._checkpoint(label)

    def finish_drag(self, start_positions: Dict[int, Tuple[float, float]]) -> None:
        if self._checkpoint("Mover átomos"):
            logger.debug("Recorded move of %d atoms", len(start_positions))

    def undo(self) -> None:
        self.undo_stack.undo()

    def redo(self) -> None:
        self.undo_stack.redo()

    def _checkpoint(self, label: str) -> bool:
        after = self.graph.snapshot()
        if after == self._baseline:
            return False
        command = SnapshotCommand(self.graph, self._baseline, after, label, skip_first_redo=True)
        self._baseline = after
        self.undo_stack.push(command)
        return True

    # === EDITING ===

    def clear(self) -> None:
        self.graph.clear()

    def load_preset(self, key: str) -> None:
        preset = PRESETS[key]
        with self.transaction(f"Cargar {preset.label}"):
            load_preset(self.graph, key)
        self.set_active_element(preset.focus_element)

    def set_active_element(self, element: str) -> int:
        """Select the palette element; the bond order follows what it allows."""
        self.state.active_element = element
        self.state.active_bond_order = bond_rules.best_allowed_order(
            element, self.state.active_bond_order
        )
        return self.state.active_bond_order

    def set_active_bond_order(self, order: int) -> bool:
        if order not in bond_rules.get_allowed_bond_types(self.state.active_element):
            return False
        self.state.active_bond_order = order
        return True

    def report_bond_rejection(
        self, outcome: BondOutcome, a1_id: int, a2_id: int, order: int
    ) -> str:
        atom1 = self.graph.get_atom(a1_id)
        atom2 = self.graph.get_atom(a2_id)
        text = REJECTION_MESSAGES.get(outcome, "Enlace no permitido")
        if outcome is BondOutcome.ORDER_NOT_ALLOWED and atom1 and atom2:
            text = bond_rules.check_bond_order(atom1.element, atom2.element, order) or text
        elif outcome is BondOutcome.CAPACITY_EXCEEDED and atom1 and atom2:
            full = [
                atom.element
                for atom in (atom1, atom2)
                if self.graph.bond_order_sum(atom.id) >= bond_rules.max_total_bond_order(atom.element)
            ]
            text = text.format(element=full[0] if full else atom1.element)
        logger.debug("Bond %s-%s rejected: %s", a1_id, a2_id, text)
        self.message.emit(text)
        self.bond_rejected.emit(text)
        return text

    # === VALIDATION ===

    def _on_graph_changed(self, change: GraphChange) -> None:
        if change is GraphChange.RESTORED:
            self._baseline = self.graph.snapshot()
        elif change is not GraphChange.ATOMS_MOVED and self._batch_depth == 0:
            self._checkpoint(CHANGE_LABELS[change])
        self._revalidate()

    def _revalidate(self) -> None:
        was_stable = self.validation.is_stable
        self.validation = validate(self.graph)
        self.recognized = recognize_molecule(self.graph)
        self.changed.emit(self.validation)
        if was_stable and not self.validation.is_stable:
            self.became_unstable.emit()
