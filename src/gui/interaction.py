"""
Octeto Interaction Controller
Pointer-driven state machine for editing the molecule graph.

The controller knows nothing about Qt: the canvas translates mouse and key
events into `press`/`move`/`release` calls in diagram coordinates, and the
render loop reads the transient display state (hover, selection, preview
line, blink phase) back from it.
"""
from __future__ import annotations

import logging
import math
from contextlib import nullcontext
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, ContextManager, Dict, List, Optional, Tuple

from core import bond_rules
from core.model import BondOutcome, ChemState, MolGraph
from gui import geom

logger = logging.getLogger(__name__)

DEFAULT_CANVAS_WIDTH = 800.0
DEFAULT_CANVAS_HEIGHT = 600.0


class InteractionMode(str, Enum):
    IDLE = "idle"
    PRESSED_ON_ATOM = "pressed_on_atom"
    CONNECTING_BOND = "connecting_bond"
    DRAGGING = "dragging"


class PointerButton(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True)
class InteractionConfig:
    """Geometry thresholds used by hit testing, dragging and snapping."""
    width: float = DEFAULT_CANVAS_WIDTH
    height: float = DEFAULT_CANVAS_HEIGHT
    padding: float = 24.0
    atom_hit_radius: float = 25.0
    bond_hit_threshold: float = 15.0
    drag_threshold: float = 5.0
    grid_size: float = 40.0
    blink_increment: float = 0.1

    @property
    def snap_unit(self) -> float:
        return self.grid_size / 2.0

    def with_size(self, width: float, height: float) -> "InteractionConfig":
        return replace(self, width=float(width), height=float(height))


Position = Tuple[float, float]
DragFinishedCallback = Callable[[Dict[int, Position]], None]
BondRejectedCallback = Callable[[BondOutcome, int, int, int], None]


class InteractionController:
    """
    Turns pointer gestures into graph mutations.

    Gestures: press on empty space adds an atom, press-release on an atom
    toggles its selection or bonds it to the single other selected atom,
    press-drag moves the atom (or the whole selection when the pressed
    atom is part of it), and a single-atom drag released over another atom
    bonds the two.
    """

    def __init__(
        self,
        graph: MolGraph,
        state: Optional[ChemState] = None,
        config: Optional[InteractionConfig] = None,
        on_drag_finished: Optional[DragFinishedCallback] = None,
        on_bond_rejected: Optional[BondRejectedCallback] = None,
        transaction: Optional[Callable[[], ContextManager]] = None,
    ) -> None:
        self.graph = graph
        self.state = state or ChemState()
        self.config = config or InteractionConfig()
        self.on_drag_finished = on_drag_finished
        self.on_bond_rejected = on_bond_rejected
        self._transaction = transaction or nullcontext

        self.mode = InteractionMode.IDLE
        self.selected_atoms: List[int] = []
        self.selected_bonds: List[int] = []
        self.hover_atom_id: Optional[int] = None
        self.connection_line: Optional[Tuple[float, float, float, float]] = None
        self.blink_phase = 0.0

        self._pressed_atom_id: Optional[int] = None
        self._press_pos: Optional[Position] = None
        self._drag_set: List[int] = []
        self._drag_start_positions: Dict[int, Position] = {}
        self._last_delta: Position = (0.0, 0.0)

    # === HIT TESTING ===

    def atom_at(self, x: float, y: float, exclude: Optional[int] = None) -> Optional[int]:
        atoms = ((atom.id, atom.x, atom.y) for atom in self.graph.atoms.values())
        return geom.first_atom_within((x, y), atoms, self.config.atom_hit_radius, exclude)

    def bond_at(self, x: float, y: float) -> Optional[int]:
        segments = []
        for bond in self.graph.bonds.values():
            a1 = self.graph.atoms.get(bond.a1_id)
            a2 = self.graph.atoms.get(bond.a2_id)
            if a1 is None or a2 is None:
                continue
            segments.append((bond.id, a1.position, a2.position))
        return geom.first_bond_within((x, y), segments, self.config.bond_hit_threshold)

    def snap(self, x: float, y: float) -> Position:
        if not self.state.snap_to_grid:
            return (x, y)
        unit = self.config.snap_unit
        return (geom.snap_value(x, unit), geom.snap_value(y, unit))

    def clamp(self, x: float, y: float) -> Position:
        pad = self.config.padding
        return (
            geom.clamp(x, pad, self.config.width - pad),
            geom.clamp(y, pad, self.config.height - pad),
        )

    # === POINTER INPUT ===

    def press(
        self,
        x: float,
        y: float,
        button: PointerButton = PointerButton.PRIMARY,
        additive: bool = False,
    ) -> None:
        if self.mode is not InteractionMode.IDLE:
            # A press without a matching release: drop the stale gesture.
            self._finish_gesture()

        atom_id = self.atom_at(x, y)

        if button is PointerButton.SECONDARY:
            if atom_id is not None:
                self.graph.delete_atoms([atom_id])
                self.sync_with_model()
            return

        if atom_id is not None:
            self._pressed_atom_id = atom_id
            self._press_pos = (x, y)
            if atom_id in self.selected_atoms:
                self._drag_set = list(self.selected_atoms)
            else:
                self._drag_set = [atom_id]
            self._drag_start_positions = {
                aid: self.graph.atoms[aid].position
                for aid in self._drag_set
                if aid in self.graph.atoms
            }
            self._last_delta = (0.0, 0.0)
            self.selected_bonds = []
            self.mode = InteractionMode.PRESSED_ON_ATOM
            return

        bond_id = self.bond_at(x, y)
        if bond_id is not None:
            self.selected_atoms = []
            if not additive:
                self.selected_bonds = [bond_id]
            elif bond_id in self.selected_bonds:
                self.selected_bonds.remove(bond_id)
            else:
                self.selected_bonds.append(bond_id)
            return

        self.clear_selection()
        self.graph.add_atom(self.state.active_element, *self.snap(x, y))

    def move(self, x: float, y: float) -> None:
        if self.mode is InteractionMode.IDLE:
            self.hover_atom_id = self.atom_at(x, y)
            return

        self.hover_atom_id = self.atom_at(x, y, exclude=self._pressed_atom_id)
        if self._pressed_atom_id not in self.graph.atoms:
            self._finish_gesture()
            return

        if self.mode is InteractionMode.DRAGGING:
            self._drag_to(x, y)
            return

        px, py = self._press_pos
        threshold = self.config.drag_threshold
        if abs(x - px) > threshold or abs(y - py) > threshold:
            self.mode = InteractionMode.DRAGGING
            if self._pressed_atom_id not in self.selected_atoms:
                self.selected_atoms = [self._pressed_atom_id]
            self.connection_line = None
            self._drag_to(x, y)
            return

        self.mode = InteractionMode.CONNECTING_BOND
        start = self.graph.atoms[self._pressed_atom_id]
        target = self.graph.atoms.get(self.hover_atom_id) if self.hover_atom_id is not None else None
        end = target.position if target is not None else (x, y)
        self.connection_line = (start.x, start.y, end[0], end[1])

    def release(self, x: Optional[float] = None, y: Optional[float] = None) -> None:
        if self.mode is InteractionMode.IDLE:
            return
        if x is not None and y is not None:
            self.hover_atom_id = self.atom_at(x, y, exclude=self._pressed_atom_id)

        pressed = self._pressed_atom_id
        if self.mode is InteractionMode.DRAGGING:
            target = self.hover_atom_id
            if len(self._drag_set) == 1 and target is not None and target != pressed:
                self._connect(pressed, target)
        elif pressed in self.graph.atoms:
            self._click_atom(pressed)
        self._finish_gesture()

    def global_release(self) -> None:
        """Any pointer release anywhere: discard an unfinished gesture."""
        if self.mode is InteractionMode.IDLE:
            return
        logger.debug("Gesture %s ended outside the canvas", self.mode.value)
        self._finish_gesture()

    def double_click(self, x: float, y: float) -> bool:
        """Cycle the order of the bond under the cursor. Returns True if handled."""
        if self.atom_at(x, y) is not None:
            return False
        bond_id = self.bond_at(x, y)
        if bond_id is None:
            return False
        self.cycle_bond_order(bond_id)
        return True

    def leave(self) -> None:
        self.hover_atom_id = None
        if self.mode is InteractionMode.IDLE:
            self.connection_line = None

    # === COMMANDS ===

    def delete_selection(self) -> bool:
        atom_ids = list(self.selected_atoms)
        bond_ids = list(self.selected_bonds)
        if not atom_ids and not bond_ids:
            return False
        self.selected_atoms = []
        self.selected_bonds = []
        with self._transaction():
            if atom_ids:
                self.graph.delete_atoms(atom_ids)
            if bond_ids:
                self.graph.delete_bonds(bond_ids)
        self.sync_with_model()
        return True

    def select_all(self) -> None:
        self.selected_atoms = list(self.graph.atoms)
        self.selected_bonds = []

    def clear_selection(self) -> None:
        self.selected_atoms = []
        self.selected_bonds = []

    def cycle_bond_order(self, bond_id: int) -> Optional[BondOutcome]:
        """Move a bond to its next order, wrapping at the pair's highest one.

        C-C cycles 1 -> 2 -> 3 -> 1; a pair limited to single bonds stays put.
        """
        bond = self.graph.get_bond(bond_id)
        if bond is None:
            return None
        atom1 = self.graph.atoms[bond.a1_id]
        atom2 = self.graph.atoms[bond.a2_id]
        top = bond_rules.max_bond_order(atom1.element, atom2.element)
        order = bond.order + 1 if bond.order < top else bond_rules.SINGLE
        outcome = self.graph.add_or_retype_bond(bond.a1_id, bond.a2_id, order)
        if not outcome.ok and self.on_bond_rejected is not None:
            self.on_bond_rejected(outcome, bond.a1_id, bond.a2_id, order)
        return outcome

    def sync_with_model(self) -> None:
        """Forget ids that no longer exist in the graph."""
        atoms = self.graph.atoms
        self.selected_atoms = [aid for aid in self.selected_atoms if aid in atoms]
        self.selected_bonds = [bid for bid in self.selected_bonds if bid in self.graph.bonds]
        if self.hover_atom_id not in atoms:
            self.hover_atom_id = None
        if self.mode is not InteractionMode.IDLE and self._pressed_atom_id not in atoms:
            self._finish_gesture()

    def advance_blink(self) -> float:
        self.blink_phase = (self.blink_phase + self.config.blink_increment) % (2 * math.pi)
        return self.blink_phase

    # === INTERNALS ===

    def _click_atom(self, atom_id: int) -> None:
        if len(self.selected_atoms) == 1 and self.selected_atoms[0] != atom_id:
            self._connect(self.selected_atoms[0], atom_id)
            return
        if atom_id in self.selected_atoms:
            self.selected_atoms.remove(atom_id)
        else:
            self.selected_atoms.append(atom_id)

    def _connect(self, a1_id: int, a2_id: int) -> BondOutcome:
        order = self.state.active_bond_order
        outcome = self.graph.add_or_retype_bond(a1_id, a2_id, order)
        if outcome.ok:
            self.selected_atoms = []
        elif self.on_bond_rejected is not None:
            self.on_bond_rejected(outcome, a1_id, a2_id, order)
        return outcome

    def _drag_to(self, x: float, y: float) -> None:
        sx, sy = self.snap(x, y)
        ox, oy = self.snap(*self._press_pos)
        delta = (sx - ox, sy - oy)
        if delta == self._last_delta:
            return
        self._last_delta = delta
        updates = {
            aid: self.clamp(x0 + delta[0], y0 + delta[1])
            for aid, (x0, y0) in self._drag_start_positions.items()
        }
        self.graph.move_atoms(updates)

    def _finish_gesture(self) -> None:
        dragged = self.mode is InteractionMode.DRAGGING
        start_positions = self._drag_start_positions
        self.mode = InteractionMode.IDLE
        self.connection_line = None
        self._pressed_atom_id = None
        self._press_pos = None
        self._drag_set = []
        self._drag_start_positions = {}
        self._last_delta = (0.0, 0.0)
        if dragged and self.on_drag_finished is not None:
            self.on_drag_finished(start_positions)
