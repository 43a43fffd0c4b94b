"""Modelos de datos base del constructor de moléculas Octeto.

Este módulo concentra las estructuras que representan el grafo molecular
(átomos y enlaces) y el estado de edición de la interfaz. El controlador
de interacción, el motor de estabilidad y la GUI trabajan sobre estas
clases; toda mutación pasa por la API de `MolGraph`, que notifica a sus
oyentes cuando el grafo cambia.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from core import bond_rules
from core.errors import check_integrity

logger = logging.getLogger(__name__)


class BondOutcome(str, Enum):
    """Resultado explícito de `MolGraph.add_or_retype_bond`."""
    CREATED = "created"
    RETYPED = "retyped"
    UNCHANGED = "unchanged"
    MISSING_ATOM = "missing_atom"
    SELF_BOND = "self_bond"
    INVALID_ORDER = "invalid_order"
    ORDER_NOT_ALLOWED = "order_not_allowed"
    CAPACITY_EXCEEDED = "capacity_exceeded"

    @property
    def ok(self) -> bool:
        return self in (BondOutcome.CREATED, BondOutcome.RETYPED, BondOutcome.UNCHANGED)

    @property
    def changed(self) -> bool:
        return self in (BondOutcome.CREATED, BondOutcome.RETYPED)


class GraphChange(str, Enum):
    """Tipos de cambio que se notifican a los oyentes del grafo."""
    ATOM_ADDED = "atom_added"
    ATOMS_MOVED = "atoms_moved"
    ATOMS_DELETED = "atoms_deleted"
    BONDS_DELETED = "bonds_deleted"
    BOND_CHANGED = "bond_changed"
    CLEARED = "cleared"
    RESTORED = "restored"


@dataclass
class Atom:
    """Representa un átomo en el grafo molecular."""
    id: int
    element: str
    x: float
    y: float

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass
class Bond:
    """Representa un enlace químico entre dos átomos."""
    id: int
    a1_id: int
    a2_id: int
    order: int = 1

    def involves(self, atom_id: int) -> bool:
        return self.a1_id == atom_id or self.a2_id == atom_id

    def other(self, atom_id: int) -> int:
        return self.a2_id if self.a1_id == atom_id else self.a1_id


@dataclass(frozen=True)
class DiagramSnapshot:
    """Copia inmutable del contenido del grafo para deshacer/rehacer."""
    atoms: Tuple[Atom, ...] = ()
    bonds: Tuple[Bond, ...] = ()


@dataclass
class ChemState:
    """Estado de edición activo en la interfaz."""
    active_element: str = "C"
    active_bond_order: int = 1
    snap_to_grid: bool = True
    show_grid: bool = True


GraphListener = Callable[[GraphChange], None]


class MolGraph:
    """Grafo molecular mutable con operaciones de edición básicas."""

    def __init__(self) -> None:
        """Inicializa el grafo vacío y contadores internos de IDs."""
        self.atoms: Dict[int, Atom] = {}
        self.bonds: Dict[int, Bond] = {}
        self._next_atom_id = 1
        self._next_bond_id = 1
        self._listeners: List[GraphListener] = []

    @property
    def next_atom_id(self) -> int:
        return self._next_atom_id

    @property
    def next_bond_id(self) -> int:
        return self._next_bond_id

    # === LISTENERS ===

    def add_listener(self, listener: GraphListener) -> None:
        """Registra una función que se llama tras cada mutación efectiva."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: GraphListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, change: GraphChange) -> None:
        for listener in list(self._listeners):
            listener(change)

    # === MUTATIONS ===

    def add_atom(self, element: str, x: float, y: float) -> Atom:
        """Crea y registra un átomo en el grafo.

        Args:
            element: Símbolo del elemento químico (p. ej., "C", "O").
            x: Posición X en coordenadas del diagrama.
            y: Posición Y en coordenadas del diagrama.

        Returns:
            El átomo creado, con un ID nuevo que nunca se reutiliza.

        Side Effects:
            Incrementa el contador de IDs, modifica `self.atoms` y notifica
            `GraphChange.ATOM_ADDED`.
        """
        atom = Atom(id=self._next_atom_id, element=element, x=float(x), y=float(y))
        self._next_atom_id += 1
        self.atoms[atom.id] = atom
        self._notify(GraphChange.ATOM_ADDED)
        return atom

    def move_atoms(self, updates: Mapping[int, Tuple[float, float]]) -> int:
        """Mueve varios átomos en un solo paso.

        Args:
            updates: Mapa de ID de átomo a su nueva posición `(x, y)`.
                Los IDs desconocidos se ignoran.

        Returns:
            Número de átomos cuya posición cambió.

        Side Effects:
            Modifica las posiciones y notifica una única vez
            `GraphChange.ATOMS_MOVED` si algo cambió.
        """
        moved = 0
        for atom_id, (x, y) in updates.items():
            atom = self.atoms.get(atom_id)
            if atom is None:
                continue
            if atom.x == x and atom.y == y:
                continue
            atom.x = float(x)
            atom.y = float(y)
            moved += 1
        if moved:
            self._notify(GraphChange.ATOMS_MOVED)
        return moved

    def delete_atoms(self, atom_ids: Iterable[int]) -> List[Atom]:
        """Elimina átomos y, en el mismo paso, todos sus enlaces.

        Args:
            atom_ids: IDs a eliminar. Los que no existen se ignoran.

        Returns:
            La lista de átomos eliminados.

        Side Effects:
            Modifica `self.atoms` y `self.bonds` y notifica
            `GraphChange.ATOMS_DELETED` si se eliminó algo.
        """
        removed: List[Atom] = []
        for atom_id in list(atom_ids):
            atom = self.atoms.pop(atom_id, None)
            if atom is not None:
                removed.append(atom)
        if not removed:
            return removed
        gone = {atom.id for atom in removed}
        for bond_id, bond in list(self.bonds.items()):
            if bond.a1_id in gone or bond.a2_id in gone:
                del self.bonds[bond_id]
        self._notify(GraphChange.ATOMS_DELETED)
        return removed

    def delete_bonds(self, bond_ids: Iterable[int]) -> List[Bond]:
        """Elimina enlaces por ID; los IDs desconocidos se ignoran."""
        removed: List[Bond] = []
        for bond_id in list(bond_ids):
            bond = self.bonds.pop(bond_id, None)
            if bond is not None:
                removed.append(bond)
        if removed:
            self._notify(GraphChange.BONDS_DELETED)
        return removed

    def add_or_retype_bond(self, a1_id: int, a2_id: int, order: int) -> BondOutcome:
        """Crea un enlace o cambia el orden del existente entre dos átomos.

        Es el único camino para crear o modificar enlaces. Antes de tocar el
        grafo se comprueba la tabla de compatibilidad para ambos extremos y
        la suma máxima de órdenes de cada átomo (descontando el orden del
        enlace que se reemplaza).

        Args:
            a1_id: ID del primer átomo.
            a2_id: ID del segundo átomo.
            order: Orden solicitado (1, 2 o 3).

        Returns:
            Un `BondOutcome`; `outcome.ok` indica si la petición se aceptó.
            Los rechazos no modifican el grafo.

        Side Effects:
            Puede añadir o actualizar un `Bond` y notificar
            `GraphChange.BOND_CHANGED`.
        """
        atom1 = self.atoms.get(a1_id)
        atom2 = self.atoms.get(a2_id)
        if atom1 is None or atom2 is None:
            outcome = BondOutcome.MISSING_ATOM
        elif a1_id == a2_id:
            outcome = BondOutcome.SELF_BOND
        elif order not in bond_rules.BOND_ORDERS:
            outcome = BondOutcome.INVALID_ORDER
        elif not bond_rules.is_bond_order_allowed(atom1.element, atom2.element, order):
            outcome = BondOutcome.ORDER_NOT_ALLOWED
        else:
            outcome = None
        if outcome is not None:
            logger.debug("Bond %s-%s (order %s) rejected: %s", a1_id, a2_id, order, outcome.value)
            return outcome

        existing = self.find_bond_between(a1_id, a2_id)
        if existing is not None and existing.order == order:
            return BondOutcome.UNCHANGED
        replaced = existing.order if existing is not None else 0
        for atom in (atom1, atom2):
            total = self.bond_order_sum(atom.id) - replaced + order
            if total > bond_rules.max_total_bond_order(atom.element):
                logger.debug(
                    "Bond %s-%s (order %s) rejected: %s would reach %s",
                    a1_id,
                    a2_id,
                    order,
                    atom.element,
                    total,
                )
                return BondOutcome.CAPACITY_EXCEEDED

        if existing is not None:
            existing.order = order
            outcome = BondOutcome.RETYPED
        else:
            bond = Bond(id=self._next_bond_id, a1_id=a1_id, a2_id=a2_id, order=order)
            self._next_bond_id += 1
            self.bonds[bond.id] = bond
            outcome = BondOutcome.CREATED
        self._notify(GraphChange.BOND_CHANGED)
        return outcome

    def clear(self) -> None:
        """Elimina todos los átomos y enlaces del grafo.

        Side Effects:
            Limpia `self.atoms` y `self.bonds`. Los contadores de IDs no se
            reinician: un ID emitido nunca vuelve a asignarse.
        """
        if not self.atoms and not self.bonds:
            return
        self.atoms.clear()
        self.bonds.clear()
        self._notify(GraphChange.CLEARED)

    # === SNAPSHOTS ===

    def snapshot(self) -> DiagramSnapshot:
        """Captura una copia independiente del contenido actual."""
        return DiagramSnapshot(
            atoms=tuple(replace(atom) for atom in self.atoms.values()),
            bonds=tuple(replace(bond) for bond in self.bonds.values()),
        )

    def restore(self, snapshot: DiagramSnapshot) -> None:
        """Reemplaza el contenido del grafo por una instantánea previa.

        Los IDs restaurados se conservan; los contadores avanzan lo necesario
        para no volver a emitir ninguno de ellos.

        Raises:
            DiagramIntegrityError: Si la instantánea no es coherente. En ese
                caso el grafo queda intacto y no se notifica nada.
        """
        candidate = MolGraph()
        candidate.atoms = {atom.id: replace(atom) for atom in snapshot.atoms}
        candidate.bonds = {bond.id: replace(bond) for bond in snapshot.bonds}
        candidate._next_atom_id = max([self._next_atom_id] + [aid + 1 for aid in candidate.atoms])
        candidate._next_bond_id = max([self._next_bond_id] + [bid + 1 for bid in candidate.bonds])
        check_integrity(candidate)

        self.atoms = candidate.atoms
        self.bonds = candidate.bonds
        self._next_atom_id = candidate._next_atom_id
        self._next_bond_id = candidate._next_bond_id
        self._notify(GraphChange.RESTORED)

    # === QUERIES ===

    def get_atom(self, atom_id: int) -> Optional[Atom]:
        return self.atoms.get(atom_id)

    def get_bond(self, bond_id: int) -> Optional[Bond]:
        return self.bonds.get(bond_id)

    def find_bond_between(self, a1_id: int, a2_id: int) -> Optional[Bond]:
        """Busca un enlace existente entre dos átomos, sin importar el orden.

        Args:
            a1_id: ID del primer átomo.
            a2_id: ID del segundo átomo.

        Returns:
            El enlace si existe, o `None` en caso contrario.
        """
        for bond in self.bonds.values():
            if {bond.a1_id, bond.a2_id} == {a1_id, a2_id}:
                return bond
        return None

    def incident_bonds(self, atom_id: int) -> List[Bond]:
        return [bond for bond in self.bonds.values() if bond.involves(atom_id)]

    def neighbors(self, atom_id: int) -> List[int]:
        return [bond.other(atom_id) for bond in self.incident_bonds(atom_id)]

    def bond_order_sum(self, atom_id: int) -> int:
        """Suma de órdenes de los enlaces incidentes en un átomo."""
        return sum(bond.order for bond in self.incident_bonds(atom_id))

    def is_empty(self) -> bool:
        return not self.atoms
