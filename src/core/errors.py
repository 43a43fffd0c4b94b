"""Excepciones y comprobaciones de integridad del grafo molecular."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Set, Tuple

from core.bond_rules import BOND_ORDERS

if TYPE_CHECKING:
    from core.model import MolGraph


class DiagramIntegrityError(Exception):
    """Se lanza cuando el grafo rompe una invariante estructural.

    Indica un defecto de programación, nunca un uso normal del editor:
    las operaciones públicas de `MolGraph` rechazan la entrada inválida
    sin lanzar excepciones.
    """


def check_integrity(graph: "MolGraph") -> None:
    """Verifica las invariantes estructurales del grafo.

    Comprueba que cada enlace referencie átomos existentes y distintos,
    que no haya dos enlaces para el mismo par, que los órdenes sean 1-3 y
    que los contadores de IDs estén por delante de todos los IDs usados.

    Raises:
        DiagramIntegrityError: Con la lista de problemas encontrados.
    """
    problems: List[str] = []
    pairs: Set[Tuple[int, int]] = set()
    for bond in graph.bonds.values():
        if bond.a1_id not in graph.atoms or bond.a2_id not in graph.atoms:
            problems.append(f"bond {bond.id} references a missing atom")
        if bond.a1_id == bond.a2_id:
            problems.append(f"bond {bond.id} is a self-bond")
        pair = (min(bond.a1_id, bond.a2_id), max(bond.a1_id, bond.a2_id))
        if pair in pairs:
            problems.append(f"bond {bond.id} duplicates pair {pair}")
        pairs.add(pair)
        if bond.order not in BOND_ORDERS:
            problems.append(f"bond {bond.id} has invalid order {bond.order}")
    if graph.atoms and graph.next_atom_id <= max(graph.atoms):
        problems.append("atom id counter is behind an existing atom id")
    if graph.bonds and graph.next_bond_id <= max(graph.bonds):
        problems.append("bond id counter is behind an existing bond id")
    if problems:
        raise DiagramIntegrityError("; ".join(problems))
