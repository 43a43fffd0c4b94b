"""Motor de estabilidad y valencia del constructor de moléculas.

`validate` recalcula desde cero, para cada átomo del grafo, los electrones
que lo rodean según la regla del octeto simplificada, su carga formal y
cuántos electrones le faltan. Con eso decide si la molécula dibujada es
estable y genera pistas y advertencias para el panel lateral.

Reparto de electrones por átomo (V = electrones de valencia,
S = suma de órdenes de enlace, T = objetivo del octeto):

    enlazantes = 2 * S               (cuentan completos para el octeto)
    libres     = min(max(0, T - 2S), max(0, V - S))
    actuales   = enlazantes + libres
    faltan     = max(0, T - actuales)
    carga      = V - libres - S
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from core import bond_rules
from .formula import format_formula, molecular_formula
from .valence import target_electrons, valence_electrons

# Un átomo con más de este múltiplo de su objetivo invalida la molécula.
OVERFILL_FACTOR = 1.5


@dataclass(frozen=True)
class AtomStability:
    """Resultado de la regla del octeto para un átomo."""
    atom_id: int
    element: str
    current_electrons: int
    target_electrons: int
    needs_electrons: int
    formal_charge: int
    octet_satisfied: bool


@dataclass(frozen=True)
class ValidationResult:
    """Resumen de estabilidad del grafo completo.

    `atom_stability` está indexado por ID de átomo y conserva el orden del
    diagrama, de modo que nunca depende de la posición en una lista.
    """
    formula: str = ""
    atom_stability: Dict[int, AtomStability] = field(default_factory=dict)
    bond_violations: Tuple[int, ...] = ()
    is_stable: bool = True
    is_valid: bool = False
    total_charge: int = 0
    hints: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    def stability_for(self, atom_id: int) -> Optional[AtomStability]:
        return self.atom_stability.get(atom_id)

    @property
    def unstable_atom_ids(self) -> List[int]:
        return [atom_id for atom_id, s in self.atom_stability.items() if s.needs_electrons > 0]


def atom_stability(atom_id: int, element: str, bond_order_sum: int) -> AtomStability:
    """Aplica la regla del octeto a un átomo.

    Args:
        atom_id: ID del átomo evaluado.
        element: Símbolo del elemento.
        bond_order_sum: Suma de órdenes de sus enlaces.

    Returns:
        Un `AtomStability` con electrones actuales, faltantes y carga formal.
    """
    target = target_electrons(element)
    valence = valence_electrons(element)
    bonding = 2 * bond_order_sum
    lone = min(max(0, target - bonding), max(0, valence - bond_order_sum))
    current = bonding + lone
    return AtomStability(
        atom_id=atom_id,
        element=element,
        current_electrons=current,
        target_electrons=target,
        needs_electrons=max(0, target - current),
        formal_charge=valence - lone - bond_order_sum,
        octet_satisfied=current == target,
    )


def find_bond_violations(graph) -> Tuple[int, ...]:
    """IDs de enlaces que contradicen la tabla de compatibilidad.

    Un enlace viola la tabla si su orden no está permitido para alguno de
    sus extremos, o si alguno de ellos supera su suma máxima de órdenes.
    """
    over_capacity = {
        atom_id
        for atom_id, atom in graph.atoms.items()
        if graph.bond_order_sum(atom_id) > bond_rules.max_total_bond_order(atom.element)
    }
    violations: List[int] = []
    for bond_id, bond in graph.bonds.items():
        atom1 = graph.atoms.get(bond.a1_id)
        atom2 = graph.atoms.get(bond.a2_id)
        if atom1 is None or atom2 is None:
            violations.append(bond_id)
        elif not bond_rules.is_bond_order_allowed(atom1.element, atom2.element, bond.order):
            violations.append(bond_id)
        elif bond.a1_id in over_capacity or bond.a2_id in over_capacity:
            violations.append(bond_id)
    return tuple(violations)


def need_suggestion(element: str, needs: int) -> str:
    """Sugerencia breve de qué añadir para completar un átomo."""
    if element == "C" and needs == 4:
        return "4 átomos de H o 2 enlaces dobles"
    if element == "C" and needs == 2:
        return "2 átomos de H o 1 enlace doble"
    if element == "N" and needs == 3:
        return "3 átomos de H o enlaces"
    if element == "O" and needs == 2:
        return "2 átomos de H o 1 enlace doble"
    if element == "H" and needs == 1:
        return "un enlace con C, N u O"
    if needs == 1:
        return "1 enlace más"
    if needs == 2:
        return "2 enlaces más o 1 enlace doble"
    return f"{needs} enlaces más"


def _signed(value: int) -> str:
    return f"+{value}" if value > 0 else str(value)


def validate(graph) -> ValidationResult:
    """Evalúa la estabilidad de todo el grafo.

    Args:
        graph: Grafo molecular (`MolGraph`). No se modifica.

    Returns:
        Un `ValidationResult` nuevo. Para un grafo vacío la fórmula es ""
        y la molécula se considera estable pero no válida.

    Side Effects:
        No tiene efectos laterales; es seguro llamarla tras cada mutación.
    """
    stabilities: Dict[int, AtomStability] = {}
    hints: List[str] = []
    warnings: List[str] = []

    for atom_id, atom in graph.atoms.items():
        stability = atom_stability(atom_id, atom.element, graph.bond_order_sum(atom_id))
        stabilities[atom_id] = stability
        if stability.needs_electrons > 0:
            hints.append(
                f"A {atom.element} le faltan {stability.needs_electrons} electrones. "
                f"Prueba a añadir {need_suggestion(atom.element, stability.needs_electrons)}"
            )
        if abs(stability.formal_charge) > 1:
            warnings.append(
                f"{atom.element} tiene una carga formal alta ({_signed(stability.formal_charge)})"
            )
        if stability.current_electrons > stability.target_electrons:
            warnings.append(
                f"{atom.element} tiene demasiados electrones "
                f"({stability.current_electrons}/{stability.target_electrons})"
            )

    violations = find_bond_violations(graph)
    for bond_id in violations:
        bond = graph.bonds[bond_id]
        names = [
            graph.atoms[a].element if a in graph.atoms else "?"
            for a in (bond.a1_id, bond.a2_id)
        ]
        warnings.append(
            f"El enlace {names[0]}{bond_rules.bond_type_symbol(bond.order)}{names[1]} "
            f"rompe las reglas de enlace"
        )

    is_stable = all(s.needs_electrons == 0 for s in stabilities.values()) and not violations
    is_valid = bool(stabilities) and all(
        s.current_electrons <= s.target_electrons * OVERFILL_FACTOR for s in stabilities.values()
    )
    total_charge = sum(s.formal_charge for s in stabilities.values())

    if not is_stable and not hints:
        hints.append(
            "La molécula es inestable. Revisa las cargas formales y la regla del octeto."
        )
    if abs(total_charge) > 2:
        warnings.append(f"Carga total alta: {_signed(total_charge)}")

    return ValidationResult(
        formula=format_formula(molecular_formula(graph)),
        atom_stability=stabilities,
        bond_violations=violations,
        is_stable=is_stable,
        is_valid=is_valid,
        total_charge=total_charge,
        hints=tuple(hints),
        warnings=tuple(warnings),
    )
