"""Fórmulas moleculares del diagrama dibujado.

El constructor no completa hidrógenos implícitos: la fórmula refleja
exactamente los átomos presentes en el grafo.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List

# Elementos que el orden de Hill coloca al principio.
HILL_LEADING = ("C", "H")

_SUBSCRIPTS = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")


def molecular_formula(graph) -> Dict[str, int]:
    """Cuenta los átomos del grafo por elemento.

    Args:
        graph: Grafo molecular (`MolGraph`).

    Returns:
        Diccionario elemento -> cantidad, en el orden en que aparece cada
        elemento por primera vez.
    """
    return dict(Counter(atom.element for atom in graph.atoms.values()))


def hill_order(elements) -> List[str]:
    """Ordena símbolos según Hill: C, luego H, luego el resto alfabético."""
    present = set(elements)
    leading = [element for element in HILL_LEADING if element in present]
    return leading + sorted(present.difference(HILL_LEADING))


def format_formula(formula_dict: Dict[str, int]) -> str:
    """Convierte un conteo de elementos en texto (p. ej., "CH4").

    Los elementos con cantidad cero o negativa se omiten y el conteo 1 no
    se escribe. Un diccionario vacío produce "".
    """
    counts = {element: n for element, n in formula_dict.items() if n > 0}
    return "".join(
        element if counts[element] == 1 else f"{element}{counts[element]}"
        for element in hill_order(counts)
    )


def subscript_formula(formula: str) -> str:
    """Convierte los dígitos de una fórmula en subíndices Unicode."""
    return formula.translate(_SUBSCRIPTS)
