"""Masa molecular aproximada para el panel de estabilidad."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

# Pesos atómicos promedio (u) de los elementos de la paleta y del helio.
ATOMIC_WEIGHTS: Dict[str, float] = {
    "H": 1.00794,
    "He": 4.002602,
    "B": 10.811,
    "C": 12.0107,
    "N": 14.0067,
    "O": 15.9994,
    "F": 18.998403,
    "Si": 28.0855,
    "P": 30.973762,
    "S": 32.065,
    "Cl": 35.453,
    "Br": 79.904,
    "I": 126.90447,
}


def molecular_weight(formula_dict: Mapping[str, int]) -> float:
    """Suma los pesos atómicos de una fórmula.

    Args:
        formula_dict: Conteo elemento -> cantidad, como el que devuelve
            `molecular_formula`.

    Returns:
        Masa molecular en unidades atómicas (u).

    Raises:
        ValueError: Si algún elemento no tiene peso atómico tabulado.
    """
    missing = sorted(element for element in formula_dict if element not in ATOMIC_WEIGHTS)
    if missing:
        raise ValueError(f"Atomic weight not available for {', '.join(missing)}")
    return sum(ATOMIC_WEIGHTS[element] * count for element, count in formula_dict.items())


def try_molecular_weight(formula_dict: Mapping[str, int]) -> Optional[float]:
    """Igual que `molecular_weight`, pero `None` si falta algún peso."""
    try:
        return molecular_weight(formula_dict)
    except ValueError:
        return None
