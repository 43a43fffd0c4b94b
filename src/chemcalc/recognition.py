"""Reconocimiento de moléculas conocidas a partir del grafo dibujado."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from .formula import format_formula, molecular_formula

# Fórmula de Hill -> (nombre, fórmula común mostrada).
KNOWN_MOLECULES: Dict[str, Tuple[str, str]] = {
    "H2O": ("Agua", "H₂O"),
    "CH4": ("Metano", "CH₄"),
    "C2H6": ("Etano", "C₂H₆"),
    "C2H4": ("Etileno", "C₂H₄"),
    "C2H2": ("Acetileno", "C₂H₂"),
    "C3H8": ("Propano", "C₃H₈"),
    "C6H6": ("Benceno", "C₆H₆"),
    "CO2": ("Dióxido de carbono", "CO₂"),
    "CO": ("Monóxido de carbono", "CO"),
    "H2O2": ("Peróxido de hidrógeno", "H₂O₂"),
    "H3N": ("Amoníaco", "NH₃"),
    "N2": ("Nitrógeno gaseoso", "N₂"),
    "NO2": ("Dióxido de nitrógeno", "NO₂"),
    "HCl": ("Ácido clorhídrico", "HCl"),
    "H2O4S": ("Ácido sulfúrico", "H₂SO₄"),
    "HNO3": ("Ácido nítrico", "HNO₃"),
    "CH4O": ("Metanol", "CH₃OH"),
    "C2H6O": ("Etanol", "C₂H₅OH"),
    "F2": ("Flúor gaseoso", "F₂"),
    "Cl2": ("Cloro gaseoso", "Cl₂"),
    "Br2": ("Bromo", "Br₂"),
    "I2": ("Yodo", "I₂"),
    "H2": ("Hidrógeno gaseoso", "H₂"),
    "O2": ("Oxígeno gaseoso", "O₂"),
}


def _label(name: str, common: str) -> str:
    return f"{name} ({common})"


def recognize_molecule(graph) -> Optional[str]:
    """Intenta reconocer la molécula dibujada.

    Busca la fórmula de Hill de los átomos dibujados en `KNOWN_MOLECULES`.

    Args:
        graph: Grafo molecular (`MolGraph`).

    Returns:
        Un nombre legible como "Agua (H₂O)", o `None` si no se reconoce.
    """
    if graph.is_empty():
        return None
    counts = molecular_formula(graph)
    formula = format_formula(counts)
    known = KNOWN_MOLECULES.get(formula)
    if known is None:
        return None
    return _label(*known)
