"""Electrones de valencia y objetivo de la regla del octeto."""

from __future__ import annotations

import logging
from typing import Dict

logger = logging.getLogger(__name__)

# Electrones de valencia por elemento (grupos IUPAC; metales de transición
# con su estado de oxidación más común; lantánidos/actínidos típicamente 3).
VALENCE_ELECTRONS: Dict[str, int] = {
    # Periodo 1
    "H": 1, "He": 2,
    # Periodo 2
    "Li": 1, "Be": 2, "B": 3, "C": 4, "N": 5, "O": 6, "F": 7, "Ne": 8,
    # Periodo 3
    "Na": 1, "Mg": 2, "Al": 3, "Si": 4, "P": 5, "S": 6, "Cl": 7, "Ar": 8,
    # Periodo 4
    "K": 1, "Ca": 2,
    "Sc": 3, "Ti": 4, "V": 5, "Cr": 6, "Mn": 7, "Fe": 2, "Co": 2, "Ni": 2, "Cu": 1, "Zn": 2,
    "Ga": 3, "Ge": 4, "As": 5, "Se": 6, "Br": 7, "Kr": 8,
    # Periodo 5
    "Rb": 1, "Sr": 2,
    "Y": 3, "Zr": 4, "Nb": 5, "Mo": 6, "Tc": 7, "Ru": 2, "Rh": 2, "Pd": 2, "Ag": 1, "Cd": 2,
    "In": 3, "Sn": 4, "Sb": 5, "Te": 6, "I": 7, "Xe": 8,
    # Periodo 6
    "Cs": 1, "Ba": 2,
    "La": 3, "Ce": 4, "Pr": 3, "Nd": 3, "Pm": 3, "Sm": 3, "Eu": 3,
    "Gd": 3, "Tb": 3, "Dy": 3, "Ho": 3, "Er": 3, "Tm": 3, "Yb": 3, "Lu": 3,
    "Hf": 4, "Ta": 5, "W": 6, "Re": 7, "Os": 2, "Ir": 2, "Pt": 2, "Au": 1, "Hg": 2,
    "Tl": 3, "Pb": 4, "Bi": 5, "Po": 6, "At": 7, "Rn": 8,
    # Periodo 7
    "Fr": 1, "Ra": 2,
    "Ac": 3, "Th": 4, "Pa": 5, "U": 6, "Np": 6, "Pu": 6, "Am": 6,
    "Cm": 3, "Bk": 3, "Cf": 3, "Es": 3, "Fm": 3, "Md": 3, "No": 3, "Lr": 3,
    "Rf": 4, "Db": 5, "Sg": 6, "Bh": 7, "Hs": 8, "Mt": 9,
    "Ds": 2, "Rg": 1, "Cn": 2,
    "Nh": 3, "Fl": 4, "Mc": 5, "Lv": 6, "Ts": 7, "Og": 8,
}

# Valor usado para símbolos desconocidos (comportamiento tipo carbono).
FALLBACK_VALENCE_ELECTRONS = 4

# Elementos que cumplen con dos electrones (regla del dueto).
DUET_ELEMENTS = frozenset({"H", "He"})


def valence_electrons(element: str) -> int:
    """Devuelve los electrones de valencia de un elemento.

    Args:
        element: Símbolo químico (sensible a mayúsculas, p. ej., "Cl").

    Returns:
        Número de electrones de valencia. Para símbolos desconocidos se
        registra una advertencia y se devuelve un valor tipo carbono.
    """
    value = VALENCE_ELECTRONS.get(element)
    if value is None:
        logger.warning("Unknown element %r; assuming %d valence electrons", element, FALLBACK_VALENCE_ELECTRONS)
        return FALLBACK_VALENCE_ELECTRONS
    return value


def target_electrons(element: str) -> int:
    """Electrones objetivo según la regla del octeto simplificada."""
    return 2 if element in DUET_ELEMENTS else 8
