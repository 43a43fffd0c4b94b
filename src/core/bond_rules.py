"""Tabla de compatibilidad de enlaces por elemento.

Define qué órdenes de enlace (simple, doble, triple) admite cada elemento
y la suma máxima de órdenes que puede soportar un átomo. El grafo consulta
esta tabla antes de crear o cambiar cualquier enlace, y el motor de
estabilidad la usa para reportar enlaces que la violan.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Optional

SINGLE = 1
DOUBLE = 2
TRIPLE = 3

BOND_ORDERS = (SINGLE, DOUBLE, TRIPLE)

_SINGLE_ONLY: FrozenSet[int] = frozenset({SINGLE})
_UP_TO_DOUBLE: FrozenSet[int] = frozenset({SINGLE, DOUBLE})
_UP_TO_TRIPLE: FrozenSet[int] = frozenset({SINGLE, DOUBLE, TRIPLE})

# Órdenes permitidos por elemento (claves en mayúsculas).
ALLOWED_BOND_TYPES: Dict[str, FrozenSet[int]] = {
    "H": _SINGLE_ONLY,
    "F": _SINGLE_ONLY,
    "CL": _SINGLE_ONLY,
    "BR": _SINGLE_ONLY,
    "I": _SINGLE_ONLY,
    "O": _UP_TO_DOUBLE,
    "S": _UP_TO_DOUBLE,
    "P": _UP_TO_DOUBLE,
    "SI": _UP_TO_DOUBLE,
    "C": _UP_TO_TRIPLE,
    "N": _UP_TO_TRIPLE,
    "B": _SINGLE_ONLY,
}

# Suma máxima de órdenes de enlace por átomo.
MAX_TOTAL_BOND_ORDER: Dict[str, int] = {
    "H": 1,
    "F": 1,
    "CL": 1,
    "BR": 1,
    "I": 1,
    "O": 2,
    "S": 4,
    "P": 4,
    "SI": 4,
    "C": 4,
    "N": 4,
    "B": 3,
}

DEFAULT_ALLOWED_BOND_TYPES = _SINGLE_ONLY
DEFAULT_MAX_TOTAL_BOND_ORDER = 4

BOND_TYPE_NAMES = {
    SINGLE: "Simple",
    DOUBLE: "Doble",
    TRIPLE: "Triple",
}

BOND_TYPE_SYMBOLS = {
    SINGLE: "-",
    DOUBLE: "=",
    TRIPLE: "≡",
}


def _key(element: str) -> str:
    return element.strip().upper()


def get_allowed_bond_types(element: str) -> FrozenSet[int]:
    """Devuelve los órdenes de enlace admitidos por un elemento.

    La búsqueda no distingue mayúsculas ("cl", "CL" y "Cl" son iguales).
    Los elementos desconocidos solo admiten enlaces simples.
    """
    return ALLOWED_BOND_TYPES.get(_key(element), DEFAULT_ALLOWED_BOND_TYPES)


def max_total_bond_order(element: str) -> int:
    """Devuelve la suma máxima de órdenes de enlace para un elemento."""
    return MAX_TOTAL_BOND_ORDER.get(_key(element), DEFAULT_MAX_TOTAL_BOND_ORDER)


def is_bond_order_allowed(element1: str, element2: str, order: int) -> bool:
    """Indica si ambos extremos admiten el orden de enlace pedido."""
    return order in get_allowed_bond_types(element1) and order in get_allowed_bond_types(
        element2
    )


def max_bond_order(element1: str, element2: str) -> int:
    """Orden de enlace más alto que admiten los dos elementos a la vez."""
    shared = get_allowed_bond_types(element1) & get_allowed_bond_types(element2)
    return max(shared) if shared else SINGLE


def check_bond_order(element1: str, element2: str, order: int) -> Optional[str]:
    """Explica por qué un orden de enlace no es válido para un par.

    Args:
        element1: Símbolo del primer átomo.
        element2: Símbolo del segundo átomo.
        order: Orden de enlace solicitado.

    Returns:
        Un mensaje legible si el enlace no está permitido, o `None` si lo está.
    """
    if order not in BOND_ORDERS:
        return f"Orden de enlace no válido: {order}"
    name = bond_type_name(order).lower()
    for element in (element1, element2):
        if order not in get_allowed_bond_types(element):
            return f"{element} no puede formar enlaces {name}s"
    return None


def best_allowed_order(element: str, preferred: int) -> int:
    """Ajusta el orden activo de la paleta al elemento seleccionado.

    Si el elemento admite `preferred` se conserva; si no, se usa el orden
    más alto que sí admite.
    """
    allowed = get_allowed_bond_types(element)
    if preferred in allowed:
        return preferred
    return max(allowed)


def bond_type_name(order: int) -> str:
    return BOND_TYPE_NAMES.get(order, "Desconocido")


def bond_type_symbol(order: int) -> str:
    return BOND_TYPE_SYMBOLS.get(order, "?")
