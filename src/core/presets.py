"""Moléculas de ejemplo que se pueden cargar desde el panel lateral.

Cada `Preset` describe posiciones y enlaces; `load_preset` los reconstruye
usando solo la API pública del grafo.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from core.model import MolGraph

# (elemento, x, y)
AtomSpec = Tuple[str, float, float]
# (índice origen, índice destino, orden)
BondSpec = Tuple[int, int, int]


@dataclass(frozen=True)
class Preset:
    """Molécula de ejemplo con su disposición en el lienzo."""
    key: str
    label: str
    description: str
    layout: Tuple[AtomSpec, ...]
    bonds: Tuple[BondSpec, ...]
    focus_element: str


PRESETS: Dict[str, Preset] = {
    "water": Preset(
        key="water",
        label="Agua",
        description="Angular, 104,5°",
        layout=(("O", 340, 320), ("H", 280, 360), ("H", 400, 360)),
        bonds=((0, 1, 1), (0, 2, 1)),
        focus_element="O",
    ),
    "methane": Preset(
        key="methane",
        label="Metano",
        description="Proyección tetraédrica",
        layout=(
            ("C", 340, 320),
            ("H", 260, 320),
            ("H", 420, 320),
            ("H", 320, 240),
            ("H", 360, 400),
        ),
        bonds=((0, 1, 1), (0, 2, 1), (0, 3, 1), (0, 4, 1)),
        focus_element="C",
    ),
    "carbon_dioxide": Preset(
        key="carbon_dioxide",
        label="Dióxido de carbono",
        description="Lineal, 180°",
        layout=(("O", 240, 320), ("C", 340, 320), ("O", 440, 320)),
        bonds=((0, 1, 2), (1, 2, 2)),
        focus_element="O",
    ),
    "ammonia": Preset(
        key="ammonia",
        label="Amoníaco",
        description="Pirámide trigonal",
        layout=(("N", 340, 300), ("H", 270, 360), ("H", 410, 360), ("H", 340, 430)),
        bonds=((0, 1, 1), (0, 2, 1), (0, 3, 1)),
        focus_element="N",
    ),
    "benzene": Preset(
        key="benzene",
        label="Benceno",
        description="Anillo plano con dobles enlaces alternados",
        layout=(
            ("C", 320, 200),
            ("C", 404, 230),
            ("C", 444, 310),
            ("C", 404, 390),
            ("C", 320, 420),
            ("C", 236, 390),
            ("H", 320, 130),
            ("H", 470, 205),
            ("H", 520, 310),
            ("H", 470, 415),
            ("H", 320, 490),
            ("H", 170, 315),
        ),
        bonds=(
            (0, 1, 2),
            (1, 2, 1),
            (2, 3, 2),
            (3, 4, 1),
            (4, 5, 2),
            (5, 0, 1),
            (0, 6, 1),
            (1, 7, 1),
            (2, 8, 1),
            (3, 9, 1),
            (4, 10, 1),
            (5, 11, 1),
        ),
        focus_element="C",
    ),
}


def load_preset(graph: MolGraph, key: str) -> List[int]:
    """Reemplaza el contenido del grafo por una molécula de ejemplo.

    Los enlaces pasan por `add_or_retype_bond`, así que la tabla de
    compatibilidad también se aplica a los ejemplos.

    Args:
        graph: Grafo a reemplazar.
        key: Clave del ejemplo en `PRESETS`.

    Returns:
        Los IDs de los átomos creados, en el orden de `layout`.

    Raises:
        KeyError: Si el ejemplo no existe.
    """
    preset = PRESETS[key]
    graph.clear()
    atom_ids = [graph.add_atom(element, x, y).id for element, x, y in preset.layout]
    for start, end, order in preset.bonds:
        graph.add_or_retype_bond(atom_ids[start], atom_ids[end], order)
    return atom_ids
