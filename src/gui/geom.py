"""Geometría 2D en coordenadas del diagrama, sin dependencias de Qt."""
from __future__ import annotations

import math
from typing import Iterable, List, Optional, Tuple

Point = Tuple[float, float]


def distance_point_to_segment(p: Point, a: Point, b: Point) -> float:
    """Distancia de un punto al segmento AB."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    if dx == 0 and dy == 0:
        return math.hypot(p[0] - a[0], p[1] - a[1])
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / (dx * dx + dy * dy)
    t = max(0.0, min(1.0, t))
    proj = (a[0] + t * dx, a[1] + t * dy)
    return math.hypot(p[0] - proj[0], p[1] - proj[1])


def first_atom_within(
    pos: Point,
    atoms: Iterable[Tuple[int, float, float]],
    radius: float,
    exclude: Optional[int] = None,
) -> Optional[int]:
    """Devuelve el primer átomo (en orden del diagrama) a menos de `radius`."""
    for atom_id, x, y in atoms:
        if atom_id == exclude:
            continue
        if math.hypot(pos[0] - x, pos[1] - y) < radius:
            return atom_id
    return None


def first_bond_within(
    pos: Point,
    bonds: Iterable[Tuple[int, Point, Point]],
    threshold: float,
) -> Optional[int]:
    """Devuelve el primer enlace cuyo segmento queda a menos de `threshold`."""
    for bond_id, a, b in bonds:
        if distance_point_to_segment(pos, a, b) < threshold:
            return bond_id
    return None


def snap_value(value: float, unit: float) -> float:
    """Redondea una coordenada al múltiplo de `unit` más cercano."""
    if unit <= 0:
        return value
    return round(value / unit) * unit


def clamp(value: float, low: float, high: float) -> float:
    if high < low:
        return (low + high) / 2.0
    return max(low, min(high, value))


def parallel_offsets(order: int, spacing: float) -> List[float]:
    """Desplazamientos perpendiculares de las líneas de un enlace múltiple."""
    if order <= 1:
        return [0.0]
    if order == 2:
        return [-spacing / 2.0, spacing / 2.0]
    return [-spacing, 0.0, spacing]


def offset_segment(a: Point, b: Point, offset: float) -> Tuple[Point, Point]:
    """Desplaza el segmento AB perpendicularmente una distancia `offset`."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length = math.hypot(dx, dy)
    if length == 0:
        return a, b
    nx = -dy / length * offset
    ny = dx / length * offset
    return (a[0] + nx, a[1] + ny), (b[0] + nx, b[1] + ny)


def trim_segment(a: Point, b: Point, start_trim: float, end_trim: float) -> Tuple[Point, Point]:
    """Acorta el segmento AB por ambos extremos (para no tapar las etiquetas)."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length = math.hypot(dx, dy)
    if length <= start_trim + end_trim:
        return a, b
    ux = dx / length
    uy = dy / length
    return (
        (a[0] + ux * start_trim, a[1] + uy * start_trim),
        (b[0] - ux * end_trim, b[1] - uy * end_trim),
    )
