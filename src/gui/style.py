"""
Drawing style presets for Octeto.
"""
from __future__ import annotations

from dataclasses import dataclass

# Colores de elementos (esquema CPK simplificado) para los átomos.
ELEMENT_COLORS = {
    "H": "#FFFFFF",
    "C": "#909090",
    "N": "#3050F8",
    "O": "#FF0D0D",
    "F": "#90E050",
    "Cl": "#1FF01F",
    "Br": "#A62929",
    "I": "#940094",
    "S": "#FFFF30",
    "P": "#FF8000",
    "B": "#FFB5B5",
    "Si": "#F0C8A0",
}
DEFAULT_ELEMENT_COLOR = "#FF1493"

# Elementos de la paleta, agrupados como en el panel lateral.
ELEMENT_GROUPS = (
    ("Backbone", ("C", "N", "O", "H")),
    ("Halogens", ("F", "Cl", "Br", "I")),
    ("Expanded set", ("S", "P", "B", "Si")),
)


def element_color(element: str) -> str:
    return ELEMENT_COLORS.get(element, DEFAULT_ELEMENT_COLOR)


def label_color(element: str) -> str:
    """Texto oscuro sobre átomos claros, blanco sobre el resto."""
    return "#111111" if element in {"H", "S", "B", "Si", "F", "Cl"} else "#FFFFFF"


@dataclass(frozen=True)
class DrawingStyle:
    atom_radius_px: float
    atom_radius_selected_px: float
    glow_min_px: float
    glow_max_px: float
    bond_stroke_px: float
    bond_stroke_selected_px: float
    parallel_offset_px: float
    background_color: str
    paper_color: str
    grid_color: str
    bond_color: str
    bond_selected_color: str
    bond_violation_color: str
    connection_color: str
    selected_color: str
    hover_color: str
    charge_positive_color: str
    charge_negative_color: str
    electron_need_color: str
    shake_distance_px: float
    shake_duration_ms: int


OCTETO_DARK = DrawingStyle(
    atom_radius_px=20.0,
    atom_radius_selected_px=25.0,
    glow_min_px=30.0,
    glow_max_px=40.0,
    bond_stroke_px=2.0,
    bond_stroke_selected_px=4.0,
    parallel_offset_px=6.0,
    background_color="#0B1120",
    paper_color="#111827",
    grid_color="#1F2937",
    bond_color="#666666",
    bond_selected_color="#00FFFF",
    bond_violation_color="#FF4D4D",
    connection_color="#00FF00",
    selected_color="#00FFFF",
    hover_color="#FFFF00",
    charge_positive_color="#FF6666",
    charge_negative_color="#6666FF",
    electron_need_color="#FFAA00",
    shake_distance_px=4.0,
    shake_duration_ms=500,
)
