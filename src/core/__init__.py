"""API pública del núcleo químico de Octeto.

Reexpone las clases base del modelo y la tabla de enlaces para facilitar
importaciones.
"""

from core.errors import DiagramIntegrityError, check_integrity
from core.model import (
    Atom,
    Bond,
    BondOutcome,
    ChemState,
    DiagramSnapshot,
    GraphChange,
    MolGraph,
)

__all__ = [
    "Atom",
    "Bond",
    "BondOutcome",
    "ChemState",
    "DiagramIntegrityError",
    "DiagramSnapshot",
    "GraphChange",
    "MolGraph",
    "check_integrity",
]
