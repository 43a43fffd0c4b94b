"""API pública de cálculos químicos auxiliares."""

from .formula import format_formula, molecular_formula, subscript_formula
from .mass import molecular_weight, try_molecular_weight
from .recognition import recognize_molecule
from .stability import AtomStability, ValidationResult, validate
from .valence import VALENCE_ELECTRONS, target_electrons, valence_electrons

__all__ = [
    "AtomStability",
    "ValidationResult",
    "VALENCE_ELECTRONS",
    "format_formula",
    "molecular_formula",
    "molecular_weight",
    "recognize_molecule",
    "subscript_formula",
    "target_electrons",
    "try_molecular_weight",
    "validate",
    "valence_electrons",
]
