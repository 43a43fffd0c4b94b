import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

import pytest

from chemcalc.formula import format_formula, molecular_formula, subscript_formula
from chemcalc.mass import molecular_weight, try_molecular_weight
from chemcalc.recognition import recognize_molecule
from core.model import MolGraph
from core.presets import load_preset


def test_hill_order():
    assert format_formula({"O": 1, "H": 2}) == "H2O"
    assert format_formula({"H": 4, "C": 1}) == "CH4"
    assert format_formula({"N": 1, "Cl": 1, "H": 4}) == "H4ClN"
    assert format_formula({}) == ""


def test_molecular_formula_counts_drawn_atoms_only():
    graph = MolGraph()
    graph.add_atom("C", 0, 0)
    graph.add_atom("O", 40, 0)
    assert molecular_formula(graph) == {"C": 1, "O": 1}


def test_subscript_formula():
    assert subscript_formula("C6H6") == "C₆H₆"


def test_molecular_weight():
    assert molecular_weight({"H": 2, "O": 1}) == pytest.approx(18.015, abs=1e-3)
    assert try_molecular_weight({"Xe": 1}) is None
    with pytest.raises(ValueError):
        molecular_weight({"Xe": 1})


@pytest.mark.parametrize(
    "key, name",
    [
        ("water", "Agua (H₂O)"),
        ("methane", "Metano (CH₄)"),
        ("carbon_dioxide", "Dióxido de carbono (CO₂)"),
        ("ammonia", "Amoníaco (NH₃)"),
        ("benzene", "Benceno (C₆H₆)"),
    ],
)
def test_presets_are_recognized(key, name):
    graph = MolGraph()
    load_preset(graph, key)
    assert recognize_molecule(graph) == name


def test_unknown_molecule_is_not_recognized():
    graph = MolGraph()
    assert recognize_molecule(graph) is None
    graph.add_atom("Si", 0, 0)
    graph.add_atom("Br", 40, 0)
    assert recognize_molecule(graph) is None
