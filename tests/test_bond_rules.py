import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

import pytest

from core import bond_rules


@pytest.mark.parametrize(
    "element, expected",
    [
        ("H", {1}),
        ("Cl", {1}),
        ("cl", {1}),
        ("O", {1, 2}),
        ("Si", {1, 2}),
        ("C", {1, 2, 3}),
        ("N", {1, 2, 3}),
        ("B", {1}),
        ("Xe", {1}),
    ],
)
def test_allowed_bond_types(element, expected):
    assert bond_rules.get_allowed_bond_types(element) == frozenset(expected)


def test_max_total_bond_order():
    assert bond_rules.max_total_bond_order("H") == 1
    assert bond_rules.max_total_bond_order("O") == 2
    assert bond_rules.max_total_bond_order("B") == 3
    assert bond_rules.max_total_bond_order("C") == 4
    assert bond_rules.max_total_bond_order("Unknown") == 4


def test_max_bond_order_between_pairs():
    assert bond_rules.max_bond_order("C", "N") == 3
    assert bond_rules.max_bond_order("C", "O") == 2
    assert bond_rules.max_bond_order("C", "H") == 1


def test_pair_requires_both_endpoints():
    assert bond_rules.is_bond_order_allowed("C", "C", 3)
    assert not bond_rules.is_bond_order_allowed("C", "O", 3)
    assert not bond_rules.is_bond_order_allowed("H", "H", 2)


def test_check_bond_order_reason():
    assert bond_rules.check_bond_order("C", "O", 2) is None
    assert bond_rules.check_bond_order("H", "C", 2) == "H no puede formar enlaces dobles"
    assert "no válido" in bond_rules.check_bond_order("C", "C", 5)


def test_best_allowed_order_falls_back_to_highest():
    assert bond_rules.best_allowed_order("C", 3) == 3
    assert bond_rules.best_allowed_order("O", 3) == 2
    assert bond_rules.best_allowed_order("H", 2) == 1
    assert bond_rules.best_allowed_order("N", 2) == 2


def test_names_and_symbols():
    assert bond_rules.bond_type_name(2) == "Doble"
    assert bond_rules.bond_type_symbol(3) == "≡"
