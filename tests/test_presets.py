"""Pruebas de las moléculas de ejemplo."""

import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from chemcalc.stability import validate
from core.errors import check_integrity
from core.model import MolGraph
from core.presets import PRESETS, load_preset


class PresetTest(unittest.TestCase):
    def test_every_preset_builds_all_its_bonds(self):
        for key, preset in PRESETS.items():
            with self.subTest(preset=key):
                graph = MolGraph()
                load_preset(graph, key)
                self.assertEqual(len(graph.atoms), len(preset.layout))
                self.assertEqual(len(graph.bonds), len(preset.bonds))
                check_integrity(graph)

    def test_closed_shell_presets_are_stable(self):
        for key in ("water", "methane", "carbon_dioxide", "ammonia", "benzene"):
            with self.subTest(preset=key):
                graph = MolGraph()
                load_preset(graph, key)
                result = validate(graph)
                self.assertTrue(result.is_stable)
                self.assertEqual(result.total_charge, 0)

    def test_loading_replaces_previous_contents(self):
        graph = MolGraph()
        graph.add_atom("Cl", 0.0, 0.0)
        load_preset(graph, "water")
        self.assertNotIn("Cl", {atom.element for atom in graph.atoms.values()})

    def test_unknown_preset(self):
        with self.assertRaises(KeyError):
            load_preset(MolGraph(), "caffeine")


if __name__ == "__main__":
    unittest.main()
