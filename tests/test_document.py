"""Pruebas del documento: historial de deshacer y revalidación."""

import os
import sys
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from PyQt6.QtWidgets import QApplication

from core.model import BondOutcome
from gui.document import HISTORY_LIMIT, MoleculeDocument


class MoleculeDocumentTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._app = QApplication.instance() or QApplication([])

    def setUp(self) -> None:
        self.document = MoleculeDocument()
        self.graph = self.document.graph
        self.stack = self.document.undo_stack

    def test_each_mutation_is_one_undo_step(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        b = self.graph.add_atom("O", 200.0, 100.0)
        self.graph.add_or_retype_bond(a.id, b.id, 2)
        self.graph.add_or_retype_bond(a.id, b.id, 2)

        self.assertEqual(self.stack.count(), 3)

        self.document.undo()
        self.assertEqual(self.graph.bonds, {})
        self.document.undo()
        self.assertEqual(list(self.graph.atoms), [a.id])
        self.document.redo()
        self.assertEqual(list(self.graph.atoms), [a.id, b.id])

    def test_drag_records_single_step(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        before = self.stack.count()

        for x in (120.0, 140.0, 160.0):
            self.graph.move_atoms({a.id: (x, 100.0)})
        self.assertEqual(self.stack.count(), before)
        self.document.finish_drag({a.id: (100.0, 100.0)})

        self.assertEqual(self.stack.count(), before + 1)
        self.document.undo()
        self.assertEqual(self.graph.get_atom(a.id).position, (100.0, 100.0))

    def test_drag_without_motion_records_nothing(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        before = self.stack.count()

        self.document.finish_drag({a.id: (100.0, 100.0)})

        self.assertEqual(self.stack.count(), before)

    def test_transaction_groups_mutations(self):
        with self.document.transaction("Construir"):
            for i in range(3):
                self.graph.add_atom("C", 100.0 + 40 * i, 100.0)

        self.assertEqual(self.stack.count(), 1)
        self.assertEqual(self.stack.undoText(), "Construir")
        self.document.undo()
        self.assertTrue(self.graph.is_empty())

    def test_load_preset_is_one_step_and_focuses_element(self):
        self.document.state.active_bond_order = 3

        self.document.load_preset("water")

        self.assertEqual(self.stack.count(), 1)
        self.assertEqual(self.document.validation.formula, "H2O")
        self.assertEqual(self.document.recognized, "Agua (H₂O)")
        self.assertEqual(self.document.state.active_element, "O")
        self.assertEqual(self.document.state.active_bond_order, 2)

    def test_clear_is_undoable(self):
        self.document.load_preset("methane")
        self.document.clear()
        self.assertTrue(self.graph.is_empty())

        self.document.undo()

        self.assertEqual(self.document.validation.formula, "CH4")
        self.assertTrue(self.document.validation.is_stable)

    def test_history_is_bounded(self):
        for i in range(HISTORY_LIMIT + 10):
            self.graph.add_atom("H", float(i), 0.0)

        self.assertEqual(self.stack.count(), HISTORY_LIMIT)

    def test_set_active_element_adjusts_bond_order(self):
        self.document.state.active_bond_order = 3
        self.assertEqual(self.document.set_active_element("O"), 2)
        self.assertEqual(self.document.set_active_element("H"), 1)
        self.assertFalse(self.document.set_active_bond_order(2))
        self.document.set_active_element("N")
        self.assertTrue(self.document.set_active_bond_order(3))

    def test_became_unstable_fires_on_transition_only(self):
        fired = []
        self.document.became_unstable.connect(lambda: fired.append(True))

        self.graph.add_atom("C", 100.0, 100.0)
        self.graph.add_atom("C", 200.0, 100.0)

        self.assertEqual(fired, [True])

    def test_bond_rejection_message(self):
        messages = []
        self.document.message.connect(messages.append)
        h1 = self.graph.add_atom("H", 0.0, 0.0)
        h2 = self.graph.add_atom("H", 40.0, 0.0)

        text = self.document.report_bond_rejection(BondOutcome.ORDER_NOT_ALLOWED, h1.id, h2.id, 2)

        self.assertEqual(text, "H no puede formar enlaces dobles")
        self.assertEqual(messages, [text])


if __name__ == "__main__":
    unittest.main()
