"""Pruebas del controlador de interacción (sin Qt)."""

import math
import os
import sys
import unittest
from contextlib import contextmanager

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from core.model import BondOutcome, ChemState, MolGraph
from gui.interaction import InteractionConfig, InteractionController, InteractionMode, PointerButton


class ControllerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.graph = MolGraph()
        self.state = ChemState(snap_to_grid=False)
        self.drags = []
        self.rejections = []
        self.controller = InteractionController(
            self.graph,
            self.state,
            InteractionConfig(),
            on_drag_finished=self.drags.append,
            on_bond_rejected=lambda *args: self.rejections.append(args),
        )

    def click(self, x, y, **kwargs):
        self.controller.press(x, y, **kwargs)
        self.controller.release(x, y)


class PressTest(ControllerTestCase):
    def test_press_on_empty_space_adds_snapped_atom(self):
        self.state.snap_to_grid = True
        self.state.active_element = "N"

        self.click(103.0, 97.0)

        atom = next(iter(self.graph.atoms.values()))
        self.assertEqual(atom.element, "N")
        self.assertEqual(atom.position, (100.0, 100.0))
        self.assertIs(self.controller.mode, InteractionMode.IDLE)

    def test_click_toggles_selection_twice(self):
        """Verifica que dos clics sobre el mismo átomo alternan la selección."""
        a = self.graph.add_atom("C", 100.0, 100.0)

        self.click(100.0, 100.0)
        self.assertEqual(self.controller.selected_atoms, [a.id])
        self.click(102.0, 101.0)
        self.assertEqual(self.controller.selected_atoms, [])
        self.assertEqual(len(self.graph.atoms), 1)

    def test_press_on_empty_clears_selection(self):
        self.graph.add_atom("C", 100.0, 100.0)
        self.click(100.0, 100.0)

        self.click(400.0, 400.0)

        self.assertEqual(self.controller.selected_atoms, [])
        self.assertEqual(len(self.graph.atoms), 2)

    def test_click_second_atom_bonds_and_clears_selection(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        b = self.graph.add_atom("C", 200.0, 100.0)
        self.state.active_bond_order = 2

        self.click(100.0, 100.0)
        self.click(200.0, 100.0)

        bond = self.graph.find_bond_between(a.id, b.id)
        self.assertIsNotNone(bond)
        self.assertEqual(bond.order, 2)
        self.assertEqual(self.controller.selected_atoms, [])

    def test_rejected_bond_keeps_selection_and_reports(self):
        """Verifica que un enlace rechazado conserva la selección."""
        a = self.graph.add_atom("H", 100.0, 100.0)
        b = self.graph.add_atom("H", 200.0, 100.0)
        self.state.active_bond_order = 2

        self.click(100.0, 100.0)
        self.click(200.0, 100.0)

        self.assertEqual(self.graph.bonds, {})
        self.assertEqual(self.controller.selected_atoms, [a.id])
        self.assertEqual(self.rejections, [(BondOutcome.ORDER_NOT_ALLOWED, a.id, b.id, 2)])

    def test_atom_hit_takes_priority_over_bond(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        b = self.graph.add_atom("C", 200.0, 100.0)
        self.graph.add_or_retype_bond(a.id, b.id, 1)

        self.click(115.0, 100.0)

        self.assertEqual(self.controller.selected_atoms, [a.id])
        self.assertEqual(self.controller.selected_bonds, [])

    def test_bond_click_selects_and_shift_toggles(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        b = self.graph.add_atom("C", 300.0, 100.0)
        self.graph.add_or_retype_bond(a.id, b.id, 1)
        bond_id = next(iter(self.graph.bonds))

        self.click(200.0, 105.0)
        self.assertEqual(self.controller.selected_bonds, [bond_id])
        self.assertEqual(len(self.graph.atoms), 2)

        self.click(200.0, 105.0, additive=True)
        self.assertEqual(self.controller.selected_bonds, [])

    def test_secondary_press_deletes_atom_and_bonds(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        b = self.graph.add_atom("O", 200.0, 100.0)
        self.graph.add_or_retype_bond(a.id, b.id, 2)

        self.controller.press(100.0, 100.0, PointerButton.SECONDARY)
        self.controller.press(500.0, 500.0, PointerButton.SECONDARY)

        self.assertEqual(list(self.graph.atoms), [b.id])
        self.assertEqual(self.graph.bonds, {})


class DragTest(ControllerTestCase):
    def test_small_motion_previews_connection(self):
        a = self.graph.add_atom("C", 100.0, 100.0)

        self.controller.press(100.0, 100.0)
        self.controller.move(104.0, 103.0)

        self.assertIs(self.controller.mode, InteractionMode.CONNECTING_BOND)
        self.assertEqual(self.controller.connection_line, (100.0, 100.0, 104.0, 103.0))
        self.assertEqual(self.graph.get_atom(a.id).position, (100.0, 100.0))

        self.controller.release(104.0, 103.0)
        self.assertEqual(self.controller.selected_atoms, [a.id])
        self.assertIsNone(self.controller.connection_line)

    def test_drag_beyond_threshold_moves_by_snapped_delta(self):
        self.state.snap_to_grid = True
        a = self.graph.add_atom("C", 100.0, 100.0)

        self.controller.press(100.0, 100.0)
        self.controller.move(111.0, 100.0)

        self.assertIs(self.controller.mode, InteractionMode.DRAGGING)
        self.assertEqual(self.graph.get_atom(a.id).position, (120.0, 100.0))

        self.controller.release(111.0, 100.0)
        self.assertIs(self.controller.mode, InteractionMode.IDLE)
        self.assertEqual(self.drags, [{a.id: (100.0, 100.0)}])

    def test_drag_is_clamped_to_padded_surface(self):
        a = self.graph.add_atom("C", 100.0, 100.0)

        self.controller.press(100.0, 100.0)
        self.controller.move(-500.0, 2000.0)

        self.assertEqual(self.graph.get_atom(a.id).position, (24.0, 576.0))

    def test_group_drag_moves_selection_without_bonding(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        b = self.graph.add_atom("C", 200.0, 100.0)
        self.controller.select_all()
        d = self.graph.add_atom("C", 300.0, 300.0)

        self.controller.press(100.0, 100.0)
        self.controller.move(300.0, 300.0)
        self.controller.release(300.0, 300.0)

        self.assertEqual(self.graph.get_atom(a.id).position, (300.0, 300.0))
        self.assertEqual(self.graph.get_atom(b.id).position, (400.0, 300.0))
        self.assertEqual(self.graph.get_atom(d.id).position, (300.0, 300.0))
        self.assertEqual(self.graph.bonds, {})
        self.assertEqual(len(self.drags), 1)

    def test_single_drag_released_on_atom_bonds(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        b = self.graph.add_atom("O", 300.0, 100.0)

        self.controller.press(100.0, 100.0)
        self.controller.move(200.0, 100.0)
        self.assertEqual(self.controller.hover_atom_id, None)
        self.controller.move(300.0, 100.0)
        self.assertEqual(self.controller.hover_atom_id, b.id)
        self.controller.release(300.0, 100.0)

        self.assertIsNotNone(self.graph.find_bond_between(a.id, b.id))
        self.assertEqual(self.controller.selected_atoms, [])

    def test_global_release_ends_gesture(self):
        """Verifica que soltar fuera del lienzo limpia el gesto pendiente."""
        a = self.graph.add_atom("C", 100.0, 100.0)
        self.controller.press(100.0, 100.0)
        self.controller.move(103.0, 100.0)

        self.controller.global_release()

        self.assertIs(self.controller.mode, InteractionMode.IDLE)
        self.assertIsNone(self.controller.connection_line)
        self.assertEqual(self.controller.selected_atoms, [])

        self.click(100.0, 100.0)
        self.assertEqual(self.controller.selected_atoms, [a.id])
        self.click(400.0, 400.0)
        self.assertEqual(len(self.graph.atoms), 2)

    def test_global_release_after_drag_leaves_no_residual_state(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        self.controller.press(100.0, 100.0)
        self.controller.move(160.0, 100.0)
        self.assertIs(self.controller.mode, InteractionMode.DRAGGING)

        self.controller.global_release()

        self.assertIs(self.controller.mode, InteractionMode.IDLE)
        self.assertIsNone(self.controller.connection_line)
        self.assertEqual(self.drags, [{a.id: (100.0, 100.0)}])

        self.controller.press(160.0, 100.0)
        self.assertIs(self.controller.mode, InteractionMode.PRESSED_ON_ATOM)
        self.controller.move(162.0, 100.0)
        self.controller.release(162.0, 100.0)
        self.assertEqual(self.graph.get_atom(a.id).position, (160.0, 100.0))
        self.assertEqual(len(self.drags), 1)

    def test_stale_gesture_is_reset_on_new_press(self):
        self.graph.add_atom("C", 100.0, 100.0)
        self.controller.press(100.0, 100.0)
        self.controller.move(150.0, 100.0)

        self.controller.press(400.0, 400.0)

        self.assertIs(self.controller.mode, InteractionMode.IDLE)
        self.assertEqual(len(self.drags), 1)
        self.assertEqual(len(self.graph.atoms), 2)

    def test_deleted_pressed_atom_ends_gesture(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        self.controller.press(100.0, 100.0)
        self.graph.delete_atoms([a.id])

        self.controller.move(150.0, 100.0)

        self.assertIs(self.controller.mode, InteractionMode.IDLE)


class CommandTest(ControllerTestCase):
    def test_delete_selection_removes_bonds_and_atoms_in_one_transaction(self):
        entered = []

        @contextmanager
        def transaction():
            entered.append(True)
            yield

        self.controller = InteractionController(self.graph, self.state, transaction=transaction)
        a = self.graph.add_atom("C", 100.0, 100.0)
        b = self.graph.add_atom("C", 300.0, 100.0)
        self.graph.add_or_retype_bond(a.id, b.id, 1)
        self.click(200.0, 100.0)

        self.assertTrue(self.controller.delete_selection())

        self.assertEqual(self.graph.bonds, {})
        self.assertEqual(len(self.graph.atoms), 2)
        self.assertEqual(entered, [True])
        self.assertFalse(self.controller.delete_selection())

    def test_cycle_bond_order_wraps_at_pair_maximum(self):
        c = self.graph.add_atom("C", 100.0, 100.0)
        c2 = self.graph.add_atom("C", 200.0, 100.0)
        o = self.graph.add_atom("O", 100.0, 200.0)
        self.graph.add_or_retype_bond(c.id, c2.id, 1)
        self.graph.add_or_retype_bond(c.id, o.id, 1)
        cc = self.graph.find_bond_between(c.id, c2.id)
        co = self.graph.find_bond_between(c.id, o.id)

        self.assertIs(self.controller.cycle_bond_order(co.id), BondOutcome.RETYPED)
        self.assertEqual(co.order, 2)
        self.controller.cycle_bond_order(co.id)
        self.assertEqual(co.order, 1)

        self.controller.cycle_bond_order(cc.id)
        self.controller.cycle_bond_order(cc.id)
        self.assertEqual(cc.order, 3)
        self.assertIsNone(self.controller.cycle_bond_order(999))

    def test_cycle_single_only_pair_stays_put(self):
        h1 = self.graph.add_atom("H", 100.0, 100.0)
        h2 = self.graph.add_atom("H", 200.0, 100.0)
        self.graph.add_or_retype_bond(h1.id, h2.id, 1)
        hh = self.graph.find_bond_between(h1.id, h2.id)

        self.assertIs(self.controller.cycle_bond_order(hh.id), BondOutcome.UNCHANGED)
        self.assertEqual(hh.order, 1)
        self.assertEqual(self.rejections, [])

    def test_cycle_reports_capacity_rejection(self):
        c = self.graph.add_atom("C", 100.0, 100.0)
        c2 = self.graph.add_atom("C", 200.0, 100.0)
        for dy in (-60.0, 60.0):
            h = self.graph.add_atom("H", 100.0, 100.0 + dy)
            self.graph.add_or_retype_bond(c.id, h.id, 1)
        h = self.graph.add_atom("H", 40.0, 100.0)
        self.graph.add_or_retype_bond(c.id, h.id, 1)
        self.graph.add_or_retype_bond(c.id, c2.id, 1)
        cc = self.graph.find_bond_between(c.id, c2.id)

        outcome = self.controller.cycle_bond_order(cc.id)

        self.assertIs(outcome, BondOutcome.CAPACITY_EXCEEDED)
        self.assertEqual(cc.order, 1)
        self.assertEqual(self.rejections, [(BondOutcome.CAPACITY_EXCEEDED, c.id, c2.id, 2)])

    def test_double_click_on_bond_cycles_order(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        b = self.graph.add_atom("N", 300.0, 100.0)
        self.graph.add_or_retype_bond(a.id, b.id, 1)

        self.assertTrue(self.controller.double_click(200.0, 100.0))
        self.assertEqual(self.graph.find_bond_between(a.id, b.id).order, 2)
        self.assertFalse(self.controller.double_click(100.0, 100.0))

    def test_sync_with_model_drops_stale_ids(self):
        a = self.graph.add_atom("C", 100.0, 100.0)
        self.click(100.0, 100.0)
        self.controller.move(100.0, 100.0)
        self.assertEqual(self.controller.hover_atom_id, a.id)

        self.graph.delete_atoms([a.id])
        self.controller.sync_with_model()

        self.assertEqual(self.controller.selected_atoms, [])
        self.assertIsNone(self.controller.hover_atom_id)

    def test_leave_clears_hover(self):
        self.graph.add_atom("C", 100.0, 100.0)
        self.controller.move(100.0, 100.0)
        self.controller.leave()
        self.assertIsNone(self.controller.hover_atom_id)

    def test_blink_phase_wraps(self):
        for _ in range(100):
            phase = self.controller.advance_blink()
            self.assertGreaterEqual(phase, 0.0)
            self.assertLess(phase, 2 * math.pi)
        self.assertAlmostEqual(self.controller.blink_phase, 10.0 - 2 * math.pi, places=6)


if __name__ == "__main__":
    unittest.main()
