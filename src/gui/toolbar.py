"""
Octeto Toolbar
Vertical toolbar with the element palette and bond-order buttons.
"""
from __future__ import annotations

from typing import Dict, FrozenSet

from PyQt6.QtWidgets import QToolBar
from PyQt6.QtGui import QAction, QActionGroup
from PyQt6.QtCore import pyqtSignal, Qt, QSize

from core import bond_rules
from gui.icons import draw_atom_icon, draw_bond_icon
from gui.style import ELEMENT_GROUPS

ELEMENT_NAMES = {
    "C": "Carbono",
    "N": "Nitrógeno",
    "O": "Oxígeno",
    "H": "Hidrógeno",
    "F": "Flúor",
    "Cl": "Cloro",
    "Br": "Bromo",
    "I": "Yodo",
    "S": "Azufre",
    "P": "Fósforo",
    "B": "Boro",
    "Si": "Silicio",
}

BOND_ORDER_NAMES = {1: "Enlace simple", 2: "Enlace doble", 3: "Enlace triple"}


class OctetoToolbar(QToolBar):
    """
    Vertical toolbar for picking the element placed on empty clicks and the
    order used for new bonds.
    """

    element_changed = pyqtSignal(str)
    bond_order_changed = pyqtSignal(int)

    def __init__(self, parent=None) -> None:
        super().__init__("Paleta", parent)
        self.setOrientation(Qt.Orientation.Vertical)
        self.setMovable(False)
        self.setFloatable(False)
        self.setIconSize(QSize(28, 28))

        self.element_group = QActionGroup(self)
        self.element_group.setExclusive(True)
        self.element_actions: Dict[str, QAction] = {}
        for _title, symbols in ELEMENT_GROUPS:
            for symbol in symbols:
                action = QAction(draw_atom_icon(symbol), symbol, self)
                action.setToolTip(f"{ELEMENT_NAMES.get(symbol, symbol)} ({symbol})")
                action.setCheckable(True)
                action.setData(symbol)
                action.triggered.connect(lambda _checked=False, s=symbol: self.element_changed.emit(s))
                self.element_group.addAction(action)
                self.addAction(action)
                self.element_actions[symbol] = action
            self.addSeparator()

        self.bond_group = QActionGroup(self)
        self.bond_group.setExclusive(True)
        self.bond_actions: Dict[int, QAction] = {}
        for order in bond_rules.BOND_ORDERS:
            action = QAction(draw_bond_icon(order), BOND_ORDER_NAMES[order], self)
            action.setToolTip(
                f"{BOND_ORDER_NAMES[order]} ({bond_rules.bond_type_symbol(order)})"
            )
            action.setCheckable(True)
            action.setData(order)
            action.triggered.connect(lambda _checked=False, o=order: self.bond_order_changed.emit(o))
            self.bond_group.addAction(action)
            self.addAction(action)
            self.bond_actions[order] = action

    def set_element(self, element: str) -> None:
        action = self.element_actions.get(element)
        if action is not None:
            action.setChecked(True)

    def set_bond_order(self, order: int) -> None:
        action = self.bond_actions.get(order)
        if action is not None:
            action.setChecked(True)

    def set_allowed_orders(self, allowed: FrozenSet[int]) -> None:
        """Disable bond buttons the active element cannot form."""
        for order, action in self.bond_actions.items():
            action.setEnabled(order in allowed)
