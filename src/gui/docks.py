"""
Octeto Dock Widgets
Panels for molecule presets and stability feedback.
"""
from typing import Optional

from PyQt6.QtWidgets import (
    QDockWidget,
    QWidget,
    QVBoxLayout,
    QLabel,
    QListWidget,
    QTreeWidget,
    QTreeWidgetItem,
    QTableWidget,
    QTableWidgetItem,
    QHeaderView,
)
from PyQt6.QtCore import Qt, pyqtSignal

from chemcalc.formula import molecular_formula, subscript_formula
from chemcalc.mass import try_molecular_weight
from chemcalc.stability import ValidationResult
from core.presets import PRESETS


class PresetsDock(QDockWidget):
    """
    Dock widget listing ready-made molecules.
    """
    preset_selected = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__("Moléculas", parent)
        self.setAllowedAreas(Qt.DockWidgetArea.LeftDockWidgetArea | Qt.DockWidgetArea.RightDockWidgetArea)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)

        self.tree = QTreeWidget()
        self.tree.setHeaderHidden(True)
        self._populate_tree()
        self.tree.itemActivated.connect(self._emit_preset)
        layout.addWidget(self.tree)

        self.setWidget(container)

    def _populate_tree(self) -> None:
        group_item = QTreeWidgetItem(["Ejemplos"])
        group_item.setFlags(group_item.flags() & ~Qt.ItemFlag.ItemIsSelectable)
        for key, preset in PRESETS.items():
            child = QTreeWidgetItem([preset.label])
            child.setToolTip(0, preset.description)
            child.setData(0, Qt.ItemDataRole.UserRole, key)
            group_item.addChild(child)
        self.tree.addTopLevelItem(group_item)
        group_item.setExpanded(True)

    def _emit_preset(self, item: QTreeWidgetItem) -> None:
        key = item.data(0, Qt.ItemDataRole.UserRole)
        if isinstance(key, str):
            self.preset_selected.emit(key)


class StabilityDock(QDockWidget):
    """
    Dock widget displaying the stability analysis of the current molecule.
    """

    def __init__(self, parent=None):
        super().__init__("Estabilidad", parent)
        self.setAllowedAreas(Qt.DockWidgetArea.LeftDockWidgetArea | Qt.DockWidgetArea.RightDockWidgetArea)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)

        self.info_label = QLabel("Lienzo vacío")
        self.info_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.info_label.setStyleSheet("color: #666666; font-style: italic; padding: 10px;")
        layout.addWidget(self.info_label)

        self.summary_table = QTableWidget(0, 2)
        self.summary_table.setHorizontalHeaderLabels(["Propiedad", "Valor"])
        self.summary_table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.summary_table.verticalHeader().setVisible(False)
        self.summary_table.setVisible(False)
        layout.addWidget(self.summary_table)

        self.atom_table = QTableWidget(0, 5)
        self.atom_table.setHorizontalHeaderLabels(["Átomo", "Vecinos", "e⁻", "Faltan", "Carga"])
        self.atom_table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.atom_table.verticalHeader().setVisible(False)
        self.atom_table.setAlternatingRowColors(True)
        self.atom_table.setVisible(False)
        layout.addWidget(self.atom_table)

        self.notes_list = QListWidget()
        self.notes_list.setWordWrap(True)
        self.notes_list.setVisible(False)
        layout.addWidget(self.notes_list)

        layout.addStretch()
        self.setWidget(container)

    def update_validation(
        self,
        graph,
        validation: ValidationResult,
        recognized: Optional[str] = None,
    ) -> None:
        """Refresh the panel from a new validation result."""
        if not validation.atom_stability:
            self.info_label.setText("Lienzo vacío")
            self.info_label.setVisible(True)
            self.summary_table.setVisible(False)
            self.atom_table.setVisible(False)
            self.notes_list.setVisible(False)
            return

        self.info_label.setVisible(False)
        weight = try_molecular_weight(molecular_formula(graph))
        charge = validation.total_charge
        data = [
            ("Fórmula", subscript_formula(validation.formula)),
            ("Estado", "Estable" if validation.is_stable else "Inestable"),
            ("Carga total", f"+{charge}" if charge > 0 else str(charge)),
            ("Masa (u)", f"{weight:.3f}" if weight is not None else "—"),
            ("Molécula", recognized or "Desconocida"),
        ]
        self.summary_table.setRowCount(len(data))
        for i, (key, val) in enumerate(data):
            self.summary_table.setItem(i, 0, QTableWidgetItem(key))
            self.summary_table.setItem(i, 1, QTableWidgetItem(val))
        self.summary_table.setVisible(True)

        rows = list(validation.atom_stability.values())
        self.atom_table.setRowCount(len(rows))
        for i, stability in enumerate(rows):
            values = (
                f"{stability.element} #{stability.atom_id}",
                str(len(graph.neighbors(stability.atom_id))),
                f"{stability.current_electrons}/{stability.target_electrons}",
                str(stability.needs_electrons),
                str(stability.formal_charge),
            )
            for column, value in enumerate(values):
                self.atom_table.setItem(i, column, QTableWidgetItem(value))
        self.atom_table.setVisible(True)

        self.notes_list.clear()
        for hint in validation.hints:
            self.notes_list.addItem(f"💡 {hint}")
        for warning in validation.warnings:
            self.notes_list.addItem(f"⚠ {warning}")
        self.notes_list.setVisible(self.notes_list.count() > 0)
