"""
Octeto Main Window
Molecule builder with palette toolbar, drawing canvas and stability panel.
"""
from PyQt6.QtWidgets import QMainWindow
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence

from chemcalc.formula import subscript_formula
from chemcalc.stability import ValidationResult
from core import bond_rules
from core.presets import PRESETS
from gui.canvas import MoleculeCanvas
from gui.docks import PresetsDock, StabilityDock
from gui.document import MoleculeDocument
from gui.toolbar import ELEMENT_NAMES, OctetoToolbar


class OctetoWindow(QMainWindow):
    """
    Main window for the Octeto molecule builder.
    """
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Octeto - Constructor de Moléculas")
        self.resize(1200, 800)

        # === CORE COMPONENTS ===
        self.document = MoleculeDocument(self)
        self._create_actions()

        # === CENTRAL CANVAS ===
        self.canvas = MoleculeCanvas(self.document, self)
        self.setCentralWidget(self.canvas)

        # === DOCK WIDGETS ===
        self.presets_dock = PresetsDock(self)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self.presets_dock)

        self.stability_dock = StabilityDock(self)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self.stability_dock)

        # === MENU AND TOOLBARS ===
        self._create_menu_bar()
        self.toolbar = OctetoToolbar()
        self.addToolBar(Qt.ToolBarArea.LeftToolBarArea, self.toolbar)

        # === SIGNAL CONNECTIONS ===
        self._connect_undo_redo()
        self.toolbar.element_changed.connect(self._handle_element_palette)
        self.toolbar.bond_order_changed.connect(self._handle_bond_palette)
        self.presets_dock.preset_selected.connect(self._on_load_preset)
        self.document.changed.connect(self._on_validation_changed)
        self.document.message.connect(lambda text: self.statusBar().showMessage(text, 4000))

        self._sync_palette()
        self._on_validation_changed(self.document.validation)
        self.statusBar().showMessage("Clic en el lienzo para añadir átomos")

    def _create_actions(self) -> None:
        """Initialize all QActions for menus."""
        # --- File Actions ---
        self.action_new = QAction("Nuevo", self)
        self.action_new.setShortcut(QKeySequence.StandardKey.New)
        self.action_new.triggered.connect(self._on_file_new)

        self.action_quit = QAction("Salir", self)
        self.action_quit.setShortcut(QKeySequence.StandardKey.Quit)
        self.action_quit.triggered.connect(self.close)

        # --- Edit Actions ---
        self.action_undo = QAction("Deshacer", self)
        self.action_undo.setShortcut(QKeySequence.StandardKey.Undo)

        self.action_redo = QAction("Rehacer", self)
        self.action_redo.setShortcuts(
            [QKeySequence.StandardKey.Redo, QKeySequence("Ctrl+Shift+Z")]
        )

        self.action_delete = QAction("Eliminar selección", self)
        self.action_delete.triggered.connect(lambda: self.canvas.delete_selection())

        self.action_select_all = QAction("Seleccionar todo", self)
        self.action_select_all.triggered.connect(lambda: self.canvas.select_all())

        # --- View Actions ---
        self.action_grid = QAction("Cuadrícula", self)
        self.action_grid.setCheckable(True)
        self.action_grid.setChecked(self.document.state.show_grid)
        self.action_grid.triggered.connect(lambda checked: self.canvas.set_show_grid(checked))

        self.action_snap = QAction("Ajustar a la cuadrícula", self)
        self.action_snap.setCheckable(True)
        self.action_snap.setChecked(self.document.state.snap_to_grid)
        self.action_snap.triggered.connect(lambda checked: self.canvas.set_snap_to_grid(checked))

    def _create_menu_bar(self) -> None:
        """Create the main menu bar with all menus."""
        menubar = self.menuBar()

        # === Archivo (File) ===
        file_menu = menubar.addMenu("Archivo")
        file_menu.addAction(self.action_new)
        file_menu.addSeparator()
        file_menu.addAction(self.action_quit)

        # === Editar (Edit) ===
        edit_menu = menubar.addMenu("Editar")
        edit_menu.addAction(self.action_undo)
        edit_menu.addAction(self.action_redo)
        edit_menu.addSeparator()
        edit_menu.addAction(self.action_delete)
        edit_menu.addAction(self.action_select_all)

        # === Ver (View) ===
        view_menu = menubar.addMenu("Ver")
        view_menu.addAction(self.action_grid)
        view_menu.addAction(self.action_snap)

        # === Moléculas (Presets) ===
        presets_menu = menubar.addMenu("Moléculas")
        for key, preset in PRESETS.items():
            action = QAction(preset.label, self)
            action.setToolTip(preset.description)
            action.triggered.connect(lambda _checked=False, k=key: self._on_load_preset(k))
            presets_menu.addAction(action)

    def _connect_undo_redo(self) -> None:
        """Connect undo/redo actions to the document undo stack."""
        undo_stack = self.document.undo_stack
        self.action_undo.triggered.connect(undo_stack.undo)
        self.action_redo.triggered.connect(undo_stack.redo)

        undo_stack.canUndoChanged.connect(self.action_undo.setEnabled)
        undo_stack.canRedoChanged.connect(self.action_redo.setEnabled)

        # Initial state
        self.action_undo.setEnabled(undo_stack.canUndo())
        self.action_redo.setEnabled(undo_stack.canRedo())

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------
    def _on_file_new(self) -> None:
        """Clear the molecule (undoable)."""
        if self.document.graph.is_empty():
            self.statusBar().showMessage("El lienzo ya está vacío")
            return
        self.document.clear()
        self.statusBar().showMessage("Lienzo vacío")

    def _on_load_preset(self, key: str) -> None:
        self.document.load_preset(key)
        self._sync_palette()
        self.statusBar().showMessage(f"Cargado: {PRESETS[key].label}")

    def _handle_element_palette(self, element: str) -> None:
        self.document.set_active_element(element)
        self._sync_palette()
        self.statusBar().showMessage(f"Elemento: {ELEMENT_NAMES.get(element, element)} ({element})")

    def _handle_bond_palette(self, order: int) -> None:
        if not self.document.set_active_bond_order(order):
            self.toolbar.set_bond_order(self.document.state.active_bond_order)
            return
        self.statusBar().showMessage(f"Enlace: {bond_rules.bond_type_name(order)}")

    def _sync_palette(self) -> None:
        state = self.document.state
        self.toolbar.set_element(state.active_element)
        self.toolbar.set_allowed_orders(bond_rules.get_allowed_bond_types(state.active_element))
        self.toolbar.set_bond_order(state.active_bond_order)

    def _on_validation_changed(self, validation: ValidationResult) -> None:
        self.stability_dock.update_validation(
            self.document.graph, validation, self.document.recognized
        )
        if validation.formula:
            status = "estable" if validation.is_stable else "inestable"
            self.setWindowTitle(
                f"Octeto - {subscript_formula(validation.formula)} ({status})"
            )
        else:
            self.setWindowTitle("Octeto - Constructor de Moléculas")
