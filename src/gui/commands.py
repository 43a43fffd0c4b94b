from __future__ import annotations

from PyQt6.QtGui import QUndoCommand

from core.model import DiagramSnapshot, MolGraph


class SnapshotCommand(QUndoCommand):
    """One undo step: swaps the graph between two captured snapshots."""

    def __init__(
        self,
        model: MolGraph,
        before: DiagramSnapshot,
        after: DiagramSnapshot,
        text: str = "Editar molécula",
        skip_first_redo: bool = False,
    ) -> None:
        super().__init__(text)
        self._model = model
        self._before = before
        self._after = after
        self._skip_first_redo = skip_first_redo
        self._first_redo = True

    @property
    def before(self) -> DiagramSnapshot:
        return self._before

    @property
    def after(self) -> DiagramSnapshot:
        return self._after

    def redo(self) -> None:
        if self._skip_first_redo and self._first_redo:
            self._first_redo = False
            return
        self._model.restore(self._after)

    def undo(self) -> None:
        self._model.restore(self._before)
