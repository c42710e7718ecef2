#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Create/edit page for a single zone: form fields plus the boundary map."""

import logging
from typing import Optional

from PySide6 import QtCore, QtWidgets
from PySide6.QtGui import QKeySequence, QShortcut

from ranchops_project.src.ui.boundary_editor import EditorMode
from ranchops_project.src.ui.map_canvas import MapCanvas
from ranchops_project.src.ui.map_input_adapter import MapInputAdapter
from ranchops_project.src.ui.zone_editor_controller import ZoneEditorController

logger = logging.getLogger(__name__)


class ZoneEditorWidget(QtWidgets.QWidget):
    """Page hosting the zone form, the map canvas and the editor buttons."""

    def __init__(self, controller: Optional[ZoneEditorController] = None, parent=None):
        super().__init__(parent)
        self.controller = controller or ZoneEditorController(parent=self)
        self.editor = self.controller.editor

        self.setWindowTitle("Zone")

        # --- Form ---
        self.name_edit = QtWidgets.QLineEdit()
        self.name_edit.setPlaceholderText("e.g. North Pasture")
        self.description_edit = QtWidgets.QPlainTextEdit()
        self.description_edit.setPlaceholderText("Optional description")
        self.description_edit.setFixedHeight(60)
        self.area_label = QtWidgets.QLabel()
        self.hint_label = QtWidgets.QLabel()
        self.hint_label.setWordWrap(True)
        self.warning_label = QtWidgets.QLabel()
        self.warning_label.setStyleSheet("color: #b45309;")
        self.error_label = QtWidgets.QLabel()
        self.error_label.setStyleSheet("color: #dc2626;")
        self.error_label.setWordWrap(True)

        form = QtWidgets.QFormLayout()
        form.addRow("Zone name *", self.name_edit)
        form.addRow("Description", self.description_edit)
        form.addRow("Area", self.area_label)

        # --- Map ---
        self.map_canvas = MapCanvas(self)
        self.adapter = MapInputAdapter(self.editor, self.map_canvas, parent=self)

        # --- Buttons ---
        self.draw_button = QtWidgets.QPushButton("Draw Boundary")
        self.finish_button = QtWidgets.QPushButton("Finish Drawing")
        self.clear_button = QtWidgets.QPushButton("Clear")
        self.hide_button = QtWidgets.QPushButton("Hide Boundary")
        self.save_button = QtWidgets.QPushButton("Save Zone")

        buttons = QtWidgets.QHBoxLayout()
        for btn in (self.draw_button, self.finish_button, self.clear_button, self.hide_button):
            buttons.addWidget(btn)
        buttons.addStretch(1)
        buttons.addWidget(self.save_button)

        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(self.error_label)
        layout.addLayout(form)
        layout.addWidget(self.hint_label)
        layout.addWidget(self.warning_label)
        layout.addWidget(self.map_canvas, 1)
        layout.addLayout(buttons)

        # Backspace removes the last vertex while drawing
        self._undo_shortcut = QShortcut(QKeySequence(QtCore.Qt.Key.Key_Backspace), self.map_canvas)
        self._undo_shortcut.setContext(QtCore.Qt.ShortcutContext.WidgetWithChildrenShortcut)
        self._undo_shortcut.activated.connect(self.editor.undo_last_vertex)

        # --- Connections ---
        self.name_edit.textChanged.connect(self.controller.set_name)
        self.description_edit.textChanged.connect(
            lambda: self.controller.set_description(self.description_edit.toPlainText())
        )
        self.draw_button.clicked.connect(self.editor.start_drawing)
        self.finish_button.clicked.connect(self.editor.finish_drawing)
        self.clear_button.clicked.connect(self.editor.clear_drawing)
        self.hide_button.clicked.connect(self.editor.hide_boundary)
        self.save_button.clicked.connect(self._on_save_clicked)

        self.editor.draftChanged.connect(self._refresh)
        self.editor.modeChanged.connect(self._refresh)
        self.controller.savingChanged.connect(self._on_saving_changed)
        self.controller.validationFailed.connect(self.error_label.setText)
        self.controller.saveFailed.connect(self.error_label.setText)
        self.controller.loadFailed.connect(self.error_label.setText)
        self.controller.zoneLoaded.connect(self._on_zone_loaded)

        self._refresh()
        logger.debug("ZoneEditorWidget initialised")

    # ------------------------------------------------------------------
    def open_zone(self, zone_id: Optional[str] = None) -> bool:
        """Begin a new zone, or load *zone_id* for editing."""
        if zone_id is None:
            self.controller.new_zone()
            self.setWindowTitle("Create Zone")
            self._sync_form()
            return True
        self.setWindowTitle("Edit Zone")
        return self.controller.load_zone(zone_id)

    # ------------------------------------------------------------------
    def _sync_form(self) -> None:
        self.name_edit.setText(self.controller.name)
        self.description_edit.setPlainText(self.controller.description)

    def _on_zone_loaded(self, _zone_id: str) -> None:
        self._sync_form()
        self.adapter.fit_to_boundary()

    def _on_save_clicked(self) -> None:
        self.error_label.clear()
        self.controller.save()

    def _on_saving_changed(self, saving: bool) -> None:
        self.save_button.setEnabled(not saving)
        self.save_button.setText("Saving..." if saving else "Save Zone")

    def _refresh(self, *_args) -> None:
        drawing = self.editor.mode is EditorMode.DRAWING
        has_geometry = self.editor.draft.has_geometry

        self.draw_button.setText("Redraw Boundary" if has_geometry else "Draw Boundary")
        self.draw_button.setEnabled(not drawing)
        self.finish_button.setEnabled(drawing)
        self.hide_button.setEnabled(not drawing and has_geometry)
        self.clear_button.setEnabled(drawing or self.editor.point_count > 0)

        self.area_label.setText(self.editor.area_display())
        self.hint_label.setText(self.editor.hint_text())
        self.warning_label.setText(
            "Boundary lines cross each other; the area may be wrong."
            if self.editor.is_self_intersecting else ""
        )
