from __future__ import annotations

"""zone_editor_controller.py
Session controller for creating or editing one zone.

Holds the form fields (name, description), the :class:`BoundaryEditor` and the
save gate.  Persistence goes through :class:`ZoneService`; the controller
itself never touches HTTP.
"""

import enum
import logging
from typing import Optional

from PySide6.QtCore import QCoreApplication, QObject, Signal, Slot

from ranchops_project.src.models.zone import ZonePayload
from ranchops_project.src.services.settings_service import SettingsService
from ranchops_project.src.services.zone_service import ZoneService, ZoneServiceError
from ranchops_project.src.ui.boundary_editor import BoundaryEditor

__all__ = ["SaveResult", "ZoneEditorController"]

logger = logging.getLogger(__name__)

MSG_NAME_REQUIRED = "Zone name is required"
MSG_BOUNDARY_REQUIRED = "Please draw a zone boundary on the map"
MSG_CREATE_FAILED = "Failed to create zone"
MSG_UPDATE_FAILED = "Failed to update zone"
MSG_LOAD_FAILED = "Failed to load zone"


class SaveResult(enum.Enum):
    SAVED = "saved"
    REJECTED = "rejected"  # validation, no request made
    FAILED = "failed"  # request made and failed
    BUSY = "busy"  # a save is already in flight


class ZoneEditorController(QObject):
    """Create/edit session for a single zone."""

    # Emits the zone id after a successful create or update
    saved = Signal(str)
    # Inline validation message (no request was made)
    validationFailed = Signal(str)
    # Banner message for a failed request; the draft is untouched
    saveFailed = Signal(str)
    savingChanged = Signal(bool)
    # Emits the zone id once an existing zone has been loaded
    zoneLoaded = Signal(str)
    loadFailed = Signal(str)

    def __init__(self, service: Optional[ZoneService] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(__name__)
        self._settings = SettingsService()
        self._service = service or ZoneService()
        self.editor = BoundaryEditor(self)

        self._zone_id: Optional[str] = None
        self._name: str = ""
        self._description: str = ""
        self._saving: bool = False

    # ------------------------------------------------------------------
    # Form state
    # ------------------------------------------------------------------
    @property
    def zone_id(self) -> Optional[str]:
        return self._zone_id

    @property
    def is_new(self) -> bool:
        return self._zone_id is None

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @Slot(str)
    def set_name(self, name: str) -> None:
        self._name = name or ""

    @Slot(str)
    def set_description(self, description: str) -> None:
        self._description = description or ""

    def is_saving(self) -> bool:  # noqa: D401
        return self._saving

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    def new_zone(self) -> None:
        """Start a fresh create session with an empty draft."""
        self._zone_id = None
        self._name = ""
        self._description = ""
        self.editor.load_geometry(None)
        self.logger.info("New zone session started")

    def load_zone(self, zone_id: str) -> bool:
        """Fetch *zone_id* and hydrate the form and boundary from it."""
        try:
            record = self._service.get_zone(zone_id)
        except ZoneServiceError as exc:
            self.logger.error("Failed to load zone %s: %s", zone_id, exc)
            self.loadFailed.emit(MSG_LOAD_FAILED)
            return False

        self._zone_id = record.id
        self._name = record.name or ""
        self._description = record.description or ""
        has_boundary = self.editor.load_geometry(record.geom)
        self.logger.info(
            "Loaded zone %s '%s' (%s)",
            record.id,
            record.name,
            f"{self.editor.point_count} vertices" if has_boundary else "no boundary",
        )
        self.zoneLoaded.emit(record.id)
        return True

    # ------------------------------------------------------------------
    # Save gate
    # ------------------------------------------------------------------
    def validate(self) -> Optional[str]:
        """Return the first validation message, or ``None`` if savable."""
        if not self._name.strip():
            return MSG_NAME_REQUIRED
        if self.editor.draft.has_geometry:
            return None
        # Only a stored zone can have its boundary removed
        if self.is_new or not self.editor.has_staged_deletion:
            return MSG_BOUNDARY_REQUIRED
        return None

    def build_payload(self) -> ZonePayload:
        draft = self.editor.draft
        return ZonePayload.build(
            name=self._name,
            description=self._description,
            geom=draft.geom_text(),
            area_acres=draft.area_acres,
            decimals=self._settings.area_display_decimals(),
        )

    def save(self) -> SaveResult:
        """Validate and persist the session.

        Only one save runs at a time.  On failure the draft and form are left
        exactly as they were so the user can retry.
        """
        if self._saving:
            self.logger.debug("save ignored: already saving")
            return SaveResult.BUSY

        message = self.validate()
        if message is not None:
            self.logger.debug("save rejected: %s", message)
            self.validationFailed.emit(message)
            return SaveResult.REJECTED

        payload = self.build_payload()
        self._set_saving(True)
        # The request blocks the GUI thread; paint the disabled save button first
        QCoreApplication.processEvents()
        try:
            if self._zone_id is None:
                self._zone_id = self._service.create_zone(payload)
            else:
                self._service.update_zone(self._zone_id, payload)
        except ZoneServiceError as exc:
            fallback = MSG_CREATE_FAILED if self._zone_id is None else MSG_UPDATE_FAILED
            self.logger.error("Save failed: %s", exc)
            self.saveFailed.emit(str(exc) or fallback)
            return SaveResult.FAILED
        finally:
            self._set_saving(False)

        self.logger.info("Zone %s saved (%.2f acres)", self._zone_id, payload.area_acres)
        self.saved.emit(self._zone_id)
        return SaveResult.SAVED

    # ------------------------------------------------------------------
    def _set_saving(self, value: bool) -> None:
        if self._saving == value:
            return
        self._saving = value
        self.savingChanged.emit(value)
