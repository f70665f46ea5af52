"""Settings dialog for the Airbike timer.

Durations of phases are typed as ``m:ss``; counts and acceleration
lengths use spin boxes.  Every accepted edit goes through
``update_settings`` so the dialog can never hold out-of-range values,
and is written to disk straight away.
"""

from __future__ import annotations

import logging

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QLineEdit, QSpinBox, QCheckBox, QPushButton, QWidget,
)

from ..settings import (
    Settings,
    update_settings,
    reset_to_defaults,
    save_settings,
    ROUNDS_RANGE,
    MIN_ACCELERATION_RANGE,
    MAX_ACCELERATION_LIMIT,
    ACCELERATIONS_PER_MINUTE_RANGE,
)
from ..timefmt import parse_time_string, seconds_to_time_string

logger = logging.getLogger(__name__)


class SettingsDialog(QDialog):
    """Modal dialog for the workout configuration."""

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        persist: bool = True,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Workout settings")
        self.setMinimumWidth(380)
        self.setModal(True)

        self._settings = settings
        self._persist = persist
        self._populating = False

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        root.addWidget(self._section_label("Timer"))
        form = QFormLayout()
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)

        self._prep_edit = self._time_edit()
        form.addRow("Preparation:", self._prep_edit)
        self._work_edit = self._time_edit()
        form.addRow("Work:", self._work_edit)
        self._rest_edit = self._time_edit()
        form.addRow("Rest:", self._rest_edit)

        self._rounds_spin = QSpinBox()
        self._rounds_spin.setRange(*ROUNDS_RANGE)
        self._rounds_spin.valueChanged.connect(self._on_numbers_changed)
        form.addRow("Rounds:", self._rounds_spin)
        root.addLayout(form)

        root.addWidget(self._section_label("Accelerations"))
        accel_form = QFormLayout()
        accel_form.setHorizontalSpacing(20)
        accel_form.setVerticalSpacing(10)

        self._accel_cb = QCheckBox("Random accelerations during work")
        self._accel_cb.toggled.connect(self._on_numbers_changed)
        accel_form.addRow("", self._accel_cb)

        self._min_spin = QSpinBox()
        self._min_spin.setRange(*MIN_ACCELERATION_RANGE)
        self._min_spin.setSuffix(" s")
        self._min_spin.valueChanged.connect(self._on_numbers_changed)
        accel_form.addRow("Shortest:", self._min_spin)

        self._max_spin = QSpinBox()
        self._max_spin.setRange(MIN_ACCELERATION_RANGE[0], MAX_ACCELERATION_LIMIT)
        self._max_spin.setSuffix(" s")
        self._max_spin.valueChanged.connect(self._on_numbers_changed)
        accel_form.addRow("Longest:", self._max_spin)

        self._per_min_spin = QSpinBox()
        self._per_min_spin.setRange(*ACCELERATIONS_PER_MINUTE_RANGE)
        self._per_min_spin.setSuffix(" / min")
        self._per_min_spin.valueChanged.connect(self._on_numbers_changed)
        accel_form.addRow("Frequency:", self._per_min_spin)
        root.addLayout(accel_form)

        root.addStretch()
        btn_row = QHBoxLayout()
        defaults_btn = QPushButton("Restore defaults")
        defaults_btn.setObjectName("secondaryButton")
        defaults_btn.clicked.connect(self._on_restore_defaults)
        btn_row.addWidget(defaults_btn)
        btn_row.addStretch()
        close_btn = QPushButton("Close")
        close_btn.setObjectName("secondaryButton")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    def _time_edit(self) -> QLineEdit:
        edit = QLineEdit()
        edit.setPlaceholderText("m:ss")
        edit.editingFinished.connect(self._on_times_edited)
        return edit

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        s = self._settings
        self._populating = True
        try:
            self._prep_edit.setText(seconds_to_time_string(s.preparation_time))
            self._work_edit.setText(seconds_to_time_string(s.work_time))
            self._rest_edit.setText(seconds_to_time_string(s.rest_time))
            self._rounds_spin.setValue(s.rounds)
            self._accel_cb.setChecked(s.accelerations_enabled)
            self._min_spin.setValue(s.min_acceleration_duration)
            self._max_spin.setValue(s.max_acceleration_duration)
            self._per_min_spin.setValue(s.accelerations_per_minute)
            for spin in (self._min_spin, self._max_spin, self._per_min_spin):
                spin.setEnabled(s.accelerations_enabled)
        finally:
            self._populating = False

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS
    # ══════════════════════════════════════════════════════════════════

    def _on_times_edited(self) -> None:
        changes = {}
        for name, edit in (
            ("preparation_time", self._prep_edit),
            ("work_time", self._work_edit),
            ("rest_time", self._rest_edit),
        ):
            seconds = parse_time_string(edit.text())
            if seconds is not None:
                changes[name] = seconds
        self._commit(**changes)

    def _on_numbers_changed(self) -> None:
        if self._populating:
            return
        self._commit(
            rounds=self._rounds_spin.value(),
            accelerations_enabled=self._accel_cb.isChecked(),
            min_acceleration_duration=self._min_spin.value(),
            max_acceleration_duration=self._max_spin.value(),
            accelerations_per_minute=self._per_min_spin.value(),
        )

    def _on_restore_defaults(self) -> None:
        self._settings = reset_to_defaults()
        self._save()
        self._populate()

    def _commit(self, **changes) -> None:
        self._settings = update_settings(self._settings, **changes)
        self._save()
        # Re-sync so clamped or rejected input shows the stored value.
        self._populate()

    def _save(self) -> None:
        if not self._persist:
            return
        try:
            save_settings(self._settings)
        except OSError:
            logger.exception("Could not save settings")

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        return self._settings
