from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QDoubleSpinBox, QCheckBox, QPushButton
)
from PyQt6.QtCore import pyqtSignal

# field -> (label, minimum, maximum, step)
PHYSICS_FIELDS = {
    "link_distance": ("Link distance", 10.0, 1000.0, 10.0),
    "repel_force": ("Repulsion", 0.0, 100.0, 1.0),
    "center_force": ("Center pull", 0.0, 5.0, 0.05),
    "link_force": ("Link strength", 0.0, 5.0, 0.1),
}


class PreferencesDialog(QDialog):
    settings_applied = pyqtSignal(dict)

    def __init__(self, config, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Preferences")
        self.resize(300, 200)

        self.layout = QVBoxLayout(self)

        self.spins = {}
        for field, (text, low, high, step) in PHYSICS_FIELDS.items():
            row = QHBoxLayout()
            row.addWidget(QLabel(text))
            spin = QDoubleSpinBox()
            spin.setRange(low, high)
            spin.setSingleStep(step)
            spin.setValue(getattr(config, field))
            row.addWidget(spin)
            self.layout.addLayout(row)
            self.spins[field] = spin

        self.persist_zoom = QCheckBox("Remember zoom level")
        self.persist_zoom.setChecked(config.persist_zoom)
        self.layout.addWidget(self.persist_zoom)

        # Buttons
        btn_layout = QHBoxLayout()
        self.btn_save = QPushButton("Save")
        self.btn_save.clicked.connect(self.on_save)
        self.btn_cancel = QPushButton("Cancel")
        self.btn_cancel.clicked.connect(self.close)

        btn_layout.addStretch()
        btn_layout.addWidget(self.btn_cancel)
        btn_layout.addWidget(self.btn_save)
        self.layout.addLayout(btn_layout)

        # Style
        self.setStyleSheet("""
            QDialog { background-color: #2d2d2d; color: white; }
            QLabel, QCheckBox { color: white; }
            QDoubleSpinBox { background-color: #3e3e3e; color: white; padding: 5px; border: 1px solid #555; }
            QPushButton { background-color: #0d47a1; color: white; padding: 5px 15px; border: none; }
            QPushButton:hover { background-color: #1565c0; }
        """)

    def on_save(self):
        values = {field: spin.value() for field, spin in self.spins.items()}
        values["persist_zoom"] = self.persist_zoom.isChecked()
        self.settings_applied.emit(values)
        self.accept()
