from PyQt6.QtCore import QSettings


class SettingsStore:
    """Key-value view over QSettings, as expected by ViewTransform."""

    def __init__(self, organization="forcegraph", application="forcegraph"):
        self.settings = QSettings(organization, application)

    def get(self, key, default=None):
        return self.settings.value(key, default)

    def __setitem__(self, key, value):
        self.settings.setValue(key, value)
        self.settings.sync()
