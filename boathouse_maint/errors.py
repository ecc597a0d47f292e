from __future__ import annotations


class MaintenanceError(Exception):
    """Base class for failures raised by maintenance fixes."""


class InvalidSettingError(MaintenanceError, ValueError):
    def __init__(self, setting: str, value: object, reason: str):
        super().__init__(f"{setting}={value!r}: {reason}")
        self.setting = setting
        self.value = value


class AmbiguousAthleteError(MaintenanceError):
    def __init__(self, athlete_name: str, matched: int):
        super().__init__(
            f"{matched} athletes named {athlete_name!r} matched; refusing to update more than one row"
        )
        self.athlete_name = athlete_name
        self.matched = matched
