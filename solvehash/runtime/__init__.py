"""solvehash runtime services: settings and snapshot loading."""

from solvehash.runtime.settings import (
    HashSettings,
    SettingsResolver,
    load_settings,
)
from solvehash.runtime.snapshot import SnapshotLoader, inputs_from_dict

__all__ = [
    "HashSettings",
    "SettingsResolver",
    "load_settings",
    "SnapshotLoader",
    "inputs_from_dict",
]
