"""Application settings resolution.

This package provides:
- ApplicationSettings / AppDefaults: the resolved settings handed to the launcher
- SettingsResolver: nearest-scope lookups plus default substitution
"""

from hostconf.settings.models import AppDefaults, ApplicationSettings
from hostconf.settings.resolver import SettingsResolver, resolve_application_settings

__all__ = [
    "AppDefaults",
    "ApplicationSettings",
    "SettingsResolver",
    "resolve_application_settings",
]
