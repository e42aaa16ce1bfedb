"""Configuration models and helpers."""

from __future__ import annotations

from .settings import AppSettings, GoogleSettings, StorageSettings, UiSettings, get_settings
from .theme import AppPalette

__all__ = ["AppPalette", "AppSettings", "GoogleSettings", "StorageSettings", "UiSettings", "get_settings"]
