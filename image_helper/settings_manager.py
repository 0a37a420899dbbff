from __future__ import annotations

import json
import os
from typing import Any

from .image_engine.compositor import Interpolation
from .logger import get_logger

_logger = get_logger("settings")


class SettingsManager:
    def __init__(self, settings_path: str | None = None):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    DEFAULTS: dict[str, Any] = {
        "interpolation": "bicubic",
        "binary_dither": True,
        "scale_identity_tolerance": 0.001,
    }

    def load(self) -> None:
        if not self.settings_path:
            self._settings = {}
            return
        try:
            if os.path.exists(self.settings_path):
                with open(self.settings_path, encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        self._settings = data
                        _logger.debug("settings loaded: %s", self.settings_path)
                        return
        except Exception as e:
            _logger.warning("settings load failed: %s", e)
        self._settings = {}

    def save(self) -> None:
        if not self.settings_path:
            return
        try:
            parent = os.path.dirname(self.settings_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
            _logger.debug("settings saved: %s", self.settings_path)
        except Exception as e:
            _logger.error("settings save failed: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._settings:
            return self._settings[key]
        if default is not None:
            return default
        return self.DEFAULTS.get(key)

    def has(self, key: str) -> bool:
        return key in self._settings

    def set(self, key: str, value: Any) -> None:
        self._settings[key] = value
        self.save()

    @property
    def data(self) -> dict[str, Any]:
        return self._settings

    @property
    def interpolation(self) -> Interpolation:
        val = self.get("interpolation")
        try:
            return Interpolation(str(val).strip().lower())
        except ValueError:
            _logger.warning("saved interpolation invalid: %s", val)
            return Interpolation.BICUBIC

    @property
    def binary_dither(self) -> bool:
        return bool(self.get("binary_dither"))

    @property
    def scale_identity_tolerance(self) -> float:
        try:
            tol = float(self.get("scale_identity_tolerance"))
        except (TypeError, ValueError):
            _logger.warning("saved scale_identity_tolerance invalid: %r", self.get("scale_identity_tolerance"))
            return float(self.DEFAULTS["scale_identity_tolerance"])
        return tol if tol >= 0 else float(self.DEFAULTS["scale_identity_tolerance"])
