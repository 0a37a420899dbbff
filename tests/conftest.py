"""Pytest configuration.

Clipboard tests touch PySide6. A single `QGuiApplication` is created for the
whole session (offscreen platform) when PySide6 is importable; everything else
runs without Qt.
"""

from __future__ import annotations

import os
from typing import Any

_APP: Any | None = None


def pytest_configure(config) -> None:  # noqa: ARG001
    """Ensure a QGuiApplication exists before collecting/running tests."""

    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    # Import lazily so non-Qt environments can still import this conftest.
    try:
        from PySide6.QtGui import QGuiApplication
    except ImportError:
        return

    global _APP

    app = QGuiApplication.instance()
    # Keep a strong ref so it isn't GC'd mid-session.
    _APP = app if app is not None else QGuiApplication([])


def pytest_sessionfinish(session, exitstatus) -> None:  # noqa: ARG001
    """Attempt a clean Qt shutdown to avoid lingering threads at interpreter exit."""

    try:
        from PySide6.QtGui import QGuiApplication
    except ImportError:
        return

    app = QGuiApplication.instance()
    if app is None:
        return

    app.quit()
    app.processEvents()
