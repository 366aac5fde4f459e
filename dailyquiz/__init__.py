"""dailyquiz package initialization.

Exposes the version and the handful of entry points most callers need so a
hosting application can simply `import dailyquiz`.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .bank.loader import load_bank
from .progress.store import ProgressStore
from .app.session_controller import SessionController

__all__ = ["__version__", "load_bank", "ProgressStore", "SessionController"]
