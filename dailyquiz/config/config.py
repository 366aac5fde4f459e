from __future__ import annotations

"""Configuration loading and validation for dailyquiz.

This module loads YAML configuration, applies defaults, and validates
that enumerations and sizes are sane.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml


ALLOWED_START_MODES = {"quiz", "flashcard"}
MIN_CANVAS = (240, 160)


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as exc:
        print(f"ERROR: Cannot parse config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    # Shallow defaults for missing sections
    for section in ("bank", "storage", "history", "canvas", "ui", "analytics"):
        if not isinstance(cfg.get(section), dict):
            cfg[section] = {}

    bank = cfg["bank"]
    storage = cfg["storage"]
    history = cfg["history"]
    canvas = cfg["canvas"]
    ui = cfg["ui"]
    analytics = cfg["analytics"]

    # Apply section defaults
    bank.setdefault("path", None)

    storage.setdefault("data_dir", "~/.dailyquiz")
    storage.setdefault("key", "kafkaQuiz")

    history.setdefault("enabled", True)
    history.setdefault("data_dir", "history")

    canvas.setdefault("width", 640)
    canvas.setdefault("height", 360)

    ui.setdefault("start_mode", "quiz")
    ui.setdefault("explain", False)

    analytics.setdefault("smoothing_span", 7)
    analytics.setdefault("reports_dir", "reports")

    # Enum validations
    start_mode = ui.get("start_mode")
    if start_mode not in ALLOWED_START_MODES:
        print(f"WARNING: Unsupported start_mode '{start_mode}', using 'quiz'.")
        ui["start_mode"] = "quiz"

    key = str(storage.get("key") or "").strip()
    if not key:
        print("WARNING: Empty storage key, using 'kafkaQuiz'.")
        key = "kafkaQuiz"
    storage["key"] = key

    for dim, minimum, fallback in (("width", MIN_CANVAS[0], 640), ("height", MIN_CANVAS[1], 360)):
        try:
            value = int(canvas.get(dim))
        except (TypeError, ValueError):
            value = -1
        if value < minimum:
            print(f"WARNING: canvas.{dim} must be an integer >= {minimum}, using {fallback}.")
            value = fallback
        canvas[dim] = value

    try:
        span = int(analytics.get("smoothing_span"))
    except (TypeError, ValueError):
        span = 0
    if span <= 1:
        print("WARNING: analytics.smoothing_span must be > 1, using 7.")
        span = 7
    analytics["smoothing_span"] = span

    # Resolve paths
    data_dir = Path(str(storage["data_dir"])).expanduser()
    storage["data_dir"] = str(data_dir)
    hist_dir = Path(str(history.get("data_dir") or "history")).expanduser()
    if not hist_dir.is_absolute():
        hist_dir = data_dir / hist_dir
    history["data_dir"] = str(hist_dir)
    history["enabled"] = bool(history.get("enabled", True))
    ui["explain"] = bool(ui.get("explain", False))

    return cfg
