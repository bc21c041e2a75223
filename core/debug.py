# core/debug.py
import os
import time
from pathlib import Path


_DEBUG = os.getenv("AMP_DEBUG", "").strip() in {"1", "true", "yes", "on"}
_LOG_PATH = Path(__file__).resolve().parents[1] / "amp_debug.log"


def debug_enabled() -> bool:
    return _DEBUG


def _append(message: str) -> None:
    try:
        ts = time.strftime("%Y-%m-%d %H:%M:%S")
    except Exception:
        ts = "unknown-time"

    try:
        with _LOG_PATH.open("a", encoding="utf-8") as f:
            f.write(f"[{ts}] {message}\n")
    except Exception:
        pass


def log(tag: str, message: str) -> None:
    """Operator-facing line, e.g. ``[RPC] Updated: Song - Artist``."""
    try:
        print(f"[{tag}] {message}", flush=True)
    except Exception:
        pass
    if _DEBUG:
        _append(f"{tag}: {message}")


def debug_log(message: str) -> None:
    if not _DEBUG:
        return

    _append(message)
    try:
        print(f"[DEBUG] {message}")
    except Exception:
        pass
