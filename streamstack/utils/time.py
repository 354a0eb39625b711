from __future__ import annotations
import time

def monotonic_ms() -> float:
    """Milliseconds from a monotonic clock; only differences are meaningful."""
    return time.monotonic() * 1000.0

def ms_to_seconds(ms: float) -> float:
    return max(0.0, float(ms)) / 1000.0

def elapsed_ms(start_ms: float, now_ms: float) -> float:
    return max(0.0, float(now_ms) - float(start_ms))
