"""
Time helpers for the Pelada Manager application.
"""
import time


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.

    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()


def stamp_ms(ts: float) -> int:
    """
    Convert epoch seconds to integer milliseconds, used to build unique object names.

    Example:
        >>> stamp_ms(1.5)
        1500
    """
    return int(ts * 1000)
