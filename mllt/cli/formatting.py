"""Human-readable output helpers for the CLI."""

from __future__ import annotations


def format_duration(seconds: float) -> str:
    """Format an elapsed time for the build summary.

    Examples: ``850ms``, ``4.005s``, ``2m 03.004s``, ``1h 02m 03.004s``.
    """
    total_ms = round(seconds * 1000)
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)

    if total_ms < 1000:
        return f"{millis}ms"
    if total_ms < 60_000:
        return f"{secs}.{millis:03d}s"
    if total_ms < 3_600_000:
        return f"{minutes}m {secs:02d}.{millis:03d}s"
    return f"{hours}h {minutes:02d}m {secs:02d}.{millis:03d}s"
