"""Human-readable sample rate strings for report headers."""

from __future__ import annotations

_UNITS = (
    (1_000_000_000, "GHz"),
    (1_000_000, "MHz"),
    (1_000, "kHz"),
)


def samplerate_string(samplerate: int) -> str:
    """Format a sample rate in Hz using the largest exact unit.

    ``200_000_000`` becomes ``"200 MHz"``, ``1_500_000`` becomes
    ``"1500 kHz"`` and ``12_345`` stays ``"12345 Hz"``.

    Raises:
        ValueError: the rate is negative.
    """
    if samplerate < 0:
        raise ValueError(f"Sample rate must not be negative: {samplerate}")
    for factor, unit in _UNITS:
        if samplerate and samplerate % factor == 0:
            return f"{samplerate // factor} {unit}"
    return f"{samplerate} Hz"
