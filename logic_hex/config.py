"""Configuration defaults, environment overrides, and option parsing.

WHY: The line width of the hex report is the one tunable the encoder has.
Keeping the default, the environment override, and the parser in one
place means the encoder and its tests agree on what counts as valid.

HOW: python-dotenv loads the .env file on import. The default lives in a
module constant; default_samples_per_line() reads the environment at call
time so a session picks up the current override. parse_samples_per_line()
validates an explicit per-session option.

RULES:
- DEFAULT_SAMPLES_PER_LINE is 192 (24 hex bytes per channel line)
- LOGIC_HEX_SAMPLES_PER_LINE overrides the default when set and non-empty
- An explicit option wins over the environment
- Non-positive or non-numeric values raise ConfigurationError
- Text options are plain decimal digits: "+5", "1_000" and "0x10" are rejected
- Options that are neither str nor int (floats, lists) are rejected
"""

from __future__ import annotations

import os
import re

from dotenv import load_dotenv

from logic_hex.errors import ConfigurationError

# Load .env from the project root (where the script is run from)
load_dotenv()

DEFAULT_SAMPLES_PER_LINE = 192
"""Samples per output line when neither the option nor the environment set one."""

SAMPLES_PER_LINE_ENV = "LOGIC_HEX_SAMPLES_PER_LINE"

# Plain decimal digits with an optional minus sign; no "+", "_" or prefixes.
_DECIMAL_RE = re.compile(r"-?[0-9]+")


def _positive_int(value: str | int, source: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ConfigurationError(f"Invalid {source}: {value!r} is not an integer")
    if isinstance(value, int):
        number = value
    else:
        text = value.strip()
        if not _DECIMAL_RE.fullmatch(text):
            raise ConfigurationError(f"Invalid {source}: {value!r} is not an integer")
        number = int(text, 10)
    if number < 1:
        raise ConfigurationError(f"Invalid {source}: {number} must be at least 1")
    return number


def default_samples_per_line() -> int:
    """Return the session default line width.

    RULES:
    - Reads LOGIC_HEX_SAMPLES_PER_LINE on every call
    - Falls back to DEFAULT_SAMPLES_PER_LINE when unset or blank
    """
    raw = os.getenv(SAMPLES_PER_LINE_ENV, "").strip()
    if not raw:
        return DEFAULT_SAMPLES_PER_LINE
    return _positive_int(raw, SAMPLES_PER_LINE_ENV)


def parse_samples_per_line(param: str | int | None) -> int:
    """Parse the per-session line-width option.

    Args:
        param: The raw option value. None or an empty string means "use
               the default"; anything else must be a positive integer.

    Returns:
        The number of samples per output line.

    Raises:
        ConfigurationError: the value is non-positive or not an integer.
    """
    if param is None or (isinstance(param, str) and not param.strip()):
        return default_samples_per_line()
    return _positive_int(param, "samples per line")
