"""Exception types shared by the channel model and the output encoders.

WHY: Callers need to tell a programming mistake (no device, no session,
malformed packet) apart from a bad user-supplied setting (line width) and
from a driver refusing a channel change. Typed exceptions make each case
catchable on its own.

HOW: Every exception derives from LogicHexError. The argument and
configuration errors also derive from ValueError so generic callers that
already catch ValueError keep working.

RULES:
- ArgumentError: missing or malformed call context; state is left unchanged
- ConfigurationError: invalid option value; raised before a session exists
- ChannelRejectedError: the driver refused a change and it was rolled back
"""

from __future__ import annotations


class LogicHexError(Exception):
    """Base class for all logic_hex errors."""


class ArgumentError(LogicHexError, ValueError):
    """Raised when a required device, session or packet is missing or invalid."""


class ConfigurationError(LogicHexError, ValueError):
    """Raised when an output option (such as the line width) is invalid.

    RULES:
    - Message names the offending value
    - Raised at session initialization, never mid-stream
    """


class ChannelRejectedError(LogicHexError):
    """Raised when a driver rejects a channel setting.

    WHY: Enable and trigger changes are forwarded to the driver, which may
    not support them for a given channel. The caller must learn that the
    change did not stick.

    HOW: The device restores the previous value, then raises this with the
    channel index and the setting that was refused.
    """

    def __init__(self, index: int, setting: str) -> None:
        self.index = index
        self.setting = setting
        super().__init__(f"Driver rejected {setting} change on channel {index}")
