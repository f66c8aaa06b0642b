"""Channel model and the driver capability interface.

WHY: Output encoders need to know which channels a device exposes, which
of them are enabled logic channels, and (when the driver can tell) the
sample rate. Front-ends need to rename, enable and arm triggers on those
channels, and a driver may refuse a change its hardware cannot honour.

HOW: Channel is a mutable dataclass. DeviceInstance owns an ordered list
of channels and an optional Driver. Driver is a capability base class:
every hook has a permissive default, drivers override what they support.
Setters on DeviceInstance follow an apply-then-confirm pattern: the new
value is written, the driver is asked, and on refusal the old value is
restored before ChannelRejectedError is raised.

RULES:
- Channel.index is the bit position inside a packed sample word
- Channel order in DeviceInstance.channels is the display order
- The driver is passed explicitly per device; there is no global registry
- Driver.config_get returns None when a value is unavailable
- Driver.config_channel_set returns False to reject a change
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from logic_hex.errors import ArgumentError, ChannelRejectedError

logger = logging.getLogger(__name__)


class ChannelType(Enum):
    """Kind of signal a channel carries."""

    LOGIC = "logic"
    ANALOG = "analog"


class ConfigKey(Enum):
    """Device options a driver may report."""

    SAMPLERATE = "samplerate"
    DEVICE_OPTIONS = "device_options"
    LIMIT_SAMPLES = "limit_samples"
    TRIGGER_TYPE = "trigger_type"


class ChannelSetting(Enum):
    """Which channel attribute a driver is asked to apply."""

    ENABLED = "enabled"
    TRIGGER = "trigger"


@dataclass
class Channel:
    """One acquisition channel of a device.

    RULES:
    - index: zero-based bit index within a packed sample word
    - type: LOGIC channels are the only ones logic encoders read
    - trigger: driver-specific condition string, None when unarmed
    """

    index: int
    type: ChannelType
    enabled: bool
    name: str
    trigger: Optional[str] = None


def channel_new(index: int, type: ChannelType, enabled: bool, name: str) -> Channel:
    """Create a channel; a thin constructor kept for driver code."""
    return Channel(index=index, type=type, enabled=enabled, name=name)


class Driver:
    """Capability base class for hardware drivers.

    WHY: Devices delegate option queries and channel changes to their
    driver. Most drivers support only some of these, so each hook has a
    default that means "not supported" or "accept".

    HOW: Subclass and override. The device calls these hooks; encoders
    only ever reach config_get(SAMPLERATE) through DeviceInstance.
    """

    name = "driver"

    def config_get(self, key: ConfigKey, device: DeviceInstance) -> Any:
        """Return the current value for ``key``, or None when unavailable."""
        return None

    def config_list(self, key: ConfigKey, device: DeviceInstance) -> Optional[List[Any]]:
        """Return the possible values for ``key``, or None when unsupported."""
        return None

    def config_channel_set(
        self, device: DeviceInstance, channel: Channel, setting: ChannelSetting
    ) -> bool:
        """Apply a channel change already written to ``channel``.

        Returns False when the hardware cannot honour it.
        """
        return True


@dataclass
class DeviceInstance:
    """A device and its channels.

    RULES:
    - channels keeps driver order, which is the order reports use
    - driver is optional; without one every change is accepted locally
    """

    channels: List[Channel] = field(default_factory=list)
    driver: Optional[Driver] = None
    vendor: Optional[str] = None
    model: Optional[str] = None
    version: Optional[str] = None

    def _find_channel(self, index: int) -> Channel:
        for channel in self.channels:
            if channel.index == index:
                return channel
        raise ArgumentError(f"No channel with index {index}")

    def samplerate(self) -> Optional[int]:
        """Current sample rate in Hz, or None if the driver cannot report it."""
        if self.driver is None:
            return None
        value = self.driver.config_get(ConfigKey.SAMPLERATE, self)
        if value is None:
            return None
        return int(value)

    def has_option(self, key: ConfigKey) -> bool:
        """Whether the driver lists ``key`` among its device options."""
        if self.driver is None:
            return False
        options = self.driver.config_list(ConfigKey.DEVICE_OPTIONS, self)
        if not options:
            return False
        return key in options

    def channel_name_set(self, index: int, name: str) -> None:
        self._find_channel(index).name = name

    def channel_enable(self, index: int, state: bool) -> None:
        """Enable or disable a channel, rolling back if the driver refuses.

        Raises:
            ArgumentError: no channel has this index.
            ChannelRejectedError: the driver refused; the old state is kept.
        """
        channel = self._find_channel(index)
        was_enabled = channel.enabled
        channel.enabled = state
        if bool(state) == bool(was_enabled) or self.driver is None:
            return
        if not self.driver.config_channel_set(self, channel, ChannelSetting.ENABLED):
            channel.enabled = was_enabled
            logger.debug("Driver %s rejected enable=%s on channel %d",
                         self.driver.name, state, index)
            raise ChannelRejectedError(index, ChannelSetting.ENABLED.value)

    def trigger_set(self, index: int, trigger: Optional[str]) -> None:
        """Set a channel's trigger condition, rolling back if the driver refuses.

        An unchanged condition is accepted without asking the driver.

        Raises:
            ArgumentError: no channel has this index.
            ChannelRejectedError: the driver refused; the old condition is kept.
        """
        channel = self._find_channel(index)
        old_trigger = channel.trigger
        if trigger == old_trigger:
            return
        channel.trigger = trigger
        if self.driver is None:
            return
        if not self.driver.config_channel_set(self, channel, ChannelSetting.TRIGGER):
            channel.trigger = old_trigger
            logger.debug("Driver %s rejected trigger %r on channel %d",
                         self.driver.name, trigger, index)
            raise ChannelRejectedError(index, ChannelSetting.TRIGGER.value)
