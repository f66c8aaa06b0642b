"""Channel model, stream packets, and unit formatting.

WHY: Output encoders need a stable description of the device they encode
for (which channels exist, which are enabled, what the sample rate is)
and of the events they receive. These types are that contract.

HOW: device.py holds Channel, DeviceInstance and the Driver capability
base; packets.py holds the three stream packet types; samplerate.py
formats rates for report headers.

RULES:
- Encoders only read from this package; they never mutate a device
- Packets are immutable value objects
"""

from logic_hex.core.device import Channel, ChannelType, DeviceInstance, Driver
from logic_hex.core.packets import EndPacket, LogicPacket, Packet, TriggerPacket

__all__ = [
    "Channel",
    "ChannelType",
    "DeviceInstance",
    "Driver",
    "EndPacket",
    "LogicPacket",
    "Packet",
    "TriggerPacket",
]
