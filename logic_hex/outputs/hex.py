"""Hexadecimal logic report encoder.

WHY: A raw logic capture is a stream of packed sample words. Reviewers
want one text line per enabled channel, each group of eight samples shown
as one hex byte, and a marker under the column where the trigger fired.
The capture can be arbitrarily long, so the report has to be produced as
packets arrive, one line group at a time.

HOW: init_session() snapshots the enabled logic channels and builds the
header. encode() dispatches on the packet type. For logic data it walks
every complete sample, shifts each selected channel's bit into a one-byte
accumulator, appends the byte in hex every eighth sample, and emits all
channel lines once ``samples_per_line`` samples have been read. The end
packet left-justifies and emits whatever partial line remains.

RULES:
- Line prefix is "<name>:" and every byte is rendered as "xx " (two
  lowercase hex digits, one trailing space)
- The most recent sample is the least significant bit of its byte
- Trigger line: "T:" + (t + t // 8) spaces + "^ <t>", t = sample offset
  of the trigger within its line; written after the last channel line
- The header is returned once, with the first logic packet
- A trigger still pending at end of stream is dropped, not annotated
- With a line width that is not a multiple of 8, the last partial byte
  of each full line is not rendered
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from logic_hex import PACKAGE_STRING
from logic_hex.config import parse_samples_per_line
from logic_hex.core.device import ChannelType, DeviceInstance
from logic_hex.core.packets import EndPacket, LogicPacket, Packet, TriggerPacket
from logic_hex.core.samplerate import samplerate_string
from logic_hex.errors import ArgumentError
from logic_hex.outputs.base import BaseOutput

logger = logging.getLogger(__name__)


@dataclass
class HexSession:
    """Per-encoding state of one hex report.

    RULES:
    - channels: (bit index, name) of each selected channel, fixed at init
    - accumulators[j] / lines[j] belong to channels[j]
    - 0 <= sample_count < samples_per_line between packets
    - trigger, when set, is the sample offset within the current line
    - header is None once it has been returned
    - max_byte_offset: highest byte index any selected channel reads
    - released: set by release(); a released session accepts no packets
    """

    samples_per_line: int
    channels: Tuple[Tuple[int, str], ...]
    header: Optional[str]
    accumulators: List[int] = field(default_factory=list)
    lines: List[str] = field(default_factory=list)
    sample_count: int = 0
    trigger: Optional[int] = None
    # Highest byte a selected channel reads within one sample.
    max_byte_offset: int = field(init=False, default=-1)
    released: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        if not self.accumulators:
            self.accumulators = [0] * len(self.channels)
        if not self.lines:
            self.lines = [f"{name}:" for _index, name in self.channels]
        self.max_byte_offset = max((index // 8 for index, _name in self.channels),
                                   default=-1)

    def reset_lines(self) -> None:
        for j, (_index, name) in enumerate(self.channels):
            self.lines[j] = f"{name}:"
        self.sample_count = 0
        self.trigger = None

    def release(self) -> None:
        """Drop buffers and any header that was never emitted."""
        self.released = True
        self.channels = ()
        self.max_byte_offset = -1
        self.accumulators = []
        self.lines = []
        self.header = None
        self.trigger = None
        self.sample_count = 0


def _build_header(device: DeviceInstance, num_enabled: int) -> str:
    header = f"{PACKAGE_STRING}\n"
    samplerate = device.samplerate()
    if samplerate is not None:
        header += "Acquisition with {}/{} channels at {}\n".format(
            num_enabled, len(device.channels), samplerate_string(samplerate),
        )
    return header


def init_session(device: Optional[DeviceInstance], param: str | int | None = None) -> HexSession:
    """Start a hex report for ``device``.

    Args:
        device: The device whose enabled logic channels are reported.
        param: Optional samples-per-line override (see config).

    Returns:
        A fresh HexSession with the header pending.

    Raises:
        ArgumentError: ``device`` is None.
        ConfigurationError: ``param`` is not a positive integer.
    """
    if device is None:
        raise ArgumentError("Hex output requires a device")

    samples_per_line = parse_samples_per_line(param)
    channels = tuple(
        (ch.index, ch.name)
        for ch in device.channels
        if ch.type is ChannelType.LOGIC and ch.enabled
    )
    session = HexSession(
        samples_per_line=samples_per_line,
        channels=channels,
        header=_build_header(device, len(channels)),
    )
    logger.debug("Hex session started: %d/%d channels, %d samples per line",
                 len(channels), len(device.channels), samples_per_line)
    return session


def trigger_line(offset: int) -> str:
    """Annotation line placing a caret under sample ``offset``.

    Each rendered byte is followed by a space, hence one extra column
    for every eight samples before the trigger.
    """
    return "T:{}^ {}\n".format(" " * (offset + offset // 8), offset)


def _flush_lines(session: HexSession, out: List[str]) -> None:
    for line in session.lines:
        out.append(line)
        out.append("\n")
    if session.channels and session.trigger is not None:
        out.append(trigger_line(session.trigger))
    session.reset_lines()


def _receive_logic(session: HexSession, packet: LogicPacket) -> Optional[str]:
    unitsize = packet.unitsize
    if unitsize < 1:
        raise ArgumentError(f"Logic packet unitsize must be positive, got {unitsize}")
    if session.max_byte_offset >= unitsize:
        raise ArgumentError(
            f"Logic packet unitsize {unitsize} is too small for the selected channels"
        )

    out: List[str] = []
    if session.header is not None:
        # Header is still here, so this is the first logic packet.
        out.append(session.header)
        session.header = None

    data = packet.data
    accumulators = session.accumulators
    lines = session.lines
    for offset in range(0, packet.num_samples * unitsize, unitsize):
        session.sample_count += 1
        byte_done = session.sample_count % 8 == 0
        for j, (index, _name) in enumerate(session.channels):
            bit = (data[offset + index // 8] >> (index % 8)) & 1
            accumulators[j] = ((accumulators[j] << 1) | bit) & 0xFF
            if byte_done:
                lines[j] += f"{accumulators[j]:02x} "
                accumulators[j] = 0
        if session.sample_count == session.samples_per_line:
            _flush_lines(session, out)

    return "".join(out) or None


def _receive_end(session: HexSession) -> Optional[str]:
    if session.sample_count == 0:
        return None

    out: List[str] = []
    remainder = session.sample_count % 8
    if remainder:
        for j in range(len(session.channels)):
            partial = (session.accumulators[j] << (8 - remainder)) & 0xFF
            session.lines[j] += f"{partial:02x} "
            session.accumulators[j] = 0
    if session.trigger is not None:
        logger.debug("Dropping trigger at sample %d of the unfinished last line",
                     session.trigger)
    for line in session.lines:
        out.append(line)
        out.append("\n")
    session.reset_lines()
    return "".join(out) or None


def encode(session: Optional[HexSession], packet: Packet) -> Optional[str]:
    """Consume one packet and return the report text it completed.

    Returns:
        The header and/or completed lines, or None when nothing is ready.

    Raises:
        ArgumentError: no session, a released session, an unknown packet
                       type, or a logic packet whose stride cannot hold
                       the selected channels.
    """
    if session is None:
        raise ArgumentError("Hex output has no session")
    if session.released:
        raise ArgumentError("Hex session has been released")

    if isinstance(packet, TriggerPacket):
        session.trigger = session.sample_count
        return None
    if isinstance(packet, LogicPacket):
        return _receive_logic(session, packet)
    if isinstance(packet, EndPacket):
        return _receive_end(session)
    raise ArgumentError(f"Unsupported packet type: {type(packet).__name__}")


class HexOutput(BaseOutput):
    """Streaming hexadecimal report for one device.

    HOW: Owns one HexSession created at construction; receive() forwards
    to encode(), cleanup() releases the session.

    RULES:
    - receive() after cleanup() raises ArgumentError
    - cleanup() does not flush; deliver an EndPacket first
    """

    id = "hex"
    description = "Hexadecimal"

    def __init__(self, device: Optional[DeviceInstance], param: str | int | None = None) -> None:
        self._session: Optional[HexSession] = init_session(device, param)

    @property
    def session(self) -> Optional[HexSession]:
        return self._session

    def receive(self, packet: Packet) -> Optional[str]:
        return encode(self._session, packet)

    def cleanup(self) -> None:
        if self._session is None:
            return
        self._session.release()
        self._session = None
        logger.debug("Hex session released")
