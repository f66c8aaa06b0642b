"""Stream packet types fed to output encoders.

WHY: An acquisition arrives as an ordered stream of heterogeneous events:
sample data, a trigger marker, and an end marker. Encoders dispatch on the
event kind, so each kind gets its own small type.

HOW: Three frozen dataclasses. LogicPacket carries raw bytes plus the
sample stride; the other two carry nothing. Packet is the union used in
signatures.

RULES:
- unitsize is the packed width of one sample across ALL device channels,
  not only the enabled ones
- data may end with a partial sample; encoders ignore those bytes
- Packets are delivered in acquisition order; nothing here reorders them
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class LogicPacket:
    """A run of packed logic samples.

    Attributes:
        data: Raw sample bytes, ``unitsize`` bytes per sample, channel
              ``i`` in bit ``i % 8`` of byte ``i // 8``.
        unitsize: Bytes per sample.
    """

    data: bytes
    unitsize: int

    @property
    def num_samples(self) -> int:
        """Number of complete samples in ``data``."""
        if self.unitsize < 1:
            return 0
        return len(self.data) // self.unitsize


@dataclass(frozen=True)
class TriggerPacket:
    """Marks the trigger position: the next sample is the trigger sample."""


@dataclass(frozen=True)
class EndPacket:
    """Marks the end of the acquisition."""


Packet = Union[LogicPacket, TriggerPacket, EndPacket]
