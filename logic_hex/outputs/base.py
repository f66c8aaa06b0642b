"""Abstract base for streaming output encoders.

WHY: Every output encoding consumes the same packet stream for one device
but renders different text. A shared base lets callers drive any encoder
the same way: feed packets, write whatever comes back, clean up.

HOW: BaseOutput is an ABC with class-level ``id`` and ``description``
and two required methods, ``receive()`` and ``cleanup()``. ``stream()``
and the context-manager protocol are built on top of those two.

RULES:
- receive() returns None when a packet completes no output
- The caller writes chunks in the order they are returned; their
  concatenation is the full report
- cleanup() is idempotent and never flushes; deliver EndPacket for that
- ``id`` is a short snake_case key used by the OUTPUTS registry
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional

from logic_hex.core.packets import Packet


class BaseOutput(ABC):
    """Abstract base for all output encoders.

    To add a new output encoding:
    1. Create a new module in outputs/
    2. Subclass BaseOutput, set ``id`` and ``description``
    3. Implement receive() and cleanup()
    4. Register the class in OUTPUTS in outputs/__init__.py
    """

    id: str = ""
    description: str = ""

    @abstractmethod
    def receive(self, packet: Packet) -> Optional[str]:
        """Consume one packet and return the text it completed, if any."""

    @abstractmethod
    def cleanup(self) -> None:
        """Release all session state. Safe to call more than once."""

    def stream(self, packets: Iterable[Packet]) -> Iterator[str]:
        """Feed ``packets`` in order, yielding each non-empty chunk."""
        for packet in packets:
            chunk = self.receive(packet)
            if chunk:
                yield chunk

    def __enter__(self) -> BaseOutput:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
