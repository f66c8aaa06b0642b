"""Output encoder registry.

WHY: Callers pick an encoding by name (from a config file, a menu, a
command line). A central dict maps those names to encoder classes.

HOW: OUTPUTS maps string ids to encoder *classes* (not instances);
instantiate with the device and option: ``OUTPUTS["hex"](device, "64")``.
find_output() does the lookup with a typed error.

RULES:
- Keys match each class's ``id`` attribute
- Values are BaseOutput subclasses
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from logic_hex.errors import ArgumentError
from logic_hex.outputs.hex import HexOutput

if TYPE_CHECKING:
    from logic_hex.outputs.base import BaseOutput

OUTPUTS: dict[str, type[BaseOutput]] = {
    HexOutput.id: HexOutput,
}


def find_output(output_id: str) -> type[BaseOutput]:
    """Return the encoder class registered as ``output_id``.

    Raises:
        ArgumentError: no encoder has that id.
    """
    try:
        return OUTPUTS[output_id]
    except KeyError:
        known = ", ".join(sorted(OUTPUTS))
        raise ArgumentError(
            f"Unknown output format {output_id!r} (known: {known})"
        ) from None
