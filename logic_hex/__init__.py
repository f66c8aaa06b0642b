"""Logic Hex: streaming hexadecimal reports for logic-analyzer captures.

WHY: Logic captures arrive as packed binary sample words with one bit per
channel. Humans reviewing a capture want one text line per channel, eight
samples per hex byte, with the trigger position marked underneath. This
package turns the packet stream into exactly that report, incrementally.

HOW: Two layers. The channel model (core) describes what the device
exposes, and output encoders (outputs) consume a packet stream for one
device and return text chunks as lines complete.

RULES:
- Encoders never hold more than one line group of samples in memory
- Adding a new output encoding = one new module in outputs/, one registry line
- Channel selection is read once, when an output session starts
"""

__version__ = "0.1.0"

PACKAGE_NAME = "logic-hex"

PACKAGE_STRING = f"{PACKAGE_NAME} {__version__}"
"""Banner written at the top of every report."""
