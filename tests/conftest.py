"""Shared test fixtures for the logic_hex test suite.

WHY: Almost every test needs a device with a known channel layout and a
way to turn per-sample channel states into packed logic bytes. Building
those in one place keeps the expected report text easy to reason about.

HOW: FakeDriver answers sample-rate and option queries and can be told to
reject channel changes. make_device builds a DeviceInstance from compact
channel specs; pack_samples packs sample words into LogicPacket bytes.

RULES:
- Channel specs are (index, name) for enabled logic channels, or
  Channel objects when the test needs other types or disabled channels
- Sample words are little-endian, unitsize bytes each
- Tests clear LOGIC_HEX_SAMPLES_PER_LINE so a developer .env cannot leak in
"""

from typing import Any, Iterable, List, Optional, Sequence, Set

import pytest

from logic_hex.config import SAMPLES_PER_LINE_ENV
from logic_hex.core.device import (
    Channel,
    ChannelSetting,
    ChannelType,
    ConfigKey,
    DeviceInstance,
    Driver,
)
from logic_hex.core.packets import LogicPacket


class FakeDriver(Driver):
    """Driver double with a fixed sample rate and selectable rejections."""

    name = "fake"

    def __init__(
        self,
        samplerate: Optional[int] = None,
        options: Optional[List[ConfigKey]] = None,
        reject: Optional[Set[ChannelSetting]] = None,
    ) -> None:
        self.samplerate = samplerate
        self.options = options
        self.reject = reject or set()
        self.calls: List[Any] = []

    def config_get(self, key, device):
        if key is ConfigKey.SAMPLERATE:
            return self.samplerate
        return None

    def config_list(self, key, device):
        if key is ConfigKey.DEVICE_OPTIONS:
            return self.options
        return None

    def config_channel_set(self, device, channel, setting):
        self.calls.append((channel.index, setting))
        return setting not in self.reject


def make_device(channels: Iterable[Any], driver: Optional[Driver] = None) -> DeviceInstance:
    built = []
    for spec in channels:
        if isinstance(spec, Channel):
            built.append(spec)
        else:
            index, name = spec
            built.append(Channel(index=index, type=ChannelType.LOGIC, enabled=True, name=name))
    return DeviceInstance(channels=built, driver=driver)


def pack_samples(words: Sequence[int], unitsize: int = 1) -> LogicPacket:
    data = b"".join(word.to_bytes(unitsize, "little") for word in words)
    return LogicPacket(data=data, unitsize=unitsize)


def words_from_bits(*channel_bits: Sequence[int]) -> List[int]:
    """Combine per-channel bit sequences (channel i at bit i) into sample words."""
    length = len(channel_bits[0])
    return [
        sum(bits[n] << i for i, bits in enumerate(channel_bits))
        for n in range(length)
    ]


@pytest.fixture(autouse=True)
def _clear_line_width_env(monkeypatch):
    monkeypatch.delenv(SAMPLES_PER_LINE_ENV, raising=False)


@pytest.fixture
def fake_driver():
    """Driver reporting 1 MHz."""
    return FakeDriver(samplerate=1_000_000)


@pytest.fixture
def two_channel_device():
    """D0 and D1 on bits 0 and 1, no driver (no sample rate)."""
    return make_device([(0, "D0"), (1, "D1")])


@pytest.fixture
def device_factory():
    """Build a DeviceInstance from (index, name) pairs or Channel objects."""
    return make_device


@pytest.fixture
def pack():
    """Pack sample words into a LogicPacket."""
    return pack_samples


@pytest.fixture
def to_words():
    """Combine per-channel bit sequences into sample words."""
    return words_from_bits


@pytest.fixture
def driver_factory():
    """FakeDriver class, for tests that need rejections or option lists."""
    return FakeDriver
