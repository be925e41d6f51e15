"""LSDj instruments: the parameters shared by every instrument type.

An instrument is stored as ``Instrument.BYTE_COUNT`` parameter bytes, in which
settings are packed as bit fields, plus a short name. How some fields are laid
out depends on the format version of the song the instrument belongs to.
"""

from __future__ import annotations

import enum
from typing import Optional, Union

from .bits import copy_bits, get_bits, sanitize_name


class Panning(enum.IntEnum):
    """Which speakers an instrument plays on."""

    NONE = 0
    LEFT = 1
    RIGHT = 2
    LEFT_RIGHT = 3


class TableMode(enum.Enum):
    """Whether an instrument's table plays on its own or steps per note."""

    PLAY = enum.auto()
    STEP = enum.auto()


class VibratoShape(enum.IntEnum):
    """The shape of the vibrato (stored directly from format version 4 on)."""

    TRIANGLE = 0
    SAWTOOTH = 1
    SQUARE = 2


class PlvSpeed(enum.Enum):
    """The speed at which pitch, LFO and vibrato commands are applied."""

    FAST = enum.auto()
    TICK = enum.auto()
    STEP = enum.auto()


_LEGACY_SHAPES = {
    0: VibratoShape.TRIANGLE,
    1: VibratoShape.SAWTOOTH,
    2: VibratoShape.TRIANGLE,
    3: VibratoShape.SQUARE,
}

_LEGACY_TICK_BITS = {
    VibratoShape.SAWTOOTH: 0x1,
    VibratoShape.TRIANGLE: 0x2,
    VibratoShape.SQUARE: 0x3,
}


class Instrument:
    """One instrument's parameter bytes and name."""

    BYTE_COUNT = 16
    NAME_LENGTH = 5

    def __init__(
        self,
        params: Optional[Union[bytes, bytearray]] = None,
        format_version: int = 0,
        name: str = "",
    ) -> None:
        if params is None:
            self.params = bytearray(self.BYTE_COUNT)
        else:
            if len(params) != self.BYTE_COUNT:
                raise ValueError(
                    f"an instrument has {self.BYTE_COUNT} parameter bytes, got {len(params)}"
                )
            self.params = bytearray(params)
        self.format_version = format_version
        self._name = bytearray(self.NAME_LENGTH)
        self.name = name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Instrument):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.params == other.params
            and self.format_version == other.format_version
            and self._name == other._name
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(params={bytes(self.params)!r}, "
            f"format_version={self.format_version}, name={self.name!r})"
        )

    # --- Raw bit fields --- #

    def _check_byte(self, byte: int) -> None:
        if not 0 <= byte < self.BYTE_COUNT:
            raise IndexError(f"parameter byte {byte} out of range")

    def set_field(self, byte: int, position: int, count: int, value: int) -> None:
        """Write the low ``count`` bits of ``value`` at ``position`` of a parameter byte."""
        self._check_byte(byte)
        self.params[byte] = copy_bits(self.params[byte], position, count, value)

    def get_field(self, byte: int, position: int, count: int) -> int:
        """Read ``count`` bits at ``position`` of a parameter byte, shifted down."""
        self._check_byte(byte)
        return get_bits(self.params[byte], position, count) >> position

    # --- Name --- #

    @property
    def name(self) -> str:
        """The instrument name, up to its first NUL."""
        return bytes(self._name).split(b"\0", 1)[0].decode("latin-1")

    @name.setter
    def name(self, value: str) -> None:
        cleaned = sanitize_name(value[: self.NAME_LENGTH])
        raw = cleaned.encode("latin-1")
        self._name = bytearray(raw.ljust(self.NAME_LENGTH, b"\0"))

    # --- General --- #

    @property
    def type(self) -> int:
        return self.get_field(0, 0, 8)

    @type.setter
    def type(self, value: int) -> None:
        self.set_field(0, 0, 8, value)

    @property
    def envelope(self) -> int:
        return self.get_field(1, 0, 8)

    @envelope.setter
    def envelope(self, value: int) -> None:
        self.set_field(1, 0, 8, value)

    # --- ADSR --- #

    @property
    def initial_level(self) -> int:
        return self.get_field(1, 4, 4)

    @initial_level.setter
    def initial_level(self, value: int) -> None:
        self.set_field(1, 4, 4, value)

    @property
    def attack_speed(self) -> int:
        """Attack speed; four bits are read from format version 13 on, three before."""
        if self.format_version >= 13:
            return self.get_field(1, 0, 4)
        return self.get_field(1, 0, 3)

    @attack_speed.setter
    def attack_speed(self, value: int) -> None:
        self.set_field(1, 0, 3, value)

    @property
    def attack_level(self) -> int:
        return self.get_field(9, 4, 4)

    @attack_level.setter
    def attack_level(self, value: int) -> None:
        self.set_field(9, 4, 4, value)

    @property
    def decay_speed(self) -> int:
        return self.get_field(9, 0, 3)

    @decay_speed.setter
    def decay_speed(self, value: int) -> None:
        self.set_field(9, 0, 3, value)

    @property
    def sustain_level(self) -> int:
        return self.get_field(0xA, 4, 4)

    @sustain_level.setter
    def sustain_level(self, value: int) -> None:
        self.set_field(0xA, 4, 4, value)

    @property
    def release_speed(self) -> int:
        return self.get_field(0xA, 0, 3)

    @release_speed.setter
    def release_speed(self, value: int) -> None:
        self.set_field(0xA, 0, 3, value)

    # --- Shared settings --- #

    @property
    def panning(self) -> Panning:
        return Panning(self.get_field(7, 0, 2))

    @panning.setter
    def panning(self, value: Panning) -> None:
        self.set_field(7, 0, 2, int(value))

    @property
    def transpose(self) -> bool:
        """Whether the instrument follows transposition (stored inverted)."""
        return self.get_field(5, 5, 1) == 0

    @transpose.setter
    def transpose(self, value: bool) -> None:
        self.set_field(5, 5, 1, 0 if value else 1)

    @property
    def table_enabled(self) -> bool:
        return self.get_field(6, 5, 1) == 1

    @table_enabled.setter
    def table_enabled(self, value: bool) -> None:
        self.set_field(6, 5, 1, 1 if value else 0)

    @property
    def table(self) -> int:
        return self.get_field(6, 0, 4)

    @table.setter
    def table(self, value: int) -> None:
        self.set_field(6, 0, 4, value)

    @property
    def table_mode(self) -> TableMode:
        return TableMode.STEP if self.get_field(5, 3, 1) == 1 else TableMode.PLAY

    @table_mode.setter
    def table_mode(self, value: TableMode) -> None:
        self.set_field(5, 3, 1, 1 if value is TableMode.STEP else 0)

    @property
    def vibrato_direction(self) -> int:
        return self.get_field(5, 0, 1)

    @vibrato_direction.setter
    def vibrato_direction(self, value: int) -> None:
        self.set_field(5, 0, 1, value)

    @property
    def command_rate(self) -> int:
        return self.get_field(8, 0, 8)

    @command_rate.setter
    def command_rate(self, value: int) -> None:
        self.set_field(8, 0, 8, value)

    # --- Vibrato and PLV speed --- #

    def set_vibrato_shape_and_plv_speed(self, shape: VibratoShape, speed: PlvSpeed) -> None:
        """Set vibrato shape and PLV speed together.

        Before format version 4 only some combinations can be stored; the
        others raise ValueError.
        """
        if self.format_version >= 4:
            self.set_field(5, 1, 2, int(shape))
            self.set_field(5, 7, 1, 1 if speed is PlvSpeed.STEP else 0)
            self.set_field(5, 4, 1, 1 if speed is PlvSpeed.TICK else 0)
            return

        if speed is PlvSpeed.FAST and shape is VibratoShape.TRIANGLE:
            self.set_field(5, 1, 2, 0x0)
            return
        if speed is PlvSpeed.TICK and shape in _LEGACY_TICK_BITS:
            self.set_field(5, 1, 2, _LEGACY_TICK_BITS[shape])
            return
        raise ValueError(
            f"{shape.name} vibrato at {speed.name} speed is not supported "
            f"in format version {self.format_version}"
        )

    @property
    def vibrato_shape(self) -> VibratoShape:
        raw = self.get_field(5, 1, 2)
        if self.format_version >= 4:
            try:
                return VibratoShape(raw)
            except ValueError:
                raise ValueError(f"invalid vibrato shape bits {raw}") from None
        return _LEGACY_SHAPES[raw]

    @property
    def plv_speed(self) -> PlvSpeed:
        if self.format_version >= 4:
            byte = self.get_field(5, 0, 8)
            if byte & 0x80:
                return PlvSpeed.STEP
            if byte & 0x10:
                return PlvSpeed.TICK
            return PlvSpeed.FAST
        return PlvSpeed.FAST if self.get_field(5, 1, 2) == 0 else PlvSpeed.TICK