"""Instrument types for the four LSDj channels: pulse, noise, wave and kit.

Each type reads its own parameters from the shared instrument bytes. Some
fields moved between format versions, and the properties follow the song's
``format_version``.
"""

from __future__ import annotations

import enum

from .instrument import Instrument


class KitLoopMode(enum.IntEnum):
    """How a kit sample loops."""

    OFF = 0
    ON = 1
    ATTACK = 2


class _LengthMixin:
    """Sound length as stored by the pulse and noise instruments."""

    #: The length value meaning "play until the next note"
    LENGTH_INFINITE = 0x40

    @property
    def length(self) -> int:
        """The sound length, or ``LENGTH_INFINITE``.

        A finite length is stored as the inverted low five bits of byte 3.
        """
        if self.get_field(3, 6, 1) == 0:
            return self.LENGTH_INFINITE
        return (~self.get_field(3, 0, 5)) & 0x3F

    @length.setter
    def length(self, value: int) -> None:
        unlimited = value == self.LENGTH_INFINITE
        self.set_field(3, 6, 1, 0 if unlimited else 1)
        if unlimited:
            self.set_field(3, 0, 5, value)


class PulseInstrument(_LengthMixin, Instrument):
    """An instrument for the two pulse channels."""

    @property
    def pulse_width(self) -> int:
        """The pulse width setting (0-3)."""
        return self.get_field(7, 6, 2)

    @pulse_width.setter
    def pulse_width(self, value: int) -> None:
        self.set_field(7, 6, 2, int(value))

    @property
    def sweep(self) -> int:
        return self.get_field(4, 0, 8)

    @sweep.setter
    def sweep(self, value: int) -> None:
        self.set_field(4, 0, 8, value)

    @property
    def pulse2_tune(self) -> int:
        return self.get_field(2, 0, 8)

    @pulse2_tune.setter
    def pulse2_tune(self, value: int) -> None:
        self.set_field(2, 0, 8, value)

    @property
    def finetune(self) -> int:
        return self.get_field(7, 2, 4)

    @finetune.setter
    def finetune(self, value: int) -> None:
        self.set_field(7, 2, 4, value)


class NoiseInstrument(_LengthMixin, Instrument):
    """An instrument for the noise channel."""

    @property
    def shape(self) -> int:
        return self.get_field(4, 0, 8)

    @shape.setter
    def shape(self, value: int) -> None:
        self.set_field(4, 0, 8, value)

    @property
    def stability(self) -> int:
        """The noise stability setting (0 or 1)."""
        return self.get_field(2, 0, 1)

    @stability.setter
    def stability(self, value: int) -> None:
        self.set_field(2, 0, 1, int(value))


class WaveInstrument(Instrument):
    """An instrument for the wave channel."""

    @property
    def volume(self) -> int:
        return self.get_field(1, 0, 8)

    @volume.setter
    def volume(self, value: int) -> None:
        self.set_field(1, 0, 8, value)

    @property
    def synth(self) -> int:
        if self.format_version >= 16:
            return self.get_field(3, 4, 4)
        return self.get_field(2, 4, 4)

    @synth.setter
    def synth(self, value: int) -> None:
        if self.format_version >= 16:
            self.set_field(3, 0, 8, (value << 4) & 0xFF)
        else:
            self.set_field(2, 4, 4, value)

    @property
    def wave(self) -> int:
        return self.get_field(3, 0, 8)

    @wave.setter
    def wave(self, value: int) -> None:
        self.set_field(3, 0, 8, value)

    @property
    def play_mode(self) -> int:
        """The play mode (0-3); stored shifted by one from format version 10 on."""
        raw = self.get_field(9, 0, 2)
        if self.format_version >= 10:
            return (raw - 1) & 0x3
        return raw

    @play_mode.setter
    def play_mode(self, value: int) -> None:
        value = int(value)
        if self.format_version >= 10:
            self.set_field(9, 0, 2, (value + 1) & 0x3)
        else:
            self.set_field(9, 0, 2, value)

    @property
    def length(self) -> int:
        if self.format_version >= 7:
            return 0xF - self.get_field(10, 0, 4)
        if self.format_version == 6:
            return self.get_field(10, 0, 4)
        return self.get_field(14, 4, 4)

    @length.setter
    def length(self, value: int) -> None:
        if self.format_version >= 7:
            self.set_field(10, 0, 4, (0xF - value) & 0xF)
        elif self.format_version == 6:
            self.set_field(10, 0, 4, value)
        else:
            self.set_field(14, 4, 4, value)

    @property
    def loop_pos(self) -> int:
        raw = self.get_field(2, 0, 4) & 0xF
        return raw if self.format_version >= 9 else raw ^ 0xF

    @loop_pos.setter
    def loop_pos(self, value: int) -> None:
        value &= 0xF
        self.set_field(2, 0, 4, value if self.format_version >= 9 else value ^ 0xF)

    @property
    def repeat(self) -> int:
        raw = self.get_field(2, 0, 4) & 0xF
        return raw ^ 0xF if self.format_version >= 9 else raw

    @repeat.setter
    def repeat(self, value: int) -> None:
        value &= 0xF
        self.set_field(2, 0, 4, value ^ 0xF if self.format_version >= 9 else value)

    @property
    def speed(self) -> int:
        """The playback speed as displayed, starting at 1."""
        if self.format_version >= 7:
            stored = (self.get_field(11, 0, 8) + 3) & 0xFF
        elif self.format_version == 6:
            stored = self.get_field(11, 0, 8)
        else:
            stored = self.get_field(14, 0, 4)
        return (stored + 1) & 0xFF

    @speed.setter
    def speed(self, value: int) -> None:
        stored = (value - 1) & 0xFF
        if self.format_version >= 7:
            self.set_field(11, 0, 8, (stored - 3) & 0xFF)
        elif self.format_version == 6:
            self.set_field(11, 0, 8, stored)
        else:
            if stored > 0x0F:
                raise ValueError(
                    f"speed {value} is not supported in format version {self.format_version}"
                )
            self.set_field(14, 0, 4, stored)


class KitInstrument(Instrument):
    """An instrument playing two samples from ROM kits on the wave channel."""

    @property
    def volume(self) -> int:
        return self.get_field(1, 0, 8)

    @volume.setter
    def volume(self, value: int) -> None:
        self.set_field(1, 0, 8, value)

    @property
    def pitch(self) -> int:
        return self.get_field(8, 0, 8)

    @pitch.setter
    def pitch(self, value: int) -> None:
        self.set_field(8, 0, 8, value)

    @property
    def half_speed(self) -> bool:
        return self.get_field(2, 6, 1) == 1

    @half_speed.setter
    def half_speed(self, value: bool) -> None:
        self.set_field(2, 6, 1, 1 if value else 0)

    @property
    def distortion_mode(self) -> int:
        """The distortion mode (0-3)."""
        return self.get_field(10, 0, 2)

    @distortion_mode.setter
    def distortion_mode(self, value: int) -> None:
        self.set_field(10, 0, 2, int(value))

    @property
    def kit1(self) -> int:
        return self.get_field(2, 0, 5)

    @kit1.setter
    def kit1(self, value: int) -> None:
        self.set_field(2, 0, 5, value)

    @property
    def kit2(self) -> int:
        return self.get_field(9, 0, 5)

    @kit2.setter
    def kit2(self, value: int) -> None:
        self.set_field(9, 0, 5, value)

    @property
    def offset1(self) -> int:
        return self.get_field(12, 0, 8)

    @offset1.setter
    def offset1(self, value: int) -> None:
        self.set_field(12, 0, 8, value)

    @property
    def offset2(self) -> int:
        return self.get_field(13, 0, 8)

    @offset2.setter
    def offset2(self, value: int) -> None:
        self.set_field(13, 0, 8, value)

    @property
    def length1(self) -> int:
        return self.get_field(3, 0, 8)

    @length1.setter
    def length1(self, value: int) -> None:
        self.set_field(3, 0, 8, value)

    @property
    def length2(self) -> int:
        """Length of the second sample; it shares its byte with ``offset2``."""
        return self.get_field(13, 0, 8)

    @length2.setter
    def length2(self, value: int) -> None:
        self.set_field(13, 0, 8, value)

    def _get_loop(self, attack_byte: int, on_position: int) -> KitLoopMode:
        if self.get_field(attack_byte, 7, 1) == 1:
            return KitLoopMode.ATTACK
        return KitLoopMode(self.get_field(5, on_position, 1))

    def _set_loop(self, attack_byte: int, on_position: int, mode: KitLoopMode) -> None:
        mode = KitLoopMode(mode)
        self.set_field(attack_byte, 7, 1, 1 if mode is KitLoopMode.ATTACK else 0)
        self.set_field(5, on_position, 1, 1 if mode is KitLoopMode.ON else 0)

    @property
    def loop1(self) -> KitLoopMode:
        return self._get_loop(2, 6)

    @loop1.setter
    def loop1(self, value: KitLoopMode) -> None:
        self._set_loop(2, 6, value)

    @property
    def loop2(self) -> KitLoopMode:
        return self._get_loop(9, 5)

    @loop2.setter
    def loop2(self, value: KitLoopMode) -> None:
        self._set_loop(9, 5, value)