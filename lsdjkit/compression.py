"""Block compression used for LSDj songs in save files and .lsdsng files.

A song is a fixed block of ``SONG_BYTE_COUNT`` bytes. It is stored as a
sequence of ``BLOCK_SIZE`` byte blocks holding run-length encoded data,
escapes for the default wave and instrument, and block jumps.
"""

from __future__ import annotations

import io
from typing import BinaryIO, Optional, Tuple

from .errors import ErrorKind, LsdjError
from .streams import read_byte, write_byte, write_bytes, write_repeat

#: The size of one compressed block
BLOCK_SIZE = 0x200

#: The maximum amount of blocks stored in a sav
BLOCK_COUNT = 191

#: The block index that marks the end of a compressed song
END_OF_FILE_BLOCK_INDEX = 0xFF

#: The size of a decompressed song
SONG_BYTE_COUNT = 0x8000

#: Byte announcing a run-length encoded section
RUN_LENGTH_ENCODING_BYTE = 0xC0

#: Byte announcing a special action
SPECIAL_ACTION_BYTE = 0xE0

#: Special action that stamps the default wave
DEFAULT_WAVE_BYTE = 0xF0

#: Special action that stamps the default instrument
DEFAULT_INSTRUMENT_BYTE = 0xF1


def _tell(stream: BinaryIO) -> int:
    try:
        return stream.tell()
    except OSError as exc:
        raise LsdjError(ErrorKind.TELL_FAILED, str(exc)) from exc


def _seek(stream: BinaryIO, position: int) -> None:
    if position < 0:
        raise LsdjError(ErrorKind.SEEK_FAILED, f"negative position {position}")
    try:
        stream.seek(position, io.SEEK_SET)
    except (OSError, ValueError) as exc:
        raise LsdjError(ErrorKind.SEEK_FAILED, str(exc)) from exc


# --- Decompression --- #


def _decompress_rle(rstream: BinaryIO, wstream: BinaryIO) -> None:
    value = read_byte(rstream)
    if value == RUN_LENGTH_ENCODING_BYTE:
        write_byte(wstream, value)
    else:
        count = read_byte(rstream)
        write_repeat(wstream, bytes([value]), count)


def _decompress_special_action(
    rstream: BinaryIO,
    wstream: BinaryIO,
    default_wave: bytes,
    default_instrument: bytes,
) -> Optional[int]:
    action = read_byte(rstream)
    if action == SPECIAL_ACTION_BYTE:
        write_byte(wstream, action)
        return None
    if action == DEFAULT_WAVE_BYTE:
        write_repeat(wstream, default_wave, read_byte(rstream))
        return None
    if action == DEFAULT_INSTRUMENT_BYTE:
        write_repeat(wstream, default_instrument, read_byte(rstream))
        return None
    # A block jump, or the end of the stream
    return action


def decompress_step(
    rstream: BinaryIO,
    wstream: BinaryIO,
    default_wave: bytes,
    default_instrument: bytes,
) -> Optional[int]:
    """Decompress one step.

    Returns the index of the next block when a block jump or end of stream
    was read, otherwise None.
    """
    byte = read_byte(rstream)
    if byte == RUN_LENGTH_ENCODING_BYTE:
        _decompress_rle(rstream, wstream)
        return None
    if byte == SPECIAL_ACTION_BYTE:
        return _decompress_special_action(rstream, wstream, default_wave, default_instrument)
    write_byte(wstream, byte)
    return None


def decompress_block(
    rstream: BinaryIO,
    wstream: BinaryIO,
    default_wave: bytes,
    default_instrument: bytes,
) -> int:
    """Decompress a single block and return the index of the next block.

    Afterwards ``rstream`` is positioned at the end of the block.
    """
    start = _tell(rstream)
    while True:
        next_block = decompress_step(rstream, wstream, default_wave, default_instrument)
        if next_block is not None:
            break
    _seek(rstream, start + BLOCK_SIZE)
    return next_block


def decompress(
    rstream: BinaryIO,
    first_block_position: int,
    follow_block_jumps: bool,
    default_wave: bytes,
    default_instrument: bytes,
) -> bytes:
    """Decompress a song starting at the current position of ``rstream``.

    With ``follow_block_jumps`` each block jump is followed relative to
    ``first_block_position``; otherwise blocks are read one after another.
    Raises LsdjError(DECOMPRESSION_INCORRECT_SIZE) if the result is not a
    full song.
    """
    output = io.BytesIO()
    while True:
        next_block = decompress_block(rstream, output, default_wave, default_instrument)
        if next_block == END_OF_FILE_BLOCK_INDEX:
            break
        if follow_block_jumps:
            index = (next_block - 1) & 0xFF
            _seek(rstream, first_block_position + index * BLOCK_SIZE)

    song = output.getvalue()
    if len(song) != SONG_BYTE_COUNT:
        raise LsdjError(
            ErrorKind.DECOMPRESSION_INCORRECT_SIZE,
            f"decompressed {len(song)} bytes",
        )
    return song


# --- Compression --- #


def _count_repeats(data: bytes, pos: int, pattern: bytes) -> Tuple[int, int]:
    """Count back-to-back copies of ``pattern`` at ``pos`` (at most 255)."""
    end = len(data)
    length = len(pattern)
    count = 0
    while pos + length < end and data[pos:pos + length] == pattern and count != 0xFF:
        pos += length
        count += 1
    return count, pos


def _next_event(
    data: bytes, pos: int, default_wave: bytes, default_instrument: bytes
) -> Tuple[bytes, int]:
    """Return the next compressed event and the read position after it."""
    count, after = _count_repeats(data, pos, default_wave)
    if count:
        return bytes([SPECIAL_ACTION_BYTE, DEFAULT_WAVE_BYTE, count]), after

    count, after = _count_repeats(data, pos, default_instrument)
    if count:
        return bytes([SPECIAL_ACTION_BYTE, DEFAULT_INSTRUMENT_BYTE, count]), after

    value = data[pos]
    if value == RUN_LENGTH_ENCODING_BYTE:
        return bytes([RUN_LENGTH_ENCODING_BYTE, RUN_LENGTH_ENCODING_BYTE]), pos + 1
    if value == SPECIAL_ACTION_BYTE:
        return bytes([SPECIAL_ACTION_BYTE, SPECIAL_ACTION_BYTE]), pos + 1

    end = len(data)
    if pos + 3 < end and data[pos + 1] == value and data[pos + 2] == value and data[pos + 3] == value:
        count = 0
        while pos < end and data[pos] == value and count != 0xFF:
            count += 1
            pos += 1
        return bytes([RUN_LENGTH_ENCODING_BYTE, value, count]), pos

    return bytes([value]), pos + 1


def compress(
    data: bytes,
    block_offset: int,
    default_wave: bytes,
    default_instrument: bytes,
) -> bytes:
    """Compress a song into blocks, padded with zeros to a block boundary.

    ``block_offset`` is the number of the first block; block jumps refer to
    the blocks following it. Raises LsdjError(WRITE_FAILED) when the song
    does not fit in the available blocks.
    """
    if len(data) != SONG_BYTE_COUNT:
        raise ValueError(f"a song must be {SONG_BYTE_COUNT} bytes, got {len(data)}")
    if not default_wave or not default_instrument:
        raise ValueError("the default wave and instrument must not be empty")
    if block_offset == BLOCK_COUNT + 1:
        raise LsdjError(ErrorKind.WRITE_FAILED, "no blocks left to compress into")

    data = bytes(data)
    default_wave = bytes(default_wave)
    default_instrument = bytes(default_instrument)

    output = io.BytesIO()
    current_block = block_offset
    block_size = 0
    pos = 0

    while pos < len(data):
        event, pos = _next_event(data, pos, default_wave, default_instrument)

        if block_size + len(event) + 2 >= BLOCK_SIZE:
            write_bytes(output, bytes([SPECIAL_ACTION_BYTE, (current_block + 1) & 0xFF]))
            write_bytes(output, bytes(BLOCK_SIZE - block_size - 2))
            current_block += 1
            block_size = 0
            if current_block == BLOCK_COUNT + 1:
                raise LsdjError(ErrorKind.WRITE_FAILED, "song does not fit in the available blocks")

        write_bytes(output, event)
        block_size += len(event)

    write_bytes(output, bytes([SPECIAL_ACTION_BYTE, END_OF_FILE_BLOCK_INDEX]))
    if block_size > 0:
        write_bytes(output, bytes(BLOCK_SIZE - block_size - 2))

    return output.getvalue()