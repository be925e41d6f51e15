import io
import random

import pytest

from lsdjkit.compression import (
    BLOCK_SIZE,
    DEFAULT_INSTRUMENT_BYTE,
    DEFAULT_WAVE_BYTE,
    END_OF_FILE_BLOCK_INDEX,
    RUN_LENGTH_ENCODING_BYTE,
    SONG_BYTE_COUNT,
    SPECIAL_ACTION_BYTE,
    compress,
    decompress,
    decompress_block,
    decompress_step,
)
from lsdjkit.errors import ErrorKind, LsdjError

WAVE = bytes([0x8E, 0xCD, 0xCC, 0xBB, 0xAA, 0xA9, 0x99, 0x88, 0x87, 0x76, 0x66, 0x55, 0x54, 0x43, 0x32, 0x31])
INSTRUMENT = bytes([0xA8, 0, 0, 0xFF, 0, 0, 3, 0, 0, 0xD0, 0, 0, 0, 0xF3, 0, 0])


def _random_song(seed):
    rng = random.Random(seed)
    return bytes(rng.randrange(256) for _ in range(SONG_BYTE_COUNT))


def _mixed_song(seed):
    rng = random.Random(seed)
    parts = bytearray()
    while len(parts) < SONG_BYTE_COUNT:
        choice = rng.randrange(5)
        if choice == 0:
            parts += WAVE * rng.randrange(1, 4)
        elif choice == 1:
            parts += INSTRUMENT * rng.randrange(1, 4)
        elif choice == 2:
            parts += bytes([rng.randrange(256)]) * rng.randrange(1, 400)
        elif choice == 3:
            parts += bytes([RUN_LENGTH_ENCODING_BYTE, SPECIAL_ACTION_BYTE])
        else:
            parts += bytes(rng.randrange(256) for _ in range(rng.randrange(1, 40)))
    return bytes(parts[:SONG_BYTE_COUNT])


def test_zero_song_compresses_to_one_block():
    song = bytes(SONG_BYTE_COUNT)
    packed = compress(song, 0, WAVE, INSTRUMENT)
    assert len(packed) == BLOCK_SIZE
    assert packed[:3] == bytes([RUN_LENGTH_ENCODING_BYTE, 0, 0xFF])
    assert decompress(io.BytesIO(packed), 0, False, WAVE, INSTRUMENT) == song


def test_compressed_output_is_block_aligned_and_ends_stream():
    packed = compress(_mixed_song(3), 1, WAVE, INSTRUMENT)
    assert len(packed) % BLOCK_SIZE == 0
    assert bytes([SPECIAL_ACTION_BYTE, END_OF_FILE_BLOCK_INDEX]) in packed[-BLOCK_SIZE:]


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_round_trip_sequential_blocks(seed):
    song = _mixed_song(seed)
    packed = compress(song, 0, WAVE, INSTRUMENT)
    assert decompress(io.BytesIO(packed), 0, False, WAVE, INSTRUMENT) == song


def test_round_trip_random_data_following_jumps():
    song = _random_song(7)
    packed = compress(song, 1, WAVE, INSTRUMENT)
    assert len(packed) > BLOCK_SIZE
    assert decompress(io.BytesIO(packed), 0, True, WAVE, INSTRUMENT) == song


def test_round_trip_with_block_offset_following_jumps():
    song = _random_song(11)
    offset = 3
    packed = compress(song, offset, WAVE, INSTRUMENT)
    stream = io.BytesIO(bytes((offset - 1) * BLOCK_SIZE) + packed)
    stream.seek((offset - 1) * BLOCK_SIZE)
    assert decompress(stream, 0, True, WAVE, INSTRUMENT) == song


def test_block_jump_numbers_follow_offset():
    packed = compress(_random_song(5), 4, WAVE, INSTRUMENT)
    first = packed[:BLOCK_SIZE]
    stream = io.BytesIO(first)
    next_block = decompress_block(stream, io.BytesIO(), WAVE, INSTRUMENT)
    assert next_block == 5
    assert stream.tell() == BLOCK_SIZE


def test_default_wave_is_compressed():
    song = WAVE * 3 + bytes(SONG_BYTE_COUNT - 3 * len(WAVE))
    packed = compress(song, 0, WAVE, INSTRUMENT)
    assert packed[:3] == bytes([SPECIAL_ACTION_BYTE, DEFAULT_WAVE_BYTE, 3])
    assert decompress(io.BytesIO(packed), 0, False, WAVE, INSTRUMENT) == song


def test_default_instrument_is_compressed():
    song = INSTRUMENT * 2 + bytes(SONG_BYTE_COUNT - 2 * len(INSTRUMENT))
    packed = compress(song, 0, WAVE, INSTRUMENT)
    assert packed[:3] == bytes([SPECIAL_ACTION_BYTE, DEFAULT_INSTRUMENT_BYTE, 2])
    assert decompress(io.BytesIO(packed), 0, False, WAVE, INSTRUMENT) == song


@pytest.mark.parametrize("marker", [RUN_LENGTH_ENCODING_BYTE, SPECIAL_ACTION_BYTE])
def test_marker_bytes_are_escaped(marker):
    song = bytes([marker]) + bytes(SONG_BYTE_COUNT - 1)
    packed = compress(song, 0, WAVE, INSTRUMENT)
    assert packed[:2] == bytes([marker, marker])
    assert decompress(io.BytesIO(packed), 0, False, WAVE, INSTRUMENT) == song


def test_compress_rejects_wrong_length():
    with pytest.raises(ValueError):
        compress(bytes(100), 0, WAVE, INSTRUMENT)


def test_compress_rejects_offset_past_last_block():
    with pytest.raises(LsdjError) as info:
        compress(bytes(SONG_BYTE_COUNT), 192, WAVE, INSTRUMENT)
    assert info.value.kind is ErrorKind.WRITE_FAILED


def test_compress_fails_when_blocks_run_out():
    with pytest.raises(LsdjError) as info:
        compress(_random_song(9), 185, WAVE, INSTRUMENT)
    assert info.value.kind is ErrorKind.WRITE_FAILED


def test_step_plain_byte():
    out = io.BytesIO()
    assert decompress_step(io.BytesIO(b"\x41"), out, WAVE, INSTRUMENT) is None
    assert out.getvalue() == b"\x41"


def test_step_run_length():
    out = io.BytesIO()
    assert decompress_step(io.BytesIO(b"\xc0\x07\x05"), out, WAVE, INSTRUMENT) is None
    assert out.getvalue() == b"\x07" * 5


def test_step_escaped_rle_byte():
    out = io.BytesIO()
    decompress_step(io.BytesIO(b"\xc0\xc0"), out, WAVE, INSTRUMENT)
    assert out.getvalue() == b"\xc0"


def test_step_escaped_special_action_byte():
    out = io.BytesIO()
    assert decompress_step(io.BytesIO(b"\xe0\xe0"), out, WAVE, INSTRUMENT) is None
    assert out.getvalue() == b"\xe0"


def test_step_default_wave_and_instrument():
    out = io.BytesIO()
    decompress_step(io.BytesIO(b"\xe0\xf0\x02"), out, WAVE, INSTRUMENT)
    decompress_step(io.BytesIO(b"\xe0\xf1\x01"), out, WAVE, INSTRUMENT)
    assert out.getvalue() == WAVE * 2 + INSTRUMENT


def test_step_block_jump():
    out = io.BytesIO()
    assert decompress_step(io.BytesIO(b"\xe0\x03"), out, WAVE, INSTRUMENT) == 3
    assert out.getvalue() == b""


def test_step_read_failure():
    with pytest.raises(LsdjError) as info:
        decompress_step(io.BytesIO(b""), io.BytesIO(), WAVE, INSTRUMENT)
    assert info.value.kind is ErrorKind.READ_FAILED


def test_block_skips_to_block_end():
    block = b"\x01\x02\xe0\xff" + bytes(BLOCK_SIZE - 4) + b"\x99"
    stream = io.BytesIO(block)
    out = io.BytesIO()
    assert decompress_block(stream, out, WAVE, INSTRUMENT) == END_OF_FILE_BLOCK_INDEX
    assert out.getvalue() == b"\x01\x02"
    assert stream.tell() == BLOCK_SIZE


def test_decompress_incorrect_size():
    block = b"\x01\xe0\xff" + bytes(BLOCK_SIZE - 3)
    with pytest.raises(LsdjError) as info:
        decompress(io.BytesIO(block), 0, False, WAVE, INSTRUMENT)
    assert info.value.kind is ErrorKind.DECOMPRESSION_INCORRECT_SIZE